"""
Pipeline - cycle orchestration and scheduling.
"""

from .orchestrator import CycleOrchestrator, CycleResult
from .scheduler import CycleScheduler

__all__ = ['CycleOrchestrator', 'CycleResult', 'CycleScheduler']
