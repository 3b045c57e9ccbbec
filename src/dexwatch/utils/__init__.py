"""Shared utilities."""

from .logger import JSONFormatter, PerformanceLogger, setup_logging, get_performance_logger

__all__ = ['JSONFormatter', 'PerformanceLogger', 'setup_logging', 'get_performance_logger']
