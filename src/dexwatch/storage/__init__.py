"""Per-asset observation history."""

from .observation_store import ObservationWindow, AssetRecord, ObservationStore

__all__ = ['ObservationWindow', 'AssetRecord', 'ObservationStore']
