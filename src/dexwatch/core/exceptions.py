"""
Error taxonomy.

Nothing raised from the pipeline is fatal to the process:
- TransportFailure is resolved by each caller to its fail-safe default
- ConfigurationMissing degrades a single sink to a no-op
- PerAssetFailure is logged and the cycle moves on to the next snapshot
"""

from typing import Optional


class DexWatchError(Exception):
    """Base class for all dexwatch errors."""


class TransportFailure(DexWatchError):
    """Network/HTTP error while calling an oracle, the feed or a sink."""

    def __init__(self, service: str, message: str, status: Optional[int] = None):
        self.service = service
        self.status = status
        super().__init__(f"{service}: {message}")


class ConfigurationMissing(DexWatchError):
    """A collaborator was asked to work without the settings it needs."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Missing configuration: {setting}")


class PerAssetFailure(DexWatchError):
    """Unexpected exception while processing a single snapshot."""

    def __init__(self, address: str, cause: Exception):
        self.address = address
        self.cause = cause
        super().__init__(f"Failed to process {address}: {cause!r}")
