"""
Blacklist state and developer lookup.

BlacklistSets is insertion-only: the bundling check adds to it, every other
check only reads it. DeveloperMap is a static, read-only lookup.
"""

from typing import Dict, Iterable, Optional, Set
import logging

logger = logging.getLogger(__name__)


class DeveloperMap:
    """Token address -> controlling developer address (case-insensitive)."""

    def __init__(self, mapping: Optional[Dict[str, str]] = None):
        self._mapping = {
            token.lower(): dev.lower()
            for token, dev in (mapping or {}).items()
        }

    def developer_for(self, token_address: str) -> Optional[str]:
        return self._mapping.get(token_address.lower())

    def __len__(self) -> int:
        return len(self._mapping)


class BlacklistSets:
    """Blacklisted token and developer addresses, stored lowercase."""

    def __init__(self, tokens: Iterable[str] = (), developers: Iterable[str] = ()):
        self.tokens: Set[str] = {address.lower() for address in tokens}
        self.developers: Set[str] = {address.lower() for address in developers}

    def is_token_blacklisted(self, address: str) -> bool:
        return address.lower() in self.tokens

    def is_developer_blacklisted(self, address: Optional[str]) -> bool:
        return address is not None and address.lower() in self.developers

    def add_token(self, address: str) -> None:
        self.tokens.add(address.lower())

    def add_developer(self, address: str) -> None:
        self.developers.add(address.lower())

    def blacklist_token_and_developer(self, token_address: str, developers: DeveloperMap) -> Optional[str]:
        """
        Blacklist a token and, when known, its developer.

        Returns:
            The developer address that was blacklisted, if any
        """
        self.add_token(token_address)
        dev_address = developers.developer_for(token_address)
        if dev_address:
            self.add_developer(dev_address)
        logger.info(
            f"Blacklisted token {token_address.lower()}"
            + (f" and developer {dev_address}" if dev_address else "")
        )
        return dev_address
