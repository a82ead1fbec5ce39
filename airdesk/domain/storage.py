"""
KeyValueStore port — the process-wide blob store backing the lookup cache.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """
    Port: read and write a string value under a fixed key.

    The lookup cache only needs get/set. Whether the bytes end up in
    SQLite, a dict, or somewhere else is an adapter concern.
    Implementations may raise on failure; callers decide how to degrade.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never set."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...
