"""
In-memory KeyValueStore for testing — no database required.
"""

from airdesk.domain.storage import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """
    Test helpers:
        fail_reads / fail_writes  — raise OSError from get() / set()
        reads / writes            — number of get() / successful set() calls
    """

    def __init__(self):
        self._store: dict[str, str] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.reads = 0
        self.writes = 0

    def get(self, key: str) -> str | None:
        self.reads += 1
        if self.fail_reads:
            raise OSError("storage unavailable")
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("quota exceeded")
        self._store[key] = value
        self.writes += 1
