"""
LookupCache — bounded keyword → airport results cache.

The whole cache lives in a single JSON blob in a KeyValueStore:

    {"entries": {"<keyword>": {"results": [...], "ts": <epoch ms>}},
     "order": ["<most recent keyword>", ...]}

It is re-read on every call and rewritten after every put, so several
LookupCache instances over the same store always see the same data.
Storage failures never escape: reads degrade to an empty cache and
writes become no-ops.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from airdesk.domain.storage import KeyValueStore

log = logging.getLogger(__name__)

CACHE_KEY = "iata_lookup_cache_v1"
MAX_CACHE = 50


@dataclass
class CacheEntry:
    results: list
    ts: int  # epoch milliseconds, informational only


@dataclass
class CacheStore:
    entries: dict[str, CacheEntry] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)  # most recently written first


def _now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def record_code(record) -> str:
    """Return the location code of an airport record, or "" if it has none."""
    if not isinstance(record, dict):
        return ""
    return str(record.get("iataCode") or record.get("code") or record.get("iata") or "")


class LookupCache:

    def __init__(self, store: KeyValueStore, max_entries: int = MAX_CACHE):
        self._store = store
        self._max_entries = max_entries

    # -- persistence ---------------------------------------------------------

    def read(self) -> CacheStore:
        """Load the cache. Missing or malformed data gives an empty cache."""
        try:
            raw = self._store.get(CACHE_KEY)
        except Exception as exc:
            log.warning("Lookup cache unreadable, starting empty: %s", exc)
            return CacheStore()
        if not raw:
            return CacheStore()
        try:
            return self._decode(json.loads(raw))
        except Exception as exc:
            log.warning("Lookup cache corrupt, starting empty: %s", exc)
            return CacheStore()

    def write(self, cache: CacheStore) -> None:
        """Persist the cache. Storage errors are logged and ignored."""
        try:
            self._store.set(CACHE_KEY, json.dumps(self._encode(cache)))
        except Exception as exc:
            log.warning("Lookup cache write skipped: %s", exc)

    def _decode(self, data) -> CacheStore:
        raw_entries = data.get("entries") or {}
        raw_order = data.get("order") or []

        cache = CacheStore()
        for key in raw_order:
            if len(cache.order) >= self._max_entries:
                break
            if not isinstance(key, str) or key in cache.entries:
                continue
            raw = raw_entries.get(key)
            if not isinstance(raw, dict) or not isinstance(raw.get("results"), list):
                continue
            cache.entries[key] = CacheEntry(results=raw["results"], ts=raw.get("ts", 0))
            cache.order.append(key)
        return cache

    @staticmethod
    def _encode(cache: CacheStore) -> dict:
        return {
            "entries": {
                key: {"results": entry.results, "ts": entry.ts}
                for key, entry in cache.entries.items()
            },
            "order": list(cache.order),
        }

    # -- operations ----------------------------------------------------------

    def get(self, keyword: str) -> list | None:
        """Cached results for keyword, or None on a miss. [] is a hit."""
        entry = self.read().entries.get(keyword.lower())
        return entry.results if entry is not None else None

    def put(self, keyword: str, results: list) -> list:
        """Store results under keyword and return them unchanged."""
        key = keyword.lower()
        cache = self.read()
        cache.entries[key] = CacheEntry(results=results, ts=_now_ms())
        cache.order = [key] + [k for k in cache.order if k != key]

        for evicted in cache.order[self._max_entries:]:
            cache.entries.pop(evicted, None)
        cache.order = cache.order[: self._max_entries]

        self.write(cache)
        return results

    def find_by_code(self, code: str) -> dict | None:
        """
        First record whose code matches, case-insensitively.

        Keywords are scanned most recent first, so when the same code is
        cached under several keywords the newest one wins.
        """
        wanted = code.upper()
        cache = self.read()
        for key in cache.order:
            for record in cache.entries[key].results:
                if record_code(record).upper() == wanted:
                    return record
        return None

    def keywords(self) -> list[str]:
        """Cached keywords, most recently written first."""
        return self.read().order

    def clear(self) -> None:
        self.write(CacheStore())
