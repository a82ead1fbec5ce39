"""
Airport lookup — cache-first keyword search and code → label resolution.

Interactive callers (typeahead inputs, label rendering) must stay
responsive, so nothing here raises: a failed remote search degrades to
whatever the cache holds, and an unknown code resolves to itself.
"""

import logging

from airdesk.adapters.ports import ReservationGateway
from airdesk.domain.lookup_cache import LookupCache, record_code

log = logging.getLogger(__name__)


def format_label(record) -> str:
    """Human-readable label, e.g. "Berlin – Tegel (TXL)"."""
    if not isinstance(record, dict):
        return ""
    code = record_code(record)
    name = record.get("name") or record.get("detailedName") or ""
    city = record.get("cityName") or record.get("city") or ""

    if city and name and code:
        return f"{city} – {name} ({code})"
    if name and code:
        return f"{name} ({code})"
    if city and code:
        return f"{city} ({code})"
    return code or name or ""


def airport_code(record) -> str:
    """The value stored when a record is picked: its code, else its label."""
    return record_code(record) or format_label(record)


class AirportResolver:

    def __init__(self, gateway: ReservationGateway, cache: LookupCache):
        self._gateway = gateway
        self._cache = cache

    def search_by_keyword(self, keyword: str) -> list:
        """
        Airport candidates for keyword. Never raises.

        A cached keyword (even one with no results) is served without
        touching the network. On a miss the remote search result is cached
        and returned; if the remote search fails, the cached value for the
        keyword is returned when there is one, else [].
        """
        trimmed = (keyword or "").strip()
        if not trimmed:
            return []

        cached = self._cache.get(trimmed)
        if cached is not None:
            return cached

        try:
            results = self._gateway.search_airports(trimmed)
        except Exception as exc:
            log.warning("Airport search for %r failed; falling back to cache: %s", trimmed, exc)
            stale = self._cache.get(trimmed)
            return stale if stale is not None else []

        return self._cache.put(trimmed, results)

    def resolve_label(self, code: str) -> str:
        """Label for an airport code; the uppercased code when nothing matches."""
        normalized = (code or "").strip().upper()
        if not normalized:
            return ""

        cached = self._cache.find_by_code(normalized)
        if cached is not None:
            return format_label(cached)

        for record in self.search_by_keyword(normalized):
            if record_code(record).upper() == normalized:
                return format_label(record)

        log.debug("No airport found for %s, using the code as label", normalized)
        return normalized

    def display_value(self, value: str, force_code: bool = False) -> str:
        """What an airport input shows for a stored value."""
        if not value:
            return ""
        if force_code:
            return value.upper()
        return self.resolve_label(value) or value
