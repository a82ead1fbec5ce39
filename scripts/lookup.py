#!/usr/bin/env python3
"""
Airport lookup CLI — search keywords, resolve codes, inspect the cache.

Usage (from project root):
    python scripts/lookup.py search berlin     # candidates for a keyword
    python scripts/lookup.py label TXL         # label for an airport code
    python scripts/lookup.py cache             # cached keywords, newest first
    python scripts/lookup.py clear             # empty the lookup cache

Environment variables (all optional):
    AMADEUS_PROXY_URL       - proxy base URL (default: http://localhost:3001)
    AMADEUS_PROXY_TIMEOUT   - request timeout in seconds (default: none)
    LOOKUP_STORAGE          - "sqlite" or "memory" (default: sqlite)
    LOOKUP_DB_PATH          - SQLite database path (default: data/lookup.db)
"""

import logging
import os
import sys

# Allow running as `python scripts/lookup.py` from project root.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from airdesk.domain.airports import AirportResolver, airport_code, format_label
from airdesk.domain.lookup_cache import LookupCache
from airdesk.factory import create_gateway, create_storage

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def search(resolver: AirportResolver, keyword: str) -> None:
    results = resolver.search_by_keyword(keyword)
    if not results:
        print(f"No airports found for {keyword!r}.")
        return
    for record in results:
        print(f"  {airport_code(record):<5}  {format_label(record)}")


def list_cache(cache: LookupCache) -> None:
    keywords = cache.keywords()
    if not keywords:
        print("Lookup cache is empty.")
        return
    for keyword in keywords:
        print(f"  {keyword:<30}  {len(cache.get(keyword) or [])} result(s)")


def main() -> None:
    cache = LookupCache(create_storage())

    if len(sys.argv) < 2:
        print(__doc__)
        return

    cmd = sys.argv[1]

    if cmd == "cache":
        list_cache(cache)
    elif cmd == "clear":
        cache.clear()
        print("Lookup cache cleared.")
    elif cmd in ("search", "label"):
        if len(sys.argv) < 3:
            what = "keyword" if cmd == "search" else "airport code"
            print(f"ERROR: {cmd!r} needs a {what}.", file=sys.stderr)
            sys.exit(1)
        resolver = AirportResolver(gateway=create_gateway(), cache=cache)
        term = " ".join(sys.argv[2:])
        if cmd == "search":
            search(resolver, term)
        else:
            print(resolver.resolve_label(term))
    else:
        print(__doc__)


if __name__ == "__main__":
    main()
