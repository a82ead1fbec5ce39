"""
Send a sample flight search to the reservation proxy and print the outcome.

Usage:
    AMADEUS_PROXY_URL=http://localhost:3001 python scripts/debug_search.py
"""

import json
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from airdesk.adapters.amadeus_proxy import DEFAULT_BASE_URL, AmadeusProxyClient
from airdesk.adapters.ports import ReservationProxyError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

PAYLOAD = {
    "originLocationCode": "MUC",
    "destinationLocationCode": "IST",
    "departureDate": "2026-02-14",
    "adults": 1,
    "currencyCode": "EUR",
}

base_url = os.environ.get("AMADEUS_PROXY_URL", DEFAULT_BASE_URL)
client = AmadeusProxyClient(base_url=base_url)

print(f"Testing proxy at {base_url} ...")
try:
    data = client.search_flights(PAYLOAD)
except ReservationProxyError as exc:
    status = exc.status_code if exc.status_code is not None else "no response"
    print(f"Search failed ({status}): {exc}")
    print(json.dumps(exc.details, indent=2, ensure_ascii=False))
    sys.exit(1)

print(json.dumps(data, indent=2, ensure_ascii=False))
