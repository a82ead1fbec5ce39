import os

from airdesk.adapters.ports import ReservationGateway
from airdesk.domain.airports import AirportResolver
from airdesk.domain.lookup_cache import LookupCache
from airdesk.domain.storage import KeyValueStore


def create_storage(backend: str | None = None) -> KeyValueStore:
    """
    Factory: create the key-value store backing the lookup cache.

    The backend can be passed explicitly or read from the LOOKUP_STORAGE
    env var. Defaults to "sqlite" at LOOKUP_DB_PATH.
    """
    backend = backend or os.environ.get("LOOKUP_STORAGE", "sqlite")

    if backend == "sqlite":
        from airdesk.adapters.sqlite_storage import SqliteKeyValueStore

        db_path = os.environ.get("LOOKUP_DB_PATH", "data/lookup.db")
        if db_path != ":memory:" and os.path.dirname(db_path):
            os.makedirs(os.path.dirname(db_path), exist_ok=True)
        return SqliteKeyValueStore(db_path=db_path)

    if backend == "memory":
        from airdesk.adapters.simulator_storage import InMemoryKeyValueStore

        return InMemoryKeyValueStore()

    raise ValueError(f"Unknown lookup storage: {backend!r}")


def create_gateway(kind: str | None = None) -> ReservationGateway:
    """
    Factory: create the reservation gateway.

    Reads RESERVATION_GATEWAY ("proxy" or "simulator", default "proxy"),
    AMADEUS_PROXY_URL and the optional AMADEUS_PROXY_TIMEOUT (seconds).
    """
    kind = kind or os.environ.get("RESERVATION_GATEWAY", "proxy")

    if kind == "proxy":
        from airdesk.adapters.amadeus_proxy import DEFAULT_BASE_URL, AmadeusProxyClient

        timeout = os.environ.get("AMADEUS_PROXY_TIMEOUT")
        return AmadeusProxyClient(
            base_url=os.environ.get("AMADEUS_PROXY_URL", DEFAULT_BASE_URL),
            timeout=float(timeout) if timeout else None,
        )

    if kind == "simulator":
        from airdesk.adapters.simulator_amadeus import SimulatorReservationGateway

        return SimulatorReservationGateway()

    raise ValueError(f"Unknown reservation gateway: {kind!r}")


def create_resolver(
    gateway: ReservationGateway | None = None,
    storage: KeyValueStore | None = None,
) -> AirportResolver:
    return AirportResolver(
        gateway=gateway or create_gateway(),
        cache=LookupCache(storage or create_storage()),
    )
