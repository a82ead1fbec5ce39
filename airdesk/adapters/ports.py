from abc import ABC, abstractmethod

SEARCH_DEFAULTS = {
    "adults": 1,
    "children": 0,
    "infants": 0,
    "currencyCode": "EUR",
    "travelClass": "ECONOMY",
    "nonStop": False,
}


class ReservationProxyError(Exception):
    """
    The reservation proxy reported a failure, or could not be reached.

    details carries the structured diagnostic payload from the response
    body (its "details" field, or the whole body when that is missing).
    status_code is None for transport failures.
    """

    def __init__(self, message: str, details=None, status_code: int | None = None):
        super().__init__(message)
        self.details = details if details is not None else {}
        self.status_code = status_code


def with_search_defaults(payload: dict) -> dict:
    """Merge the default search attributes under payload; payload wins."""
    return {**SEARCH_DEFAULTS, **payload}


class ReservationGateway(ABC):
    """
    Port: how we talk to the remote reservation API.

    The resolver and booking flows depend ONLY on this interface.
    Every operation returns the "data" field of the response envelope
    and raises ReservationProxyError on failure.
    """

    @abstractmethod
    def search_airports(self, keyword: str) -> list:
        """Return airport/location candidates for a free-text keyword."""
        ...

    @abstractmethod
    def search_flights(self, payload: dict):
        """Search flight offers. Default attributes are merged under payload."""
        ...

    @abstractmethod
    def hold(self, payload: dict):
        """Create a pending booking (PNR / order) upstream."""
        ...

    @abstractmethod
    def ticket(self, payload: dict):
        """Issue tickets for a previously held booking."""
        ...


def booking_reference(data, *fields: str):
    """First non-empty field of a hold/ticket response, for logging."""
    if not isinstance(data, dict):
        return None
    for name in fields:
        if data.get(name):
            return data[name]
    return None
