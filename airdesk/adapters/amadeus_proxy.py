import logging

import requests

from .ports import ReservationGateway, ReservationProxyError, booking_reference, with_search_defaults

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001"
FALLBACK_ERROR = "Amadeus proxy error"


def handle_response(resp: requests.Response):
    """
    Classify a proxy response envelope {data, error?, details?}.

    A non-2xx status or a truthy "error" field is a failure. Returns the
    envelope's data on success.
    """
    try:
        body = resp.json()
    except ValueError:
        body = {}

    error = body.get("error") if isinstance(body, dict) else None
    if not 200 <= resp.status_code < 300 or error:
        message = error or resp.reason or FALLBACK_ERROR
        details = (body.get("details") if isinstance(body, dict) else None) or body
        raise ReservationProxyError(str(message), details=details, status_code=resp.status_code)

    return body.get("data") if isinstance(body, dict) else None


class AmadeusProxyClient(ReservationGateway):
    """Adapter: HTTP client for the /api/amadeus/* proxy endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers.update({"Content-Type": "application/json"})
        self.session = session

    def _post(self, path: str, payload: dict):
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ReservationProxyError(str(exc) or FALLBACK_ERROR) from exc
        return handle_response(resp)

    def search_airports(self, keyword: str) -> list:
        return self._post("/api/amadeus/airports/search", {"keyword": keyword}) or []

    def search_flights(self, payload: dict):
        request_payload = with_search_defaults(payload)
        log.info("Amadeus search %s", request_payload)
        return self._post("/api/amadeus/search", request_payload)

    def hold(self, payload: dict):
        log.info("PNR create request %s", payload)
        data = self._post("/api/amadeus/hold", payload)
        log.info(
            "PNR created %s",
            booking_reference(data, "amadeus_pnr", "amadeus_order_id", "id"),
        )
        return data

    def ticket(self, payload: dict):
        log.info("Ticket issue request %s", payload)
        data = self._post("/api/amadeus/ticket", payload)
        log.info(
            "Ticket issued %s",
            booking_reference(data, "amadeus_ticket_number", "amadeus_order_id", "id"),
        )
        return data
