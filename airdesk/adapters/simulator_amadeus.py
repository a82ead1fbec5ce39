from .ports import ReservationGateway, ReservationProxyError, with_search_defaults


class SimulatorReservationGateway(ReservationGateway):
    """
    In-memory fake for testing. No mocking framework needed.

    Test helpers:
        inject_airport()       — make a record findable by search_airports()
        inject_flight_offer()  — add an offer returned by search_flights()
        fail_with()            — make every call raise until cleared
        calls                  — list of (operation, payload) tuples, in order
    """

    def __init__(self):
        self._airports: list[dict] = []
        self._offers: list[dict] = []
        self._bookings: dict[str, dict] = {}
        self._failure: Exception | None = None
        self._next_id = 1
        self.calls: list[tuple[str, dict]] = []

    def inject_airport(self, record: dict) -> None:
        self._airports.append(record)

    def inject_flight_offer(self, offer: dict) -> None:
        self._offers.append(offer)

    def fail_with(self, error: Exception | None) -> None:
        """Raise error from every operation; pass None to recover."""
        self._failure = error

    def _record(self, operation: str, payload: dict) -> None:
        self.calls.append((operation, payload))
        if self._failure is not None:
            raise self._failure

    def calls_to(self, operation: str) -> list[dict]:
        return [payload for op, payload in self.calls if op == operation]

    def search_airports(self, keyword: str) -> list:
        self._record("search_airports", {"keyword": keyword})
        term = keyword.strip().lower()
        if not term:
            return []
        return [
            a for a in self._airports
            if any(
                term in str(a.get(f) or "").lower()
                for f in ("iataCode", "code", "name", "detailedName", "cityName", "city")
            )
        ]

    def search_flights(self, payload: dict):
        self._record("search_flights", with_search_defaults(payload))
        return list(self._offers)

    def hold(self, payload: dict):
        self._record("hold", payload)
        booking_id = str(self._next_id)
        self._next_id += 1
        booking = {
            **payload,
            "id": booking_id,
            "amadeus_pnr": f"SIM{booking_id:0>3}",
            "status": "held",
        }
        self._bookings[booking_id] = booking
        return dict(booking)

    def ticket(self, payload: dict):
        self._record("ticket", payload)
        booking_id = str(payload.get("id") or payload.get("booking_id") or "")
        booking = self._bookings.get(booking_id)
        if booking is None:
            raise ReservationProxyError(
                "Booking not found",
                details={"booking_id": booking_id},
                status_code=404,
            )
        booking["status"] = "ticketed"
        booking["amadeus_ticket_number"] = f"TKT{booking_id:0>10}"
        return dict(booking)
