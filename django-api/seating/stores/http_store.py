"""httpx implementation of the persistence service stores."""

import logging
from typing import Any

import httpx

from seating.domain import EventId
from seating.domain.errors import GatewayError
from seating.stores.interfaces import ReservationGateway, ZoneConfigStore

logger = logging.getLogger(__name__)


def build_client(conf: dict[str, Any]) -> httpx.Client:
    return httpx.Client(
        base_url=conf["BACKEND_BASE_URL"],
        timeout=conf.get("REQUEST_TIMEOUT", 10.0),
        headers={"Accept": "application/json"},
    )


def _error_message(response: httpx.Response) -> str:
    """The server's own message when it sent one, else the raw body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return response.text or f"HTTP {response.status_code}"


def _send(client: httpx.Client, method: str, url: str, **kwargs: Any) -> httpx.Response:
    try:
        response = client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        logger.warning("%s %s failed: %s", method, url, exc)
        raise GatewayError(str(exc)) from exc
    return response


def _json_or_raise(method: str, url: str, response: httpx.Response) -> dict[str, Any]:
    if response.is_error:
        message = _error_message(response)
        logger.warning("%s %s -> %d: %s", method, url, response.status_code, message)
        raise GatewayError(message, status=response.status_code)
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError as exc:
        logger.warning("%s %s -> %d: body is not JSON", method, url, response.status_code)
        raise GatewayError(
            response.text or "Invalid response from persistence service", status=response.status_code
        ) from exc
    return data if isinstance(data, dict) else {"data": data}


class HttpZoneConfigStore(ZoneConfigStore):
    """Seating configuration reached over the persistence service's REST API."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, conf: dict[str, Any]) -> "HttpZoneConfigStore":
        return cls(build_client(conf))

    def get_config(self, event_id: EventId) -> dict[str, Any] | None:
        url = f"/api/public/events/{event_id}/tickets/setup"
        response = _send(self._client, "GET", url)
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        data = _json_or_raise("GET", url, response)
        # The service answers 200 with an empty body before anything is set up.
        return data or None

    def create_config(self, event_id: EventId, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"/api/events/{event_id}/tickets/setup"
        return self._saved("POST", url, payload)

    def update_config(self, event_id: EventId, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"/api/events/{event_id}/tickets/setup"
        return self._saved("PUT", url, payload)

    def _saved(self, method: str, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        data = _json_or_raise(method, url, _send(self._client, method, url, json=payload))
        # Setup failures come back as 200 with status "error".
        if data.get("status") == "error":
            message = data.get("message") or "Ticket setup was not saved"
            logger.warning("%s %s rejected: %s", method, url, message)
            raise GatewayError(message)
        return data


class HttpReservationGateway(ReservationGateway):
    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, conf: dict[str, Any]) -> "HttpReservationGateway":
        return cls(build_client(conf))

    def submit(self, payload: dict[str, Any]) -> int | str:
        url = "/api/public/reservations"
        data = _json_or_raise("POST", url, _send(self._client, "POST", url, json=payload))
        reservation_id = data.get("reservedId", data.get("reservationId"))
        if reservation_id is None:
            raise GatewayError("Reservation service returned no reservation id")
        return reservation_id
