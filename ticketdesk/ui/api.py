from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from ticketdesk.tickets.state import TicketStatus


class APIError(RuntimeError):
    """Raised when the ticket API cannot be reached or rejects a request."""

    def __init__(self, message: str, *, status_code: int | None = None, response: httpx.Response | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        prefix = f"[{self.status_code}] " if self.status_code is not None else ""
        return f"{prefix}{super().__str__()}"


def _extract_error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or "Unknown server error"

    if isinstance(data, Mapping):
        detail = data.get("detail")
        if isinstance(detail, str):
            return detail
        if isinstance(detail, Mapping) and "msg" in detail:
            return str(detail["msg"])
    return "The request could not be completed"


@dataclass(slots=True)
class TicketdeskAPIClient:
    """Small client for the ticket API backing the dashboard."""

    base_url: str
    token: str | None = None
    timeout: float = 10.0

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send one request to the ticket API.

        Returns decoded JSON, plain text, or ``None`` for empty bodies. Failures
        surface as :class:`APIError` so the detail view can show them next to
        the status stepper without touching its state.
        """

        url = self._build_url(path)
        headers: dict[str, str] = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        headers.update(kwargs.pop("headers", {}))

        try:
            response = httpx.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except httpx.HTTPError as exc:
            raise APIError(f"Ticket API request failed: {exc}") from exc

        if response.status_code >= 400:
            raise APIError(_extract_error_message(response), status_code=response.status_code, response=response)

        if response.status_code == 204 or not response.content:
            return None

        if "application/json" in response.headers.get("Content-Type", ""):
            return response.json()
        return response.text

    def _build_url(self, path: str) -> str:
        normalized = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url.rstrip('/')}{normalized}"

    def list_tickets(self) -> list[Mapping[str, Any]]:
        data = self._request("GET", "/tickets")
        return list(data or [])

    def get_ticket(self, ticket_id: str) -> Mapping[str, Any]:
        return self._request("GET", f"/tickets/{ticket_id}")

    def change_ticket_status(self, ticket_id: str, *, status: TicketStatus | str) -> Mapping[str, Any]:
        """Persist a confirmed status change; returns the refreshed ticket."""

        payload = {"status": TicketStatus(status).value}
        return self._request("POST", f"/tickets/{ticket_id}/status", json=payload)
