from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import streamlit as st

from ticketdesk.core.config import Settings, get_settings
from ticketdesk.core.logging import configure_logging, get_tracer, init_tracer
from ticketdesk.tickets.state import STATUS_LABELS, TicketStatus, parse_status
from ticketdesk.ui.api import APIError, TicketdeskAPIClient
from ticketdesk.ui.streamlit_stepper import render_status_stepper, unmount_stepper

logger = logging.getLogger(__name__)

STEPPER_KEY = "ticket_status"


def _get_base_url(settings: Settings) -> str:
    base_url = st.session_state.get("base_url")
    if not base_url:
        base_url = settings.api_base_url
        st.session_state["base_url"] = base_url
    return str(base_url)


def _build_client(settings: Settings) -> TicketdeskAPIClient:
    return TicketdeskAPIClient(
        base_url=_get_base_url(settings),
        token=settings.api_token,
        timeout=settings.api_timeout,
    )


def _flash(level: str, message: str) -> None:
    st.session_state["flash"] = (level, message)


def _render_flash() -> None:
    flash = st.session_state.pop("flash", None)
    if not flash:
        return
    level, message = flash
    if level == "error":
        st.error(message)
    else:
        st.success(message)


def _handle_api_call(
    callback: Callable[[], object], success_message: str | None = None
) -> tuple[bool, object | None]:
    try:
        result = callback()
    except APIError as exc:
        logger.warning("Ticket API call failed: %s", exc)
        _flash("error", str(exc))
        return False, None
    else:
        if success_message:
            _flash("success", success_message)
        return True, result


def _select_ticket(ticket: Mapping[str, Any] | None) -> None:
    previous = st.session_state.get("selected_ticket")
    previous_id = previous.get("id") if isinstance(previous, Mapping) else None
    new_id = ticket.get("id") if isinstance(ticket, Mapping) else None
    if previous_id != new_id:
        unmount_stepper(STEPPER_KEY)
    if ticket is None:
        st.session_state.pop("selected_ticket", None)
    else:
        st.session_state["selected_ticket"] = ticket


def _render_sidebar(settings: Settings, client: TicketdeskAPIClient) -> None:
    st.sidebar.header("Connection")
    base_url = st.sidebar.text_input("API Base URL", value=_get_base_url(settings))
    st.session_state["base_url"] = base_url

    st.sidebar.header("Ticket")
    ticket_id = st.sidebar.text_input("Ticket ID", key="ticket_lookup")
    if st.sidebar.button("Load"):
        if not ticket_id.strip():
            st.sidebar.error("A ticket ID is required")
        else:
            success, ticket = _handle_api_call(lambda: client.get_ticket(ticket_id.strip()))
            if success and isinstance(ticket, Mapping):
                _select_ticket(ticket)
    if st.sidebar.button("Clear"):
        _select_ticket(None)


def _status_change_handler(
    client: TicketdeskAPIClient, ticket_id: str
) -> Callable[[TicketStatus], None]:
    tracer = get_tracer()

    def on_status_change(status: TicketStatus) -> None:
        with tracer.start_as_current_span("ticket.status_change") as span:
            span.set_attribute("ticket.id", ticket_id)
            span.set_attribute("ticket.status", status.value)
            success, updated = _handle_api_call(
                lambda: client.change_ticket_status(ticket_id, status=status),
                f"Status changed to {STATUS_LABELS[status]}",
            )
        if success and isinstance(updated, Mapping):
            st.session_state["selected_ticket"] = updated

    return on_status_change


def _render_ticket_detail(settings: Settings, client: TicketdeskAPIClient) -> None:
    detail = st.session_state.get("selected_ticket")
    if not isinstance(detail, Mapping):
        st.caption("Load a ticket from the sidebar to manage its status")
        return

    status = parse_status(detail.get("status"))
    st.markdown(f"### {detail.get('title', 'Ticket')}")
    meta_cols = st.columns(3)
    meta_cols[0].metric("Priority", str(detail.get("priority", "-")))
    meta_cols[1].metric("Requester", str(detail.get("requester", "-")))
    meta_cols[2].metric("Status", STATUS_LABELS[status] if status else str(detail.get("status", "-")))

    if status is None:
        st.warning("This ticket has a status the dashboard does not recognise")
        return

    ticket_id = detail.get("id")
    # Without an id there is nothing to persist to, so the stepper stays display-only.
    handler = _status_change_handler(client, str(ticket_id)) if ticket_id is not None else None

    st.markdown("#### Status")
    render_status_stepper(
        status,
        handler,
        disabled=settings.read_only,
        key=STEPPER_KEY,
        allow_reopen=settings.allow_reopen,
    )
    if settings.read_only:
        st.caption("Status changes are disabled in read-only mode")


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    init_tracer(settings)

    st.set_page_config(page_title=settings.app_name, layout="wide")
    st.title(settings.app_name)

    client = _build_client(settings)
    _render_sidebar(settings, client)
    _render_flash()
    _render_ticket_detail(settings, client)


if __name__ == "__main__":
    main()
