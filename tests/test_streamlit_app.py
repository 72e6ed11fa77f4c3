from streamlit.testing.v1 import AppTest

from ticketdesk.ui.api import APIError, TicketdeskAPIClient

TICKET = {"id": "t-1", "title": "VPN drops", "priority": "high", "requester": "editor", "status": "resolved"}


def _detail_app():
    from ticketdesk.ui.streamlit_app import main

    main()


def _run_with_ticket(ticket=TICKET) -> AppTest:
    at = AppTest.from_function(_detail_app)
    at.session_state["selected_ticket"] = dict(ticket)
    return at.run()


def test_confirmed_close_is_persisted(monkeypatch):
    calls = []

    def change_ticket_status(self, ticket_id, *, status):
        calls.append((ticket_id, status.value))
        return {**TICKET, "status": status.value}

    monkeypatch.setattr(TicketdeskAPIClient, "change_ticket_status", change_ticket_status)

    at = _run_with_ticket()
    at.button(key="ticket_status__step__closed").click().run()
    assert calls == []

    at.button(key="ticket_status__confirm").click().run()
    assert calls == [("t-1", "closed")]
    assert at.session_state["selected_ticket"]["status"] == "closed"
    assert at.success[0].value == "Status changed to Closed"


def test_failed_save_is_reported(monkeypatch):
    def change_ticket_status(self, ticket_id, *, status):
        raise APIError("Ticket is locked", status_code=409)

    monkeypatch.setattr(TicketdeskAPIClient, "change_ticket_status", change_ticket_status)

    at = _run_with_ticket({**TICKET, "status": "open"})
    at.button(key="ticket_status__step__in_progress").click().run()

    assert at.error[0].value == "[409] Ticket is locked"
    assert at.session_state["selected_ticket"]["status"] == "open"


def test_unknown_status_hides_stepper():
    at = _run_with_ticket({**TICKET, "status": "archived"})
    assert not at.exception
    assert at.warning[0].value == "This ticket has a status the dashboard does not recognise"
    assert all(not button.key or not button.key.startswith("ticket_status__") for button in at.button)


def test_read_only_mode_disables_stepper(monkeypatch):
    monkeypatch.setenv("TICKETDESK_READ_ONLY", "true")
    at = _run_with_ticket()
    steps = [button for button in at.button if button.key and button.key.startswith("ticket_status__step__")]
    assert len(steps) == 4
    assert all(button.disabled for button in steps)
