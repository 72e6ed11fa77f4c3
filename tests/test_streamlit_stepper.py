from streamlit.testing.v1 import AppTest


def _stepper_app():
    import streamlit as st

    from ticketdesk.tickets.state import TicketStatus
    from ticketdesk.ui.streamlit_stepper import render_status_stepper

    st.session_state.setdefault("status", "resolved")
    st.session_state.setdefault("changes", [])

    def on_status_change(status: TicketStatus) -> None:
        st.session_state["changes"].append(status.value)

    render_status_stepper(
        TicketStatus(st.session_state["status"]),
        on_status_change,
        disabled=st.session_state.get("disabled", False),
        key="stepper",
        allow_reopen=st.session_state.get("allow_reopen", False),
    )


def _run_app(**state) -> AppTest:
    at = AppTest.from_function(_stepper_app)
    for name, value in state.items():
        at.session_state[name] = value
    return at.run()


def test_renders_one_button_per_status():
    at = _run_app()
    assert not at.exception
    keys = [button.key for button in at.button]
    assert keys == [
        "stepper__step__open",
        "stepper__step__in_progress",
        "stepper__step__resolved",
        "stepper__step__closed",
    ]
    assert at.button(key="stepper__step__open").disabled
    assert not at.button(key="stepper__step__closed").disabled
    assert [caption.value for caption in at.caption] == ["Current"]


def test_closing_asks_for_confirmation_then_applies():
    at = _run_app()
    at.button(key="stepper__step__closed").click().run()

    assert at.session_state["changes"] == []
    assert at.markdown[0].value == "#### Confirm Status Change"

    at.button(key="stepper__confirm").click().run()
    assert at.session_state["changes"] == ["closed"]
    assert len(at.button) == 4


def test_cancel_dismisses_prompt_without_change():
    at = _run_app(status="open")
    at.button(key="stepper__step__closed").click().run()
    at.button(key="stepper__cancel").click().run()

    assert at.session_state["changes"] == []
    assert len(at.button) == 4


def test_forward_click_applies_immediately():
    at = _run_app(status="open")
    at.button(key="stepper__step__resolved").click().run()
    assert at.session_state["changes"] == ["resolved"]
    assert len(at.button) == 4


def test_disabled_stepper_renders_all_steps_disabled():
    at = _run_app(disabled=True)
    assert all(button.disabled for button in at.button)


def test_closed_ticket_steps_stay_disabled_by_default():
    at = _run_app(status="closed")
    assert at.button(key="stepper__step__open").disabled
    assert at.button(key="stepper__step__resolved").disabled
    assert not at.button(key="stepper__step__closed").disabled


def test_reopen_enabled_confirms_before_leaving_closed():
    at = _run_app(status="closed", allow_reopen=True)
    assert not at.button(key="stepper__step__open").disabled

    at.button(key="stepper__step__open").click().run()
    assert at.session_state["changes"] == []
    assert at.markdown[0].value == "#### Confirm Status Change"

    at.button(key="stepper__confirm").click().run()
    assert at.session_state["changes"] == ["open"]
