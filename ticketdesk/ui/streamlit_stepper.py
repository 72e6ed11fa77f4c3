from __future__ import annotations

import streamlit as st

from ticketdesk.tickets.state import TicketStatus
from ticketdesk.ui.stepper import StatusChangeHandler, StatusStepper, StepperProps, StepView


def _stepper_state_key(key: str) -> str:
    return f"{key}__stepper"


def get_stepper(key: str, *, allow_reopen: bool = False) -> StatusStepper:
    """Return the stepper mounted under ``key``, creating it on first render."""

    state_key = _stepper_state_key(key)
    stepper = st.session_state.get(state_key)
    if not isinstance(stepper, StatusStepper):
        stepper = StatusStepper(allow_reopen=allow_reopen)
        st.session_state[state_key] = stepper
    stepper.allow_reopen = allow_reopen
    return stepper


def unmount_stepper(key: str) -> None:
    """Drop the stepper state, e.g. when the detail view switches tickets."""

    st.session_state.pop(_stepper_state_key(key), None)


def _step_button_label(step: StepView) -> str:
    marker = step.icon if step.is_active else str(step.number)
    return f"{marker} {step.label}"


def render_status_stepper(
    current_status: TicketStatus,
    on_status_change: StatusChangeHandler | None = None,
    *,
    disabled: bool = False,
    key: str = "status_stepper",
    allow_reopen: bool = False,
) -> StatusStepper:
    """Render the status stepper and its confirmation prompt.

    Clicks are routed through ``on_click`` callbacks, which Streamlit runs
    before the next script run, so the props bound here are the ones the
    handler sees. ``on_status_change`` is invoked at most once per click.
    """

    stepper = get_stepper(key, allow_reopen=allow_reopen)
    props = StepperProps(current_status=current_status, on_status_change=on_status_change, disabled=disabled)
    steps = stepper.steps(props)

    columns = st.columns(len(steps))
    for column, step in zip(columns, steps):
        with column:
            st.button(
                _step_button_label(step),
                key=f"{key}__step__{step.status.value}",
                type="primary" if step.is_current else "secondary",
                disabled=not step.is_clickable,
                on_click=stepper.click,
                args=(props, step.status),
            )
            if step.is_current:
                st.caption("Current")
            if step.index < len(steps) - 1:
                st.progress(1.0 if step.connector_filled else 0.0)

    prompt = stepper.prompt()
    if prompt is not None:
        with st.container(border=True):
            st.markdown(f"#### {prompt.title}")
            st.write(prompt.message)
            cancel_col, confirm_col = st.columns(2)
            cancel_col.button("Cancel", key=f"{key}__cancel", on_click=stepper.cancel)
            confirm_col.button(
                "Confirm",
                key=f"{key}__confirm",
                type="primary",
                on_click=stepper.confirm,
                args=(props,),
            )

    return stepper
