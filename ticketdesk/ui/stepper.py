"""Status workflow control shown on the ticket detail view.

The stepper is a controlled component: the current status, the ``disabled``
flag and the change callback are supplied by the parent on every render as
:class:`StepperProps`. The only state the control owns is a single optional
``pending_target`` holding a status that waits for the user's confirmation.

Users may only re-assert the current status or move forward in
:data:`~ticketdesk.tickets.state.STATUS_SEQUENCE`. Moving to ``closed`` (and,
on paper, leaving ``closed``) requires an explicit confirmation. Because the
backward guard runs first, the "leaving closed" case is unreachable unless the
stepper is built with ``allow_reopen=True``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ticketdesk.tickets.state import (
    STATUS_ICONS,
    STATUS_LABELS,
    STATUS_SEQUENCE,
    TicketStatus,
    status_index,
)

logger = logging.getLogger(__name__)

StatusChangeHandler = Callable[[TicketStatus], None]

CONFIRM_TITLE = "Confirm Status Change"


@dataclass(frozen=True, slots=True)
class StepperProps:
    """Inputs supplied by the parent view on every render."""

    current_status: TicketStatus
    on_status_change: StatusChangeHandler | None = None
    disabled: bool = False

    @property
    def interactive(self) -> bool:
        return self.on_status_change is not None and not self.disabled


@dataclass(frozen=True, slots=True)
class StepView:
    """Derived display state for one status in the sequence."""

    status: TicketStatus
    index: int
    label: str
    icon: str
    is_active: bool
    is_current: bool
    is_clickable: bool
    connector_filled: bool

    @property
    def number(self) -> int:
        return self.index + 1


@dataclass(frozen=True, slots=True)
class ConfirmationPrompt:
    target: TicketStatus
    title: str
    message: str


def build_prompt(target: TicketStatus) -> ConfirmationPrompt:
    message = f'Are you sure you want to change the status to "{STATUS_LABELS[target]}"?'
    if target is TicketStatus.CLOSED:
        message += " This action will close the ticket."
    return ConfirmationPrompt(target=target, title=CONFIRM_TITLE, message=message)


def requires_confirmation(current: TicketStatus, target: TicketStatus) -> bool:
    """Closing, or leaving ``closed``, has to be confirmed by the user."""

    if target is TicketStatus.CLOSED:
        return True
    return current is TicketStatus.CLOSED and target is not TicketStatus.CLOSED


class StatusStepper:
    """Forward-only status workflow with a single confirmation slot.

    States are ``Idle`` (``pending_target is None``) and
    ``AwaitingConfirmation(target)``. Every operation is synchronous and none of
    them raise; misuse (unknown current status, missing callback) makes the
    control inert instead.
    """

    __slots__ = ("pending_target", "allow_reopen")

    def __init__(self, *, allow_reopen: bool = False) -> None:
        self.pending_target: TicketStatus | None = None
        self.allow_reopen = allow_reopen

    def __repr__(self) -> str:
        return f"StatusStepper(pending_target={self.pending_target!r}, allow_reopen={self.allow_reopen!r})"

    @property
    def is_awaiting_confirmation(self) -> bool:
        return self.pending_target is not None

    def steps(self, props: StepperProps) -> list[StepView]:
        current = status_index(props.current_status)
        views: list[StepView] = []
        for index, status in enumerate(STATUS_SEQUENCE):
            views.append(
                StepView(
                    status=status,
                    index=index,
                    label=STATUS_LABELS[status],
                    icon=STATUS_ICONS[status],
                    is_active=index <= current,
                    is_current=index == current,
                    is_clickable=props.interactive and self._reachable(current, index),
                    connector_filled=index < current,
                )
            )
        return views

    def prompt(self) -> ConfirmationPrompt | None:
        if self.pending_target is None:
            return None
        return build_prompt(self.pending_target)

    def click(self, props: StepperProps, status: TicketStatus) -> None:
        """Handle a click on the step for ``status``."""

        if not props.interactive:
            logger.debug("Ignoring click on %s: stepper is not interactive", status)
            return

        current = status_index(props.current_status)
        target = status_index(status)
        if not self._reachable(current, target):
            logger.debug(
                "Ignoring click on %s: not reachable from %s", status, props.current_status
            )
            return

        status = STATUS_SEQUENCE[target]
        if requires_confirmation(STATUS_SEQUENCE[current], status):
            if self.pending_target is not None and self.pending_target is not status:
                logger.debug("Replacing pending target %s", self.pending_target.value)
            self.pending_target = status
            logger.debug("Awaiting confirmation for %s", status.value)
            return

        self._emit(props.on_status_change, status)

    def confirm(self, props: StepperProps) -> None:
        """Accept the pending target.

        The target is not re-checked against ``props.current_status``: if the
        parent changed the status while the prompt was open, the (possibly
        stale) target is still reported.
        """

        target = self.pending_target
        if target is None:
            logger.debug("Confirm without a pending target")
            return
        if props.on_status_change is None:
            logger.debug("Dropping confirmed %s: no change handler", target.value)
        else:
            self._emit(props.on_status_change, target)
        self.pending_target = None

    def cancel(self) -> None:
        if self.pending_target is not None:
            logger.debug("Cancelled pending change to %s", self.pending_target.value)
        self.pending_target = None

    def _reachable(self, current: int, target: int) -> bool:
        if current < 0 or target < 0:
            return False
        if target >= current:
            return True
        # Backward moves exist only for reopening, and only when enabled.
        return self.allow_reopen and STATUS_SEQUENCE[current] is TicketStatus.CLOSED

    @staticmethod
    def _emit(handler: StatusChangeHandler | None, status: TicketStatus) -> None:
        if handler is None:
            return
        logger.info("Status change requested: %s", status.value)
        handler(status)
