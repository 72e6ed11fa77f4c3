from __future__ import annotations

from enum import Enum


class TicketStatus(str, Enum):
    """Supported states for a ticket's lifecycle."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


# Order defines "forward" for the status stepper.
STATUS_SEQUENCE: tuple[TicketStatus, ...] = (
    TicketStatus.OPEN,
    TicketStatus.IN_PROGRESS,
    TicketStatus.RESOLVED,
    TicketStatus.CLOSED,
)

STATUS_LABELS: dict[TicketStatus, str] = {
    TicketStatus.OPEN: "Open",
    TicketStatus.IN_PROGRESS: "In Progress",
    TicketStatus.RESOLVED: "Resolved",
    TicketStatus.CLOSED: "Closed",
}

STATUS_ICONS: dict[TicketStatus, str] = {
    TicketStatus.OPEN: "🕒",
    TicketStatus.IN_PROGRESS: "▶️",
    TicketStatus.RESOLVED: "✅",
    TicketStatus.CLOSED: "⛔",
}


def status_index(value: TicketStatus | str | None) -> int:
    """Return the position of ``value`` in the sequence, ``-1`` when unknown."""

    try:
        status = TicketStatus(value)
    except ValueError:
        return -1
    return STATUS_SEQUENCE.index(status)


def parse_status(value: TicketStatus | str | None) -> TicketStatus | None:
    """Coerce a raw API value into a status, ``None`` when it is not one."""

    try:
        return TicketStatus(value)
    except ValueError:
        return None
