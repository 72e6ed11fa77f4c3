"""Ticket lifecycle primitives shared by the dashboard views."""

from .state import (
    STATUS_ICONS,
    STATUS_LABELS,
    STATUS_SEQUENCE,
    TicketStatus,
    parse_status,
    status_index,
)

__all__ = [
    "STATUS_ICONS",
    "STATUS_LABELS",
    "STATUS_SEQUENCE",
    "TicketStatus",
    "parse_status",
    "status_index",
]
