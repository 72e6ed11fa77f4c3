"""Ticketdesk dashboard presentation layer."""
