"""Ticket Desk: JSON-file backed REST service for teams, users and tickets."""

__version__ = "1.0.0"
