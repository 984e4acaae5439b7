"""Chip ledger accounting for a poker club's cashier and admin dashboards."""

__version__ = "0.1.0"
