"""Operational scripts run with ``python -m stablebook.scripts.<name>``."""
