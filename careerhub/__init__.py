"""CareerHub backend: activity ledger, streaks and placement scoring."""

__version__ = "0.1.0"
