"""Recurring classroom calendar with cascade rescheduling."""

__version__ = "0.3.0"
