"""Vacation rental availability aggregation across booking systems."""

__version__ = "0.1.0"
