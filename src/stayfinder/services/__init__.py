"""Service layer for availability lookups."""

from .aggregator import aggregate
from .booking_system import BookingSystemClient
from .pricing import PriceBreakdown, quote
from .registry import build_sources, demo_sources
from .sources import CatalogSource, PostgresSource, Source

__all__ = [
    "BookingSystemClient",
    "CatalogSource",
    "PostgresSource",
    "PriceBreakdown",
    "Source",
    "aggregate",
    "build_sources",
    "demo_sources",
    "quote",
]
