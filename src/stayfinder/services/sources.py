"""Booking-system sources the aggregator fans out to."""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import psycopg2

from stayfinder.errors import SourceUnavailable
from stayfinder.models import MANUAL, PropertyListing, StayRequest, unprefixed_id
from stayfinder.repositories import postgres


DateRange = Tuple[date, date]


class Source:
    """One booking system able to list candidate properties for a stay.

    Implementations return only listings they consider free for the
    requested dates and raise ``SourceUnavailable`` when they cannot answer.
    """

    tag: str = ""

    def fetch_candidates(self, request: StayRequest) -> List[PropertyListing]:
        raise NotImplementedError

    def lookup(self, listing_id: str) -> Optional[PropertyListing]:
        """The listing with this id regardless of dates, or ``None`` if unknown here."""
        return None


def overlaps(blocked: DateRange, check_in: date, check_out: date) -> bool:
    start, end = blocked
    return start < check_out and check_in < end


class CatalogSource(Source):
    """Static in-memory listings with an optional blocked-dates calendar.

    ``blocked`` maps a listing id to half-open ``(start, end)`` date ranges
    during which the listing is already taken.
    """

    def __init__(
        self,
        tag: str,
        listings: Iterable[PropertyListing],
        blocked: Optional[Mapping[str, Sequence[DateRange]]] = None,
    ) -> None:
        self.tag = tag
        self.listings = [l for l in listings if l.system == tag]
        self.blocked: Dict[str, List[DateRange]] = {k: list(v) for k, v in (blocked or {}).items()}

    def is_available(self, listing: PropertyListing, request: StayRequest) -> bool:
        return not any(
            overlaps(r, request.check_in, request.check_out) for r in self.blocked.get(listing.id, [])
        )

    def fetch_candidates(self, request: StayRequest) -> List[PropertyListing]:
        return [l for l in self.listings if self.is_available(l, request)]

    def lookup(self, listing_id: str) -> Optional[PropertyListing]:
        for l in self.listings:
            if l.id == listing_id:
                return l
        return None


class PostgresSource(Source):
    """Manually managed properties kept in the ``properties`` table.

    These listings have no external calendar, so every active row counts as
    available.
    """

    def __init__(self, url: Optional[str] = None, tag: str = MANUAL) -> None:
        self.tag = tag
        self.url = url

    def fetch_candidates(self, request: StayRequest) -> List[PropertyListing]:
        try:
            return postgres.active_properties(
                booking_system=self.tag,
                min_guests=request.guests,
                location=request.location,
                url=self.url,
            )
        except psycopg2.Error as e:
            raise SourceUnavailable(self.tag, f"database error: {e}", e) from e

    def lookup(self, listing_id: str) -> Optional[PropertyListing]:
        raw_id = unprefixed_id(self.tag, listing_id)
        if raw_id is None:
            return None
        try:
            listing = postgres.property_by_id(raw_id, url=self.url)
        except psycopg2.Error as e:
            raise SourceUnavailable(self.tag, f"database error: {e}", e) from e
        if listing is None or listing.system != self.tag:
            return None
        return listing
