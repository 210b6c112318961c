from __future__ import annotations

import threading
from datetime import date, timedelta
from typing import List

import pytest

from stayfinder.errors import SourceUnavailable
from stayfinder.models import PropertyListing, StayRequest
from stayfinder.services import Source


TODAY = date(2026, 3, 1)


def stay(days_ahead: int = 8, nights: int = 7, guests: int = 2, location: str | None = None) -> StayRequest:
    check_in = TODAY + timedelta(days=days_ahead)
    return StayRequest(
        check_in=check_in,
        check_out=check_in + timedelta(days=nights),
        guests=guests,
        location=location,
    )


def listing(id: str, system: str, rate: float, guests: int = 4, location: str = "Knysna, Western Cape", name: str | None = None) -> PropertyListing:
    return PropertyListing(
        id=id,
        system=system,
        name=name or f"Listing {id}",
        location=location,
        rate_from=rate,
        max_guests=guests,
    )


class ListSource(Source):
    def __init__(self, tag: str, listings: List[PropertyListing]) -> None:
        self.tag = tag
        self.listings = listings
        self.calls = 0

    def fetch_candidates(self, request: StayRequest) -> List[PropertyListing]:
        self.calls += 1
        return list(self.listings)


class FailingSource(Source):
    def __init__(self, tag: str, exc: Exception | None = None) -> None:
        self.tag = tag
        self.exc = exc or SourceUnavailable(tag, "connection refused")
        self.calls = 0

    def fetch_candidates(self, request: StayRequest) -> List[PropertyListing]:
        self.calls += 1
        raise self.exc

    def lookup(self, listing_id: str) -> PropertyListing | None:
        self.calls += 1
        raise self.exc


class SlowSource(Source):
    def __init__(self, tag: str) -> None:
        self.tag = tag
        self.release = threading.Event()

    def fetch_candidates(self, request: StayRequest) -> List[PropertyListing]:
        self.release.wait(5)
        return []


@pytest.fixture
def slow_source():
    src = SlowSource("slowbooking")
    yield src
    src.release.set()
