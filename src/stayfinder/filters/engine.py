from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from pydantic import BaseModel

from stayfinder.models import PropertyListing, StayRequest


class FilterConfig(BaseModel):
    min_guests: int = 1
    location: Optional[str] = None

    @classmethod
    def for_request(cls, request: StayRequest) -> "FilterConfig":
        return cls(min_guests=request.guests, location=request.location)


@dataclass
class FilterResult:
    included: bool
    reasons: List[str] = field(default_factory=list)


class FilterEngine:
    """Capacity and location rules applied to one source's candidates.

    Availability for the requested dates is not checked here; each source
    only returns listings it considers free.
    """

    def __init__(self, config: FilterConfig) -> None:
        self.config = config
        self._needle = (config.location or "").strip().lower()

    def apply(self, listing: PropertyListing) -> FilterResult:
        if listing.max_guests < self.config.min_guests:
            return FilterResult(False, ["below_capacity"])
        if self._needle and not listing.matches_location(self._needle):
            return FilterResult(False, [f"location_mismatch:{self._needle}"])
        return FilterResult(True)

    def select(self, listings: Iterable[PropertyListing]) -> List[PropertyListing]:
        return [l for l in listings if self.apply(l).included]
