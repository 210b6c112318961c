"""Data models for bookable listings reported by source systems."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


NIGHTSBRIDGE = "nightsbridge"
CHECKFRONT = "checkfront"
MANUAL = "manual"


class PropertyListing(BaseModel):
    """A bookable property as reported by one booking system.

    Identifiers are prefixed per source (``nb-``, ``cf-`` ...) so they stay
    unique once lists from several systems are merged.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)
    system: str = Field(min_length=1)
    name: str
    location: str
    thumbnail: str = ""
    rate_from: float = Field(alias="rateFrom", gt=0)
    max_guests: int = Field(alias="maxGuests", ge=1)
    description: str = ""
    amenities: List[str] = Field(default_factory=list)
    available: bool = False

    @field_validator("amenities")
    @classmethod
    def _dedupe_amenities(cls, value: List[str]) -> List[str]:
        seen: set[str] = set()
        out: List[str] = []
        for a in value:
            a = a.strip()
            if a and a.lower() not in seen:
                seen.add(a.lower())
                out.append(a)
        return out

    def matches_location(self, needle: str) -> bool:
        n = needle.lower()
        return n in self.name.lower() or n in self.location.lower()

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


_ID_PREFIXES = {NIGHTSBRIDGE: "nb", CHECKFRONT: "cf", MANUAL: "mn"}


def id_prefix(system: str) -> str:
    return _ID_PREFIXES.get(system, system)


def prefixed_id(system: str, raw_id: object) -> str:
    """Qualify a source-local identifier so it is unique across systems."""
    prefix = id_prefix(system)
    s = str(raw_id).strip()
    return s if s.startswith(f"{prefix}-") else f"{prefix}-{s}"


def unprefixed_id(system: str, listing_id: str) -> Optional[str]:
    """Source-local identifier for ``listing_id``, or ``None`` if another system owns it."""
    prefix = f"{id_prefix(system)}-"
    if not listing_id.startswith(prefix) or len(listing_id) == len(prefix):
        return None
    return listing_id[len(prefix):]
