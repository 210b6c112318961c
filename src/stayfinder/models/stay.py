"""Stay request parsing and validation."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from stayfinder.errors import ValidationError


DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
INT_RE = re.compile(r"^[+-]?\d+$")

DEFAULT_MAX_GUESTS = 50
DEFAULT_GUESTS = 2


def parse_date(field: str, value: Any) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_RE.match(value.strip()):
        raise ValidationError(field, "Invalid date format. Use YYYY-MM-DD format.")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(field, "Invalid date format. Use YYYY-MM-DD format.") from None


def parse_guests(value: Any, default: int = DEFAULT_GUESTS) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValidationError("guests", "Guests must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and INT_RE.match(value.strip()):
        return int(value.strip())
    raise ValidationError("guests", "Guests must be an integer")


class StayRequest(BaseModel):
    """Immutable search parameters: dates, party size and optional location."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    check_in: date = Field(alias="checkIn")
    check_out: date = Field(alias="checkOut")
    guests: int = DEFAULT_GUESTS
    location: Optional[str] = None

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def check(self, today: Optional[date] = None, max_guests: int = DEFAULT_MAX_GUESTS) -> None:
        """Raise ``ValidationError`` for the first violated constraint."""
        today = today or date.today()
        if self.check_in <= today:
            raise ValidationError("checkIn", "Check-in date must be in the future")
        if self.check_out <= self.check_in:
            raise ValidationError("checkOut", "Check-out date must be after check-in date")
        if self.guests < 1 or self.guests > max_guests:
            raise ValidationError("guests", f"Guests must be an integer between 1 and {max_guests}")

    @classmethod
    def parse(
        cls,
        raw: Mapping[str, Any],
        today: Optional[date] = None,
        max_guests: int = DEFAULT_MAX_GUESTS,
        default_guests: int = DEFAULT_GUESTS,
    ) -> "StayRequest":
        """Build a validated request from wire fields (query string or JSON body)."""
        for name in ("checkIn", "checkOut"):
            if raw.get(name) in (None, ""):
                raise ValidationError(name, "Missing required parameters: checkIn and checkOut")
        check_in = parse_date("checkIn", raw.get("checkIn"))
        check_out = parse_date("checkOut", raw.get("checkOut"))
        guests = parse_guests(raw.get("guests"), default_guests)

        location = raw.get("location")
        if location is not None and not isinstance(location, str):
            raise ValidationError("location", "Location must be a string")
        location = (location or "").strip() or None

        req = cls(check_in=check_in, check_out=check_out, guests=guests, location=location)
        req.check(today, max_guests)
        return req

    def to_wire(self) -> dict:
        data = {
            "checkIn": self.check_in.isoformat(),
            "checkOut": self.check_out.isoformat(),
            "guests": self.guests,
        }
        if self.location:
            data["location"] = self.location
        return data
