from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


SA_PHONE_PATTERN = r"^(\+27|0)[6-8][0-9]{8}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class GuestDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    full_name: str = Field(alias="fullName", min_length=2, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: str = Field(pattern=SA_PHONE_PATTERN)
    special_requests: Optional[str] = Field(default=None, alias="specialRequests")


class BookingRequest(BaseModel):
    """Demo booking submission; stay fields use the availability wire names."""

    model_config = ConfigDict(populate_by_name=True)

    property_id: str = Field(alias="propertyId", min_length=1)
    check_in: str = Field(alias="checkIn")
    check_out: str = Field(alias="checkOut")
    guests: Optional[int] = None
    guest_details: GuestDetails = Field(alias="guestDetails")

    def stay_fields(self) -> dict:
        return {"checkIn": self.check_in, "checkOut": self.check_out, "guests": self.guests}
