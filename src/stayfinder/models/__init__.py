from .listing import CHECKFRONT, MANUAL, NIGHTSBRIDGE, PropertyListing, prefixed_id, unprefixed_id
from .stay import StayRequest
from .availability import AvailabilityResult
from .credential import SystemCredential
from .booking import BookingRequest, GuestDetails

__all__ = [
    "AvailabilityResult",
    "BookingRequest",
    "CHECKFRONT",
    "GuestDetails",
    "MANUAL",
    "NIGHTSBRIDGE",
    "PropertyListing",
    "StayRequest",
    "SystemCredential",
    "prefixed_id",
    "unprefixed_id",
]
