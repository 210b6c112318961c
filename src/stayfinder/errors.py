"""Error taxonomy for availability lookups."""

from __future__ import annotations

from typing import Dict, Optional


class StayfinderError(Exception):
    """Base class for errors raised by this package."""


class ValidationError(StayfinderError):
    """A stay request violated one of its constraints.

    Raised before any source is contacted. ``field`` names the offending
    wire field (``checkIn``, ``checkOut``, ``guests`` or ``location``).
    """

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(reason)
        self.field = field
        self.reason = reason


class SourceUnavailable(StayfinderError):
    """A single booking-system source could not produce candidates."""

    def __init__(self, source: str, reason: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
        self.__cause__ = cause


class AggregationFailure(StayfinderError):
    """No configured source could be reached, so availability is unknown."""

    def __init__(self, reasons: Dict[str, str] | None = None) -> None:
        self.reasons = dict(reasons or {})
        if self.reasons:
            detail = "; ".join(f"{k}: {v}" for k, v in self.reasons.items())
            msg = f"All booking sources are unavailable ({detail})"
        else:
            msg = "No booking sources are configured"
        super().__init__(msg)
