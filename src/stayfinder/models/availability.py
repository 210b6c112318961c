from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .listing import PropertyListing


@dataclass
class AvailabilityResult:
    """Merged outcome of one aggregation.

    ``breakdown`` carries every configured source, including those that
    failed (with a zero count). ``unavailable`` maps failed sources to the
    reason they were skipped.
    """

    properties: List[PropertyListing] = field(default_factory=list)
    breakdown: Dict[str, int] = field(default_factory=dict)
    unavailable: Dict[str, str] = field(default_factory=dict)

    @property
    def total_count(self) -> int:
        return len(self.properties)

    def to_wire(self) -> dict:
        return {
            "success": True,
            "properties": [p.to_wire() for p in self.properties],
            "totalCount": self.total_count,
            "breakdown": dict(self.breakdown),
            "unavailable": dict(self.unavailable),
        }
