from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import BaseModel

from stayfinder.config import PricingConfig
from stayfinder.errors import ValidationError
from stayfinder.models import StayRequest


CENTS = Decimal("0.01")


class PriceBreakdown(BaseModel):
    nights: int
    nightly_rate: Decimal
    subtotal: Decimal
    cleaning_fee: Decimal
    service_fee_rate: Decimal
    service_fee: Decimal
    grand_total: Decimal
    currency: str

    def to_wire(self) -> dict:
        return {
            "nights": self.nights,
            "nightlyRate": float(self.nightly_rate),
            "subtotal": float(self.subtotal),
            "cleaningFee": float(self.cleaning_fee),
            "serviceFeeRate": float(self.service_fee_rate),
            "serviceFee": float(self.service_fee),
            "grandTotal": float(self.grand_total),
            "currency": self.currency,
        }


def _cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def quote(rate: float | Decimal, request: StayRequest, config: Optional[PricingConfig] = None) -> PriceBreakdown:
    """Price a stay: nightly rate times nights, plus cleaning and service fees."""
    cfg = config or PricingConfig()
    nights = request.nights
    if nights < 1:
        raise ValidationError("checkOut", "Check-out date must be after check-in date")
    nightly = Decimal(str(rate))
    subtotal = _cents(nightly * nights)
    cleaning = _cents(cfg.cleaning_fee)
    service = _cents(subtotal * cfg.service_fee_rate)
    return PriceBreakdown(
        nights=nights,
        nightly_rate=_cents(nightly),
        subtotal=subtotal,
        cleaning_fee=cleaning,
        service_fee_rate=cfg.service_fee_rate,
        service_fee=service,
        grand_total=subtotal + cleaning + service,
        currency=cfg.currency,
    )
