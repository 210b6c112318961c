from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() not in ("0", "false", "no", "off", "")


@dataclass
class AggregatorConfig:
    # Upper bound a single source may take before it counts as unavailable
    source_timeout_secs: float = float(os.environ.get("STAYFINDER_SOURCE_TIMEOUT_SECS", "10"))
    max_workers: int = int(os.environ.get("STAYFINDER_MAX_WORKERS", "8"))
    max_guests: int = int(os.environ.get("STAYFINDER_MAX_GUESTS", "50"))
    default_guests: int = 2


@dataclass
class PricingConfig:
    cleaning_fee: Decimal = Decimal(os.environ.get("STAYFINDER_CLEANING_FEE", "500"))
    service_fee_rate: Decimal = Decimal(os.environ.get("STAYFINDER_SERVICE_FEE_RATE", "0.075"))
    currency: str = os.environ.get("STAYFINDER_CURRENCY", "ZAR")


@dataclass
class AppConfig:
    """Runtime configuration read from ``STAYFINDER_*`` environment variables.

    - ``live_sources`` switches from the demo catalog to booking-system
      clients built from the credential store.
    - ``db_url`` points at the Postgres database holding properties and
      system credentials.
    """

    aggregator: AggregatorConfig = field(default_factory=AggregatorConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    live_sources: bool = _env_flag("STAYFINDER_LIVE_SOURCES")
    db_url: str = os.environ.get("STAYFINDER_DB_URL", "postgresql://stayfinder:stayfinder@db:5432/stayfinder")
    log_level: str = os.environ.get("STAYFINDER_LOG_LEVEL", "INFO")
    user_agent: str = os.environ.get("HTTP_USER_AGENT", "Stayfinder/1.0")
    source_min_interval_secs: float = float(os.environ.get("STAYFINDER_SOURCE_MIN_INTERVAL_SECS", "0.3"))


def load_config(db_url: Optional[str] = None) -> AppConfig:
    cfg = AppConfig()
    if db_url:
        cfg.db_url = db_url
    return cfg
