from __future__ import annotations

import logging
from typing import List, Optional

import psycopg2

from stayfinder.config import AppConfig
from stayfinder.models import CHECKFRONT, MANUAL, NIGHTSBRIDGE
from stayfinder.repositories import postgres

from .booking_system import BookingSystemClient
from .catalog import DEMO_LISTINGS
from .sources import CatalogSource, PostgresSource, Source


logger = logging.getLogger(__name__)


def demo_sources() -> List[Source]:
    return [
        CatalogSource(NIGHTSBRIDGE, DEMO_LISTINGS),
        CatalogSource(CHECKFRONT, DEMO_LISTINGS),
    ]


def build_sources(config: Optional[AppConfig] = None) -> List[Source]:
    """Sources for the configured mode.

    Live mode builds one client per active credential plus the manually
    managed properties table. If the credential store cannot be read, no
    sources are returned so that lookups fail rather than serve the demo
    catalog as live data. Each source tag appears at most once.
    """
    cfg = config or AppConfig()
    if not cfg.live_sources:
        return demo_sources()
    try:
        credentials = postgres.active_credentials(cfg.db_url)
    except psycopg2.Error as e:
        logger.error("Credential store unavailable, no live sources configured: %s", e)
        return []
    sources: List[Source] = []
    seen = {MANUAL}
    for c in credentials:
        if c.system_name in seen:
            logger.warning("Ignoring extra credential for booking system %s", c.system_name)
            continue
        seen.add(c.system_name)
        sources.append(
            BookingSystemClient(
                c,
                user_agent=cfg.user_agent,
                timeout=cfg.aggregator.source_timeout_secs,
                min_interval_secs=cfg.source_min_interval_secs,
            )
        )
    sources.append(PostgresSource(cfg.db_url))
    logger.info("Configured %d live sources: %s", len(sources), ", ".join(s.tag for s in sources))
    return sources
