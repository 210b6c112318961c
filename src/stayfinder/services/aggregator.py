"""Fan-out, filtering and ranking of listings across booking systems."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import date
from typing import Dict, List, Optional, Sequence

from stayfinder.config import AggregatorConfig
from stayfinder.errors import AggregationFailure, SourceUnavailable
from stayfinder.filters import FilterConfig, FilterEngine
from stayfinder.models import AvailabilityResult, PropertyListing, StayRequest

from .sources import Source


logger = logging.getLogger(__name__)


def _fetch(source: Source, request: StayRequest) -> List[PropertyListing]:
    return list(source.fetch_candidates(request))


def fetch_all(
    request: StayRequest,
    sources: Sequence[Source],
    config: AggregatorConfig,
) -> tuple[Dict[int, List[PropertyListing]], Dict[int, str]]:
    """Query every source concurrently.

    Returns candidates and failure reasons keyed by the source's position.
    Every call is submitted before any result is read; a source still
    running when the timeout expires counts as failed.
    """
    fetched: Dict[int, List[PropertyListing]] = {}
    failed: Dict[int, str] = {}
    pool = ThreadPoolExecutor(
        max_workers=max(1, min(config.max_workers, len(sources))),
        thread_name_prefix="stayfinder-source",
    )
    try:
        futures: Dict[Future, int] = {pool.submit(_fetch, s, request): i for i, s in enumerate(sources)}
        done, pending = wait(futures, timeout=config.source_timeout_secs)
        for fut in pending:
            fut.cancel()
            i = futures[fut]
            failed[i] = f"timed out after {config.source_timeout_secs:g}s"
            logger.warning("Source %s timed out after %ss", sources[i].tag, config.source_timeout_secs)
        for fut in done:
            i = futures[fut]
            try:
                fetched[i] = fut.result()
            except SourceUnavailable as e:
                failed[i] = e.reason
                logger.warning("Source %s unavailable: %s", sources[i].tag, e.reason)
            except Exception as e:
                failed[i] = str(e) or type(e).__name__
                logger.warning("Source %s failed", sources[i].tag, exc_info=True)
    finally:
        # Slow sources keep their thread; nothing waits on them
        pool.shutdown(wait=False, cancel_futures=True)
    return fetched, failed


def aggregate(
    request: StayRequest,
    sources: Sequence[Source],
    config: Optional[AggregatorConfig] = None,
    today: Optional[date] = None,
) -> AvailabilityResult:
    """Merge available listings from all sources into one rate-ordered list.

    Raises ``ValidationError`` before contacting any source when the request
    is invalid, and ``AggregationFailure`` when no source could answer.
    """
    cfg = config or AggregatorConfig()
    request.check(today, cfg.max_guests)
    sources = list(sources)
    if not sources:
        raise AggregationFailure()

    logger.info(
        "Availability query: checkIn=%s, checkOut=%s, guests=%s, location=%s",
        request.check_in, request.check_out, request.guests, request.location,
    )
    fetched, failed = fetch_all(request, sources, cfg)
    if len(failed) == len(sources):
        raise AggregationFailure({sources[i].tag: reason for i, reason in failed.items()})

    engine = FilterEngine(FilterConfig.for_request(request))
    result = AvailabilityResult(
        breakdown={s.tag: 0 for s in sources},
        unavailable={sources[i].tag: reason for i, reason in sorted(failed.items())},
    )
    seen: set[str] = set()
    merged: List[PropertyListing] = []
    for i, source in enumerate(sources):
        candidates = fetched.get(i, [])
        matched = engine.select(candidates)
        for l in matched:
            if l.id in seen:
                logger.warning("Dropping duplicate listing %s reported by %s", l.id, source.tag)
                continue
            seen.add(l.id)
            merged.append(l.model_copy(update={"system": source.tag, "available": True}))
            result.breakdown[source.tag] += 1
        if i not in failed:
            logger.info("Fetched %d candidates from %s, %d matched", len(candidates), source.tag, len(matched))

    # sorted() is stable: equal rates keep source order
    result.properties = sorted(merged, key=lambda l: l.rate_from)
    return result
