from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from stayfinder import __version__
from stayfinder.config import AppConfig, load_config
from stayfinder.errors import AggregationFailure, SourceUnavailable, ValidationError
from stayfinder.models import BookingRequest, PropertyListing, StayRequest
from stayfinder.services import Source, aggregate, build_sources, quote
from stayfinder.utils.log import configure_logging


logger = logging.getLogger(__name__)

app = FastAPI(title="Stayfinder", version=__version__)
config = load_config()


@app.middleware("http")
async def catch_unexpected_errors(request: Request, call_next):
    # Registered before CORS so error responses still pass through it
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Error handling %s", request.url.path)
        return _error(500, "An unexpected error occurred")


# Storefront clients call from arbitrary origins; reflect whichever one asks.
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=".*",
    allow_methods=["*"],
    allow_headers=["*"],
)


PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@app.on_event("startup")
def on_startup() -> None:
    configure_logging(config.log_level)


def get_config() -> AppConfig:
    return config


def get_sources(cfg: AppConfig = Depends(get_config)) -> List[Source]:
    sources = getattr(app.state, "sources", None)
    if not sources:
        # An empty list means the credential store was unreadable; retry next time
        sources = build_sources(cfg)
        if sources:
            app.state.sources = sources
    return sources


def _error(status: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse({"success": False, "error": message, **extra}, status_code=status)


@app.exception_handler(ValidationError)
def on_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Validation failed on %s: %s (%s)", request.url.path, exc.reason, exc.field)
    return _error(400, exc.reason, field=exc.field)


@app.exception_handler(AggregationFailure)
def on_aggregation_failure(request: Request, exc: AggregationFailure) -> JSONResponse:
    logger.error("Aggregation failed: %s", exc)
    return _error(503, "Availability is temporarily unavailable. Please try again shortly.")


@app.exception_handler(RequestValidationError)
def on_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(422, "Invalid request body", details=jsonable_errors(exc))


def jsonable_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    out = []
    for err in exc.errors():
        out.append({"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")})
    return out


def _search(raw: Dict[str, Any], sources: List[Source], cfg: AppConfig) -> JSONResponse:
    stay = StayRequest.parse(
        raw,
        max_guests=cfg.aggregator.max_guests,
        default_guests=cfg.aggregator.default_guests,
    )
    result = aggregate(stay, sources, cfg.aggregator)
    return JSONResponse(result.to_wire())


def find_available(
    property_id: str, stay: StayRequest, sources: List[Source], cfg: AppConfig
) -> Optional[PropertyListing]:
    result = aggregate(stay, sources, cfg.aggregator)
    for l in result.properties:
        if l.id == property_id:
            return l
    return None


def find_property(property_id: str, sources: List[Source]) -> Optional[PropertyListing]:
    """First source that knows ``property_id`` wins; dates are not considered."""
    failures: Dict[str, str] = {}
    for s in sources:
        try:
            listing = s.lookup(property_id)
        except SourceUnavailable as e:
            logger.warning("Source %s unavailable for lookup of %s: %s", s.tag, property_id, e.reason)
            failures[s.tag] = e.reason
            continue
        if listing is not None:
            return listing
    if not sources or len(failures) == len(sources):
        raise AggregationFailure(failures)
    return None


@app.options("/{path:path}")
def preflight(path: str) -> Response:
    # Pre-flight requests carrying CORS headers are answered by the middleware
    return Response(status_code=204, headers=PREFLIGHT_HEADERS)


@app.get("/availability")
def availability_query(
    check_in: Optional[str] = Query(None, alias="checkIn"),
    check_out: Optional[str] = Query(None, alias="checkOut"),
    guests: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    sources: List[Source] = Depends(get_sources),
    cfg: AppConfig = Depends(get_config),
) -> JSONResponse:
    raw = {"checkIn": check_in, "checkOut": check_out, "guests": guests, "location": location}
    return _search(raw, sources, cfg)


@app.post("/availability")
def availability_body(
    payload: Dict[str, Any] = Body(...),
    sources: List[Source] = Depends(get_sources),
    cfg: AppConfig = Depends(get_config),
) -> JSONResponse:
    return _search(payload, sources, cfg)


@app.get("/properties/{property_id}")
def property_detail(property_id: str, sources: List[Source] = Depends(get_sources)) -> JSONResponse:
    listing = find_property(property_id, sources)
    if listing is None:
        return _error(404, "Property not found")
    return JSONResponse({"success": True, "property": listing.to_wire()})


@app.get("/properties/{property_id}/quote")
def property_quote(
    property_id: str,
    check_in: Optional[str] = Query(None, alias="checkIn"),
    check_out: Optional[str] = Query(None, alias="checkOut"),
    guests: Optional[str] = Query(None),
    sources: List[Source] = Depends(get_sources),
    cfg: AppConfig = Depends(get_config),
) -> JSONResponse:
    stay = StayRequest.parse(
        {"checkIn": check_in, "checkOut": check_out, "guests": guests},
        max_guests=cfg.aggregator.max_guests,
        default_guests=cfg.aggregator.default_guests,
    )
    listing = find_available(property_id, stay, sources, cfg)
    if listing is None:
        return _error(404, "Property is not available for the selected dates")
    pricing = quote(listing.rate_from, stay, cfg.pricing)
    return JSONResponse(
        {"success": True, "property": listing.to_wire(), "stay": stay.to_wire(), "pricing": pricing.to_wire()}
    )


@app.post("/bookings", status_code=201)
def create_booking(
    payload: BookingRequest,
    sources: List[Source] = Depends(get_sources),
    cfg: AppConfig = Depends(get_config),
) -> JSONResponse:
    """Confirm a booking in demo mode: priced and logged, never persisted."""
    stay = StayRequest.parse(
        payload.stay_fields(),
        max_guests=cfg.aggregator.max_guests,
        default_guests=cfg.aggregator.default_guests,
    )
    listing = find_available(payload.property_id, stay, sources, cfg)
    if listing is None:
        return _error(404, "Property is not available for the selected dates")
    pricing = quote(listing.rate_from, stay, cfg.pricing)
    booking = {
        "property": {"id": listing.id, "name": listing.name, "location": listing.location},
        "dates": {**stay.to_wire(), "nights": stay.nights},
        "guests": stay.guests,
        "guestDetails": payload.guest_details.model_dump(by_alias=True),
        "pricing": pricing.to_wire(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    logger.info("Booking confirmed (demo): %s for %s, %s", listing.id, stay.check_in, stay.check_out)
    return JSONResponse({"success": True, "demo": True, "booking": booking}, status_code=201)


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "version": app.version}
