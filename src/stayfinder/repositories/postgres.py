from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Any, List, Mapping, Optional

import psycopg2
import psycopg2.extras

from stayfinder.models import PropertyListing, SystemCredential, prefixed_id


logger = logging.getLogger(__name__)


def db_url() -> str:
    return os.environ.get("STAYFINDER_DB_URL", "postgresql://stayfinder:stayfinder@db:5432/stayfinder")


@contextmanager
def connect(url: Optional[str] = None):
    conn = psycopg2.connect(url or db_url())
    try:
        yield conn
    finally:
        conn.close()


def compose_location(location: Optional[str], city: Optional[str], country: Optional[str]) -> str:
    """Join location, city and country, skipping blanks and repeats.

    Location filters match against this string, so a search for a city or a
    country finds the property even when ``location`` holds a street or area.
    """
    parts: List[str] = []
    for p in (location, city, country):
        p = (p or "").strip()
        if p and p.lower() not in (x.lower() for x in parts):
            parts.append(p)
    return ", ".join(parts)


def row_to_listing(row: Mapping[str, Any]) -> PropertyListing:
    system = row.get("booking_system") or "manual"
    images = row.get("images") or []
    return PropertyListing(
        id=prefixed_id(system, row["id"]),
        system=system,
        name=row["name"],
        location=compose_location(row.get("location"), row.get("city"), row.get("country")),
        thumbnail=images[0] if images else "",
        rate_from=float(row["price_per_night"]),
        max_guests=int(row["max_guests"]),
        description=row.get("description") or "",
        amenities=list(row.get("amenities") or []),
    )


def active_properties(
    booking_system: Optional[str] = None,
    min_guests: Optional[int] = None,
    location: Optional[str] = None,
    url: Optional[str] = None,
) -> List[PropertyListing]:
    where = ["is_active = TRUE"]
    params: List[object] = []
    if booking_system:
        where.append("booking_system = %s")
        params.append(booking_system)
    if min_guests is not None:
        where.append("max_guests >= %s")
        params.append(min_guests)
    if location:
        where.append("(name ILIKE %s OR location ILIKE %s OR city ILIKE %s OR country ILIKE %s)")
        like = f"%{location}%"
        params.extend([like, like, like, like])
    sql = (
        "SELECT id, name, description, location, city, country, max_guests, price_per_night, "
        "       images, amenities, booking_system "
        "FROM properties WHERE " + " AND ".join(where) + " ORDER BY price_per_night ASC"
    )
    results: List[PropertyListing] = []
    with connect(url) as conn:
        with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
            cur.execute(sql, params)
            for row in cur.fetchall():
                try:
                    results.append(row_to_listing(row))
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping malformed property row %s: %s", row.get("id"), e)
    return results


def property_by_id(raw_id: str, url: Optional[str] = None) -> Optional[PropertyListing]:
    """One active property by its table id, regardless of guest count or location."""
    sql = (
        "SELECT id, name, description, location, city, country, max_guests, price_per_night, "
        "       images, amenities, booking_system "
        "FROM properties WHERE id::text = %s AND is_active = TRUE"
    )
    with connect(url) as conn:
        with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
            cur.execute(sql, (raw_id,))
            row = cur.fetchone()
    return row_to_listing(row) if row else None


def active_credentials(url: Optional[str] = None) -> List[SystemCredential]:
    sql = (
        "SELECT system_name, endpoint_url, api_key, api_secret, is_active "
        "FROM system_credentials WHERE is_active = TRUE ORDER BY system_name ASC"
    )
    with connect(url) as conn:
        with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
            cur.execute(sql)
            return [SystemCredential(**row) for row in cur.fetchall()]
