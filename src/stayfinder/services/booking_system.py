from __future__ import annotations

import logging
import time
from typing import Any, List, Mapping, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError as PydanticValidationError

from stayfinder.errors import SourceUnavailable
from stayfinder.models import PropertyListing, StayRequest, SystemCredential, prefixed_id, unprefixed_id

from .sources import Source


logger = logging.getLogger(__name__)


class BookingSystemClient(Source):
    """Thin client for an external booking system's availability endpoint.

    - Authentication: API key via ``Authorization: Bearer <key>``; the secret,
      when stored, goes in ``X-API-Secret``.
    - Rate limiting: simple client-side min-interval between requests per
      client instance.
    - Expects ``{"items": [{"id", "name", "location", "rateFrom", "maxGuests", ...}]}``.
      Items flagged ``"available": false`` are dropped.
    - Single listings come from ``<endpoint>/properties/<id>``; a 404 means unknown.
    """

    def __init__(
        self,
        credential: SystemCredential,
        user_agent: str = "Stayfinder/1.0",
        timeout: float = 10.0,
        min_interval_secs: float = 0.3,
    ) -> None:
        self.credential = credential
        self.tag = credential.system_name
        self.user_agent = user_agent
        self.timeout = timeout
        self.min_interval_secs = min_interval_secs
        self._last_call = 0.0

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
            "Authorization": f"Bearer {self.credential.api_key}",
        }
        if self.credential.api_secret:
            headers["X-API-Secret"] = self.credential.api_secret
        return headers

    def _to_listing(self, item: Mapping[str, Any], require_available: bool = True) -> Optional[PropertyListing]:
        if require_available and item.get("available") is False:
            return None
        rate = item.get("rateFrom", item.get("rate"))
        return PropertyListing(
            id=prefixed_id(self.tag, item["id"]),
            system=self.tag,
            name=item["name"],
            location=item.get("location") or "",
            thumbnail=item.get("thumbnail") or "",
            rate_from=rate,
            max_guests=item.get("maxGuests"),
            description=item.get("description") or "",
            amenities=list(item.get("amenities") or []),
        )

    def _get_json(self, path: str, params: Optional[dict] = None, missing_ok: bool = False) -> Any:
        """GET ``<endpoint>/<path>`` and decode JSON; ``None`` for a 404 when ``missing_ok``."""
        # Respect client-side pacing
        now = time.time()
        if now - self._last_call < self.min_interval_secs:
            time.sleep(self.min_interval_secs - (now - self._last_call))

        url = f"{self.credential.endpoint_url.rstrip('/')}/{path}"
        try:
            resp = requests.get(url, params=params, headers=self._auth_headers(), timeout=self.timeout)
            if missing_ok and resp.status_code == 404:
                return None
            resp.raise_for_status()
            return resp.json()
        except requests.Timeout as e:
            raise SourceUnavailable(self.tag, "request timed out", e) from e
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise SourceUnavailable(self.tag, f"HTTP {status}", e) from e
        except requests.exceptions.JSONDecodeError as e:
            raise SourceUnavailable(self.tag, "response is not valid JSON", e) from e
        except requests.RequestException as e:
            raise SourceUnavailable(self.tag, f"request failed: {e}", e) from e
        finally:
            # Failed calls count towards pacing too
            self._last_call = time.time()

    def fetch_candidates(self, request: StayRequest) -> List[PropertyListing]:
        payload = self._get_json("availability", params=request.to_wire())
        items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            raise SourceUnavailable(self.tag, "unexpected response payload")

        listings: List[PropertyListing] = []
        for it in items:
            if not isinstance(it, dict):
                continue
            try:
                listing = self._to_listing(it)
            except (KeyError, PydanticValidationError) as e:
                logger.warning("Skipping malformed %s item %r: %s", self.tag, it.get("id"), e)
                continue
            if listing is not None:
                listings.append(listing)
        return listings

    def lookup(self, listing_id: str) -> Optional[PropertyListing]:
        raw_id = unprefixed_id(self.tag, listing_id)
        if raw_id is None:
            return None
        payload = self._get_json(f"properties/{quote(raw_id, safe='')}", missing_ok=True)
        if payload is None:
            return None
        item = payload.get("item", payload) if isinstance(payload, dict) else None
        if not isinstance(item, dict):
            raise SourceUnavailable(self.tag, "unexpected response payload")
        try:
            return self._to_listing(item, require_available=False)
        except (KeyError, PydanticValidationError) as e:
            raise SourceUnavailable(self.tag, f"malformed property {listing_id}: {e}", e) from e
