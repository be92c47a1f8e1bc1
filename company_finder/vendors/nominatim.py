"""Client utilities for the Nominatim place search API."""

import logging
from typing import Any

import requests

from company_finder.core.config import get_settings
from company_finder.core.errors import NotFoundError, TransportError
from company_finder.core.http import get_json
from company_finder.models import GeoPoint

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


def resolve(place_text: str) -> GeoPoint:
    """Resolve free text to coordinates using the first Nominatim match.

    Nominatim's own relevance order is trusted; no re-ranking happens here.
    """
    query = (place_text or "").strip()
    if not query:
        raise ValueError("Place text must not be empty")

    settings = get_settings()
    params = {"q": query, "format": "json", "limit": 1}
    payload = get_json(
        _SESSION,
        settings.nominatim_url,
        service="Nominatim",
        params=params,
        timeout=settings.request_timeout,
        user_agent=settings.user_agent,
    )
    if not isinstance(payload, list):
        logger.error("Nominatim returned unexpected payload type %s", type(payload).__name__)
        raise TransportError("Nominatim returned an unexpected payload")
    if not payload:
        logger.info("Nominatim found no match for %r", query)
        raise NotFoundError(f"No place found for {query!r}")

    first = payload[0]
    point = _to_point(first)
    logger.info("Resolved %r to %s,%s (%s)", query, point.latitude, point.longitude, first.get("display_name"))
    return point


def _to_point(result: Any) -> GeoPoint:
    try:
        return GeoPoint(latitude=float(result["lat"]), longitude=float(result["lon"]))
    except (KeyError, TypeError, ValueError) as exc:
        logger.error("Nominatim result has malformed coordinates: %s", result)
        raise TransportError("Nominatim result has malformed coordinates") from exc
