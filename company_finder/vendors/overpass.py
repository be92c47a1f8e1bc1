"""Overpass API helpers for finding IT offices around a point."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests

from company_finder.core.config import get_settings
from company_finder.core.errors import TransportError
from company_finder.core.http import get_json
from company_finder.models import GeoPoint, RawPOI

logger = logging.getLogger(__name__)
_SESSION = requests.Session()

DEFAULT_RADIUS_M = 3000
OFFICE_TAG = ("office", "it")


def build_overpass_query(center: GeoPoint, radius_m: int = DEFAULT_RADIUS_M) -> str:
    """Construct the Overpass QL filter for IT offices within ``radius_m`` of ``center``."""
    if radius_m <= 0:
        raise ValueError("radius_m must be positive")
    key, value = OFFICE_TAG
    return (
        "[out:json][timeout:25];"
        f'node["{key}"="{value}"](around:{int(radius_m)},{center.latitude},{center.longitude});'
        "out body;"
    )


def query_nearby(center: GeoPoint, radius_m: int = DEFAULT_RADIUS_M) -> List[RawPOI]:
    """Return IT office nodes around ``center`` in the order Overpass lists them.

    An empty list means the query succeeded and matched nothing.
    """
    query = build_overpass_query(center, radius_m)
    settings = get_settings()
    logger.info("Querying Overpass around %s,%s radius=%sm", center.latitude, center.longitude, radius_m)
    payload = get_json(
        _SESSION,
        settings.overpass_url,
        service="Overpass",
        params={"data": query},
        timeout=settings.request_timeout,
        user_agent=settings.user_agent,
    )
    if not isinstance(payload, dict) or not isinstance(payload.get("elements"), list):
        logger.error("Overpass response missing elements list. preview=%s", str(payload)[:200])
        raise TransportError("Overpass returned an unexpected payload")

    # Server-side timeouts and memory limits come back as 200 with a remark.
    remark = str(payload.get("remark") or "")
    if remark.startswith("runtime error"):
        logger.error("Overpass query aborted: %s", remark)
        raise TransportError(f"Overpass query aborted: {remark}")

    pois = parse_elements(payload["elements"])
    logger.info("Overpass returned %d IT offices", len(pois))
    return pois


def parse_elements(elements: List[Any]) -> List[RawPOI]:
    pois: List[RawPOI] = []
    for element in elements:
        if not isinstance(element, dict):
            continue
        try:
            position = GeoPoint(latitude=float(element["lat"]), longitude=float(element["lon"]))
            poi_id = int(element["id"])
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping Overpass element without usable id/coordinates: %s", str(element)[:200])
            continue
        pois.append(RawPOI(id=poi_id, position=position, tags=_clean_tags(element.get("tags"))))
    return pois


def _clean_tags(tags: Any) -> Dict[str, str]:
    if not isinstance(tags, dict):
        return {}
    return {str(key): str(value) for key, value in tags.items() if value is not None}
