"""Best-effort IP geolocation used before the user has typed a place."""

import logging

import requests

from company_finder.core.config import get_settings
from company_finder.core.errors import TransportError
from company_finder.core.http import get_json
from company_finder.models import GeoPoint

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


def resolve_from_network_origin() -> GeoPoint:
    settings = get_settings()
    payload = get_json(
        _SESSION,
        settings.ip_geolocation_url,
        service="IP geolocation",
        timeout=settings.request_timeout,
        user_agent=settings.user_agent,
    )
    if not isinstance(payload, dict):
        raise TransportError("IP geolocation returned an unexpected payload")
    if payload.get("error"):
        raise TransportError(f"IP geolocation error: {payload.get('reason') or payload.get('error')}")

    try:
        point = GeoPoint(latitude=float(payload["latitude"]), longitude=float(payload["longitude"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise TransportError("IP geolocation returned malformed coordinates") from exc

    logger.info("Network origin resolved near %s (%s,%s)", payload.get("city") or "unknown city", point.latitude, point.longitude)
    return point
