"""Client for the optional local company backend (``GET /api/companies``)."""

import logging
from typing import Any, Dict, List

import requests

from company_finder.core.config import get_settings
from company_finder.core.errors import TransportError
from company_finder.core.http import get_json
from company_finder.etl.transform import from_backend_company
from company_finder.models import CompanyRecord

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


def ping() -> bool:
    """Return True when the backend host answers at all."""
    settings = get_settings()
    if not settings.backend_url:
        return False
    root_url = settings.backend_url.split("/api/", 1)[0] + "/"
    try:
        response = _SESSION.get(root_url, timeout=settings.request_timeout)
    except requests.RequestException as exc:
        logger.info("Backend at %s is not reachable: %s", root_url, exc)
        return False
    return response.status_code < 500


def fetch_companies(location: str) -> List[CompanyRecord]:
    query = (location or "").strip()
    if not query:
        raise ValueError("Location must not be empty")

    settings = get_settings()
    if not settings.backend_url:
        raise TransportError("BACKEND_URL is not configured")

    payload = get_json(
        _SESSION,
        settings.backend_url,
        service="Company backend",
        params={"location": query},
        timeout=settings.request_timeout,
        user_agent=settings.user_agent,
    )
    items = _extract_items(payload)
    logger.info("Backend returned %d companies for %r", len(items), query)
    return [
        from_backend_company(
            item,
            max_emails=settings.max_display_emails,
            local_parts=settings.email_local_parts,
            phone_region=settings.default_phone_region,
        )
        for item in items
    ]


def _extract_items(payload: Any) -> List[Dict[str, Any]]:
    """The backend answers with a bare array or with ``{"data": {"companies": [...]}}``."""
    items = payload
    if isinstance(payload, dict):
        data = payload.get("data")
        items = data.get("companies") if isinstance(data, dict) else None
    if not isinstance(items, list):
        logger.error("Backend response missing companies list. preview=%s", str(payload)[:200])
        raise TransportError("Company backend returned an unexpected payload")
    return [item for item in items if isinstance(item, dict)]
