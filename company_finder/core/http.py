"""Shared JSON-over-HTTP helper for the upstream services."""

import logging
from typing import Any, Dict, Optional

import requests

from company_finder.core.errors import TransportError

logger = logging.getLogger(__name__)


def get_json(
    session: requests.Session,
    url: str,
    *,
    service: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: float = 10,
    user_agent: Optional[str] = None,
) -> Any:
    """GET ``url`` and decode the JSON body, raising TransportError on any failure."""
    headers = {"Accept": "application/json"}
    if user_agent:
        headers["User-Agent"] = user_agent
    try:
        response = session.get(url, params=params, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error("%s request failed: %s", service, exc)
        raise TransportError(f"{service} request failed: {exc}") from exc

    try:
        return response.json()
    except ValueError as exc:
        logger.error("%s returned a non-JSON payload: %s", service, exc)
        raise TransportError(f"{service} returned a non-JSON payload") from exc
