"""Search pipeline: place text -> coordinates -> nearby IT offices -> company records."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Tuple

from company_finder.core.config import get_settings
from company_finder.core.errors import NotFoundError, TransportError
from company_finder.core.search_state import SearchOutcome, SearchState, SearchStatus
from company_finder.etl.samples import sample_companies
from company_finder.etl.transform import assemble
from company_finder.models import CompanyRecord, GeoPoint
from company_finder.vendors import ip_geolocation, local_backend, nominatim, overpass

logger = logging.getLogger(__name__)


def initial_center() -> GeoPoint:
    """Locate the caller by IP, falling back to the configured default point."""
    settings = get_settings()
    try:
        return ip_geolocation.resolve_from_network_origin()
    except TransportError as exc:
        logger.warning(
            "IP geolocation unavailable (%s); using default center %s,%s",
            exc,
            settings.default_latitude,
            settings.default_longitude,
        )
        return GeoPoint(latitude=settings.default_latitude, longitude=settings.default_longitude)


def find_companies(
    place_text: str,
    radius_m: Optional[int] = None,
    max_emails: Optional[int] = None,
) -> Tuple[Optional[GeoPoint], List[CompanyRecord]]:
    """Run one full search and return the resolved center with its listing.

    Raises NotFoundError when the place cannot be geocoded and TransportError
    when any upstream call fails. An empty listing is a normal result.
    """
    query = (place_text or "").strip()
    if not query:
        raise ValueError("Place text must not be empty")

    settings = get_settings()
    radius = radius_m if radius_m is not None else settings.search_radius_m
    email_limit = max_emails if max_emails is not None else settings.max_display_emails

    center: Optional[GeoPoint] = None
    if settings.company_source == "backend":
        logger.info("Fetching companies for %r from local backend", query)
        companies = local_backend.fetch_companies(query)
        if max_emails is not None:
            companies = [_truncate_emails(record, email_limit) for record in companies]
    else:
        center = nominatim.resolve(query)
        pois = overpass.query_nearby(center, radius)
        companies = assemble(
            pois,
            max_emails=email_limit,
            local_parts=settings.email_local_parts,
            phone_region=settings.default_phone_region,
        )
    logger.info("Assembled %d companies for %r", len(companies), query)

    if not companies and settings.sample_fallback:
        logger.warning("No live results for %r; returning synthetic sample companies", query)
        companies = sample_companies(
            query,
            max_emails=email_limit,
            local_parts=settings.email_local_parts,
            phone_region=settings.default_phone_region,
        )
    return center, companies


def _truncate_emails(record: CompanyRecord, limit: int) -> CompanyRecord:
    return replace(record, emails=record.all_emails[: max(limit, 0)])


def run_search(
    state: SearchState,
    place_text: str,
    radius_m: Optional[int] = None,
    max_emails: Optional[int] = None,
    generation: Optional[int] = None,
) -> SearchOutcome:
    """Run a search as one generation of ``state`` and commit its outcome.

    Failures become ``not_found``/``failed`` outcomes instead of exceptions so
    the presentation layer can show them.
    """
    query = (place_text or "").strip()
    if not query:
        raise ValueError("Place text must not be empty")
    if generation is None:
        generation = state.begin()

    try:
        center, companies = find_companies(query, radius_m=radius_m, max_emails=max_emails)
    except NotFoundError as exc:
        outcome = SearchOutcome(generation, query, SearchStatus.NOT_FOUND, message=str(exc))
    except TransportError as exc:
        logger.error("Search for %r failed: %s", query, exc)
        outcome = SearchOutcome(generation, query, SearchStatus.FAILED, message=str(exc))
    else:
        status = SearchStatus.OK if companies else SearchStatus.EMPTY
        outcome = SearchOutcome(generation, query, status, center=center, companies=tuple(companies))

    state.commit(outcome)
    return outcome
