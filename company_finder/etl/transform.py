"""Utilities for turning POIs and backend objects into presentable company records."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

import phonenumbers

from company_finder.etl.contacts import DEFAULT_LOCAL_PARTS, synthesize
from company_finder.models import CompanyRecord, GeoPoint, RawPOI

logger = logging.getLogger(__name__)

UNKNOWN_COMPANY = "Unknown Company"
ADDRESS_UNAVAILABLE = "Address unavailable"
DEFAULT_MAX_EMAILS = 2
OSM_SOURCE_LABEL = "OpenStreetMap"
BACKEND_SOURCE_LABEL = "Backend"
BACKEND_FALLBACK_LABEL = "Backend Fallback"
_ADDRESS_TAGS = ("addr:street", "addr:city", "addr:postcode")
_HR_LOCAL_PARTS = {"hr", "careers", "jobs"}


def format_address(tags: Dict[str, str]) -> str:
    parts = [(tags.get(key) or "").strip() for key in _ADDRESS_TAGS]
    joined = ", ".join(part for part in parts if part)
    return joined or ADDRESS_UNAVAILABLE


def normalize_phone(raw: Optional[str], default_region: Optional[str] = None) -> Optional[str]:
    """Return an E.164 phone string when parseable, else the trimmed raw value."""
    if not raw or not raw.strip():
        return None
    stripped = raw.strip()
    try:
        parsed = phonenumbers.parse(stripped, default_region)
    except phonenumbers.NumberParseException:
        return stripped
    if not phonenumbers.is_possible_number(parsed):
        return stripped
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def to_company_record(
    poi: RawPOI,
    *,
    max_emails: int = DEFAULT_MAX_EMAILS,
    local_parts: Sequence[str] = DEFAULT_LOCAL_PARTS,
    phone_region: Optional[str] = None,
) -> CompanyRecord:
    tags = poi.tags or {}
    tag_name = _strip_or_none(tags.get("name"))
    website = _strip_or_none(tags.get("website") or tags.get("contact:website"))
    all_emails = tuple(synthesize(tag_name, website, local_parts))

    return CompanyRecord(
        name=tag_name or UNKNOWN_COMPANY,
        address=format_address(tags),
        website=website,
        emails=all_emails[: max(max_emails, 0)],
        all_emails=all_emails,
        source_position=poi.position,
        source_label=OSM_SOURCE_LABEL,
        phone=normalize_phone(tags.get("phone") or tags.get("contact:phone"), phone_region),
        osm_id=poi.id,
    )


def assemble(
    pois: Iterable[RawPOI],
    *,
    max_emails: int = DEFAULT_MAX_EMAILS,
    local_parts: Sequence[str] = DEFAULT_LOCAL_PARTS,
    phone_region: Optional[str] = None,
) -> List[CompanyRecord]:
    """Build one record per POI, keeping the Overpass order.

    Duplicate POI ids are passed through unchanged.
    """
    return [
        to_company_record(poi, max_emails=max_emails, local_parts=local_parts, phone_region=phone_region)
        for poi in pois or []
    ]


def from_backend_company(
    raw: Dict[str, Any],
    *,
    max_emails: int = DEFAULT_MAX_EMAILS,
    local_parts: Sequence[str] = DEFAULT_LOCAL_PARTS,
    phone_region: Optional[str] = None,
) -> CompanyRecord:
    """Normalize a pre-enriched object from the local backend into a CompanyRecord."""
    name = _strip_or_none(raw.get("name"))
    website = _strip_or_none(raw.get("website"))

    provided: List[str] = []
    for key in ("hr_email", "email"):
        value = _strip_or_none(raw.get(key))
        if value and value.lower() not in provided:
            provided.append(value.lower())
    for value in raw.get("emails") or []:
        value = _strip_or_none(value)
        if value and value.lower() not in provided:
            provided.append(value.lower())
    all_emails = tuple(provided) if provided else tuple(synthesize(name, website, local_parts))

    source = _strip_or_none(raw.get("source")) or BACKEND_SOURCE_LABEL
    position = None
    lat, lon = raw.get("lat"), raw.get("lon")
    if lat is not None and lon is not None:
        try:
            position = GeoPoint(latitude=float(lat), longitude=float(lon))
        except (TypeError, ValueError):
            logger.debug("Ignoring malformed backend coordinates for %s", name)

    return CompanyRecord(
        name=name or UNKNOWN_COMPANY,
        address=_strip_or_none(raw.get("address")) or ADDRESS_UNAVAILABLE,
        website=website,
        emails=all_emails[: max(max_emails, 0)],
        all_emails=all_emails,
        source_position=position,
        source_label=source,
        phone=normalize_phone(_strip_or_none(raw.get("phone")), phone_region),
        osm_id=None,
        is_synthetic=bool(raw.get("is_synthetic")) or source == BACKEND_FALLBACK_LABEL,
    )


def to_company_payload(record: CompanyRecord) -> Dict[str, Any]:
    """Serialize a record in the shape the extension popup already understands."""
    hr_email = next((e for e in record.all_emails if e.split("@", 1)[0] in _HR_LOCAL_PARTS), None)
    email = next((e for e in record.all_emails if e.split("@", 1)[0] not in _HR_LOCAL_PARTS), None)
    position = record.source_position
    return {
        "name": record.name,
        "address": record.address,
        "website": record.website,
        "phone": record.phone,
        "email": email,
        "hr_email": hr_email,
        "emails": list(record.emails),
        "source": record.source_label,
        "lat": position.latitude if position else None,
        "lon": position.longitude if position else None,
        "osm_id": record.osm_id,
        "is_synthetic": record.is_synthetic,
    }
