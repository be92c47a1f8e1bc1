"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

from company_finder.core.errors import ConfigError

logger = logging.getLogger(__name__)

COMPANY_SOURCES = {"overpass", "backend"}


@dataclass(frozen=True)
class Settings:
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    ip_geolocation_url: str = "https://ipapi.co/json/"
    backend_url: str = "http://localhost:3000/api/companies"
    company_source: str = "overpass"
    user_agent: str = "ITCompanyFinder/1.0"
    request_timeout: float = 10.0
    search_radius_m: int = 3000
    max_display_emails: int = 2
    email_local_parts: Tuple[str, ...] = ("hr", "careers", "info", "contact")
    default_latitude: float = 23.0225
    default_longitude: float = 72.5714
    default_phone_region: Optional[str] = None
    sample_fallback: bool = False
    worker_port: int = 9000


def _parse_local_parts(raw: str) -> Tuple[str, ...]:
    parts = []
    for part in raw.split(","):
        part = part.strip().lower()
        if part and part not in parts:
            parts.append(part)
    return tuple(parts)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()
    defaults = Settings()

    company_source = os.getenv("COMPANY_SOURCE", defaults.company_source).strip().lower()
    if company_source not in COMPANY_SOURCES:
        raise ConfigError(
            f"COMPANY_SOURCE must be one of {', '.join(sorted(COMPANY_SOURCES))}, got {company_source!r}."
        )

    default_latitude = float(os.getenv("DEFAULT_LATITUDE", str(defaults.default_latitude)))
    default_longitude = float(os.getenv("DEFAULT_LONGITUDE", str(defaults.default_longitude)))
    if not -90.0 <= default_latitude <= 90.0 or not -180.0 <= default_longitude <= 180.0:
        raise ConfigError("DEFAULT_LATITUDE/DEFAULT_LONGITUDE are outside the valid coordinate range.")

    email_local_parts = _parse_local_parts(os.getenv("EMAIL_LOCAL_PARTS", ",".join(defaults.email_local_parts)))
    if not email_local_parts:
        logger.warning("EMAIL_LOCAL_PARTS is empty; no contact emails will be synthesized.")

    search_radius_m = int(os.getenv("SEARCH_RADIUS_M", str(defaults.search_radius_m)))
    if search_radius_m <= 0:
        logger.warning("SEARCH_RADIUS_M=%s is not positive; using %s.", search_radius_m, defaults.search_radius_m)
        search_radius_m = defaults.search_radius_m

    backend_url = os.getenv("BACKEND_URL", defaults.backend_url).strip()
    if company_source == "backend" and not backend_url:
        logger.warning("COMPANY_SOURCE=backend but BACKEND_URL is not configured; searches will fail.")

    default_phone_region_raw = os.getenv("DEFAULT_PHONE_REGION")
    default_phone_region = default_phone_region_raw.strip().upper() if default_phone_region_raw else None
    sample_fallback = os.getenv("SAMPLE_FALLBACK", "false").lower() in {"1", "true", "yes"}

    return Settings(
        nominatim_url=os.getenv("NOMINATIM_URL", defaults.nominatim_url),
        overpass_url=os.getenv("OVERPASS_URL", defaults.overpass_url),
        ip_geolocation_url=os.getenv("IP_GEOLOCATION_URL", defaults.ip_geolocation_url),
        backend_url=backend_url,
        company_source=company_source,
        user_agent=os.getenv("FINDER_USER_AGENT", defaults.user_agent),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", str(defaults.request_timeout))),
        search_radius_m=search_radius_m,
        max_display_emails=int(os.getenv("MAX_DISPLAY_EMAILS", str(defaults.max_display_emails))),
        email_local_parts=email_local_parts,
        default_latitude=default_latitude,
        default_longitude=default_longitude,
        default_phone_region=default_phone_region,
        sample_fallback=sample_fallback,
        worker_port=int(os.getenv("WORKER_PORT", str(defaults.worker_port))),
    )
