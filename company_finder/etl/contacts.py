"""Role-based contact email synthesis.

Addresses produced here are guesses built from a website host or, failing
that, from the company name. A name-derived domain (``"Acme IT"`` ->
``acmeit.com``) is frequently wrong and must never be shown as verified.
"""

import logging
import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_PARTS = ("hr", "careers", "info", "contact")
_SCHEME_PREFIXES = ("https://", "http://", "//")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def _strip_www(host: str) -> str:
    return host[4:] if host.startswith("www.") else host


def _naive_host(raw: str) -> str:
    value = raw.strip().lower()
    for prefix in _SCHEME_PREFIXES:
        if value.startswith(prefix):
            value = value[len(prefix):]
            break
    value = _strip_www(value)
    return value.split("/")[0]


def extract_domain(website: Optional[str]) -> Optional[str]:
    """Return the bare host of ``website`` without scheme, path or ``www.``."""
    raw = (website or "").strip()
    if not raw:
        return None

    if "://" in raw:
        candidate = raw
    elif raw.startswith("//"):
        candidate = f"http:{raw}"
    else:
        candidate = f"http://{raw}"
    try:
        host = urlparse(candidate).hostname
    except ValueError:
        logger.debug("Could not parse website %r; falling back to naive split", raw)
        host = None
    if not host:
        host = _naive_host(raw)

    host = _strip_www(host.strip().lower().rstrip("."))
    return host or None


def domain_from_name(name: Optional[str]) -> Optional[str]:
    slug = _NON_ALNUM.sub("", (name or "").lower())
    return f"{slug}.com" if slug else None


def synthesize(
    name: Optional[str],
    website: Optional[str] = None,
    local_parts: Iterable[str] = DEFAULT_LOCAL_PARTS,
) -> List[str]:
    """Compose ``local_part@domain`` for each configured local part, in order."""
    domain = extract_domain(website) if website else None
    if not domain:
        domain = domain_from_name(name)
    if not domain:
        return []

    emails: List[str] = []
    for local_part in local_parts:
        email = f"{local_part}@{domain}"
        if email not in emails:
            emails.append(email)
    return emails
