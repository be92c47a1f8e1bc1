"""Demo listings returned when sample fallback is switched on and a live search is empty."""

from typing import Any, Dict, List, Optional, Sequence

from company_finder.etl.contacts import DEFAULT_LOCAL_PARTS
from company_finder.etl.transform import DEFAULT_MAX_EMAILS, from_backend_company
from company_finder.models import CompanyRecord

SAMPLE_SOURCE_LABEL = "Sample Data"

_SAMPLE_COMPANIES = (
    {
        "name": "Infotech Solutions {location}",
        "address": "102, Silicon Valley Complex, {location}",
        "phone": "+91 98765 43210",
        "website": "https://infotech-demo.com",
    },
    {
        "name": "CyberWeb Systems",
        "address": "Opp. City Mall, {location} Main Road",
        "phone": "+91 98989 89898",
        "website": "https://cyberweb.io",
    },
    {
        "name": "DevX Digital Labs",
        "address": "4th Floor, Tech Park, Near {location} Circle",
        "phone": "079-23232323",
        "website": "https://devx-labs.com",
    },
    {
        "name": "Global IT Services",
        "address": "Block B, Commerce Six Roads, {location}",
        "phone": "+91 99000 99000",
        "website": "https://global-it.net",
    },
)


def sample_companies(
    location: str,
    *,
    max_emails: int = DEFAULT_MAX_EMAILS,
    local_parts: Sequence[str] = DEFAULT_LOCAL_PARTS,
    phone_region: Optional[str] = None,
) -> List[CompanyRecord]:
    """Return placeholder companies for ``location``, every one flagged ``is_synthetic``."""
    location = location.strip()
    records = []
    for template in _SAMPLE_COMPANIES:
        raw: Dict[str, Any] = {key: value.format(location=location) for key, value in template.items()}
        raw["source"] = SAMPLE_SOURCE_LABEL
        raw["is_synthetic"] = True
        records.append(
            from_backend_company(raw, max_emails=max_emails, local_parts=local_parts, phone_region=phone_region)
        )
    return records
