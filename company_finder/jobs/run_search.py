"""CLI job that searches IT companies near one or more places."""

import argparse
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from company_finder.core.config import get_settings
from company_finder.core.errors import ConfigError
from company_finder.core.search_state import SearchOutcome, SearchState, SearchStatus
from company_finder.etl.transform import to_company_payload
from company_finder.pipeline import initial_center, run_search

logger = logging.getLogger(__name__)


def render_outcome(outcome: SearchOutcome) -> str:
    if outcome.status is SearchStatus.NOT_FOUND:
        return f"Place not found: {outcome.query}"
    if outcome.status is SearchStatus.FAILED:
        return f"Search failed for {outcome.query}. Please try again later."
    if outcome.status is SearchStatus.EMPTY:
        return f"No companies found near {outcome.query}."

    lines = [f"{len(outcome.companies)} companies near {outcome.query}:"]
    for index, record in enumerate(outcome.companies, start=1):
        label = f"{record.source_label}, sample" if record.is_synthetic else record.source_label
        lines.append(f"{index}. {record.name} [{label}]")
        lines.append(f"   Address: {record.address}")
        if record.phone:
            lines.append(f"   Phone: {record.phone}")
        if record.website:
            lines.append(f"   Website: {record.website}")
        if record.emails:
            lines.append(f"   Emails (unverified): {', '.join(record.emails)}")
    return "\n".join(lines)


def outcome_payload(outcome: SearchOutcome) -> dict:
    return {
        "query": outcome.query,
        "status": outcome.status.value,
        "center": outcome.center.to_dict() if outcome.center else None,
        "message": outcome.message,
        "companies": [to_company_payload(record) for record in outcome.companies],
    }


def search_locations(
    state: SearchState,
    locations: List[str],
    *,
    radius_m: Optional[int],
    max_emails: Optional[int],
    max_workers: int = 4,
) -> Optional[SearchOutcome]:
    """Dispatch one search generation per location and return the committed outcome."""
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = []
        for location in locations:
            generation = state.begin()
            logger.info("Queueing search generation %d for %r", generation, location)
            futures.append(
                executor.submit(
                    run_search,
                    state,
                    location,
                    radius_m=radius_m,
                    max_emails=max_emails,
                    generation=generation,
                )
            )
        for future in futures:
            future.result()
    return state.last_outcome


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} must not be negative")
    return number


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Find IT companies near a place")
    parser.add_argument("locations", nargs="*", help="Place names, e.g. 'Vastral, Ahmedabad'")
    parser.add_argument(
        "--radius",
        dest="radius_m",
        type=_positive_int,
        default=settings.search_radius_m,
        help="Search radius in meters",
    )
    parser.add_argument(
        "--max-emails",
        dest="max_emails",
        type=_non_negative_int,
        default=settings.max_display_emails,
        help="Maximum number of synthesized emails shown per company",
    )
    parser.add_argument("--json", dest="as_json", action="store_true", help="Print JSON instead of text")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    try:
        parser = build_parser()
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    args = parser.parse_args(argv)

    locations = [location.strip() for location in args.locations if location.strip()]
    if not locations:
        center = initial_center()
        print(f"Current center: {center.latitude},{center.longitude}. Pass a place name to search.")
        return 0

    state = SearchState()
    outcome = search_locations(state, locations, radius_m=args.radius_m, max_emails=args.max_emails)
    if args.as_json:
        print(json.dumps(outcome_payload(outcome), ensure_ascii=False, indent=2))
    else:
        print(render_outcome(outcome))
    return 1 if outcome.status in {SearchStatus.FAILED, SearchStatus.NOT_FOUND} else 0


if __name__ == "__main__":
    sys.exit(main())
