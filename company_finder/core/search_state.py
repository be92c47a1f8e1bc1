"""Current listing state with a generation guard against stale searches."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from company_finder.core.map_view import MapViewState
from company_finder.models import CompanyRecord, GeoPoint

logger = logging.getLogger(__name__)


class SearchStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    generation: int
    query: str
    status: SearchStatus
    center: Optional[GeoPoint] = None
    companies: Tuple[CompanyRecord, ...] = ()
    message: Optional[str] = None


class SearchState:
    """Owns the current listing, center and map view.

    Each search takes a generation number from ``begin()``. ``commit()`` only
    applies an outcome whose generation is newer than the last one applied, so
    a slow earlier search can never replace a later one.
    """

    def __init__(self, center: Optional[GeoPoint] = None, map_view: Optional[MapViewState] = None) -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0
        self.map_view = map_view or MapViewState()
        self.center = center
        self.listing: Tuple[CompanyRecord, ...] = ()
        self.status: Optional[SearchStatus] = None
        self.last_outcome: Optional[SearchOutcome] = None
        if center is not None:
            self.map_view.set_center(center)

    @property
    def applied_generation(self) -> int:
        return self._applied

    def begin(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def commit(self, outcome: SearchOutcome) -> bool:
        """Apply ``outcome`` unless a newer generation was already applied."""
        with self._lock:
            if outcome.generation <= self._applied:
                logger.info(
                    "Discarding stale results for %r (generation %d, current %d)",
                    outcome.query,
                    outcome.generation,
                    self._applied,
                )
                return False

            self._applied = outcome.generation
            self.status = outcome.status
            self.listing = outcome.companies
            self.last_outcome = outcome
            self.map_view.clear()
            if outcome.center is not None:
                self.center = outcome.center
                self.map_view.set_center(outcome.center)
            for record in outcome.companies:
                self.map_view.add_marker(record)
            return True
