"""Map state owned by whoever renders a listing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from company_finder.models import CompanyRecord, GeoPoint


@dataclass(frozen=True, slots=True)
class Marker:
    position: GeoPoint
    label: str
    address: str


@dataclass(slots=True)
class MapViewState:
    center: Optional[GeoPoint] = None
    markers: List[Marker] = field(default_factory=list)

    def clear(self) -> None:
        self.markers.clear()

    def set_center(self, point: GeoPoint) -> None:
        self.center = point

    def add_marker(self, record: CompanyRecord) -> Optional[Marker]:
        """Add a marker for ``record``; records without a position are skipped."""
        if record.source_position is None:
            return None
        marker = Marker(position=record.source_position, label=record.name, address=record.address)
        self.markers.append(marker)
        return marker
