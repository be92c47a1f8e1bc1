"""Core data models shared by the company search pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """WGS84 coordinate resolved for one search cycle."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude {self.latitude} is outside [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude {self.longitude} is outside [-180, 180]")

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.latitude, "lon": self.longitude}


@dataclass(frozen=True, slots=True)
class RawPOI:
    """OpenStreetMap element returned by the Overpass query, kept as-is."""

    id: int
    position: GeoPoint
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CompanyRecord:
    """Presentable company entry built from a POI or a backend object.

    ``emails`` is the display subset; ``all_emails`` holds every synthesized
    address. Neither list is verified.
    """

    name: str
    address: str
    website: Optional[str] = None
    emails: Tuple[str, ...] = ()
    all_emails: Tuple[str, ...] = ()
    source_position: Optional[GeoPoint] = None
    source_label: str = "OpenStreetMap"
    phone: Optional[str] = None
    osm_id: Optional[int] = None
    is_synthetic: bool = False
