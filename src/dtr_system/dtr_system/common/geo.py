from __future__ import annotations

from dataclasses import dataclass
from math import atan2, cos, radians, sin, sqrt
from typing import Optional

from ..core.constants import EARTH_RADIUS_METERS
from .validators import require_latitude, require_longitude


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["GeoPoint"]:
        if not data:
            return None
        return cls(
            latitude=require_latitude(data["latitude"]),
            longitude=require_longitude(data["longitude"]),
        )

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two WGS84 coordinates."""
    phi1, phi2 = radians(lat1), radians(lat2)
    d_phi = radians(lat2 - lat1)
    d_lambda = radians(lon2 - lon1)

    a = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    # atan2 keeps precision for the short, same-municipality distances we measure.
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def distance_between(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_meters(a.latitude, a.longitude, b.latitude, b.longitude)
