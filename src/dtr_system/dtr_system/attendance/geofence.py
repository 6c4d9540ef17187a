from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.geo import GeoPoint, distance_between
from ..core.constants import LOCATION_THRESHOLD_METERS
from ..employees.department_model import Department


@dataclass(frozen=True)
class GeofenceResult:
    distance_m: float
    out_of_range: bool

    def notification_text(self, employee_name: str, department: str) -> str:
        return f"{employee_name} scanned {round(self.distance_m)}m away from the {department} office."


def evaluate_geofence(
    position: Optional[GeoPoint],
    department: Department,
    threshold_m: float = LOCATION_THRESHOLD_METERS,
) -> Optional[GeofenceResult]:
    """Distance check against the office; None when either side has no coordinates."""
    if position is None or department.location is None:
        return None
    distance = distance_between(position, department.location)
    return GeofenceResult(distance_m=distance, out_of_range=distance > threshold_m)
