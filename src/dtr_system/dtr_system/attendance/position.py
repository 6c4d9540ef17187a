from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Union

from ..common.geo import GeoPoint
from ..common.validators import require_latitude, require_longitude
from ..core.exceptions import PositionUnavailable, ValidationError


@dataclass(frozen=True)
class PositionFix:
    latitude: float
    longitude: float
    accuracy: Optional[float] = None

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


@dataclass(frozen=True)
class PositionError:
    message: str


# Either a fix or the reason one could not be obtained.
PositionResult = Union[PositionFix, PositionError]


class PositionProvider(Protocol):
    def get_current_position(self, timeout_ms: int) -> PositionFix:
        """Return a fix or raise PositionUnavailable."""

        raise NotImplementedError


class StaticPositionProvider(PositionProvider):
    """Provider backed by a fix the client already took (browser geolocation)."""

    def __init__(self, fix: Optional[PositionFix], *, error: Optional[str] = None):
        self._fix = fix
        self._error = error

    def get_current_position(self, timeout_ms: int) -> PositionFix:
        if self._fix is None:
            raise PositionUnavailable(self._error or "Location is unavailable")
        return self._fix


def resolve_position(provider: PositionProvider, timeout_ms: int) -> PositionResult:
    try:
        return provider.get_current_position(timeout_ms)
    except PositionUnavailable as e:
        return PositionError(message=str(e) or "Location is unavailable")


def position_from_request(data: Any) -> PositionResult:
    """Build a position result from a client body like ``{"latitude":..,"longitude":..}``."""
    if not data:
        return PositionError(message="No location was sent with the scan")
    if not isinstance(data, Mapping):
        return PositionError(message="Malformed location")
    if data.get("error"):
        return PositionError(message=str(data["error"]))
    try:
        return PositionFix(
            latitude=require_latitude(data["latitude"]),
            longitude=require_longitude(data["longitude"]),
            accuracy=float(data["accuracy"]) if data.get("accuracy") is not None else None,
        )
    except (KeyError, TypeError, ValueError, ValidationError):
        return PositionError(message="Malformed location")
