from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.geo import GeoPoint


@dataclass(frozen=True)
class Department:
    name: str
    location: Optional[GeoPoint] = None
    campus: str = ""
    on_travel: bool = False
