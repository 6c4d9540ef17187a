"""QR payload variants.

Payloads carry an explicit ``type`` tag written at encode time. Codes printed
before the tag existed are still accepted when their shape is unambiguous:
exactly ``{department}`` is a department scan code, ``{id, name, department}``
is an employee identity code. Any other shape is rejected.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Union

from ..core.enums import PayloadKind
from ..core.exceptions import InvalidPayload


@dataclass(frozen=True)
class DepartmentScanPayload:
    department: str

    kind = PayloadKind.DEPARTMENT_SCAN

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "department": self.department}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class EmployeeIdentityPayload:
    id: str
    name: str
    department: str

    kind = PayloadKind.EMPLOYEE_IDENTITY

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "id": self.id, "name": self.name, "department": self.department}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


QrPayload = Union[DepartmentScanPayload, EmployeeIdentityPayload]

_LEGACY_IDENTITY_KEYS = {"id", "name", "department"}


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, (str, int)) or not str(value).strip():
        raise InvalidPayload()
    return str(value).strip()


def parse_payload(raw: Union[str, bytes, Mapping[str, Any]]) -> QrPayload:
    """Resolve decoded QR text (or an already-decoded object) to a payload variant."""
    data: Any = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except ValueError:
            raise InvalidPayload()

    if not isinstance(data, Mapping):
        raise InvalidPayload()

    tag = data.get("type")
    if tag is not None:
        if tag == PayloadKind.DEPARTMENT_SCAN.value:
            return DepartmentScanPayload(department=_text(data, "department"))
        if tag == PayloadKind.EMPLOYEE_IDENTITY.value:
            return EmployeeIdentityPayload(
                id=_text(data, "id"),
                name=_text(data, "name"),
                department=_text(data, "department"),
            )
        raise InvalidPayload()

    keys = set(data.keys())
    if keys == {"department"}:
        return DepartmentScanPayload(department=_text(data, "department"))
    if keys == _LEGACY_IDENTITY_KEYS:
        return EmployeeIdentityPayload(
            id=_text(data, "id"),
            name=_text(data, "name"),
            department=_text(data, "department"),
        )
    raise InvalidPayload()


def require_department_scan(raw: Union[str, bytes, Mapping[str, Any], QrPayload]) -> DepartmentScanPayload:
    payload = raw if isinstance(raw, (DepartmentScanPayload, EmployeeIdentityPayload)) else parse_payload(raw)
    if not isinstance(payload, DepartmentScanPayload):
        raise InvalidPayload()
    return payload


def require_employee_identity(raw: Union[str, bytes, Mapping[str, Any], QrPayload]) -> EmployeeIdentityPayload:
    payload = raw if isinstance(raw, (DepartmentScanPayload, EmployeeIdentityPayload)) else parse_payload(raw)
    if not isinstance(payload, EmployeeIdentityPayload):
        raise InvalidPayload("Invalid QR code. Not an employee ID code.")
    return payload
