import json

import pytest

from src.dtr_system.dtr_system.attendance.payload import (
    DepartmentScanPayload,
    EmployeeIdentityPayload,
    parse_payload,
    require_employee_identity,
)
from src.dtr_system.dtr_system.core.exceptions import InvalidPayload


def test_tagged_payloads_resolve_by_tag():
    dept = DepartmentScanPayload(department="Finance")
    ident = EmployeeIdentityPayload(id="4001", name="Hannah Martinez", department="Finance")

    assert parse_payload(dept.to_json()) == dept
    assert parse_payload(ident.to_json()) == ident
    assert json.loads(dept.to_json())["type"] == "department_scan"


def test_legacy_shapes_are_accepted_when_unambiguous():
    assert parse_payload('{"department": "Finance"}') == DepartmentScanPayload(department="Finance")
    assert parse_payload({"id": 4001, "name": "Hannah", "department": "Finance"}) == EmployeeIdentityPayload(
        id="4001", name="Hannah", department="Finance"
    )


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "[1, 2]",
        '{"department": ""}',
        '{"id": "1", "department": "Finance"}',
        '{"type": "department_scan"}',
    ],
)
def test_malformed_payloads(raw):
    with pytest.raises(InvalidPayload):
        parse_payload(raw)


def test_identity_required_for_login_codes():
    with pytest.raises(InvalidPayload) as exc:
        require_employee_identity('{"department": "Finance"}')

    assert str(exc.value) == "Invalid QR code. Not an employee ID code."
