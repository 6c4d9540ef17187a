from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class StorageFailure(DomainError):
    """Raised when a persistence write fails; the change is considered not recorded."""


class PositionUnavailable(Exception):
    """Raised by position providers when the device cannot produce a fix.

    Never fatal for a scan: the recorder proceeds without geofencing.
    """


class ScanError(DomainError):
    """Base for expected, user-facing scan rejections. No record is mutated."""

    kind = "ScanError"


class UnknownEmployee(ScanError):
    kind = "UnknownEmployee"

    def __init__(self, employee_id: str):
        super().__init__(f"Scanning user with ID {employee_id} not found.")
        self.employee_id = employee_id


class InvalidPayload(ScanError):
    kind = "InvalidPayload"

    def __init__(self, message: str = "Invalid QR code. Not a department DTR code."):
        super().__init__(message)


class UnknownDepartment(ScanError):
    kind = "UnknownDepartment"

    def __init__(self, department: str):
        super().__init__(f'Department "{department}" from QR code not found.')
        self.department = department


class DepartmentMismatch(ScanError):
    kind = "DepartmentMismatch"

    def __init__(self, employee_department: str, scanned_department: str):
        super().__init__(
            "Access Denied: You can only scan the QR code for your own department "
            f"({employee_department})."
        )
        self.employee_department = employee_department
        self.scanned_department = scanned_department


class OnApprovedLeave(ScanError):
    kind = "OnApprovedLeave"

    def __init__(self, employee_name: str, leave_type: str):
        super().__init__(f"{employee_name} is on {leave_type} today.")
        self.leave_type = leave_type


class OutsideAllowedWindow(ScanError):
    kind = "OutsideAllowedWindow"

    def __init__(self, punch_label: str, window: str):
        super().__init__(f"{punch_label} is only allowed between {window}.")
        self.punch = punch_label
        self.window = window


class AlreadyComplete(ScanError):
    kind = "AlreadyComplete"

    def __init__(self, message: str, *, record_id: Optional[str] = None):
        super().__init__(message)
        self.record_id = record_id
