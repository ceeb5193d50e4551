from __future__ import annotations

import enum


class LeaveType(enum.StrEnum):
    """Kind of leave an employee can request."""

    VACATION = "VACATION"
    SICK = "SICK"
    PERSONAL = "PERSONAL"
    OTHER = "OTHER"


class LeaveStatus(enum.StrEnum):
    """State machine for leave requests."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class TerminationReason(enum.StrEnum):
    """Why an employment relationship ends."""

    RESIGNATION = "RESIGNATION"
    DISMISSAL = "DISMISSAL"
    MUTUAL_AGREEMENT = "MUTUAL_AGREEMENT"
    CONTRACT_END = "CONTRACT_END"
    OTHER = "OTHER"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    LEAVE_REQUEST = "LEAVE_REQUEST"
    HOLIDAY = "HOLIDAY"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    DELETE = "DELETE"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    CANCEL = "CANCEL"
    SUBMIT = "SUBMIT"
