from sqlmodel import SQLModel

from hr_portal.models.audit import AuditLog
from hr_portal.models.base import TimestampMixin, UUIDBase
from hr_portal.models.enums import (
    AuditAction,
    AuditEntityType,
    LeaveStatus,
    LeaveType,
    TerminationReason,
)
from hr_portal.models.holiday import CompanyHoliday
from hr_portal.models.leave_request import LeaveRequest

__all__ = [
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "CompanyHoliday",
    "LeaveRequest",
    "LeaveStatus",
    "LeaveType",
    "SQLModel",
    "TerminationReason",
    "TimestampMixin",
    "UUIDBase",
]
