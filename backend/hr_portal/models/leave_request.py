# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

import sqlalchemy as sa
from sqlmodel import Field

from hr_portal.models.base import TimestampMixin, UUIDBase
from hr_portal.models.enums import LeaveStatus, LeaveType


class LeaveRequest(UUIDBase, TimestampMixin, table=True):
    """A leave request covering ``[start_date, end_date]`` inclusive.

    Approved ``VACATION`` requests are what the vacation balance counts as taken.
    """

    __tablename__ = "leave_request"
    __table_args__ = (
        sa.Index("ix_leave_request_company_status", "company_id", "status"),
        sa.Index("ix_leave_request_employee_dates", "employee_id", "start_date", "end_date"),
        sa.CheckConstraint("end_date >= start_date", name="ck_leave_request_dates"),
    )

    company_id: uuid.UUID = Field(index=True)
    employee_id: uuid.UUID = Field(index=True)
    leave_type: str = Field(default=LeaveType.VACATION, max_length=50)
    start_date: date
    end_date: date
    requested_days: int
    working_days: int
    reason: str | None = None
    status: str = Field(
        default=LeaveStatus.PENDING, max_length=50, index=True, sa_column_kwargs={"server_default": "PENDING"}
    )
    submitted_by: uuid.UUID | None = None
    reviewed_by: uuid.UUID | None = None
    reviewed_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    review_comments: str | None = None
