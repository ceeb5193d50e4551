# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Self

from pydantic import BaseModel, Field, model_validator

from hr_portal.models.enums import LeaveStatus, LeaveType

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class SubmitLeaveRequestPayload(BaseModel):
    """Request body for submitting a leave request; dates are inclusive."""

    employee_id: uuid.UUID
    leave_type: LeaveType = LeaveType.VACATION
    start_date: date
    end_date: date
    reason: str | None = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def _validate_dates(self) -> Self:
        if self.end_date < self.start_date:
            msg = "end_date must not be before start_date"
            raise ValueError(msg)
        return self


class ReviewPayload(BaseModel):
    """Optional reviewer comments for approve/reject."""

    comments: str | None = Field(default=None, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeaveRequestResponse(BaseModel):
    id: uuid.UUID
    company_id: uuid.UUID
    employee_id: uuid.UUID
    leave_type: LeaveType
    start_date: date
    end_date: date
    requested_days: int
    working_days: int
    reason: str | None
    status: LeaveStatus
    submitted_by: uuid.UUID | None
    reviewed_by: uuid.UUID | None
    reviewed_at: datetime | None
    review_comments: str | None
    created_at: datetime


class LeaveRequestListResponse(BaseModel):
    items: list[LeaveRequestResponse]
    total: int
