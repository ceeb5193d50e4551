# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date
from typing import Self

from pydantic import BaseModel, Field, model_validator

from hr_portal.models.enums import LeaveStatus, LeaveType

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class LeaveIntervalPayload(BaseModel):
    """A leave interval supplied by the caller instead of read from storage."""

    start_date: date
    end_date: date
    leave_type: LeaveType = LeaveType.VACATION
    status: LeaveStatus = LeaveStatus.APPROVED


class VacationBalanceCalculateRequest(BaseModel):
    """Ad-hoc balance calculation over caller-supplied data."""

    start_date: date | None = None
    as_of: date
    intervals: list[LeaveIntervalPayload] = Field(default_factory=list)
    trial_period_days: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _validate_as_of(self) -> Self:
        if self.start_date is not None and self.as_of < self.start_date:
            msg = "as_of must not be before start_date"
            raise ValueError(msg)
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AnniversaryYearResponse(BaseModel):
    start: date
    end: date


class VacationBalanceResponse(BaseModel):
    """Vacation figures for one employee as of ``as_of``.

    ``available`` may be negative when more days were taken than granted.
    """

    employee_id: uuid.UUID | None = None
    as_of: date
    start_date: date
    entitlement: int
    taken: int
    available: int
    years_of_service: int
    is_in_trial_period: bool
    days_until_eligible: int
    next_anniversary: date
    anniversary_year: AnniversaryYearResponse
    cumulative_entitlement: int
