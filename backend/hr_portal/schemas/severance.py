# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from hr_portal.models.enums import TerminationReason
from hr_portal.schemas.balance import LeaveIntervalPayload
from hr_portal.schemas.employee import NATIONAL_ID_PATTERN

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class SettlementManualFields(BaseModel):
    """Figures the engine takes verbatim. Negative values are rejected by the calculation."""

    cesantia_days: Decimal = Decimal("0")
    proportional_cesantia_days: Decimal = Decimal("0")
    vacation_bonus_days: Decimal = Decimal("0")

    salaries_due: Decimal = Decimal("0")
    overtime_due: Decimal = Decimal("0")
    other_payments: Decimal = Decimal("0")
    seventh_day_payment: Decimal = Decimal("0")
    wage_adjustment: Decimal = Decimal("0")
    educational_bonus: Decimal = Decimal("0")

    municipal_tax: Decimal = Decimal("0")
    notice_penalty: Decimal = Decimal("0")


class SeveranceCalculateRequest(SettlementManualFields):
    """Stand-alone settlement over caller-supplied employee data.

    ``reference_date`` is the day notice is given. It defaults to an
    explicit ``termination_date`` when one is supplied, else to today.
    When ``termination_date`` is omitted it is the reference date plus the
    statutory notice.
    """

    employee_name: str = Field(min_length=1, max_length=255)
    national_id: str = Field(pattern=NATIONAL_ID_PATTERN)
    start_date: date | None = None
    base_monthly_salary: Decimal
    reference_date: date | None = None
    termination_date: date | None = None
    termination_reason: TerminationReason = TerminationReason.DISMISSAL
    vacation_intervals: list[LeaveIntervalPayload] = Field(default_factory=list)


class EmployeeSeveranceRequest(SettlementManualFields):
    """Settlement for a directory employee; missing salary falls back to the directory."""

    reference_date: date | None = None
    termination_date: date | None = None
    termination_reason: TerminationReason = TerminationReason.DISMISSAL
    base_monthly_salary: Decimal | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ServicePeriodResponse(BaseModel):
    years: int
    months: int
    days: int
    total_days: int


class BonusWindowResponse(BaseModel):
    """A 13th or 14th month window on the 30-day-month convention."""

    start: date
    days: int
    proportional_days: Decimal
    amount: Decimal


class SalaryResponse(BaseModel):
    base_monthly: Decimal
    average_monthly: Decimal
    average_daily: Decimal
    base_daily: Decimal


class VacationSettlementResponse(BaseModel):
    entitlement: int
    taken: int
    proportional_days: int
    amount: Decimal


class SettlementResponse(BaseModel):
    """Full severance statement."""

    employee_name: str
    national_id: str
    termination_reason: TerminationReason
    start_date: date
    reference_date: date
    termination_date: date
    service: ServicePeriodResponse
    notice_days: int
    notice_pay: Decimal
    last_anniversary: date
    cesantia_days: Decimal
    cesantia_pay: Decimal
    proportional_cesantia_days: Decimal
    proportional_cesantia_pay: Decimal
    vacation: VacationSettlementResponse
    vacation_bonus_days: Decimal
    vacation_bonus_pay: Decimal
    thirteenth_month: BonusWindowResponse
    fourteenth_month: BonusWindowResponse
    salary: SalaryResponse
    salaries_due: Decimal
    overtime_due: Decimal
    other_payments: Decimal
    seventh_day_payment: Decimal
    wage_adjustment: Decimal
    educational_bonus: Decimal
    municipal_tax: Decimal
    notice_penalty: Decimal
    total_benefits: Decimal
    total_deductions: Decimal
    net_payment: Decimal
    warnings: list[str]


class SeverancePrefillResponse(BaseModel):
    """Directory and vacation data a settlement form starts from."""

    employee_id: uuid.UUID
    employee_name: str
    national_id: str | None
    position: str | None
    start_date: date
    as_of: date
    last_anniversary: date
    years_of_service: int
    vacation_entitlement: int
    vacation_taken: int
    vacation_available: int
    monthly_salary: Decimal | None
    required_notice_days: int
    suggested_termination_date: date
    suggested_cesantia_days: int
