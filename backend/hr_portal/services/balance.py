# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from hr_portal.config import get_settings
from hr_portal.exceptions import CalculationError
from hr_portal.models.enums import LeaveStatus, LeaveType
from hr_portal.models.leave_request import LeaveRequest
from hr_portal.schemas.balance import AnniversaryYearResponse, VacationBalanceResponse
from hr_portal.services.employee import get_employee_or_404
from hr_portal.services.entitlement import (
    BalanceErrorKind,
    LeaveInterval,
    VacationBalance,
    compute_vacation_balance,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_portal.schemas.balance import VacationBalanceCalculateRequest

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_balance_response(
    balance: VacationBalance,
    start_date: date | None,
    as_of: date,
    employee_id: uuid.UUID | None = None,
) -> VacationBalanceResponse:
    year = balance.anniversary_year
    if start_date is None or year is None or balance.next_anniversary is None:
        raise CalculationError(
            balance.error or BalanceErrorKind.MISSING_START_DATE,
            "Employee start date is required to compute a vacation balance",
        )
    return VacationBalanceResponse(
        employee_id=employee_id,
        as_of=as_of,
        start_date=start_date,
        entitlement=balance.entitlement,
        taken=balance.taken,
        available=balance.available,
        years_of_service=balance.years_of_service,
        is_in_trial_period=balance.is_in_trial_period,
        days_until_eligible=balance.days_until_eligible,
        next_anniversary=balance.next_anniversary,
        anniversary_year=AnniversaryYearResponse(
            start=year.start,
            end=year.end,
        ),
        cumulative_entitlement=balance.cumulative_entitlement,
    )


def to_leave_interval(request: LeaveRequest) -> LeaveInterval:
    return LeaveInterval(
        start_date=request.start_date,
        end_date=request.end_date,
        leave_type=LeaveType(request.leave_type),
        status=LeaveStatus(request.status),
    )


async def load_vacation_intervals(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
) -> list[LeaveInterval]:
    """Approved vacation requests of an employee, oldest first."""
    result = await session.execute(
        select(LeaveRequest)
        .where(
            col(LeaveRequest.company_id) == company_id,
            col(LeaveRequest.employee_id) == employee_id,
            col(LeaveRequest.leave_type) == LeaveType.VACATION.value,
            col(LeaveRequest.status) == LeaveStatus.APPROVED.value,
        )
        .order_by(col(LeaveRequest.start_date))
    )
    return [to_leave_interval(r) for r in result.scalars().all()]


async def vacation_balance_for(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    start_date: date | None,
    as_of: date,
) -> VacationBalance:
    """Run the entitlement engine over the persisted approved vacations."""
    intervals = await load_vacation_intervals(session, company_id, employee_id)
    return compute_vacation_balance(start_date, as_of, intervals, get_settings().trial_period_days)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def get_employee_vacation_balance(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    as_of: date | None = None,
) -> VacationBalanceResponse:
    """Vacation balance of a directory employee; ``as_of`` defaults to today."""
    employee = await get_employee_or_404(company_id, employee_id)
    reference = as_of or date.today()

    balance = await vacation_balance_for(session, company_id, employee_id, employee.start_date, reference)
    response = _build_balance_response(balance, employee.start_date, reference, employee_id)

    logger.debug(
        "Vacation balance for %s as of %s: %d available of %d",
        employee_id,
        reference,
        balance.available,
        balance.entitlement,
    )
    return response


def calculate_vacation_balance(payload: VacationBalanceCalculateRequest) -> VacationBalanceResponse:
    """Balance over a caller-supplied start date and intervals; no storage involved."""
    trial_period_days = payload.trial_period_days
    if trial_period_days is None:
        trial_period_days = get_settings().trial_period_days

    intervals = [
        LeaveInterval(
            start_date=i.start_date,
            end_date=i.end_date,
            leave_type=i.leave_type,
            status=i.status,
        )
        for i in payload.intervals
    ]
    balance = compute_vacation_balance(payload.start_date, payload.as_of, intervals, trial_period_days)
    return _build_balance_response(balance, payload.start_date, payload.as_of)
