# ruff: noqa: TC003
"""Severance flows: map payloads and directory data into the settlement engine."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from hr_portal.config import get_settings
from hr_portal.exceptions import AppError, CalculationError
from hr_portal.schemas.severance import (
    BonusWindowResponse,
    SalaryResponse,
    ServicePeriodResponse,
    SettlementManualFields,
    SettlementResponse,
    SeverancePrefillResponse,
    VacationSettlementResponse,
)
from hr_portal.services.balance import load_vacation_intervals, vacation_balance_for
from hr_portal.services.employee import get_employee_or_404
from hr_portal.services.entitlement import LeaveInterval
from hr_portal.services.pdf import render_settlement_pdf, settlement_filename
from hr_portal.services.settlement import (
    SettlementError,
    SettlementInput,
    SettlementStatement,
    compute_settlement,
    compute_termination_date,
    last_anniversary_date,
    required_notice_days,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_portal.schemas.severance import EmployeeSeveranceRequest, SeveranceCalculateRequest

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")

# Cesantía suggested per completed year of service.
_CESANTIA_DAYS_PER_YEAR = 30


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _manual_kwargs(payload: SettlementManualFields) -> dict[str, Decimal]:
    return {name: getattr(payload, name) for name in SettlementManualFields.model_fields}


def _run(data: SettlementInput) -> SettlementStatement:
    result = compute_settlement(data)
    if isinstance(result, SettlementError):
        logger.info("Settlement rejected for %s: %s (%s)", data.employee_name, result.kind, result.field)
        raise CalculationError(result.kind, result.message, result.field)
    return result


def _build_settlement_response(statement: SettlementStatement) -> SettlementResponse:
    items = statement.line_items
    manual = statement.manual
    salary = statement.salary
    return SettlementResponse(
        employee_name=statement.employee_name,
        national_id=statement.national_id,
        termination_reason=statement.termination_reason,
        start_date=statement.start_date,
        reference_date=statement.reference_date,
        termination_date=statement.termination_date,
        service=ServicePeriodResponse(
            years=statement.service.years,
            months=statement.service.months,
            days=statement.service.days,
            total_days=statement.service.total_days,
        ),
        notice_days=statement.notice_days,
        notice_pay=items.notice_pay,
        last_anniversary=statement.last_anniversary,
        cesantia_days=manual.cesantia_days,
        cesantia_pay=items.cesantia_pay,
        proportional_cesantia_days=manual.proportional_cesantia_days,
        proportional_cesantia_pay=items.proportional_cesantia_pay,
        vacation=VacationSettlementResponse(
            entitlement=statement.vacation_balance.entitlement,
            taken=statement.vacation_balance.taken,
            proportional_days=statement.vacation_proportional_days,
            amount=items.vacation_pay,
        ),
        vacation_bonus_days=manual.vacation_bonus_days,
        vacation_bonus_pay=items.vacation_bonus_pay,
        thirteenth_month=BonusWindowResponse(
            start=statement.thirteenth_month.start,
            days=statement.thirteenth_month.days,
            proportional_days=statement.thirteenth_month_proportional_days,
            amount=items.thirteenth_month_pay,
        ),
        fourteenth_month=BonusWindowResponse(
            start=statement.fourteenth_month.start,
            days=statement.fourteenth_month.days,
            proportional_days=statement.fourteenth_month_proportional_days,
            amount=items.fourteenth_month_pay,
        ),
        # Display only; line items were priced on the unrounded values.
        salary=SalaryResponse(
            base_monthly=salary.base_monthly.quantize(_CENTS),
            average_monthly=salary.average_monthly.quantize(_CENTS),
            average_daily=salary.average_daily.quantize(_CENTS),
            base_daily=salary.base_daily.quantize(_CENTS),
        ),
        salaries_due=manual.salaries_due,
        overtime_due=manual.overtime_due,
        other_payments=manual.other_payments,
        seventh_day_payment=manual.seventh_day_payment,
        wage_adjustment=manual.wage_adjustment,
        educational_bonus=manual.educational_bonus,
        municipal_tax=manual.municipal_tax,
        notice_penalty=manual.notice_penalty,
        total_benefits=statement.total_benefits,
        total_deductions=statement.total_deductions,
        net_payment=statement.net_payment,
        warnings=list(statement.warnings),
    )


def notice_reference_date(reference_date: date | None, termination_date: date | None) -> date:
    """Day the notice tenure is measured at.

    Defaults to an explicit termination date, so a past termination is
    settled the same whatever day it is computed on, and to today otherwise.
    """
    if reference_date is not None:
        return reference_date
    if termination_date is not None:
        return termination_date
    return date.today()


def build_settlement_input(payload: SeveranceCalculateRequest) -> SettlementInput:
    return SettlementInput(
        employee_name=payload.employee_name,
        national_id=payload.national_id,
        start_date=payload.start_date,
        base_monthly_salary=payload.base_monthly_salary,
        reference_date=notice_reference_date(payload.reference_date, payload.termination_date),
        termination_date=payload.termination_date,
        termination_reason=payload.termination_reason,
        vacation_intervals=tuple(
            LeaveInterval(
                start_date=i.start_date,
                end_date=i.end_date,
                leave_type=i.leave_type,
                status=i.status,
            )
            for i in payload.vacation_intervals
        ),
        trial_period_days=get_settings().trial_period_days,
        **_manual_kwargs(payload),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def calculate_severance(payload: SeveranceCalculateRequest) -> SettlementResponse:
    """Settlement over a caller payload; nothing is read from storage."""
    return _build_settlement_response(_run(build_settlement_input(payload)))


async def get_severance_prefill(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    as_of: date | None = None,
) -> SeverancePrefillResponse:
    """Directory data plus the derived figures a settlement form starts from."""
    employee = await get_employee_or_404(company_id, employee_id)
    if employee.start_date is None:
        raise CalculationError("MissingStartDate", "Employee start date is required for a severance", "start_date")

    reference = as_of or date.today()
    if reference < employee.start_date:
        raise CalculationError("InvalidDateRange", "as_of is before the employee start date", "as_of")

    balance = await vacation_balance_for(session, company_id, employee_id, employee.start_date, reference)
    notice_days = required_notice_days(employee.start_date, reference)

    return SeverancePrefillResponse(
        employee_id=employee.id,
        employee_name=employee.full_name,
        national_id=employee.national_id,
        position=employee.position,
        start_date=employee.start_date,
        as_of=reference,
        last_anniversary=last_anniversary_date(employee.start_date, reference),
        years_of_service=balance.years_of_service,
        vacation_entitlement=balance.entitlement,
        vacation_taken=balance.taken,
        vacation_available=balance.available,
        monthly_salary=employee.monthly_salary,
        required_notice_days=notice_days,
        suggested_termination_date=compute_termination_date(reference, notice_days),
        suggested_cesantia_days=balance.years_of_service * _CESANTIA_DAYS_PER_YEAR,
    )


async def calculate_employee_severance(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    payload: EmployeeSeveranceRequest,
) -> SettlementResponse:
    """Settlement for a directory employee over their persisted approved vacations."""
    employee = await get_employee_or_404(company_id, employee_id)

    salary = payload.base_monthly_salary
    if salary is None:
        salary = employee.monthly_salary
    if salary is None:
        raise AppError("Monthly salary is not on file; supply base_monthly_salary", status_code=400)

    intervals = await load_vacation_intervals(session, company_id, employee_id)
    data = SettlementInput(
        employee_name=employee.full_name,
        national_id=employee.national_id or "",
        start_date=employee.start_date,
        base_monthly_salary=salary,
        reference_date=notice_reference_date(payload.reference_date, payload.termination_date),
        termination_date=payload.termination_date,
        termination_reason=payload.termination_reason,
        vacation_intervals=tuple(intervals),
        trial_period_days=get_settings().trial_period_days,
        **_manual_kwargs(payload),
    )
    statement = _run(data)
    logger.info(
        "Computed severance for employee %s: net %s on %s",
        employee_id,
        statement.net_payment,
        statement.termination_date,
    )
    return _build_settlement_response(statement)


def render_severance_pdf(payload: SeveranceCalculateRequest) -> tuple[bytes, str]:
    """Return ``(pdf_bytes, filename)`` for the settlement of ``payload``."""
    statement = _run(build_settlement_input(payload))
    settings = get_settings()
    content = render_settlement_pdf(statement, settings.company_name, settings.currency_symbol)
    return content, settlement_filename(statement)
