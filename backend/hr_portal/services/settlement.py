"""Settlement engine: notice periods, bonus windows and the severance statement.

Pure computation, no I/O. Currency is ``Decimal`` end to end and is rounded
half-up to cents only when a line item is produced.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from dateutil.relativedelta import relativedelta

from hr_portal.models.enums import TerminationReason
from hr_portal.services.entitlement import (
    TRIAL_PERIOD_DAYS,
    LeaveInterval,
    TenureBand,
    VacationBalance,
    band_value,
    compute_anniversary_year,
    compute_vacation_balance,
)

_CENTS = Decimal("0.01")
_ZERO = Decimal("0")
_DAYS_PER_MONTH = 30
_MONTHS_PER_YEAR = Decimal("12")
_SALARIES_PER_YEAR = Decimal("14")

# Statutory notice (preaviso) in calendar days, keyed by total months of service.
NOTICE_BANDS: tuple[TenureBand, ...] = (
    TenureBand(0, 3, 0),
    TenureBand(3, 6, 7),
    TenureBand(6, 12, 14),
    TenureBand(12, 24, 30),
    TenureBand(24, 60, 60),
    TenureBand(60, 120, 90),
    TenureBand(120, None, 120),
)


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Service period and notice
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ServicePeriod:
    """Calendar-aware elapsed time between two dates."""

    years: int
    months: int
    days: int
    total_days: int

    @property
    def total_months(self) -> int:
        return self.years * 12 + self.months


def service_period(start: date, end: date) -> ServicePeriod:
    """Years, months and days from ``start`` to ``end``; zero if ``end`` precedes ``start``."""
    if end < start:
        return ServicePeriod(years=0, months=0, days=0, total_days=0)
    delta = relativedelta(end, start)
    return ServicePeriod(
        years=delta.years,
        months=delta.months,
        days=delta.days,
        total_days=(end - start).days,
    )


def required_notice_days(service_start: date, reference_date: date) -> int:
    """Notice days owed for the tenure reached on ``reference_date``."""
    return band_value(NOTICE_BANDS, service_period(service_start, reference_date).total_months)


def compute_termination_date(
    reference_date: date,
    notice_days: int,
    explicit: date | None = None,
) -> date:
    """``reference_date`` plus the notice in calendar days, unless ``explicit`` is given."""
    if explicit is not None:
        return explicit
    return reference_date + timedelta(days=notice_days)


def last_anniversary_date(service_start: date, reference_date: date) -> date:
    """Most recent hire-date anniversary on or before ``reference_date``.

    Before the first anniversary this is the start date itself.
    """
    if reference_date < service_start:
        return service_start
    return compute_anniversary_year(service_start, reference_date).start


# ---------------------------------------------------------------------------
# Thirteenth / fourteenth month windows
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BonusWindow:
    """Start of a bonus accrual window and the days worked in it."""

    start: date
    days: int


def thirty_day_month_days(start: date, end: date) -> int:
    """Elapsed time as ``full_months * 30 + remainder_days``."""
    if end < start:
        return 0
    delta = relativedelta(end, start)
    return (delta.years * 12 + delta.months) * _DAYS_PER_MONTH + delta.days


def thirteenth_month_window(termination_date: date) -> BonusWindow:
    """Window opening on the last July 1 on or before ``termination_date``."""
    start = date(termination_date.year, 7, 1)
    if termination_date < start:
        start = date(termination_date.year - 1, 7, 1)
    return BonusWindow(start=start, days=thirty_day_month_days(start, termination_date))


def fourteenth_month_window(termination_date: date) -> BonusWindow:
    """Window opening on January 1 of the termination year."""
    start = date(termination_date.year, 1, 1)
    return BonusWindow(start=start, days=thirty_day_month_days(start, termination_date))


def vacation_proportional_days(balance: VacationBalance) -> int:
    return balance.available


# ---------------------------------------------------------------------------
# Salary
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SalaryBreakdown:
    base_monthly: Decimal
    average_monthly: Decimal
    average_daily: Decimal
    base_daily: Decimal


def salary_breakdown(base_monthly_salary: Decimal) -> SalaryBreakdown:
    """Derive the monthly/daily salaries used to price settlement line items.

    The average monthly salary spreads the two extra statutory payments
    (13th and 14th month) over twelve months. Values are not rounded.
    """
    base = Decimal(base_monthly_salary)
    average = base * _SALARIES_PER_YEAR / _MONTHS_PER_YEAR
    return SalaryBreakdown(
        base_monthly=base,
        average_monthly=average,
        average_daily=average / _DAYS_PER_MONTH,
        base_daily=base / _DAYS_PER_MONTH,
    )


# ---------------------------------------------------------------------------
# Settlement
# ---------------------------------------------------------------------------


class SettlementErrorKind(enum.StrEnum):
    MISSING_START_DATE = "MissingStartDate"
    INVALID_DATE_RANGE = "InvalidDateRange"
    INVALID_NUMERIC_INPUT = "InvalidNumericInput"


@dataclass(frozen=True)
class SettlementError:
    """Explicit failure value returned instead of a statement."""

    kind: SettlementErrorKind
    message: str
    field: str | None = None


@dataclass(frozen=True)
class SettlementInput:
    """Everything the settlement needs; manual figures default to zero."""

    employee_name: str
    national_id: str
    start_date: date | None
    base_monthly_salary: Decimal
    reference_date: date
    termination_date: date | None = None
    termination_reason: TerminationReason = TerminationReason.DISMISSAL
    vacation_intervals: tuple[LeaveInterval, ...] = ()
    trial_period_days: int = TRIAL_PERIOD_DAYS

    # Manual day counts
    cesantia_days: Decimal = _ZERO
    proportional_cesantia_days: Decimal = _ZERO
    vacation_bonus_days: Decimal = _ZERO

    # Manual earnings
    salaries_due: Decimal = _ZERO
    overtime_due: Decimal = _ZERO
    other_payments: Decimal = _ZERO
    seventh_day_payment: Decimal = _ZERO
    wage_adjustment: Decimal = _ZERO
    educational_bonus: Decimal = _ZERO

    # Deductions
    municipal_tax: Decimal = _ZERO
    notice_penalty: Decimal = _ZERO


# Fields that must not be negative; order is the order errors are reported in.
NON_NEGATIVE_FIELDS: tuple[str, ...] = (
    "base_monthly_salary",
    "cesantia_days",
    "proportional_cesantia_days",
    "vacation_bonus_days",
    "salaries_due",
    "overtime_due",
    "other_payments",
    "seventh_day_payment",
    "wage_adjustment",
    "educational_bonus",
    "municipal_tax",
    "notice_penalty",
)

MANUAL_EARNING_FIELDS: tuple[str, ...] = (
    "salaries_due",
    "overtime_due",
    "other_payments",
    "seventh_day_payment",
    "wage_adjustment",
    "educational_bonus",
)


@dataclass(frozen=True)
class SettlementLineItems:
    """Priced line items, each rounded to cents."""

    notice_pay: Decimal
    cesantia_pay: Decimal
    proportional_cesantia_pay: Decimal
    vacation_pay: Decimal
    vacation_bonus_pay: Decimal
    thirteenth_month_pay: Decimal
    fourteenth_month_pay: Decimal

    def total(self) -> Decimal:
        return sum((getattr(self, f.name) for f in fields(self)), _ZERO)


@dataclass(frozen=True)
class SettlementStatement:
    """Immutable severance statement."""

    employee_name: str
    national_id: str
    termination_reason: TerminationReason
    start_date: date
    reference_date: date
    termination_date: date
    service: ServicePeriod
    notice_days: int
    last_anniversary: date
    vacation_balance: VacationBalance
    vacation_proportional_days: int
    thirteenth_month: BonusWindow
    fourteenth_month: BonusWindow
    thirteenth_month_proportional_days: Decimal
    fourteenth_month_proportional_days: Decimal
    salary: SalaryBreakdown
    line_items: SettlementLineItems
    manual: SettlementInput
    total_benefits: Decimal
    total_deductions: Decimal
    net_payment: Decimal
    warnings: tuple[str, ...] = ()


def _validate(data: SettlementInput, start: date) -> SettlementError | None:
    for name in NON_NEGATIVE_FIELDS:
        if Decimal(getattr(data, name)) < 0:
            return SettlementError(
                kind=SettlementErrorKind.INVALID_NUMERIC_INPUT,
                message=f"{name} must not be negative",
                field=name,
            )
    if data.reference_date < start:
        return SettlementError(
            kind=SettlementErrorKind.INVALID_DATE_RANGE,
            message="Reference date is before the employee start date",
            field="reference_date",
        )
    if data.termination_date is not None and data.termination_date < start:
        return SettlementError(
            kind=SettlementErrorKind.INVALID_DATE_RANGE,
            message="Termination date is before the employee start date",
            field="termination_date",
        )
    return None


def _bonus_proportional_days(window: BonusWindow) -> Decimal:
    return _quantize(Decimal(window.days) / _MONTHS_PER_YEAR)


def compute_settlement(data: SettlementInput) -> SettlementStatement | SettlementError:
    """Build the full severance statement for ``data``.

    Notice is measured from the start date to ``reference_date``; the
    vacation balance, service period and bonus windows are measured at the
    termination date.
    """
    start = data.start_date
    if start is None:
        return SettlementError(
            kind=SettlementErrorKind.MISSING_START_DATE,
            message="Employee start date is required",
            field="start_date",
        )
    error = _validate(data, start)
    if error is not None:
        return error

    notice_days = required_notice_days(start, data.reference_date)
    termination = compute_termination_date(data.reference_date, notice_days, data.termination_date)

    balance = compute_vacation_balance(
        start,
        termination,
        data.vacation_intervals,
        data.trial_period_days,
    )
    vacation_days = vacation_proportional_days(balance)
    thirteenth = thirteenth_month_window(termination)
    fourteenth = fourteenth_month_window(termination)
    thirteenth_days = _bonus_proportional_days(thirteenth)
    fourteenth_days = _bonus_proportional_days(fourteenth)

    salary = salary_breakdown(data.base_monthly_salary)
    daily = salary.average_daily

    line_items = SettlementLineItems(
        notice_pay=_quantize(daily * notice_days),
        cesantia_pay=_quantize(daily * Decimal(data.cesantia_days)),
        proportional_cesantia_pay=_quantize(daily * Decimal(data.proportional_cesantia_days)),
        vacation_pay=_quantize(daily * vacation_days),
        vacation_bonus_pay=_quantize(daily * Decimal(data.vacation_bonus_days)),
        thirteenth_month_pay=_quantize(salary.base_daily * thirteenth_days),
        fourteenth_month_pay=_quantize(salary.base_daily * fourteenth_days),
    )

    manual_earnings = sum((Decimal(getattr(data, name)) for name in MANUAL_EARNING_FIELDS), _ZERO)
    total_benefits = line_items.total() + manual_earnings
    total_deductions = Decimal(data.municipal_tax) + Decimal(data.notice_penalty)

    warnings: list[str] = []
    if vacation_days < 0:
        warnings.append("Vacation balance at termination is negative")
    if data.termination_date is not None and data.termination_date < data.reference_date:
        warnings.append("Termination date precedes the notice reference date")

    return SettlementStatement(
        employee_name=data.employee_name,
        national_id=data.national_id,
        termination_reason=data.termination_reason,
        start_date=start,
        reference_date=data.reference_date,
        termination_date=termination,
        service=service_period(start, termination),
        notice_days=notice_days,
        last_anniversary=last_anniversary_date(start, termination),
        vacation_balance=balance,
        vacation_proportional_days=vacation_days,
        thirteenth_month=thirteenth,
        fourteenth_month=fourteenth,
        thirteenth_month_proportional_days=thirteenth_days,
        fourteenth_month_proportional_days=fourteenth_days,
        salary=salary,
        line_items=line_items,
        manual=data,
        total_benefits=total_benefits,
        total_deductions=total_deductions,
        net_payment=total_benefits - total_deductions,
        warnings=tuple(warnings),
    )


get_severance_settlement = compute_settlement
