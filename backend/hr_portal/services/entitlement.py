"""Entitlement engine: anniversary years, vacation entitlement and balances.

Pure functions over dates and integers. Nothing in this module reads the clock,
the settings or the database; callers pass the reference date explicitly.

Tier values follow Honduran labor law: the vacation entitlement grows with
each completed year of service and is zero during the trial period.
"""

from __future__ import annotations

import calendar
import enum
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING

from hr_portal.models.enums import LeaveStatus, LeaveType

if TYPE_CHECKING:
    from collections.abc import Iterable

TRIAL_PERIOD_DAYS = 90

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class TenureBand:
    """A half-open tenure range ``[min_value, max_value)`` mapped to a value.

    ``max_value=None`` leaves the band unbounded above.
    """

    min_value: int
    max_value: int | None
    value: int

    def contains(self, tenure: int) -> bool:
        return tenure >= self.min_value and (self.max_value is None or tenure < self.max_value)


# Vacation days per anniversary year, keyed by completed years of service.
ENTITLEMENT_BANDS: tuple[TenureBand, ...] = (
    TenureBand(0, 1, 10),
    TenureBand(1, 2, 12),
    TenureBand(2, 3, 15),
    TenureBand(3, None, 20),
)


def band_value(bands: tuple[TenureBand, ...], tenure: int) -> int:
    """Look up ``tenure`` in an ordered band table.

    Values below the first band resolve to the first band.
    """
    if tenure < bands[0].min_value:
        return bands[0].value
    for band in bands:
        if band.contains(tenure):
            return band.value
    return bands[-1].value


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


class BalanceErrorKind(enum.StrEnum):
    """Reasons a balance could not be computed."""

    MISSING_START_DATE = "MissingStartDate"


@dataclass(frozen=True)
class AnniversaryYear:
    """Inclusive window ``[start, end]`` anchored on the hire month/day."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def length_days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class LeaveInterval:
    """A leave request reduced to what the engine needs."""

    start_date: date
    end_date: date
    leave_type: LeaveType = LeaveType.VACATION
    status: LeaveStatus = LeaveStatus.APPROVED

    @property
    def counts_against_vacation(self) -> bool:
        return self.leave_type == LeaveType.VACATION and self.status == LeaveStatus.APPROVED


@dataclass(frozen=True)
class VacationBalance:
    """Derived vacation figures for one employee at one reference date."""

    entitlement: int
    taken: int
    available: int
    years_of_service: int
    is_in_trial_period: bool
    days_until_eligible: int
    next_anniversary: date | None
    anniversary_year: AnniversaryYear | None = None
    cumulative_entitlement: int = 0
    error: BalanceErrorKind | None = None

    @classmethod
    def missing_start_date(cls) -> VacationBalance:
        return cls(
            entitlement=0,
            taken=0,
            available=0,
            years_of_service=0,
            is_in_trial_period=False,
            days_until_eligible=0,
            next_anniversary=None,
            error=BalanceErrorKind.MISSING_START_DATE,
        )


# ---------------------------------------------------------------------------
# Anniversary arithmetic
# ---------------------------------------------------------------------------


def anniversary_on(service_start: date, year: int) -> date:
    """Return the anniversary of ``service_start`` falling in ``year``.

    A February 29 hire date resolves to February 28 in non-leap years.
    """
    if service_start.month == 2 and service_start.day == 29 and not calendar.isleap(year):
        return date(year, 2, 28)
    return service_start.replace(year=year)


def compute_anniversary_year(service_start: date, reference: date) -> AnniversaryYear:
    """Return the anniversary year that contains ``reference``."""
    start = anniversary_on(service_start, reference.year)
    if reference < start:
        start = anniversary_on(service_start, reference.year - 1)
    end = anniversary_on(service_start, start.year + 1) - _ONE_DAY
    return AnniversaryYear(start=start, end=end)


def years_of_service(service_start: date, reference: date) -> int:
    """Completed anniversary years between ``service_start`` and ``reference``."""
    if reference < service_start:
        return 0
    current = compute_anniversary_year(service_start, reference)
    return max(0, current.start.year - service_start.year)


def elapsed_days(service_start: date, reference: date) -> int:
    return (reference - service_start).days


def is_in_trial_period(service_start: date, reference: date, trial_period_days: int = TRIAL_PERIOD_DAYS) -> bool:
    """True while fewer than ``trial_period_days`` have elapsed since hire."""
    return elapsed_days(service_start, reference) < trial_period_days


def days_until_eligible(service_start: date, reference: date, trial_period_days: int = TRIAL_PERIOD_DAYS) -> int:
    return max(0, trial_period_days - elapsed_days(service_start, reference))


# ---------------------------------------------------------------------------
# Entitlement tiers
# ---------------------------------------------------------------------------


def vacation_entitlement_days(completed_years: int) -> int:
    """Vacation days for the anniversary year after ``completed_years``."""
    return band_value(ENTITLEMENT_BANDS, completed_years)


def cumulative_entitlement_days(completed_years: int) -> int:
    """Sum of the entitlements earned by each completed year.

    1 year -> 10, 2 years -> 22, 3 years -> 37, then 20 per further year.
    """
    return sum(vacation_entitlement_days(year) for year in range(max(0, completed_years)))


# ---------------------------------------------------------------------------
# Days taken
# ---------------------------------------------------------------------------


def overlaps(interval: LeaveInterval, year: AnniversaryYear) -> bool:
    """True if the interval starts, ends, or spans across the anniversary year."""
    return (
        year.contains(interval.start_date)
        or year.contains(interval.end_date)
        or (interval.start_date <= year.start and interval.end_date >= year.end)
    )


def days_within(interval: LeaveInterval, year: AnniversaryYear) -> int:
    """Inclusive day count of ``interval`` clipped to ``year``.

    Inverted intervals (end before start) count as zero days.
    """
    if interval.end_date < interval.start_date:
        return 0
    first = max(interval.start_date, year.start)
    last = min(interval.end_date, year.end)
    if last < first:
        return 0
    return (last - first).days + 1


def days_taken(intervals: Iterable[LeaveInterval], year: AnniversaryYear) -> int:
    """Approved vacation days consumed inside the anniversary year."""
    return sum(
        days_within(interval, year)
        for interval in intervals
        if interval.counts_against_vacation and overlaps(interval, year)
    )


# ---------------------------------------------------------------------------
# Balance
# ---------------------------------------------------------------------------


def compute_vacation_balance(
    service_start: date | None,
    reference_date: date,
    intervals: Iterable[LeaveInterval],
    trial_period_days: int = TRIAL_PERIOD_DAYS,
) -> VacationBalance:
    """Compute the vacation balance as of ``reference_date``.

    A missing start date yields a zeroed balance tagged with
    ``BalanceErrorKind.MISSING_START_DATE`` rather than an exception.
    ``available`` is not clamped: a negative value means the employee is
    over-drawn.
    """
    if service_start is None:
        return VacationBalance.missing_start_date()

    year = compute_anniversary_year(service_start, reference_date)
    completed = years_of_service(service_start, reference_date)
    in_trial = is_in_trial_period(service_start, reference_date, trial_period_days)

    entitlement = 0 if in_trial else vacation_entitlement_days(completed)
    taken = days_taken(intervals, year)

    return VacationBalance(
        entitlement=entitlement,
        taken=taken,
        available=entitlement - taken,
        years_of_service=completed,
        is_in_trial_period=in_trial,
        days_until_eligible=days_until_eligible(service_start, reference_date, trial_period_days),
        next_anniversary=year.end + _ONE_DAY,
        anniversary_year=year,
        cumulative_entitlement=cumulative_entitlement_days(completed),
    )


get_vacation_balance = compute_vacation_balance
