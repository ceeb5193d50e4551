# ruff: noqa: TC003
"""Working-day calendar for leave requests.

Statutory Honduran holidays are computed per year; company holidays come from
the ``company_holiday`` table.
"""

from __future__ import annotations

import uuid
from datetime import date, timedelta
from functools import lru_cache
from typing import TYPE_CHECKING

from dateutil.easter import easter
from dateutil.relativedelta import WE, relativedelta
from sqlalchemy import select
from sqlmodel import col

from hr_portal.config import get_settings
from hr_portal.models.holiday import CompanyHoliday

if TYPE_CHECKING:
    from collections.abc import Collection

    from sqlalchemy.ext.asyncio import AsyncSession

_ONE_DAY = timedelta(days=1)

# Fixed-date statutory holidays as (month, day, name).
_FIXED_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "Año Nuevo"),
    (4, 14, "Día de las Américas"),
    (5, 1, "Día del Trabajador"),
    (9, 15, "Día de la Independencia"),
    (12, 25, "Navidad"),
)


@lru_cache(maxsize=64)
def _statutory_holidays(year: int) -> tuple[tuple[date, str], ...]:
    days: dict[date, str] = {date(year, month, day): name for month, day, name in _FIXED_HOLIDAYS}

    easter_sunday = easter(year)
    days[easter_sunday - timedelta(days=3)] = "Jueves Santo"
    days[easter_sunday - timedelta(days=2)] = "Viernes Santo"
    days[easter_sunday - timedelta(days=1)] = "Sábado Santo"

    # Morazán week: first Wednesday of October plus the following Friday and Saturday.
    morazan = date(year, 10, 1) + relativedelta(weekday=WE(1))
    days[morazan] = "Semana Morazánica"
    days[morazan + timedelta(days=2)] = "Semana Morazánica"
    days[morazan + timedelta(days=3)] = "Semana Morazánica"

    return tuple(sorted(days.items()))


def statutory_holidays(year: int) -> dict[date, str]:
    """Return the statutory holidays of ``year`` keyed by date."""
    return dict(_statutory_holidays(year))


def statutory_holidays_between(start_date: date, end_date: date) -> set[date]:
    result: set[date] = set()
    for year in range(start_date.year, end_date.year + 1):
        result.update(d for d in statutory_holidays(year) if start_date <= d <= end_date)
    return result


def calendar_days(start_date: date, end_date: date) -> int:
    """Inclusive calendar days; 0 when the range is inverted."""
    if end_date < start_date:
        return 0
    return (end_date - start_date).days + 1


def count_working_days(start_date: date, end_date: date, holidays: Collection[date] = ()) -> int:
    """Count Monday-Friday days in ``[start_date, end_date]`` that are not holidays."""
    total = 0
    current = start_date
    while current <= end_date:
        if current.weekday() < 5 and current not in holidays:
            total += 1
        current += _ONE_DAY
    return total


async def _fetch_holiday_dates(
    session: AsyncSession,
    company_id: uuid.UUID,
    start_date: date,
    end_date: date,
) -> set[date]:
    """Fetch company holidays in the given date range."""
    result = await session.execute(
        select(col(CompanyHoliday.date)).where(
            col(CompanyHoliday.company_id) == company_id,
            col(CompanyHoliday.date) >= start_date,
            col(CompanyHoliday.date) <= end_date,
        )
    )
    return {row[0] for row in result.all()}


async def calculate_requested_days(
    session: AsyncSession,
    company_id: uuid.UUID,
    start_date: date,
    end_date: date,
) -> tuple[int, int]:
    """Return ``(calendar_days, working_days)`` for a leave request.

    Working days exclude weekends, company holidays and, when enabled in the
    settings, the statutory calendar.
    """
    holidays = await _fetch_holiday_dates(session, company_id, start_date, end_date)
    if get_settings().statutory_holidays_enabled:
        holidays |= statutory_holidays_between(start_date, end_date)

    return calendar_days(start_date, end_date), count_working_days(start_date, end_date, holidays)
