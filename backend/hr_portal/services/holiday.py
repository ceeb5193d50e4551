from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import extract, func, select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from hr_portal.exceptions import AppError
from hr_portal.models.enums import AuditAction, AuditEntityType
from hr_portal.models.holiday import CompanyHoliday
from hr_portal.schemas.holiday import (
    HolidayListResponse,
    HolidayResponse,
    StatutoryHolidayListResponse,
    StatutoryHolidayResponse,
)
from hr_portal.services.audit import model_to_audit_dict, write_audit_log
from hr_portal.services.duration import statutory_holidays

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_portal.schemas.auth import AuthContext
    from hr_portal.schemas.holiday import CreateHolidayRequest

logger = logging.getLogger(__name__)


def _build_holiday_response(holiday: CompanyHoliday) -> HolidayResponse:
    return HolidayResponse(
        id=holiday.id,
        company_id=holiday.company_id,
        date=holiday.date,
        name=holiday.name,
    )


async def create_holiday(
    session: AsyncSession,
    auth: AuthContext,
    payload: CreateHolidayRequest,
) -> HolidayResponse:
    """Declare a company holiday; one per company and date."""
    holiday = CompanyHoliday(
        company_id=auth.company_id,
        date=payload.date,
        name=payload.name,
    )
    session.add(holiday)

    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        raise AppError("Holiday already exists for this date", status_code=409) from None

    await write_audit_log(
        session,
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.HOLIDAY,
        entity_id=holiday.id,
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(holiday),
    )

    await session.commit()
    await session.refresh(holiday)
    logger.info("Created holiday %s on %s for company %s", holiday.name, holiday.date, auth.company_id)
    return _build_holiday_response(holiday)


async def list_holidays(
    session: AsyncSession,
    company_id: uuid.UUID,
    year: int | None = None,
    offset: int = 0,
    limit: int = 50,
) -> HolidayListResponse:
    filters = [col(CompanyHoliday.company_id) == company_id]

    if year is not None:
        filters.append(extract("year", col(CompanyHoliday.date)) == year)

    count_result = await session.execute(select(func.count()).select_from(CompanyHoliday).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(CompanyHoliday).where(*filters).order_by(col(CompanyHoliday.date)).offset(offset).limit(limit)
    )

    return HolidayListResponse(
        items=[_build_holiday_response(h) for h in result.scalars().all()],
        total=total,
    )


async def _get_holiday_or_404(
    session: AsyncSession,
    company_id: uuid.UUID,
    holiday_id: uuid.UUID,
) -> CompanyHoliday:
    result = await session.execute(
        select(CompanyHoliday).where(
            col(CompanyHoliday.id) == holiday_id,
            col(CompanyHoliday.company_id) == company_id,
        )
    )
    holiday = result.scalar_one_or_none()
    if holiday is None:
        raise AppError("Holiday not found", status_code=404)
    return holiday


async def delete_holiday(
    session: AsyncSession,
    auth: AuthContext,
    holiday_id: uuid.UUID,
) -> None:
    holiday = await _get_holiday_or_404(session, auth.company_id, holiday_id)

    await write_audit_log(
        session,
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.HOLIDAY,
        entity_id=holiday.id,
        action=AuditAction.DELETE,
        before_json=model_to_audit_dict(holiday),
    )

    await session.delete(holiday)
    await session.commit()
    logger.info("Deleted holiday %s for company %s", holiday_id, auth.company_id)


def list_statutory_holidays(year: int) -> StatutoryHolidayListResponse:
    """The national holiday calendar of ``year``, in date order."""
    items = [
        StatutoryHolidayResponse(date=day, name=name, weekday=day.strftime("%A"))
        for day, name in sorted(statutory_holidays(year).items())
    ]
    return StatutoryHolidayListResponse(year=year, items=items, total=len(items))
