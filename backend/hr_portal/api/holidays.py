# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Path, Query

from hr_portal.api.deps import AuthDep, validate_company_scope
from hr_portal.db import SessionDep
from hr_portal.schemas.holiday import (
    CreateHolidayRequest,
    HolidayListResponse,
    HolidayResponse,
    StatutoryHolidayListResponse,
)
from hr_portal.services import holiday as holiday_service

holidays_router = APIRouter(
    prefix="/companies/{company_id}/holidays",
    tags=["holidays"],
    dependencies=[Depends(validate_company_scope)],
)


@holidays_router.post(
    "",
    response_model=HolidayResponse,
    status_code=201,
)
async def create_holiday(
    company_id: uuid.UUID,
    payload: CreateHolidayRequest,
    session: SessionDep,
    auth: AuthDep,
) -> HolidayResponse:
    return await holiday_service.create_holiday(session, auth, payload)


@holidays_router.get(
    "",
    response_model=HolidayListResponse,
)
async def list_holidays(
    company_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    year: int | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> HolidayListResponse:
    """List company holidays, optionally for one year."""
    return await holiday_service.list_holidays(session, company_id, year, offset, limit)


@holidays_router.get(
    "/statutory/{year}",
    response_model=StatutoryHolidayListResponse,
)
async def list_statutory_holidays(
    company_id: uuid.UUID,
    auth: AuthDep,
    year: int = Path(ge=1900, le=2200),
) -> StatutoryHolidayListResponse:
    """National holidays of ``year``, including Holy Week and Morazán week."""
    return holiday_service.list_statutory_holidays(year)


@holidays_router.delete(
    "/{holiday_id}",
    status_code=204,
)
async def delete_holiday(
    company_id: uuid.UUID,
    holiday_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> None:
    await holiday_service.delete_holiday(session, auth, holiday_id)
