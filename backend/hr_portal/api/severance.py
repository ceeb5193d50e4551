# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from hr_portal.api.deps import AuthDep, validate_company_scope
from hr_portal.db import SessionDep
from hr_portal.schemas.severance import (
    EmployeeSeveranceRequest,
    SettlementResponse,
    SeveranceCalculateRequest,
    SeverancePrefillResponse,
)
from hr_portal.services import severance as severance_service

severance_router = APIRouter(
    prefix="/companies/{company_id}/severance",
    tags=["severance"],
    dependencies=[Depends(validate_company_scope)],
)

employee_severance_router = APIRouter(
    prefix="/companies/{company_id}/employees/{employee_id}/severance",
    tags=["severance"],
    dependencies=[Depends(validate_company_scope)],
)


@severance_router.post("/calculate", response_model=SettlementResponse)
async def calculate_severance(
    payload: SeveranceCalculateRequest,
    auth: AuthDep,
) -> SettlementResponse:
    """Compute a settlement statement from the request body alone."""
    return severance_service.calculate_severance(payload)


@severance_router.post(
    "/pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def severance_pdf(
    payload: SeveranceCalculateRequest,
    auth: AuthDep,
) -> Response:
    """Render the settlement statement as a PDF attachment."""
    content, filename = severance_service.render_severance_pdf(payload)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@employee_severance_router.get("/prefill", response_model=SeverancePrefillResponse)
async def get_severance_prefill(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    as_of: date | None = Query(default=None),
) -> SeverancePrefillResponse:
    return await severance_service.get_severance_prefill(session, auth.company_id, employee_id, as_of)


@employee_severance_router.post("", response_model=SettlementResponse)
async def calculate_employee_severance(
    employee_id: uuid.UUID,
    payload: EmployeeSeveranceRequest,
    session: SessionDep,
    auth: AuthDep,
) -> SettlementResponse:
    """Settlement with start date, salary and approved vacations taken from storage."""
    return await severance_service.calculate_employee_severance(session, auth.company_id, employee_id, payload)
