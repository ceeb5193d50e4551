# ruff: noqa: TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from hr_portal.api.deps import AuthDep, validate_company_scope
from hr_portal.schemas.employee import EmployeeListResponse, EmployeeResponse, UpsertEmployeeRequest
from hr_portal.services.employee import EmployeeInfo, get_employee_or_404, get_employee_service

employees_router = APIRouter(
    prefix="/companies/{company_id}/employees",
    tags=["employees"],
    dependencies=[Depends(validate_company_scope)],
)


def _build_employee_response(employee: EmployeeInfo) -> EmployeeResponse:
    return EmployeeResponse.model_validate(employee.model_dump())


@employees_router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def upsert_employee(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    payload: UpsertEmployeeRequest,
    auth: AuthDep,
) -> EmployeeResponse:
    """Create or replace an employee in the directory."""
    employee = EmployeeInfo(id=employee_id, company_id=company_id, **payload.model_dump())
    saved = await get_employee_service().upsert_employee(employee)
    return _build_employee_response(saved)


@employees_router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def get_employee(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    auth: AuthDep,
) -> EmployeeResponse:
    employee = await get_employee_or_404(company_id, employee_id)
    return _build_employee_response(employee)


@employees_router.get(
    "",
    response_model=EmployeeListResponse,
)
async def list_employees(
    company_id: uuid.UUID,
    auth: AuthDep,
) -> EmployeeListResponse:
    """List the company's employees ordered by last name."""
    employees = await get_employee_service().list_employees(company_id)
    items = [_build_employee_response(e) for e in employees]
    return EmployeeListResponse(items=items, total=len(items))
