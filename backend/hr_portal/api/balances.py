# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query

from hr_portal.api.deps import AuthDep, validate_company_scope
from hr_portal.db import SessionDep
from hr_portal.schemas.balance import VacationBalanceCalculateRequest, VacationBalanceResponse
from hr_portal.services import balance as balance_service

employee_balance_router = APIRouter(
    prefix="/companies/{company_id}/employees/{employee_id}/vacation-balance",
    tags=["balances"],
    dependencies=[Depends(validate_company_scope)],
)

balance_calculator_router = APIRouter(
    prefix="/companies/{company_id}/vacation-balance",
    tags=["balances"],
    dependencies=[Depends(validate_company_scope)],
)


@employee_balance_router.get("", response_model=VacationBalanceResponse)
async def get_employee_vacation_balance(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    as_of: date | None = Query(default=None),
) -> VacationBalanceResponse:
    """Vacation balance over the employee's approved vacation requests."""
    return await balance_service.get_employee_vacation_balance(session, auth.company_id, employee_id, as_of)


@balance_calculator_router.post("/calculate", response_model=VacationBalanceResponse)
async def calculate_vacation_balance(
    payload: VacationBalanceCalculateRequest,
    auth: AuthDep,
) -> VacationBalanceResponse:
    """Vacation balance for an arbitrary start date and list of intervals."""
    return balance_service.calculate_vacation_balance(payload)
