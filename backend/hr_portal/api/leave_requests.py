# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status

from hr_portal.api.deps import AuthDep, validate_company_scope
from hr_portal.db import SessionDep
from hr_portal.models.enums import LeaveStatus, LeaveType
from hr_portal.schemas.leave import (
    LeaveRequestListResponse,
    LeaveRequestResponse,
    ReviewPayload,
    SubmitLeaveRequestPayload,
)
from hr_portal.services import leave as leave_service

leave_requests_router = APIRouter(
    prefix="/companies/{company_id}/leave-requests",
    tags=["leave-requests"],
    dependencies=[Depends(validate_company_scope)],
)


@leave_requests_router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_leave_request(
    payload: SubmitLeaveRequestPayload,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveRequestResponse:
    """Submit a leave request for review."""
    return await leave_service.submit_leave_request(session, auth, payload)


@leave_requests_router.get("", response_model=LeaveRequestListResponse)
async def list_leave_requests(
    session: SessionDep,
    auth: AuthDep,
    status_filter: LeaveStatus | None = Query(default=None, alias="status"),
    leave_type: LeaveType | None = Query(default=None),
    employee_id: uuid.UUID | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> LeaveRequestListResponse:
    return await leave_service.list_leave_requests(
        session, auth.company_id, status_filter, leave_type, employee_id, offset, limit
    )


@leave_requests_router.get("/{request_id}", response_model=LeaveRequestResponse)
async def get_leave_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveRequestResponse:
    return await leave_service.get_leave_request(session, auth.company_id, request_id)


@leave_requests_router.post("/{request_id}/approve", response_model=LeaveRequestResponse)
async def approve_leave_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    payload: ReviewPayload | None = None,
) -> LeaveRequestResponse:
    return await leave_service.approve_leave_request(session, auth, request_id, payload)


@leave_requests_router.post("/{request_id}/reject", response_model=LeaveRequestResponse)
async def reject_leave_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    payload: ReviewPayload | None = None,
) -> LeaveRequestResponse:
    return await leave_service.reject_leave_request(session, auth, request_id, payload)


@leave_requests_router.post("/{request_id}/cancel", response_model=LeaveRequestResponse)
async def cancel_leave_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveRequestResponse:
    """Withdraw a pending request."""
    return await leave_service.cancel_leave_request(session, auth, request_id)
