# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from hr_portal.exceptions import AppError, CalculationError
from hr_portal.models.enums import AuditAction, AuditEntityType, LeaveStatus, LeaveType
from hr_portal.models.leave_request import LeaveRequest
from hr_portal.schemas.leave import LeaveRequestListResponse, LeaveRequestResponse
from hr_portal.services.audit import model_to_audit_dict, write_audit_log
from hr_portal.services.balance import vacation_balance_for
from hr_portal.services.duration import calculate_requested_days
from hr_portal.services.employee import get_employee_or_404

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_portal.schemas.auth import AuthContext
    from hr_portal.schemas.leave import ReviewPayload, SubmitLeaveRequestPayload

logger = logging.getLogger(__name__)

_ACTIVE_STATUSES = (LeaveStatus.PENDING.value, LeaveStatus.APPROVED.value)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_leave_response(request: LeaveRequest) -> LeaveRequestResponse:
    return LeaveRequestResponse(
        id=request.id,
        company_id=request.company_id,
        employee_id=request.employee_id,
        leave_type=LeaveType(request.leave_type),
        start_date=request.start_date,
        end_date=request.end_date,
        requested_days=request.requested_days,
        working_days=request.working_days,
        reason=request.reason,
        status=LeaveStatus(request.status),
        submitted_by=request.submitted_by,
        reviewed_by=request.reviewed_by,
        reviewed_at=request.reviewed_at,
        review_comments=request.review_comments,
        created_at=request.created_at,
    )


async def _get_leave_request_or_404(
    session: AsyncSession,
    company_id: uuid.UUID,
    request_id: uuid.UUID,
) -> LeaveRequest:
    result = await session.execute(
        select(LeaveRequest).where(
            col(LeaveRequest.id) == request_id,
            col(LeaveRequest.company_id) == company_id,
        )
    )
    request = result.scalar_one_or_none()
    if request is None:
        raise AppError("Leave request not found", status_code=404)
    return request


async def _check_overlap(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    start_date: date,
    end_date: date,
) -> None:
    """Raise 409 if a pending or approved request shares any day with the range."""
    result = await session.execute(
        select(LeaveRequest.id)
        .where(
            col(LeaveRequest.company_id) == company_id,
            col(LeaveRequest.employee_id) == employee_id,
            col(LeaveRequest.status).in_(_ACTIVE_STATUSES),
            col(LeaveRequest.start_date) <= end_date,
            col(LeaveRequest.end_date) >= start_date,
        )
        .limit(1)
    )
    if result.scalar_one_or_none() is not None:
        raise AppError("Leave request overlaps an existing pending or approved request", status_code=409)


async def _check_vacation_available(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    start_date: date,
    requested_days: int,
) -> None:
    """Enforce trial period and available balance for a vacation request.

    The balance is evaluated in the anniversary year in which the leave starts.
    """
    employee = await get_employee_or_404(company_id, employee_id)
    balance = await vacation_balance_for(session, company_id, employee_id, employee.start_date, start_date)

    if balance.error is not None:
        raise CalculationError(balance.error, "Employee start date is required to request vacation")
    if balance.is_in_trial_period:
        raise AppError(
            f"Employee is in the trial period; eligible in {balance.days_until_eligible} days",
            status_code=400,
        )
    if requested_days > balance.available:
        raise AppError(
            f"Insufficient vacation balance: requested {requested_days}, available {balance.available}",
            status_code=400,
        )


async def _review(
    session: AsyncSession,
    auth: AuthContext,
    request: LeaveRequest,
    new_status: LeaveStatus,
    action: AuditAction,
    comments: str | None = None,
) -> LeaveRequestResponse:
    """Move a pending request to ``new_status`` and audit the change."""
    before = model_to_audit_dict(request)

    request.status = new_status.value
    request.reviewed_by = auth.user_id
    request.reviewed_at = datetime.now(UTC)
    request.review_comments = comments

    await session.flush()

    await write_audit_log(
        session,
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_REQUEST,
        entity_id=request.id,
        action=action,
        before_json=before,
        after_json=model_to_audit_dict(request),
    )

    await session.commit()
    await session.refresh(request)
    logger.info("Leave request %s %s by %s", request.id, new_status.value, auth.user_id)
    return _build_leave_response(request)


def _require_pending(request: LeaveRequest, verb: str) -> None:
    if request.status != LeaveStatus.PENDING.value:
        raise AppError(f"Only pending requests can be {verb}", status_code=400)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def submit_leave_request(
    session: AsyncSession,
    auth: AuthContext,
    payload: SubmitLeaveRequestPayload,
) -> LeaveRequestResponse:
    """Submit a leave request in ``PENDING`` state.

    Flow:
    1. Count calendar and working days (weekends and holidays excluded)
    2. Reject overlaps with pending/approved requests
    3. For vacation: reject during the trial period or beyond the available balance
    4. Create the request, audit, commit
    """
    await get_employee_or_404(auth.company_id, payload.employee_id)

    requested_days, working_days = await calculate_requested_days(
        session, auth.company_id, payload.start_date, payload.end_date
    )
    if working_days <= 0:
        raise AppError("Request covers no working days after excluding weekends and holidays", status_code=400)

    await _check_overlap(session, auth.company_id, payload.employee_id, payload.start_date, payload.end_date)

    if payload.leave_type == LeaveType.VACATION:
        await _check_vacation_available(
            session, auth.company_id, payload.employee_id, payload.start_date, requested_days
        )

    leave_request = LeaveRequest(
        company_id=auth.company_id,
        employee_id=payload.employee_id,
        leave_type=payload.leave_type.value,
        start_date=payload.start_date,
        end_date=payload.end_date,
        requested_days=requested_days,
        working_days=working_days,
        reason=payload.reason,
        status=LeaveStatus.PENDING.value,
        submitted_by=auth.user_id,
    )
    session.add(leave_request)
    await session.flush()

    await write_audit_log(
        session,
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_REQUEST,
        entity_id=leave_request.id,
        action=AuditAction.SUBMIT,
        after_json=model_to_audit_dict(leave_request),
    )

    await session.commit()
    await session.refresh(leave_request)
    logger.info(
        "Submitted %s request %s for employee %s (%d days)",
        payload.leave_type.value,
        leave_request.id,
        payload.employee_id,
        requested_days,
    )
    return _build_leave_response(leave_request)


async def approve_leave_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    payload: ReviewPayload | None = None,
) -> LeaveRequestResponse:
    """Approve a pending request.

    Vacation requests are re-checked against the balance, since other
    requests may have been approved since submission.
    """
    leave_request = await _get_leave_request_or_404(session, auth.company_id, request_id)
    _require_pending(leave_request, "approved")

    if leave_request.leave_type == LeaveType.VACATION.value:
        await _check_vacation_available(
            session,
            auth.company_id,
            leave_request.employee_id,
            leave_request.start_date,
            leave_request.requested_days,
        )

    return await _review(
        session,
        auth,
        leave_request,
        LeaveStatus.APPROVED,
        AuditAction.APPROVE,
        payload.comments if payload else None,
    )


async def reject_leave_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    payload: ReviewPayload | None = None,
) -> LeaveRequestResponse:
    leave_request = await _get_leave_request_or_404(session, auth.company_id, request_id)
    _require_pending(leave_request, "rejected")
    return await _review(
        session,
        auth,
        leave_request,
        LeaveStatus.REJECTED,
        AuditAction.REJECT,
        payload.comments if payload else None,
    )


async def cancel_leave_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
) -> LeaveRequestResponse:
    leave_request = await _get_leave_request_or_404(session, auth.company_id, request_id)
    _require_pending(leave_request, "cancelled")
    return await _review(session, auth, leave_request, LeaveStatus.CANCELLED, AuditAction.CANCEL)


async def get_leave_request(
    session: AsyncSession,
    company_id: uuid.UUID,
    request_id: uuid.UUID,
) -> LeaveRequestResponse:
    leave_request = await _get_leave_request_or_404(session, company_id, request_id)
    return _build_leave_response(leave_request)


async def list_leave_requests(
    session: AsyncSession,
    company_id: uuid.UUID,
    status_filter: LeaveStatus | None = None,
    leave_type: LeaveType | None = None,
    employee_id: uuid.UUID | None = None,
    offset: int = 0,
    limit: int = 50,
) -> LeaveRequestListResponse:
    """List leave requests, newest first."""
    filters = [col(LeaveRequest.company_id) == company_id]

    if status_filter is not None:
        filters.append(col(LeaveRequest.status) == status_filter.value)
    if leave_type is not None:
        filters.append(col(LeaveRequest.leave_type) == leave_type.value)
    if employee_id is not None:
        filters.append(col(LeaveRequest.employee_id) == employee_id)

    count_result = await session.execute(select(func.count()).select_from(LeaveRequest).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(LeaveRequest)
        .where(*filters)
        .order_by(col(LeaveRequest.created_at).desc())
        .offset(offset)
        .limit(limit)
    )

    return LeaveRequestListResponse(
        items=[_build_leave_response(r) for r in result.scalars().all()],
        total=total,
    )
