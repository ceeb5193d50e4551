"""Integration tests for the leave request workflow."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from hr_portal.models.audit import AuditLog
from hr_portal.services.employee import EmployeeInfo, InMemoryEmployeeService

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

COMPANY_ID = uuid.uuid4()
USER_ID = uuid.uuid4()
HEADERS = {"X-Company-Id": str(COMPANY_ID), "X-User-Id": str(USER_ID)}
BASE_URL = f"/companies/{COMPANY_ID}/leave-requests"


async def _add_employee(
    directory: InMemoryEmployeeService,
    start_date: date | None = date(2020, 3, 10),
) -> uuid.UUID:
    employee_id = uuid.uuid4()
    await directory.upsert_employee(
        EmployeeInfo(
            id=employee_id,
            company_id=COMPANY_ID,
            first_name="María",
            last_name="Hernández",
            email="maria@example.com",
            national_id="0801198501234",
            start_date=start_date,
            monthly_salary=Decimal("30000"),
        )
    )
    return employee_id


def _payload(employee_id: uuid.UUID, start: str, end: str, leave_type: str = "VACATION") -> dict:
    return {"employee_id": str(employee_id), "leave_type": leave_type, "start_date": start, "end_date": end}


# ---------------------------------------------------------------------------
# Submit
# ---------------------------------------------------------------------------


async def test_submit_vacation_request(async_client: AsyncClient, employee_directory: InMemoryEmployeeService) -> None:
    employee_id = await _add_employee(employee_directory)
    resp = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-09"), headers=HEADERS
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "PENDING"
    assert data["leave_type"] == "VACATION"
    assert data["requested_days"] == 7
    assert data["working_days"] == 5
    assert data["submitted_by"] == str(USER_ID)
    assert data["reviewed_by"] is None


async def test_submit_sick_leave_during_trial_is_allowed(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory, start_date=date(2024, 5, 1))
    resp = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-03", "SICK"), headers=HEADERS
    )
    assert resp.status_code == 201


async def test_submit_vacation_during_trial_is_rejected(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory, start_date=date(2024, 5, 1))
    resp = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-04"), headers=HEADERS
    )
    assert resp.status_code == 400
    assert "trial period" in resp.json()["detail"]


async def test_submit_vacation_beyond_available_is_rejected(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory)
    resp = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-30"), headers=HEADERS
    )
    assert resp.status_code == 400
    assert "Insufficient vacation balance" in resp.json()["detail"]


async def test_submit_vacation_without_start_date_is_calculation_error(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory, start_date=None)
    resp = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-04"), headers=HEADERS
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "MissingStartDate"


async def test_submit_weekend_only_is_rejected(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory)
    resp = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-08", "2024-06-09"), headers=HEADERS
    )
    assert resp.status_code == 400


async def test_submit_end_before_start_is_validation_error(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory)
    resp = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-09", "2024-06-03"), headers=HEADERS
    )
    assert resp.status_code == 422


async def test_submit_for_unknown_employee_returns_404(async_client: AsyncClient) -> None:
    resp = await async_client.post(BASE_URL, json=_payload(uuid.uuid4(), "2024-06-03", "2024-06-04"), headers=HEADERS)
    assert resp.status_code == 404


async def test_overlapping_request_returns_409(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory)
    first = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07"), headers=HEADERS
    )
    assert first.status_code == 201

    resp = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-07", "2024-06-11", "PERSONAL"), headers=HEADERS
    )
    assert resp.status_code == 409


async def test_rejected_request_does_not_block_new_one(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory)
    first = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07"), headers=HEADERS
    )
    await async_client.post(f"{BASE_URL}/{first.json()['id']}/reject", headers=HEADERS)

    resp = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07"), headers=HEADERS
    )
    assert resp.status_code == 201


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------


async def test_approve_request(async_client: AsyncClient, employee_directory: InMemoryEmployeeService) -> None:
    employee_id = await _add_employee(employee_directory)
    created = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07"), headers=HEADERS
    )
    request_id = created.json()["id"]

    resp = await async_client.post(
        f"{BASE_URL}/{request_id}/approve", json={"comments": "Disfrute"}, headers=HEADERS
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "APPROVED"
    assert data["reviewed_by"] == str(USER_ID)
    assert data["reviewed_at"] is not None
    assert data["review_comments"] == "Disfrute"


async def test_approved_vacation_reduces_balance(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory)
    created = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07"), headers=HEADERS
    )
    await async_client.post(f"{BASE_URL}/{created.json()['id']}/approve", headers=HEADERS)

    resp = await async_client.get(
        f"/companies/{COMPANY_ID}/employees/{employee_id}/vacation-balance",
        params={"as_of": "2024-08-01"},
        headers=HEADERS,
    )
    assert resp.status_code == 200
    assert resp.json()["taken"] == 5
    assert resp.json()["available"] == 15


async def test_approve_rechecks_balance(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory)
    first = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-14"), headers=HEADERS
    )
    second = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-07-01", "2024-07-12"), headers=HEADERS
    )
    assert first.status_code == 201
    assert second.status_code == 201

    resp = await async_client.post(f"{BASE_URL}/{first.json()['id']}/approve", headers=HEADERS)
    assert resp.status_code == 200

    resp = await async_client.post(f"{BASE_URL}/{second.json()['id']}/approve", headers=HEADERS)
    assert resp.status_code == 400


async def test_reject_request(async_client: AsyncClient, employee_directory: InMemoryEmployeeService) -> None:
    employee_id = await _add_employee(employee_directory)
    created = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07", "PERSONAL"), headers=HEADERS
    )
    resp = await async_client.post(
        f"{BASE_URL}/{created.json()['id']}/reject", json={"comments": "Cierre de mes"}, headers=HEADERS
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "REJECTED"
    assert resp.json()["review_comments"] == "Cierre de mes"


async def test_cancel_request(async_client: AsyncClient, employee_directory: InMemoryEmployeeService) -> None:
    employee_id = await _add_employee(employee_directory)
    created = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07"), headers=HEADERS
    )
    resp = await async_client.post(f"{BASE_URL}/{created.json()['id']}/cancel", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json()["status"] == "CANCELLED"


async def test_only_pending_requests_can_be_reviewed(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory)
    created = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07"), headers=HEADERS
    )
    request_id = created.json()["id"]
    await async_client.post(f"{BASE_URL}/{request_id}/approve", headers=HEADERS)

    for action in ("approve", "reject", "cancel"):
        resp = await async_client.post(f"{BASE_URL}/{request_id}/{action}", headers=HEADERS)
        assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


async def test_get_request(async_client: AsyncClient, employee_directory: InMemoryEmployeeService) -> None:
    employee_id = await _add_employee(employee_directory)
    created = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07"), headers=HEADERS
    )
    resp = await async_client.get(f"{BASE_URL}/{created.json()['id']}", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json()["id"] == created.json()["id"]


async def test_get_unknown_request_returns_404(async_client: AsyncClient) -> None:
    resp = await async_client.get(f"{BASE_URL}/{uuid.uuid4()}", headers=HEADERS)
    assert resp.status_code == 404


async def test_list_requests_with_filters(
    async_client: AsyncClient, employee_directory: InMemoryEmployeeService
) -> None:
    employee_id = await _add_employee(employee_directory)
    other_id = await _add_employee(employee_directory)
    vacation = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07"), headers=HEADERS
    )
    await async_client.post(BASE_URL, json=_payload(employee_id, "2024-07-01", "2024-07-01", "SICK"), headers=HEADERS)
    await async_client.post(BASE_URL, json=_payload(other_id, "2024-06-03", "2024-06-04"), headers=HEADERS)
    await async_client.post(f"{BASE_URL}/{vacation.json()['id']}/approve", headers=HEADERS)

    resp = await async_client.get(BASE_URL, params={"employee_id": str(employee_id)}, headers=HEADERS)
    assert resp.json()["total"] == 2

    resp = await async_client.get(
        BASE_URL, params={"employee_id": str(employee_id), "status": "APPROVED"}, headers=HEADERS
    )
    assert [r["id"] for r in resp.json()["items"]] == [vacation.json()["id"]]

    resp = await async_client.get(BASE_URL, params={"leave_type": "SICK", "employee_id": str(employee_id)}, headers=HEADERS)
    assert resp.json()["total"] == 1


async def test_list_rejects_unknown_status(async_client: AsyncClient) -> None:
    resp = await async_client.get(BASE_URL, params={"status": "DRAFT"}, headers=HEADERS)
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------


async def test_submit_and_approve_write_audit(
    async_client: AsyncClient,
    db_session: AsyncSession,
    employee_directory: InMemoryEmployeeService,
) -> None:
    employee_id = await _add_employee(employee_directory)
    created = await async_client.post(
        BASE_URL, json=_payload(employee_id, "2024-06-03", "2024-06-07"), headers=HEADERS
    )
    request_id = uuid.UUID(created.json()["id"])
    await async_client.post(f"{BASE_URL}/{request_id}/approve", headers=HEADERS)

    result = await db_session.execute(
        select(AuditLog).where(col(AuditLog.entity_id) == request_id).order_by(col(AuditLog.created_at))
    )
    entries = list(result.scalars().all())
    assert [e.action for e in entries] == ["SUBMIT", "APPROVE"]
    assert entries[1].before_json is not None
    assert entries[1].before_json["status"] == "PENDING"
    assert entries[1].after_json is not None
    assert entries[1].after_json["status"] == "APPROVED"
