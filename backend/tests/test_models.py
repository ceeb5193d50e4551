from __future__ import annotations

import uuid
from datetime import date

from hr_portal.models import AuditLog, CompanyHoliday, LeaveRequest, SQLModel
from hr_portal.models.enums import LeaveStatus, LeaveType

EXPECTED_TABLES = {
    "audit_log",
    "company_holiday",
    "leave_request",
}


def test_all_tables_registered() -> None:
    table_names = set(SQLModel.metadata.tables.keys())
    assert EXPECTED_TABLES.issubset(table_names)


def test_leave_request_defaults() -> None:
    request = LeaveRequest(
        company_id=uuid.uuid4(),
        employee_id=uuid.uuid4(),
        start_date=date(2024, 6, 3),
        end_date=date(2024, 6, 7),
        requested_days=5,
        working_days=5,
    )
    assert request.id is not None
    assert request.status == LeaveStatus.PENDING
    assert request.leave_type == LeaveType.VACATION
    assert request.reviewed_by is None
    assert request.review_comments is None


def test_leave_request_has_date_check_constraint() -> None:
    table = SQLModel.metadata.tables["leave_request"]
    names = {c.name for c in table.constraints}
    assert "ck_leave_request_dates" in names


def test_company_holiday_instantiation() -> None:
    holiday = CompanyHoliday(
        company_id=uuid.uuid4(),
        date=date(2025, 6, 11),
        name="Aniversario de la empresa",
    )
    assert holiday.name == "Aniversario de la empresa"


def test_audit_log_instantiation() -> None:
    log = AuditLog(
        company_id=uuid.uuid4(),
        actor_id=uuid.uuid4(),
        entity_type="LEAVE_REQUEST",
        entity_id=uuid.uuid4(),
        action="SUBMIT",
    )
    assert log.before_json is None
    assert log.after_json is None
