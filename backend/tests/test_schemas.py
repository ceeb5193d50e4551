"""Unit tests for API request schemas."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from hr_portal.models.enums import LeaveStatus, LeaveType, TerminationReason
from hr_portal.schemas.balance import VacationBalanceCalculateRequest
from hr_portal.schemas.employee import UpsertEmployeeRequest
from hr_portal.schemas.leave import SubmitLeaveRequestPayload
from hr_portal.schemas.severance import EmployeeSeveranceRequest, SeveranceCalculateRequest

# ---------------------------------------------------------------------------
# Employees
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("national_id", ["0801198501234", "0801-1985-01234"])
def test_employee_national_id_accepts_dni_formats(national_id: str) -> None:
    req = UpsertEmployeeRequest(
        first_name="Ana", last_name="López", email="ana@example.com", national_id=national_id
    )
    assert req.national_id == national_id


@pytest.mark.parametrize("national_id", ["0801", "0801-1985-0123", "ABCD198501234"])
def test_employee_national_id_rejects_malformed(national_id: str) -> None:
    with pytest.raises(ValidationError):
        UpsertEmployeeRequest(first_name="Ana", last_name="López", email="ana@example.com", national_id=national_id)


def test_employee_salary_must_be_non_negative() -> None:
    with pytest.raises(ValidationError):
        UpsertEmployeeRequest(
            first_name="Ana", last_name="López", email="ana@example.com", monthly_salary=Decimal("-1")
        )


def test_employee_optional_fields_default_to_none() -> None:
    req = UpsertEmployeeRequest(first_name="Ana", last_name="López", email="ana@example.com")
    assert req.start_date is None
    assert req.monthly_salary is None


# ---------------------------------------------------------------------------
# Leave requests
# ---------------------------------------------------------------------------


def test_leave_request_defaults_to_vacation() -> None:
    req = SubmitLeaveRequestPayload(
        employee_id=uuid.uuid4(), start_date=date(2024, 6, 3), end_date=date(2024, 6, 3)
    )
    assert req.leave_type == LeaveType.VACATION


def test_leave_request_rejects_inverted_dates() -> None:
    with pytest.raises(ValidationError, match="end_date must not be before start_date"):
        SubmitLeaveRequestPayload(
            employee_id=uuid.uuid4(), start_date=date(2024, 6, 10), end_date=date(2024, 6, 3)
        )


# ---------------------------------------------------------------------------
# Vacation balance
# ---------------------------------------------------------------------------


def test_balance_request_interval_defaults() -> None:
    req = VacationBalanceCalculateRequest.model_validate(
        {
            "start_date": "2020-03-10",
            "as_of": "2024-03-15",
            "intervals": [{"start_date": "2024-05-06", "end_date": "2024-05-10"}],
        }
    )
    interval = req.intervals[0]
    assert interval.leave_type == LeaveType.VACATION
    assert interval.status == LeaveStatus.APPROVED
    assert req.trial_period_days is None


def test_balance_request_allows_missing_start_date() -> None:
    req = VacationBalanceCalculateRequest(as_of=date(2024, 3, 15))
    assert req.start_date is None


def test_balance_request_rejects_as_of_before_start() -> None:
    with pytest.raises(ValidationError):
        VacationBalanceCalculateRequest(start_date=date(2024, 3, 15), as_of=date(2024, 3, 1))


def test_balance_request_rejects_negative_trial_period() -> None:
    with pytest.raises(ValidationError):
        VacationBalanceCalculateRequest(start_date=date(2024, 1, 1), as_of=date(2024, 3, 1), trial_period_days=-1)


# ---------------------------------------------------------------------------
# Severance
# ---------------------------------------------------------------------------


def test_severance_request_defaults() -> None:
    req = SeveranceCalculateRequest.model_validate(
        {"employee_name": "María Hernández", "national_id": "0801198501234", "base_monthly_salary": "30000"}
    )
    assert req.base_monthly_salary == Decimal("30000")
    assert req.termination_reason == TerminationReason.DISMISSAL
    assert req.reference_date is None
    assert req.cesantia_days == Decimal("0")
    assert req.vacation_intervals == []


def test_severance_request_parses_decimal_strings_exactly() -> None:
    req = SeveranceCalculateRequest.model_validate(
        {
            "employee_name": "María Hernández",
            "national_id": "0801198501234",
            "base_monthly_salary": "30000.10",
            "overtime_due": "750.50",
        }
    )
    assert req.base_monthly_salary == Decimal("30000.10")
    assert req.overtime_due == Decimal("750.50")


def test_severance_request_requires_employee_name() -> None:
    with pytest.raises(ValidationError):
        SeveranceCalculateRequest(employee_name="", national_id="0801198501234", base_monthly_salary=Decimal("1"))


def test_employee_severance_request_salary_is_optional() -> None:
    req = EmployeeSeveranceRequest()
    assert req.base_monthly_salary is None
    assert req.municipal_tax == Decimal("0")
