# ruff: noqa: TC003
"""Employee directory collaborator.

The HR Portal does not own employee records. Start dates, national IDs and
salaries come from an external directory behind the ``EmployeeService``
protocol; the in-memory implementation backs development and tests.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from hr_portal.exceptions import AppError

logger = logging.getLogger(__name__)


class EmployeeInfo(BaseModel):
    """Directory record for one employee."""

    id: uuid.UUID
    company_id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    national_id: str | None = None  # DNI, 13 digits
    position: str | None = None
    start_date: date | None = None
    monthly_salary: Decimal | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@runtime_checkable
class EmployeeService(Protocol):
    async def get_employee(self, company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Return the employee, or None if the directory does not know them."""
        ...

    async def list_employees(self, company_id: uuid.UUID) -> list[EmployeeInfo]: ...

    async def upsert_employee(self, employee: EmployeeInfo) -> EmployeeInfo: ...


class InMemoryEmployeeService:
    """Dictionary-backed directory keyed by ``(company_id, employee_id)``."""

    def __init__(self) -> None:
        self._employees: dict[tuple[uuid.UUID, uuid.UUID], EmployeeInfo] = {}

    async def get_employee(self, company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo | None:
        return self._employees.get((company_id, employee_id))

    async def list_employees(self, company_id: uuid.UUID) -> list[EmployeeInfo]:
        employees = [e for e in self._employees.values() if e.company_id == company_id]
        return sorted(employees, key=lambda e: (e.last_name, e.first_name))

    async def upsert_employee(self, employee: EmployeeInfo) -> EmployeeInfo:
        self._employees[(employee.company_id, employee.id)] = employee
        logger.info("Upserted employee %s for company %s", employee.id, employee.company_id)
        return employee

    def clear(self) -> None:
        self._employees.clear()


_employee_service: EmployeeService = InMemoryEmployeeService()


def get_employee_service() -> EmployeeService:
    return _employee_service


def set_employee_service(service: EmployeeService) -> None:
    """Swap the directory implementation (tests, production wiring)."""
    global _employee_service
    _employee_service = service


async def get_employee_or_404(company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo:
    employee = await get_employee_service().get_employee(company_id, employee_id)
    if employee is None:
        raise AppError("Employee not found", status_code=404)
    return employee
