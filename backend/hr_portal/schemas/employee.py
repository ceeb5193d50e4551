# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

# Honduran DNI: 13 digits, optionally written as 0801-1990-12345.
NATIONAL_ID_PATTERN = r"^\d{4}-?\d{4}-?\d{5}$"


class UpsertEmployeeRequest(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=1, max_length=255)
    national_id: str | None = Field(default=None, pattern=NATIONAL_ID_PATTERN)
    position: str | None = Field(default=None, max_length=255)
    start_date: date | None = None
    monthly_salary: Decimal | None = Field(default=None, ge=0, decimal_places=2)


class EmployeeResponse(BaseModel):
    id: uuid.UUID
    company_id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    national_id: str | None
    position: str | None
    start_date: date | None
    monthly_salary: Decimal | None


class EmployeeListResponse(BaseModel):
    items: list[EmployeeResponse]
    total: int
