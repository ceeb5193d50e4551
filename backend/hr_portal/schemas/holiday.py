# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, Field


class CreateHolidayRequest(BaseModel):
    date: date
    name: str = Field(min_length=1, max_length=255)


class HolidayResponse(BaseModel):
    id: uuid.UUID
    company_id: uuid.UUID
    date: date
    name: str


class HolidayListResponse(BaseModel):
    items: list[HolidayResponse]
    total: int


class StatutoryHolidayResponse(BaseModel):
    """A national holiday from the statutory calendar."""

    date: date
    name: str
    weekday: str


class StatutoryHolidayListResponse(BaseModel):
    year: int
    items: list[StatutoryHolidayResponse]
    total: int
