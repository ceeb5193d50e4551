# ruff: noqa: TC003
from __future__ import annotations

import datetime
import uuid

import sqlalchemy as sa
from sqlmodel import Field

from hr_portal.models.base import TimestampMixin, UUIDBase


class CompanyHoliday(UUIDBase, TimestampMixin, table=True):
    """A non-working day declared by the company on top of the statutory calendar."""

    __tablename__ = "company_holiday"
    __table_args__ = (sa.UniqueConstraint("company_id", "date", name="uq_company_holiday_date"),)

    company_id: uuid.UUID = Field(index=True)
    date: datetime.date = Field(index=True)
    name: str = Field(max_length=255)
