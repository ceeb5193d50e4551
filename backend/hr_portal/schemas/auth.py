# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel


class AuthContext(BaseModel):
    """Caller identity taken from the ``X-Company-Id`` / ``X-User-Id`` headers."""

    company_id: uuid.UUID
    user_id: uuid.UUID
