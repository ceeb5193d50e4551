# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Header, Path, status

from hr_portal.exceptions import AppError
from hr_portal.schemas.auth import AuthContext


async def get_auth_context(
    x_company_id: uuid.UUID = Header(),
    x_user_id: uuid.UUID = Header(),
) -> AuthContext:
    """Build the caller identity from the request headers."""
    return AuthContext(company_id=x_company_id, user_id=x_user_id)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def validate_company_scope(
    company_id: uuid.UUID = Path(),
    auth: AuthContext = Depends(get_auth_context),
) -> AuthContext:
    """Reject requests whose path company differs from ``X-Company-Id``."""
    if company_id != auth.company_id:
        raise AppError("Company ID mismatch", status_code=status.HTTP_403_FORBIDDEN)
    return auth
