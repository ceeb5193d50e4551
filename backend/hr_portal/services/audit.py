from __future__ import annotations

import enum
import logging
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from hr_portal.models.audit import AuditLog

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlmodel import SQLModel

    from hr_portal.models.enums import AuditAction, AuditEntityType

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, enum.Enum):
        return value.value
    return value


def model_to_audit_dict(model: SQLModel) -> dict[str, Any]:
    """Dump a table row into a JSON-serializable dict."""
    return {key: _json_safe(value) for key, value in model.model_dump().items()}


async def write_audit_log(
    session: AsyncSession,
    *,
    company_id: uuid.UUID,
    actor_id: uuid.UUID,
    entity_type: AuditEntityType,
    entity_id: uuid.UUID,
    action: AuditAction,
    before_json: dict[str, Any] | None = None,
    after_json: dict[str, Any] | None = None,
) -> AuditLog:
    """Add an audit entry to the caller's transaction; the caller commits."""
    entry = AuditLog(
        company_id=company_id,
        actor_id=actor_id,
        entity_type=entity_type.value,
        entity_id=entity_id,
        action=action.value,
        before_json=before_json,
        after_json=after_json,
    )
    session.add(entry)
    logger.debug("Audit %s %s %s", action.value, entity_type.value, entity_id)
    return entry
