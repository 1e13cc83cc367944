from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import sessionmaker

from payslip.db.session import get_session_factory
from payslip.domains.audit.service import AuditLogger
from payslip.models import AuditLog

router = APIRouter(prefix="/admin/audit-logs", tags=["audit"])


class AuditLogOut(BaseModel):
    id: int
    createdAt: datetime
    userId: int | None
    userType: str
    action: str
    details: str | None
    requestIp: str | None


def _sanitize(row: AuditLog) -> AuditLogOut:
    return AuditLogOut(
        id=row.id,
        createdAt=row.created_at,
        userId=row.user_id,
        userType=row.user_type,
        action=row.action,
        details=row.details,
        requestIp=row.request_ip,
    )


@router.get("", response_model=list[AuditLogOut])
def list_audit_logs(
    limit: int | None = Query(default=None, gt=0),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> list[AuditLogOut]:
    return [_sanitize(row) for row in AuditLogger(session_factory).recent(limit)]
