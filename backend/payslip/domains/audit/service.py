from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from payslip.core.logging import get_logger
from payslip.db.session import session_scope
from payslip.models.audit_log import AuditLog

logger = get_logger(__name__)

RAN_PAYROLL = "RAN_PAYROLL"
CREATED_PERIOD = "CREATED_PERIOD"


class AuditLogger:
    """Append-only audit trail. Writes never fail the action being audited."""

    def __init__(self, session_factory: sessionmaker | None = None):
        self.session_factory = session_factory

    def record(
        self,
        actor_id: int | None,
        actor_type: str,
        action: str,
        detail: str,
        origin: str | None = None,
    ) -> None:
        try:
            with session_scope(self.session_factory) as session:
                session.add(
                    AuditLog(
                        user_id=actor_id,
                        user_type=actor_type,
                        action=action,
                        details=detail,
                        request_ip=origin,
                    )
                )
        except SQLAlchemyError:
            logger.exception("audit_record_failed", action=action, actor_id=actor_id)
            return
        logger.info("audit_recorded", action=action, actor_id=actor_id, actor_type=actor_type)

    def recent(self, limit: int | None = None) -> List[AuditLog]:
        with session_scope(self.session_factory) as session:
            query = select(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            if limit:
                query = query.limit(limit)
            rows = list(session.scalars(query))
            session.expunge_all()
        return rows
