from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from payslip.db.session import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    user_id = Column(Integer, nullable=True, index=True)
    user_type = Column(String(20), nullable=False)  # admin|employee
    action = Column(String(50), nullable=False)  # RAN_PAYROLL, CREATED_PERIOD, ...
    details = Column(Text, nullable=True)
    request_ip = Column(String(64), nullable=True)
