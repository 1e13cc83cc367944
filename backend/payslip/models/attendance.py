from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from payslip.db.session import Base
from payslip.models.mixins import TraceableMixin


class Attendance(TraceableMixin, Base):
    __tablename__ = "attendances"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    check_in = Column(DateTime, nullable=False)

    employee = relationship("Employee")
