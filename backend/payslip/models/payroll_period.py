from sqlalchemy import Boolean, Column, Date, Integer

from payslip.db.session import Base
from payslip.models.mixins import TraceableMixin


class PayrollPeriod(TraceableMixin, Base):
    __tablename__ = "payroll_periods"

    id = Column(Integer, primary_key=True, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_run = Column(Boolean, nullable=False, default=False)
