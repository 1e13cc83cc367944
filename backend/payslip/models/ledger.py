from sqlalchemy import Boolean, CheckConstraint, Column, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from payslip.db.session import Base
from payslip.models.mixins import TraceableMixin


class Overtime(TraceableMixin, Base):
    __tablename__ = "overtimes"
    __table_args__ = (CheckConstraint("hours > 0", name="ck_overtimes_hours_positive"),)

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    hours = Column(Numeric(5, 2), nullable=False)
    is_approved = Column(Boolean, nullable=False, default=True)

    # set once by the payroll run that paid this entry out, never cleared
    payroll_run_id = Column(Integer, ForeignKey("payroll_periods.id"), nullable=True, index=True)

    employee = relationship("Employee")


class Reimbursement(TraceableMixin, Base):
    __tablename__ = "reimbursements"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_reimbursements_amount_positive"),)

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    is_approved = Column(Boolean, nullable=False, default=True)
    payroll_run_id = Column(Integer, ForeignKey("payroll_periods.id"), nullable=True, index=True)

    employee = relationship("Employee")
