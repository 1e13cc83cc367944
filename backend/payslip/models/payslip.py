from sqlalchemy import Column, ForeignKey, Integer, Numeric, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from payslip.db.session import Base
from payslip.models.mixins import TraceableMixin


class Payslip(TraceableMixin, Base):
    __tablename__ = "payslips"
    __table_args__ = (
        UniqueConstraint("employee_id", "payroll_period_id", name="uq_payslips_employee_period"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    payroll_period_id = Column(Integer, ForeignKey("payroll_periods.id"), nullable=False, index=True)

    base_salary = Column(Numeric(14, 2), nullable=False)
    working_days = Column(Integer, nullable=False)
    days_attended = Column(Integer, nullable=False)
    prorated_salary = Column(Numeric(14, 2), nullable=False)
    overtime_hours = Column(Numeric(7, 2), nullable=False)
    overtime_pay = Column(Numeric(14, 2), nullable=False)
    reimbursement = Column(Numeric(14, 2), nullable=False)
    take_home_pay = Column(Numeric(14, 2), nullable=False)
    details = Column(Text, nullable=False)

    employee = relationship("Employee")
    payroll_period = relationship("PayrollPeriod")
