from sqlalchemy import Column, Integer, Numeric, String

from payslip.db.session import Base
from payslip.models.mixins import TraceableMixin


class Employee(TraceableMixin, Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)

    # monthly base salary; proration happens per period
    salary = Column(Numeric(14, 2), nullable=False)


class Admin(TraceableMixin, Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)
