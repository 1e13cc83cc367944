from .attendance import Attendance
from .audit_log import AuditLog
from .employee import Admin, Employee
from .ledger import Overtime, Reimbursement
from .payroll_period import PayrollPeriod
from .payslip import Payslip

__all__ = [
    "Admin",
    "Employee",
    "Attendance",
    "Overtime",
    "Reimbursement",
    "PayrollPeriod",
    "Payslip",
    "AuditLog",
]
