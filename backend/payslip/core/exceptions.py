"""
Typed errors raised by the payroll engine.

Every error carries a machine-readable ``code`` class attribute so log
events and API responses can identify the failure without parsing messages.

    PayslipError
    +-- PeriodNotFoundError         run aborts, nothing mutated
    +-- PeriodAlreadyRunError       run aborts, nothing mutated
    +-- PayslipCalculationError     one employee skipped
    +-- LedgerConsumptionError      one employee skipped, entries stay unconsumed
"""


class PayslipError(Exception):
    """Base exception for payroll engine errors."""

    code: str = "PAYSLIP_ERROR"


class PeriodNotFoundError(PayslipError):
    code: str = "PERIOD_NOT_FOUND"

    def __init__(self, period_id: int):
        self.period_id = period_id
        super().__init__(f"Payroll period {period_id} not found")


class PeriodAlreadyRunError(PayslipError):
    code: str = "PERIOD_ALREADY_RUN"

    def __init__(self, period_id: int):
        self.period_id = period_id
        super().__init__(f"Payroll for period {period_id} has already been run")


class PayslipCalculationError(PayslipError):
    """Sourcing or combining one employee's payroll data failed."""

    code: str = "PAYSLIP_CALCULATION_FAILED"

    def __init__(self, employee_id: int, reason: str):
        self.employee_id = employee_id
        self.reason = reason
        super().__init__(f"Cannot calculate payslip for employee {employee_id}: {reason}")


class LedgerConsumptionError(PayslipError):
    """Marking overtime/reimbursement entries as consumed did not fully apply."""

    code: str = "LEDGER_CONSUMPTION_FAILED"

    def __init__(self, period_id: int, ledger: str, expected: int, marked: int):
        self.period_id = period_id
        self.ledger = ledger
        self.expected = expected
        self.marked = marked
        super().__init__(
            f"Consumed {marked} of {expected} {ledger} entries for period {period_id}"
        )
