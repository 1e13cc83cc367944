from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable

CENT = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # floats go through str so 0.1 stays 0.1
    return Decimal(str(value))


@dataclass(frozen=True)
class PayslipResult:
    employee_id: int
    period_id: int
    base_salary: Decimal
    working_days: int
    days_attended: int
    daily_rate: Decimal
    prorated_salary: Decimal
    overtime_hours: Decimal
    hourly_rate: Decimal
    overtime_pay: Decimal
    reimbursement: Decimal
    take_home_pay: Decimal

    def breakdown(self) -> Dict[str, Dict[str, float | int]]:
        return {
            "attendance": {
                "daysAttended": self.days_attended,
                "totalWorkingDays": self.working_days,
            },
            "salary": {
                "base": float(to_money(self.base_salary)),
                "prorated": float(self.prorated_salary),
            },
            "overtime": {
                "hours": float(to_money(self.overtime_hours)),
                "pay": float(self.overtime_pay),
            },
            "reimbursements": {"total": float(self.reimbursement)},
        }

    def details_json(self) -> str:
        return json.dumps(self.breakdown(), separators=(",", ":"))


class EarningsCalculator:
    """Turns attendance and ledger inputs into the money fields of one payslip.

    Each of the three components (prorated salary, overtime pay,
    reimbursements) is rounded to cents on its own; take-home pay is their
    exact sum so the stored figures always add up.
    """

    def __init__(self, hours_per_day: int = 8, overtime_multiplier: Decimal | int = 2):
        self.hours_per_day = hours_per_day
        self.overtime_multiplier = _decimal(overtime_multiplier)

    def calculate(
        self,
        *,
        employee_id: int,
        period_id: int,
        base_salary,
        working_days: int,
        days_attended: int,
        overtime_entries: Iterable = (),
        reimbursements: Iterable = (),
    ) -> PayslipResult:
        salary = _decimal(base_salary)
        daily_rate = salary / working_days
        prorated_salary = to_money(daily_rate * days_attended)

        overtime_hours = sum((_decimal(entry.hours) for entry in overtime_entries), Decimal("0"))
        hourly_rate = daily_rate / self.hours_per_day
        overtime_pay = to_money(overtime_hours * hourly_rate * self.overtime_multiplier)

        reimbursement = to_money(sum((_decimal(entry.amount) for entry in reimbursements), Decimal("0")))

        return PayslipResult(
            employee_id=employee_id,
            period_id=period_id,
            base_salary=salary,
            working_days=working_days,
            days_attended=days_attended,
            daily_rate=daily_rate,
            prorated_salary=prorated_salary,
            overtime_hours=overtime_hours,
            hourly_rate=hourly_rate,
            overtime_pay=overtime_pay,
            reimbursement=reimbursement,
            take_home_pay=prorated_salary + overtime_pay + reimbursement,
        )
