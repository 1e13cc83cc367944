from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from payslip.core.exceptions import LedgerConsumptionError
from payslip.domains.payroll.calculator import PayslipResult
from payslip.models import Attendance, Employee, Overtime, PayrollPeriod, Payslip, Reimbursement


def day_window(start: date, end: date) -> Tuple[datetime, datetime]:
    """Half-open timestamp window covering the calendar dates ``[start, end]``."""
    return datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)


@dataclass
class LedgerSelection:
    overtime: List[Overtime] = field(default_factory=list)
    reimbursements: List[Reimbursement] = field(default_factory=list)

    @property
    def overtime_ids(self) -> List[int]:
        return [entry.id for entry in self.overtime]

    @property
    def reimbursement_ids(self) -> List[int]:
        return [entry.id for entry in self.reimbursements]


class PayrollRepository:
    """Store access for one unit of payroll work, bound to a single session."""

    def __init__(self, session: Session):
        self.session = session

    def get_period(self, period_id: int) -> Optional[PayrollPeriod]:
        return self.session.get(PayrollPeriod, period_id)

    def claim_period(self, period_id: int, actor_id: int | None = None) -> bool:
        """Flip ``is_run`` to true unless another run already did. Returns whether this call won."""
        result = self.session.execute(
            update(PayrollPeriod)
            .where(PayrollPeriod.id == period_id, PayrollPeriod.is_run.is_(False))
            .values(is_run=True, updated_by_id=actor_id, updated_at=datetime.now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def list_employees(self) -> List[Employee]:
        return list(self.session.scalars(select(Employee).order_by(Employee.id)))

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        return self.session.get(Employee, employee_id)

    def count_attendance(self, employee_id: int, start: date, end: date) -> int:
        window_start, window_end = day_window(start, end)
        return self.session.scalar(
            select(func.count(Attendance.id)).where(
                Attendance.employee_id == employee_id,
                Attendance.check_in >= window_start,
                Attendance.check_in < window_end,
            )
        )

    def list_unconsumed_overtime(self, employee_id: int, start: date, end: date) -> List[Overtime]:
        # keyed on the day the overtime was worked
        return list(
            self.session.scalars(
                select(Overtime)
                .where(
                    Overtime.employee_id == employee_id,
                    Overtime.date >= start,
                    Overtime.date <= end,
                    Overtime.payroll_run_id.is_(None),
                )
                .order_by(Overtime.id)
                .with_for_update()
            )
        )

    def list_unconsumed_reimbursements(self, employee_id: int, start: date, end: date) -> List[Reimbursement]:
        # keyed on when the claim was filed, not on an expense date
        window_start, window_end = day_window(start, end)
        return list(
            self.session.scalars(
                select(Reimbursement)
                .where(
                    Reimbursement.employee_id == employee_id,
                    Reimbursement.created_at >= window_start,
                    Reimbursement.created_at < window_end,
                    Reimbursement.payroll_run_id.is_(None),
                )
                .order_by(Reimbursement.id)
                .with_for_update()
            )
        )

    def select_unconsumed(self, employee_id: int, start: date, end: date) -> LedgerSelection:
        return LedgerSelection(
            overtime=self.list_unconsumed_overtime(employee_id, start, end),
            reimbursements=self.list_unconsumed_reimbursements(employee_id, start, end),
        )

    def mark_consumed(self, selection: LedgerSelection, period_id: int) -> None:
        """Stamp every selected entry with ``period_id``.

        Only rows whose ``payroll_run_id`` is still empty are updated. Any shortfall
        raises ``LedgerConsumptionError``; the caller's transaction must then be
        rolled back so neither ledger is partially marked.
        """
        self._consume(Overtime, "overtime", selection.overtime_ids, period_id)
        self._consume(Reimbursement, "reimbursement", selection.reimbursement_ids, period_id)

    def _consume(self, model, ledger: str, ids: List[int], period_id: int) -> None:
        if not ids:
            return
        try:
            result = self.session.execute(
                update(model)
                .where(model.id.in_(ids), model.payroll_run_id.is_(None))
                .values(payroll_run_id=period_id)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as exc:
            raise LedgerConsumptionError(period_id, ledger, len(ids), 0) from exc
        if result.rowcount != len(ids):
            raise LedgerConsumptionError(period_id, ledger, len(ids), result.rowcount)

    def create_payslip(self, result: PayslipResult, actor_id: int | None, origin: str | None) -> Payslip:
        payslip = Payslip(
            employee_id=result.employee_id,
            payroll_period_id=result.period_id,
            base_salary=result.base_salary,
            working_days=result.working_days,
            days_attended=result.days_attended,
            prorated_salary=result.prorated_salary,
            overtime_hours=result.overtime_hours,
            overtime_pay=result.overtime_pay,
            reimbursement=result.reimbursement,
            take_home_pay=result.take_home_pay,
            details=result.details_json(),
            created_by_id=actor_id,
            updated_by_id=actor_id,
            request_ip=origin,
        )
        self.session.add(payslip)
        self.session.flush()
        return payslip
