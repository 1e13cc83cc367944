from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, List

from sqlalchemy.orm import Session, sessionmaker

from payslip.core.config import settings
from payslip.core.exceptions import (
    LedgerConsumptionError,
    PayslipCalculationError,
    PeriodAlreadyRunError,
    PeriodNotFoundError,
)
from payslip.core.logging import get_logger
from payslip.core.monitoring import report_exception
from payslip.core.observability import get_meter, get_tracer
from payslip.db.session import SessionLocal, session_scope
from payslip.domains.audit.service import RAN_PAYROLL, AuditLogger
from payslip.domains.payroll.calculator import EarningsCalculator
from payslip.domains.payroll.repository import PayrollRepository
from payslip.domains.payroll.working_days import count_working_days

logger = get_logger(__name__)


class RunOutcome(str, Enum):
    ABORTED_NOT_FOUND = "aborted-not-found"
    ABORTED_ALREADY_RUN = "aborted-already-run"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PayrollRunRequest:
    period_id: int
    actor_id: int
    origin: str | None = None


@dataclass(frozen=True)
class PeriodWindow:
    period_id: int
    start: date
    end: date
    working_days: int


@dataclass
class PayrollRunReport:
    period_id: int
    outcome: RunOutcome
    payslip_ids: List[int] = field(default_factory=list)
    skipped_employee_ids: List[int] = field(default_factory=list)


class PayrollRunOrchestrator:
    """Runs payroll for one period over every employee, at most once per period.

    The period is claimed (``is_run`` set) in its own transaction before any
    employee is processed. Each employee is then handled in a separate unit of
    work: ledger selection, calculation, consumption and the payslip insert
    commit or roll back together. A failing employee is logged and skipped.
    """

    def __init__(
        self,
        session_factory: sessionmaker | None = None,
        calculator: EarningsCalculator | None = None,
        audit: AuditLogger | None = None,
        repository_factory: Callable[[Session], PayrollRepository] = PayrollRepository,
    ):
        self.session_factory = session_factory or SessionLocal
        self.calculator = calculator or EarningsCalculator(
            hours_per_day=settings.hours_per_day,
            overtime_multiplier=settings.overtime_multiplier,
        )
        self.audit = audit or AuditLogger(self.session_factory)
        self.repository_factory = repository_factory
        self.tracer = get_tracer()
        self.payslip_counter = get_meter().create_counter(
            "payslips_generated", unit="1", description="Payslips persisted by payroll runs"
        )

    def run(self, request: PayrollRunRequest) -> PayrollRunReport:
        log = logger.bind(period_id=request.period_id, actor_id=request.actor_id)
        log.info("payroll_run_started")

        with self.tracer.start_as_current_span("payroll_run") as span:
            span.set_attribute("payroll.period_id", request.period_id)
            try:
                window, employee_ids = self._claim(request)
            except PeriodNotFoundError as exc:
                log.warning("payroll_run_aborted", reason=exc.code)
                return PayrollRunReport(request.period_id, RunOutcome.ABORTED_NOT_FOUND)
            except PeriodAlreadyRunError as exc:
                log.warning("payroll_run_aborted", reason=exc.code)
                return PayrollRunReport(request.period_id, RunOutcome.ABORTED_ALREADY_RUN)

            report = PayrollRunReport(request.period_id, RunOutcome.COMPLETED)
            for employee_id in employee_ids:
                try:
                    payslip_id = self._process_employee(employee_id, window, request)
                except (LedgerConsumptionError, PayslipCalculationError) as exc:
                    log.warning("payslip_skipped", employee_id=employee_id, reason=exc.code, error=str(exc))
                    report_exception(exc, employee_id=employee_id, period_id=request.period_id)
                    report.skipped_employee_ids.append(employee_id)
                    continue
                except Exception as exc:
                    log.exception("payslip_calculation_failed", employee_id=employee_id)
                    report_exception(exc, employee_id=employee_id, period_id=request.period_id)
                    report.skipped_employee_ids.append(employee_id)
                    continue
                report.payslip_ids.append(payslip_id)
                self.payslip_counter.add(1, {"period_id": request.period_id})
                log.debug("payslip_generated", employee_id=employee_id, payslip_id=payslip_id)

            span.set_attribute("payroll.generated", len(report.payslip_ids))
            span.set_attribute("payroll.skipped", len(report.skipped_employee_ids))

        log.info(
            "payroll_run_finished",
            generated=len(report.payslip_ids),
            skipped=len(report.skipped_employee_ids),
        )
        self.audit.record(
            request.actor_id,
            "admin",
            RAN_PAYROLL,
            f"Ran payroll for period ID {request.period_id}: "
            f"{len(report.payslip_ids)} payslips generated, {len(report.skipped_employee_ids)} employees skipped.",
            request.origin,
        )
        return report

    def _claim(self, request: PayrollRunRequest) -> tuple[PeriodWindow, List[int]]:
        with session_scope(self.session_factory) as session:
            repo = self.repository_factory(session)
            period = repo.get_period(request.period_id)
            if period is None:
                raise PeriodNotFoundError(request.period_id)
            if period.is_run or not repo.claim_period(period.id, request.actor_id):
                raise PeriodAlreadyRunError(request.period_id)
            window = PeriodWindow(
                period_id=period.id,
                start=period.start_date,
                end=period.end_date,
                working_days=count_working_days(period.start_date, period.end_date),
            )
            employee_ids = [employee.id for employee in repo.list_employees()]
        return window, employee_ids

    def _process_employee(self, employee_id: int, window: PeriodWindow, request: PayrollRunRequest) -> int:
        with session_scope(self.session_factory) as session:
            repo = self.repository_factory(session)
            employee = repo.get_employee(employee_id)
            if employee is None:
                raise PayslipCalculationError(employee_id, "employee no longer exists")

            days_attended = repo.count_attendance(employee.id, window.start, window.end)
            selection = repo.select_unconsumed(employee.id, window.start, window.end)
            result = self.calculator.calculate(
                employee_id=employee.id,
                period_id=window.period_id,
                base_salary=employee.salary,
                working_days=window.working_days,
                days_attended=days_attended,
                overtime_entries=selection.overtime,
                reimbursements=selection.reimbursements,
            )
            repo.mark_consumed(selection, window.period_id)
            payslip = repo.create_payslip(result, request.actor_id, request.origin)
            return payslip.id


def run_payroll(
    period_id: int,
    actor_id: int,
    origin: str | None = None,
    session_factory: sessionmaker | None = None,
) -> None:
    """Fire-and-forget entry point. Outcomes are reported through logs and the audit trail."""
    request = PayrollRunRequest(period_id=period_id, actor_id=actor_id, origin=origin)
    try:
        PayrollRunOrchestrator(session_factory=session_factory).run(request)
    except Exception as exc:
        logger.exception("payroll_run_crashed", period_id=period_id, actor_id=actor_id)
        report_exception(exc, period_id=period_id)
