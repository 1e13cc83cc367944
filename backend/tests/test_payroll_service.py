from datetime import date, datetime
from decimal import Decimal
from functools import partial

from structlog.testing import capture_logs

from factories import (
    JUNE_END,
    JUNE_START,
    add_attendance,
    add_employee,
    add_overtime,
    add_period,
    add_reimbursement,
    weekdays,
)
from payslip.core.exceptions import LedgerConsumptionError
from payslip.domains.payroll.repository import PayrollRepository
from payslip.domains.payroll.service import (
    PayrollRunOrchestrator,
    PayrollRunRequest,
    RunOutcome,
    run_payroll,
)
from payslip.models import AuditLog, Overtime, PayrollPeriod, Payslip, Reimbursement


def run(session_factory, period_id: int, **kwargs):
    orchestrator = PayrollRunOrchestrator(session_factory=session_factory, **kwargs)
    return orchestrator.run(PayrollRunRequest(period_id=period_id, actor_id=1, origin="10.0.0.1"))


def test_full_attendance_payslip(db, session_factory):
    employee = add_employee(db)
    period = add_period(db)
    add_attendance(db, employee.id, weekdays(JUNE_START, JUNE_END))

    report = run(session_factory, period.id)

    assert report.outcome is RunOutcome.COMPLETED
    payslip = db.query(Payslip).one()
    assert report.payslip_ids == [payslip.id]
    assert payslip.working_days == 21
    assert payslip.days_attended == 21
    assert payslip.prorated_salary == Decimal("10500000")
    assert payslip.take_home_pay == Decimal("10500000")
    assert payslip.created_by_id == 1
    assert payslip.request_ip == "10.0.0.1"


def test_partial_attendance_overtime_and_reimbursement(db, session_factory):
    employee = add_employee(db)
    period = add_period(db)
    add_attendance(db, employee.id, weekdays(JUNE_START, date(2025, 6, 21)))
    add_overtime(db, employee.id, date(2025, 6, 5))
    add_reimbursement(db, employee.id)

    run(session_factory, period.id)

    payslip = db.query(Payslip).one()
    assert payslip.days_attended == 15
    assert payslip.prorated_salary == Decimal("7500000")
    assert payslip.overtime_hours == Decimal("3")
    assert payslip.overtime_pay == Decimal("375000")
    assert payslip.reimbursement == Decimal("50000")
    assert payslip.take_home_pay == Decimal("7925000")
    assert payslip.take_home_pay == payslip.prorated_salary + payslip.overtime_pay + payslip.reimbursement
    assert db.query(Overtime).one().payroll_run_id == period.id
    assert db.query(Reimbursement).one().payroll_run_id == period.id


def test_every_employee_gets_a_payslip(db, session_factory):
    first = add_employee(db, "employee1", "10500000")
    second = add_employee(db, "employee2", "4200000")
    add_employee(db, "employee3", "6300000")
    period = add_period(db)
    add_attendance(db, first.id, weekdays(JUNE_START, JUNE_END))
    add_attendance(db, second.id, [date(2025, 6, 2)])

    report = run(session_factory, period.id)

    assert len(report.payslip_ids) == 3
    assert report.skipped_employee_ids == []
    by_employee = {p.employee_id: p for p in db.query(Payslip)}
    assert by_employee[second.id].take_home_pay == Decimal("200000")
    for payslip in by_employee.values():
        assert payslip.take_home_pay == payslip.prorated_salary + payslip.overtime_pay + payslip.reimbursement


def test_unknown_period_aborts_without_side_effects(db, session_factory):
    add_employee(db)

    with capture_logs() as logs:
        report = run(session_factory, 404)

    assert report.outcome is RunOutcome.ABORTED_NOT_FOUND
    assert db.query(Payslip).count() == 0
    assert db.query(AuditLog).count() == 0
    assert any(log["event"] == "payroll_run_aborted" and log["reason"] == "PERIOD_NOT_FOUND" for log in logs)


def test_second_run_is_a_noop(db, session_factory):
    employee = add_employee(db)
    period = add_period(db)
    add_attendance(db, employee.id, weekdays(JUNE_START, JUNE_END))

    first = run(session_factory, period.id)
    add_overtime(db, employee.id, date(2025, 6, 10))
    second = run(session_factory, period.id)

    assert first.outcome is RunOutcome.COMPLETED
    assert second.outcome is RunOutcome.ABORTED_ALREADY_RUN
    assert second.payslip_ids == []
    assert db.query(Payslip).count() == 1
    assert db.query(Overtime).one().payroll_run_id is None
    assert db.query(AuditLog).count() == 1


def test_period_flagged_as_run_is_refused(db, session_factory):
    employee = add_employee(db)
    period = add_period(db, is_run=True)
    add_overtime(db, employee.id, date(2025, 6, 10))

    report = run(session_factory, period.id)

    assert report.outcome is RunOutcome.ABORTED_ALREADY_RUN
    assert db.query(Payslip).count() == 0
    assert db.query(Overtime).one().payroll_run_id is None


def test_period_is_claimed_even_with_no_employees(db, session_factory):
    period = add_period(db)

    report = run(session_factory, period.id)

    assert report.outcome is RunOutcome.COMPLETED
    assert db.query(Payslip).count() == 0
    db.expire_all()
    assert db.get(PayrollPeriod, period.id).is_run is True
    audit = db.query(AuditLog).one()
    assert audit.action == "RAN_PAYROLL"
    assert audit.user_id == 1
    assert audit.user_type == "admin"
    assert audit.request_ip == "10.0.0.1"
    assert f"period ID {period.id}" in audit.details


def test_entries_consumed_by_one_run_are_not_paid_again(db, session_factory):
    employee = add_employee(db)
    june = add_period(db)
    late_june = add_period(db, start=date(2025, 6, 16))
    add_overtime(db, employee.id, date(2025, 6, 20))
    add_reimbursement(db, employee.id, created_at=datetime(2025, 6, 20, 8, 0))

    run(session_factory, june.id)
    run(session_factory, late_june.id)

    first = db.query(Payslip).filter(Payslip.payroll_period_id == june.id).one()
    second = db.query(Payslip).filter(Payslip.payroll_period_id == late_june.id).one()
    assert first.overtime_hours == Decimal("3")
    assert first.reimbursement == Decimal("50000")
    assert second.overtime_hours == 0
    assert second.reimbursement == 0
    assert db.query(Overtime).one().payroll_run_id == june.id
    assert db.query(Reimbursement).one().payroll_run_id == june.id


class FailingLedgerRepository(PayrollRepository):
    """Marks overtime, then fails on reimbursements for one employee."""

    def __init__(self, session, failing_employee_id):
        super().__init__(session)
        self.failing_employee_id = failing_employee_id

    def mark_consumed(self, selection, period_id):
        if selection.reimbursements and selection.reimbursements[0].employee_id == self.failing_employee_id:
            self._consume(Overtime, "overtime", selection.overtime_ids, period_id)
            raise LedgerConsumptionError(period_id, "reimbursement", len(selection.reimbursements), 0)
        super().mark_consumed(selection, period_id)


def test_consumption_failure_skips_only_that_employee(db, session_factory):
    unlucky = add_employee(db, "employee1")
    lucky = add_employee(db, "employee2")
    period = add_period(db)
    for employee in (unlucky, lucky):
        add_attendance(db, employee.id, weekdays(JUNE_START, JUNE_END))
        add_overtime(db, employee.id, date(2025, 6, 5))
        add_reimbursement(db, employee.id)
    factory = partial(FailingLedgerRepository, failing_employee_id=unlucky.id)

    with capture_logs() as logs:
        report = run(session_factory, period.id, repository_factory=factory)

    assert report.outcome is RunOutcome.COMPLETED
    assert report.skipped_employee_ids == [unlucky.id]
    assert [p.employee_id for p in db.query(Payslip)] == [lucky.id]
    db.expire_all()
    unlucky_overtime = db.query(Overtime).filter(Overtime.employee_id == unlucky.id).one()
    assert unlucky_overtime.payroll_run_id is None
    assert db.query(Reimbursement).filter(Reimbursement.employee_id == unlucky.id).one().payroll_run_id is None
    assert db.query(Overtime).filter(Overtime.employee_id == lucky.id).one().payroll_run_id == period.id
    assert db.query(AuditLog).count() == 1
    assert any(log["event"] == "payslip_skipped" and log["employee_id"] == unlucky.id for log in logs)


class ExplodingRepository(PayrollRepository):
    def __init__(self, session, exploding_employee_id):
        super().__init__(session)
        self.exploding_employee_id = exploding_employee_id

    def count_attendance(self, employee_id, start, end):
        if employee_id == self.exploding_employee_id:
            raise RuntimeError("attendance store unavailable")
        return super().count_attendance(employee_id, start, end)


def test_calculation_failure_is_isolated(db, session_factory):
    broken = add_employee(db, "employee1")
    healthy = add_employee(db, "employee2")
    period = add_period(db)
    add_overtime(db, broken.id, date(2025, 6, 5))
    factory = partial(ExplodingRepository, exploding_employee_id=broken.id)

    report = run(session_factory, period.id, repository_factory=factory)

    assert report.outcome is RunOutcome.COMPLETED
    assert report.skipped_employee_ids == [broken.id]
    assert [p.employee_id for p in db.query(Payslip)] == [healthy.id]
    assert db.query(Overtime).one().payroll_run_id is None


def test_run_payroll_entry_point_swallows_outcomes(db, session_factory):
    employee = add_employee(db)
    period = add_period(db)
    add_attendance(db, employee.id, [date(2025, 6, 2)])

    assert run_payroll(period.id, 1, "127.0.0.1", session_factory) is None
    assert run_payroll(period.id, 1, "127.0.0.1", session_factory) is None
    assert run_payroll(999, 1, "127.0.0.1", session_factory) is None

    assert db.query(Payslip).count() == 1
    assert db.query(AuditLog).count() == 1
