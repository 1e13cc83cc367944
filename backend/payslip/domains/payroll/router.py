from datetime import date

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field, model_validator
from sqlalchemy.orm import Session, sessionmaker

from payslip.core.logging import get_logger
from payslip.core.middleware import client_ip
from payslip.db.session import get_session, get_session_factory
from payslip.domains.audit.service import CREATED_PERIOD, AuditLogger
from payslip.domains.payroll.service import run_payroll
from payslip.models import PayrollPeriod, Payslip

router = APIRouter(prefix="/admin", tags=["admin"])
logger = get_logger(__name__)


class PayrollPeriodCreate(BaseModel):
    startDate: date
    endDate: date
    adminId: int = Field(..., gt=0)

    @model_validator(mode="after")
    def check_range(self) -> "PayrollPeriodCreate":
        if self.endDate < self.startDate:
            raise ValueError("endDate must not be before startDate")
        return self


class PayrollPeriodOut(BaseModel):
    id: int
    startDate: date
    endDate: date
    isRun: bool
    createdById: int | None = None


class RunPayrollRequest(BaseModel):
    payrollPeriodId: int = Field(..., gt=0)
    adminId: int = Field(..., gt=0)


class EmployeeSummary(BaseModel):
    employeeId: int
    takeHomePay: float


class PayslipSummaryOut(BaseModel):
    payrollPeriodId: int
    totalPayout: float
    employeePayslips: list[EmployeeSummary]


def _period_out(period: PayrollPeriod) -> PayrollPeriodOut:
    return PayrollPeriodOut(
        id=period.id,
        startDate=period.start_date,
        endDate=period.end_date,
        isRun=period.is_run,
        createdById=period.created_by_id,
    )


@router.post("/payroll-periods", response_model=PayrollPeriodOut, status_code=201)
def create_payroll_period(
    payload: PayrollPeriodCreate,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_session),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> PayrollPeriodOut:
    origin = client_ip(request)
    period = PayrollPeriod(
        start_date=payload.startDate,
        end_date=payload.endDate,
        created_by_id=payload.adminId,
        updated_by_id=payload.adminId,
        request_ip=origin,
    )
    db.add(period)
    db.commit()
    db.refresh(period)

    logger.info("payroll_period_created", period_id=period.id, admin_id=payload.adminId)
    background_tasks.add_task(
        AuditLogger(session_factory).record,
        payload.adminId,
        "admin",
        CREATED_PERIOD,
        f"Created new payroll period ID {period.id} from {payload.startDate} to {payload.endDate}.",
        origin,
    )
    return _period_out(period)


@router.post("/run-payroll", status_code=202)
def trigger_payroll_run(
    payload: RunPayrollRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    session_factory: sessionmaker = Depends(get_session_factory),
) -> dict[str, str]:
    # plain values only; the request object is gone by the time the task runs
    background_tasks.add_task(
        run_payroll,
        payload.payrollPeriodId,
        payload.adminId,
        client_ip(request),
        session_factory,
    )
    logger.info("payroll_run_queued", period_id=payload.payrollPeriodId, admin_id=payload.adminId)
    return {"message": "Payroll run has been initiated. This may take a few moments."}


@router.get("/payslips/summary", response_model=PayslipSummaryOut)
def payslip_summary(
    period_id: int = Query(..., gt=0),
    db: Session = Depends(get_session),
) -> PayslipSummaryOut:
    payslips = (
        db.query(Payslip)
        .filter(Payslip.payroll_period_id == period_id)
        .order_by(Payslip.employee_id.asc())
        .all()
    )
    if not payslips:
        raise HTTPException(status_code=404, detail="No payslips found for this period. Has payroll been run?")

    total = sum((p.take_home_pay for p in payslips), 0)
    return PayslipSummaryOut(
        payrollPeriodId=period_id,
        totalPayout=float(total),
        employeePayslips=[
            EmployeeSummary(employeeId=p.employee_id, takeHomePay=float(p.take_home_pay)) for p in payslips
        ],
    )

