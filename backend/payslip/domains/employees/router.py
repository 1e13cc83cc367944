import json
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from payslip.core.clock import Clock, get_clock
from payslip.core.config import settings
from payslip.core.logging import get_logger
from payslip.core.middleware import client_ip
from payslip.db.session import get_session
from payslip.models import Attendance, Employee, Overtime, Payslip, Reimbursement

router = APIRouter(prefix="/employee", tags=["employee"])
logger = get_logger(__name__)

SATURDAY = 5


class AttendanceCreate(BaseModel):
    employeeId: int = Field(..., gt=0)


class AttendanceOut(BaseModel):
    id: int
    employeeId: int
    checkIn: datetime


class OvertimeCreate(BaseModel):
    employeeId: int = Field(..., gt=0)
    hours: Annotated[Decimal, Field(gt=0, max_digits=5, decimal_places=2)]
    date: date


class OvertimeOut(BaseModel):
    id: int
    employeeId: int
    date: date
    hours: float
    isApproved: bool
    payrollRunId: int | None = None


class ReimbursementCreate(BaseModel):
    employeeId: int = Field(..., gt=0)
    amount: Annotated[Decimal, Field(gt=0, max_digits=14, decimal_places=2)]
    description: Annotated[str, Field(min_length=1, max_length=255)]


class ReimbursementOut(BaseModel):
    id: int
    employeeId: int
    amount: float
    description: str
    isApproved: bool
    createdAt: datetime
    payrollRunId: int | None = None


class PayslipOut(BaseModel):
    id: int
    employeeId: int
    payrollPeriodId: int
    baseSalary: float
    workingDays: int
    daysAttended: int
    proratedSalary: float
    overtimeHours: float
    overtimePay: float
    reimbursement: float
    takeHomePay: float
    payslipDetails: dict[str, Any]


def _require_employee(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


@router.post("/attendance", response_model=AttendanceOut, status_code=201)
def submit_attendance(
    payload: AttendanceCreate,
    request: Request,
    db: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> AttendanceOut:
    now = clock()
    if now.weekday() >= SATURDAY:
        raise HTTPException(status_code=403, detail="Attendance submission is not allowed on weekends.")
    _require_employee(db, payload.employeeId)

    start_of_day = datetime.combine(now.date(), datetime.min.time())
    existing = (
        db.query(Attendance)
        .filter(
            Attendance.employee_id == payload.employeeId,
            Attendance.check_in >= start_of_day,
            Attendance.check_in < start_of_day + timedelta(days=1),
        )
        .first()
    )
    if existing:
        raise HTTPException(status_code=409, detail="Attendance for today has already been submitted.")

    row = Attendance(
        employee_id=payload.employeeId,
        check_in=now,
        created_by_id=payload.employeeId,
        updated_by_id=payload.employeeId,
        request_ip=client_ip(request),
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info("attendance_submitted", employee_id=payload.employeeId)
    return AttendanceOut(id=row.id, employeeId=row.employee_id, checkIn=row.check_in)


@router.post("/overtime", response_model=OvertimeOut, status_code=201)
def submit_overtime(
    payload: OvertimeCreate,
    request: Request,
    db: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> OvertimeOut:
    if payload.hours > settings.max_overtime_hours:
        raise HTTPException(
            status_code=422, detail=f"Overtime cannot exceed {settings.max_overtime_hours:g} hours per day."
        )
    if clock().hour < settings.overtime_opens_at_hour:
        raise HTTPException(
            status_code=403,
            detail=f"Overtime can only be proposed after {settings.overtime_opens_at_hour}:00.",
        )
    _require_employee(db, payload.employeeId)

    row = Overtime(
        employee_id=payload.employeeId,
        date=payload.date,
        hours=payload.hours,
        created_by_id=payload.employeeId,
        updated_by_id=payload.employeeId,
        request_ip=client_ip(request),
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info("overtime_submitted", employee_id=payload.employeeId, hours=float(payload.hours))
    return OvertimeOut(
        id=row.id,
        employeeId=row.employee_id,
        date=row.date,
        hours=float(row.hours),
        isApproved=row.is_approved,
        payrollRunId=row.payroll_run_id,
    )


@router.post("/reimbursements", response_model=ReimbursementOut, status_code=201)
def submit_reimbursement(
    payload: ReimbursementCreate,
    request: Request,
    db: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> ReimbursementOut:
    _require_employee(db, payload.employeeId)

    row = Reimbursement(
        employee_id=payload.employeeId,
        amount=payload.amount,
        description=payload.description.strip(),
        created_at=clock(),
        created_by_id=payload.employeeId,
        updated_by_id=payload.employeeId,
        request_ip=client_ip(request),
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info("reimbursement_submitted", employee_id=payload.employeeId, amount=float(payload.amount))
    return ReimbursementOut(
        id=row.id,
        employeeId=row.employee_id,
        amount=float(row.amount),
        description=row.description,
        isApproved=row.is_approved,
        createdAt=row.created_at,
        payrollRunId=row.payroll_run_id,
    )


@router.get("/payslip", response_model=PayslipOut)
def get_payslip(
    employee_id: int = Query(..., gt=0),
    period_id: int = Query(..., gt=0),
    db: Session = Depends(get_session),
) -> PayslipOut:
    payslip = (
        db.query(Payslip)
        .filter(Payslip.employee_id == employee_id, Payslip.payroll_period_id == period_id)
        .one_or_none()
    )
    if not payslip:
        raise HTTPException(status_code=404, detail="Payslip for this period not found.")

    return PayslipOut(
        id=payslip.id,
        employeeId=payslip.employee_id,
        payrollPeriodId=payslip.payroll_period_id,
        baseSalary=float(payslip.base_salary),
        workingDays=payslip.working_days,
        daysAttended=payslip.days_attended,
        proratedSalary=float(payslip.prorated_salary),
        overtimeHours=float(payslip.overtime_hours),
        overtimePay=float(payslip.overtime_pay),
        reimbursement=float(payslip.reimbursement),
        takeHomePay=float(payslip.take_home_pay),
        payslipDetails=json.loads(payslip.details),
    )
