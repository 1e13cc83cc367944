from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from payslip.core.config import settings
from payslip.db.session import get_session
from payslip.seed.seed_data import seed

router = APIRouter(prefix="/seed", tags=["seed"])


@router.post("", summary="Create the default admin and employees")
def seed_database(db: Session = Depends(get_session)) -> dict[str, str | dict[str, int]]:
    created = seed(db, settings.seed_employee_count)
    return {
        "message": f"Database seeded with 1 admin and {settings.seed_employee_count} employees.",
        "created": created,
    }
