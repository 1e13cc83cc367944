from decimal import Decimal
from hashlib import sha256

from sqlalchemy.orm import Session

from payslip.core.logging import get_logger
from payslip.models import Admin, Employee

logger = get_logger(__name__)

BASE_SALARY = Decimal("5000000")
SALARY_STEP = Decimal("100000")


def _hash_password(raw: str) -> str:
    return sha256(raw.encode("utf-8")).hexdigest()


def seed(session: Session, employee_count: int = 100) -> dict[str, int]:
    """Create the ``admin`` account and ``employee1..N``. Existing usernames are left alone."""
    created_admins = 0
    if not session.query(Admin).filter(Admin.username == "admin").one_or_none():
        session.add(Admin(username="admin", hashed_password=_hash_password("admin")))
        created_admins = 1

    existing = {username for (username,) in session.query(Employee.username)}
    new_employees = []
    for i in range(employee_count):
        username = f"employee{i + 1}"
        if username in existing:
            continue
        new_employees.append(
            Employee(
                username=username,
                # password is the username
                hashed_password=_hash_password(username),
                salary=BASE_SALARY + SALARY_STEP * i,
            )
        )
    session.add_all(new_employees)
    session.commit()

    logger.info("database_seeded", admins=created_admins, employees=len(new_employees))
    return {"admins": created_admins, "employees": len(new_employees)}
