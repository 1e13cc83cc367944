from decimal import Decimal

from payslip.models import Admin, Employee
from payslip.seed.seed_data import seed


def test_seed_creates_admin_and_employees(db):
    created = seed(db, employee_count=3)

    assert created == {"admins": 1, "employees": 3}
    assert db.query(Admin).one().username == "admin"
    salaries = {e.username: e.salary for e in db.query(Employee)}
    assert salaries == {
        "employee1": Decimal("5000000"),
        "employee2": Decimal("5100000"),
        "employee3": Decimal("5200000"),
    }


def test_seed_is_idempotent(db):
    seed(db, employee_count=2)

    again = seed(db, employee_count=3)

    assert again == {"admins": 0, "employees": 1}
    assert db.query(Employee).count() == 3
    assert db.query(Admin).count() == 1


def test_seed_endpoint(client, db):
    response = client.post("/seed")

    assert response.status_code == 200
    assert response.json()["created"]["admins"] == 1
    assert db.query(Employee).count() == 100
