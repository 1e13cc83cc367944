"""create core tables

Revision ID: 0001
Revises: None
Create Date: 2025-06-01
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _traceable_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("created_by_id", sa.Integer(), nullable=True),
        sa.Column("updated_by_id", sa.Integer(), nullable=True),
        sa.Column("request_ip", sa.String(length=64), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "admins",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        *_traceable_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_index(op.f("ix_admins_id"), "admins", ["id"], unique=False)

    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("salary", sa.Numeric(14, 2), nullable=False),
        *_traceable_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_index(op.f("ix_employees_id"), "employees", ["id"], unique=False)

    op.create_table(
        "payroll_periods",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_run", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_traceable_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_payroll_periods_id"), "payroll_periods", ["id"], unique=False)

    op.create_table(
        "attendances",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("check_in", sa.DateTime(), nullable=False),
        *_traceable_columns(),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_attendances_id"), "attendances", ["id"], unique=False)
    op.create_index(op.f("ix_attendances_employee_id"), "attendances", ["employee_id"], unique=False)

    op.create_table(
        "overtimes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("hours", sa.Numeric(5, 2), nullable=False),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("payroll_run_id", sa.Integer(), nullable=True),
        *_traceable_columns(),
        sa.CheckConstraint("hours > 0", name="ck_overtimes_hours_positive"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
        sa.ForeignKeyConstraint(["payroll_run_id"], ["payroll_periods.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_overtimes_id"), "overtimes", ["id"], unique=False)
    op.create_index(op.f("ix_overtimes_employee_id"), "overtimes", ["employee_id"], unique=False)
    op.create_index(op.f("ix_overtimes_payroll_run_id"), "overtimes", ["payroll_run_id"], unique=False)

    op.create_table(
        "reimbursements",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("payroll_run_id", sa.Integer(), nullable=True),
        *_traceable_columns(),
        sa.CheckConstraint("amount > 0", name="ck_reimbursements_amount_positive"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
        sa.ForeignKeyConstraint(["payroll_run_id"], ["payroll_periods.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_reimbursements_id"), "reimbursements", ["id"], unique=False)
    op.create_index(op.f("ix_reimbursements_employee_id"), "reimbursements", ["employee_id"], unique=False)
    op.create_index(
        op.f("ix_reimbursements_payroll_run_id"), "reimbursements", ["payroll_run_id"], unique=False
    )

    op.create_table(
        "payslips",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("payroll_period_id", sa.Integer(), nullable=False),
        sa.Column("base_salary", sa.Numeric(14, 2), nullable=False),
        sa.Column("working_days", sa.Integer(), nullable=False),
        sa.Column("days_attended", sa.Integer(), nullable=False),
        sa.Column("prorated_salary", sa.Numeric(14, 2), nullable=False),
        sa.Column("overtime_hours", sa.Numeric(7, 2), nullable=False),
        sa.Column("overtime_pay", sa.Numeric(14, 2), nullable=False),
        sa.Column("reimbursement", sa.Numeric(14, 2), nullable=False),
        sa.Column("take_home_pay", sa.Numeric(14, 2), nullable=False),
        sa.Column("details", sa.Text(), nullable=False),
        *_traceable_columns(),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
        sa.ForeignKeyConstraint(["payroll_period_id"], ["payroll_periods.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_id", "payroll_period_id", name="uq_payslips_employee_period"),
    )
    op.create_index(op.f("ix_payslips_id"), "payslips", ["id"], unique=False)
    op.create_index(op.f("ix_payslips_employee_id"), "payslips", ["employee_id"], unique=False)
    op.create_index(op.f("ix_payslips_payroll_period_id"), "payslips", ["payroll_period_id"], unique=False)

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("user_type", sa.String(length=20), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("request_ip", sa.String(length=64), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_audit_logs_id"), "audit_logs", ["id"], unique=False)
    op.create_index(op.f("ix_audit_logs_user_id"), "audit_logs", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_audit_logs_user_id"), table_name="audit_logs")
    op.drop_index(op.f("ix_audit_logs_id"), table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_index(op.f("ix_payslips_payroll_period_id"), table_name="payslips")
    op.drop_index(op.f("ix_payslips_employee_id"), table_name="payslips")
    op.drop_index(op.f("ix_payslips_id"), table_name="payslips")
    op.drop_table("payslips")
    op.drop_index(op.f("ix_reimbursements_payroll_run_id"), table_name="reimbursements")
    op.drop_index(op.f("ix_reimbursements_employee_id"), table_name="reimbursements")
    op.drop_index(op.f("ix_reimbursements_id"), table_name="reimbursements")
    op.drop_table("reimbursements")
    op.drop_index(op.f("ix_overtimes_payroll_run_id"), table_name="overtimes")
    op.drop_index(op.f("ix_overtimes_employee_id"), table_name="overtimes")
    op.drop_index(op.f("ix_overtimes_id"), table_name="overtimes")
    op.drop_table("overtimes")
    op.drop_index(op.f("ix_attendances_employee_id"), table_name="attendances")
    op.drop_index(op.f("ix_attendances_id"), table_name="attendances")
    op.drop_table("attendances")
    op.drop_index(op.f("ix_payroll_periods_id"), table_name="payroll_periods")
    op.drop_table("payroll_periods")
    op.drop_index(op.f("ix_employees_id"), table_name="employees")
    op.drop_table("employees")
    op.drop_index(op.f("ix_admins_id"), table_name="admins")
    op.drop_table("admins")
