"""Initial schema: financial records and recorded income figures."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

from backend.app.db_types import GUID


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    expense_category_enum = sa.Enum(
        "Fertilizers",
        "Labor",
        "Transport",
        "Other",
        "Income",
        name="expense_category_enum",
        native_enum=False,
    )
    payment_method_enum = sa.Enum(
        "Cash",
        "Bank Transfer",
        "Credit Card",
        "Other",
        name="expense_payment_method_enum",
        native_enum=False,
    )

    op.create_table(
        "expenses",
        sa.Column("expense_id", GUID(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("category", expense_category_enum, nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("payment_method", payment_method_enum, nullable=False),
        sa.Column("status", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
    )
    op.create_index("expenses_date_idx", "expenses", ["date"])

    op.create_table(
        "local_incomes",
        sa.Column("income_id", GUID(), primary_key=True),
        sa.Column("total_revenue", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("local_incomes")
    op.drop_index("expenses_date_idx", table_name="expenses")
    op.drop_table("expenses")
