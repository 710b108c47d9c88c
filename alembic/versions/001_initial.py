"""Create deals and passengers tables.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

Both tables use a BIGINT identity primary key. passengers.deal_id is indexed
but has no foreign key constraint (application-level reference).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── deals table ─────────────────────────────────────────────────────

    op.create_table(
        "deals",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(300), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("destination", sa.String(200), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("departure_date", sa.Date(), nullable=True),
        sa.Column("return_date", sa.Date(), nullable=True),
        sa.Column("seats_available", sa.Integer(), nullable=True),
    )

    # ── passengers table ────────────────────────────────────────────────

    op.create_table(
        "passengers",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("email", sa.String(254), nullable=True),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("deal_id", sa.BigInteger(), nullable=True),
    )
    op.create_index("ix_passengers_deal_id", "passengers", ["deal_id"])


def downgrade() -> None:
    op.drop_index("ix_passengers_deal_id", table_name="passengers")
    op.drop_table("passengers")
    op.drop_table("deals")
