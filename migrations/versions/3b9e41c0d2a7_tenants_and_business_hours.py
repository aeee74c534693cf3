"""tenants and business hours

Revision ID: 3b9e41c0d2a7
Revises: 
Create Date: 2026-10-18 09:12:04.511372

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3b9e41c0d2a7'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DAYS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=120), nullable=False, unique=True),
        sa.Column("timezone", sa.String(length=64), nullable=True),
        sa.Column("is_paused", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "business_hours",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenants.id"), nullable=False),
        sa.Column("timezone", sa.String(length=64), nullable=True),
        *[sa.Column(day, sa.Text(), nullable=True) for day in DAYS],
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("uix_business_hours_tenant", "business_hours", ["tenant_id"], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("uix_business_hours_tenant", table_name="business_hours")
    op.drop_table("business_hours")
    op.drop_table("tenants")
