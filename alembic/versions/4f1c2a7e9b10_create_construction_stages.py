"""create construction_stages

Revision ID: 4f1c2a7e9b10
Revises:
Create Date: 2026-10-19 09:12:44.104215
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "4f1c2a7e9b10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "construction_stages",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=True),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.Column("duration_unit", sa.String(length=10), nullable=False, server_default="DAYS"),
        sa.Column("color", sa.String(length=7), nullable=True),
        sa.Column("external_id", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="NEW"),
        sa.CheckConstraint(
            "status IN ('NEW','PLANNED','DELETED')",
            name="ck_construction_stages_status",
        ),
        sa.CheckConstraint(
            "duration_unit IN ('HOURS','DAYS','WEEKS')",
            name="ck_construction_stages_duration_unit",
        ),
    )
    op.create_index(
        "ix_construction_stages_status", "construction_stages", ["status"]
    )


def downgrade() -> None:
    op.drop_index("ix_construction_stages_status", table_name="construction_stages")
    op.drop_table("construction_stages")
