"""Create mesas table.

Revision ID: 001_create_mesas
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_mesas"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "mesas",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("capacidade", sa.Integer, nullable=False),
        sa.Column("descricao", sa.Text, nullable=False),
        sa.Column("local", sa.String(255), nullable=False),
        sa.Column("status", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("status IN (1, -1)", name="ck_mesas_status"),
    )
    op.create_index("ix_mesas_local", "mesas", ["local"])


def downgrade() -> None:
    op.drop_index("ix_mesas_local", table_name="mesas")
    op.drop_table("mesas")
