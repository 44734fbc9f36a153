"""item has_tax flag

Revision ID: 0002_item_has_tax
Revises: 0001_initial_schema
Create Date: 2026-10-18 10:15:00.000000
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0002_item_has_tax"
down_revision: str | None = "0001_initial_schema"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # existing items were all priced with tax
    op.add_column(
        "item",
        sa.Column("has_tax", sa.Boolean(), nullable=False, server_default=sa.true()),
    )


def downgrade() -> None:
    with op.batch_alter_table("item") as batch_op:
        batch_op.drop_column("has_tax")
