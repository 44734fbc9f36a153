"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-01-12 09:30:00.000000
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _money(name: str) -> sa.Column[sa.Numeric]:
    return sa.Column(name, sa.Numeric(12, 4), nullable=False)


def _markup(name: str) -> sa.Column[sa.Numeric]:
    return sa.Column(name, sa.Numeric(8, 4), nullable=False)


def upgrade() -> None:
    op.create_table(
        "vendor",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("contact_info", sa.Text(), nullable=True),
        sa.Column("payment_terms", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_vendor")),
        sa.UniqueConstraint("name", name=op.f("uq_vendor_vendor_name")),
    )

    op.create_table(
        "item",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("vendor_id", sa.Uuid(), nullable=True),
        _money("cost_ex_tax"),
        _markup("markup"),
        _money("sell_ex_tax"),
        _money("sell_inc_tax"),
        sa.Column("sku", sa.String(), nullable=True),
        sa.Column("barcode", sa.String(), nullable=True),
        sa.Column("pos_catalog_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["vendor_id"], ["vendor.id"], name=op.f("fk_item_item_vendor_id_vendor")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_item")),
        sa.UniqueConstraint("pos_catalog_id", name=op.f("uq_item_item_pos_catalog_id")),
    )
    op.create_index("ix_item_name_vendor_id", "item", ["name", "vendor_id"])

    op.create_table(
        "invoice",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("vendor_id", sa.Uuid(), nullable=False),
        sa.Column("invoice_number", sa.String(), nullable=True),
        sa.Column("invoice_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        _money("subtotal_ex_tax"),
        _money("tax_amount"),
        _money("total_inc_tax"),
        sa.Column("raw_document", sa.LargeBinary(), nullable=True),
        sa.Column("needs_rectification", sa.Boolean(), nullable=False),
        sa.Column("rectification_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["vendor_id"], ["vendor.id"], name=op.f("fk_invoice_invoice_vendor_id_vendor")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_invoice")),
    )
    op.create_index("ix_invoice_vendor_id", "invoice", ["vendor_id"])

    op.create_table(
        "invoice_line_item",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("invoice_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        _money("unit_cost_ex_tax"),
        sa.Column("detected_pack_size", sa.Integer(), nullable=False),
        _money("effective_unit_cost_ex_tax"),
        sa.Column("category", sa.String(), nullable=False),
        _markup("markup"),
        _money("sell_ex_tax"),
        _money("sell_inc_tax"),
        sa.Column("has_tax", sa.Boolean(), nullable=False),
        sa.Column("item_id", sa.Uuid(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["invoice_id"],
            ["invoice.id"],
            name=op.f("fk_invoice_line_item_invoice_line_item_invoice_id_invoice"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["item_id"], ["item.id"], name=op.f("fk_invoice_line_item_invoice_line_item_item_id_item")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_invoice_line_item")),
    )
    op.create_index("ix_invoice_line_item_invoice_id", "invoice_line_item", ["invoice_id"])

    op.create_table(
        "item_price_history",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("item_id", sa.Uuid(), nullable=False),
        _money("cost_ex_tax"),
        _markup("markup"),
        _money("sell_ex_tax"),
        _money("sell_inc_tax"),
        sa.Column("source_invoice_id", sa.Uuid(), nullable=True),
        sa.Column("changed_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["item_id"], ["item.id"], name=op.f("fk_item_price_history_item_price_history_item_id_item")
        ),
        sa.ForeignKeyConstraint(
            ["source_invoice_id"],
            ["invoice.id"],
            name=op.f("fk_item_price_history_item_price_history_source_invoice_id_invoice"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_item_price_history")),
    )
    op.create_index(
        "ix_item_price_history_item_id_changed_at",
        "item_price_history",
        ["item_id", "changed_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_item_price_history_item_id_changed_at", table_name="item_price_history")
    op.drop_table("item_price_history")
    op.drop_index("ix_invoice_line_item_invoice_id", table_name="invoice_line_item")
    op.drop_table("invoice_line_item")
    op.drop_index("ix_invoice_vendor_id", table_name="invoice")
    op.drop_table("invoice")
    op.drop_index("ix_item_name_vendor_id", table_name="item")
    op.drop_table("item")
    op.drop_table("vendor")
