"""SQLAlchemy mapping metadata for the pricebook domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    Numeric,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from pricebook.domain.model import (
    Invoice,
    InvoiceLineItem,
    InvoiceStatus,
    Item,
    PriceHistory,
    Vendor,
)

if TYPE_CHECKING:
    from decimal import Decimal

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


def _money() -> Numeric[Decimal]:
    return Numeric(12, 4, asdecimal=True)


def _markup() -> Numeric[Decimal]:
    return Numeric(8, 4, asdecimal=True)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Catalog tables --------------------------------------------------------------

vendor_table = Table(
    "vendor",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False, unique=True),
    Column("contact_info", Text, nullable=True),
    Column("payment_terms", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
)

item_table = Table(
    "item",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("category", String, nullable=False),
    Column("vendor_id", UUIDColumnType, ForeignKey("vendor.id"), nullable=True),
    Column("cost_ex_tax", _money(), nullable=False, default=0),
    Column("markup", _markup(), nullable=False, default=0),
    Column("sell_ex_tax", _money(), nullable=False, default=0),
    Column("sell_inc_tax", _money(), nullable=False, default=0),
    Column("has_tax", Boolean, nullable=False, default=True),
    Column("sku", String, nullable=True),
    Column("barcode", String, nullable=True),
    Column("pos_catalog_id", String, nullable=True, unique=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=True),
    Index("ix_item_name_vendor_id", "name", "vendor_id"),
)

# Invoice tables --------------------------------------------------------------

invoice_table = Table(
    "invoice",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("vendor_id", UUIDColumnType, ForeignKey("vendor.id"), nullable=False),
    Column("invoice_number", String, nullable=True),
    Column("invoice_date", Date, nullable=True),
    Column(
        "status",
        Enum(InvoiceStatus, native_enum=False, length=16),
        nullable=False,
        default=InvoiceStatus.PARSED,
    ),
    Column("subtotal_ex_tax", _money(), nullable=False, default=0),
    Column("tax_amount", _money(), nullable=False, default=0),
    Column("total_inc_tax", _money(), nullable=False, default=0),
    Column("raw_document", LargeBinary, nullable=True),
    Column("needs_rectification", Boolean, nullable=False, default=False),
    Column("rectification_notes", Text, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=True),
    Index("ix_invoice_vendor_id", "vendor_id"),
)

invoice_line_item_table = Table(
    "invoice_line_item",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "invoice_id",
        UUIDColumnType,
        ForeignKey("invoice.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("position", Integer, nullable=False, default=0),
    Column("name", String, nullable=False),
    Column("quantity", Numeric(12, 3, asdecimal=True), nullable=False),
    Column("unit_cost_ex_tax", _money(), nullable=False),
    Column("detected_pack_size", Integer, nullable=False, default=1),
    Column("effective_unit_cost_ex_tax", _money(), nullable=False),
    Column("category", String, nullable=False),
    Column("markup", _markup(), nullable=False),
    Column("sell_ex_tax", _money(), nullable=False),
    Column("sell_inc_tax", _money(), nullable=False),
    Column("has_tax", Boolean, nullable=False, default=True),
    Column("item_id", UUIDColumnType, ForeignKey("item.id"), nullable=True),
    Column("notes", Text, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Index("ix_invoice_line_item_invoice_id", "invoice_id"),
)

item_price_history_table = Table(
    "item_price_history",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("item_id", UUIDColumnType, ForeignKey("item.id"), nullable=False),
    Column("cost_ex_tax", _money(), nullable=False),
    Column("markup", _markup(), nullable=False),
    Column("sell_ex_tax", _money(), nullable=False),
    Column("sell_inc_tax", _money(), nullable=False),
    Column("source_invoice_id", UUIDColumnType, ForeignKey("invoice.id"), nullable=True),
    Column("changed_at", UTCDateTime(), nullable=False),
    Index("ix_item_price_history_item_id_changed_at", "item_id", "changed_at"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Vendor, vendor_table)
    mapper_registry.map_imperatively(Item, item_table)

    mapper_registry.map_imperatively(
        Invoice,
        invoice_table,
        properties={
            "line_items": relationship(
                InvoiceLineItem,
                order_by=invoice_line_item_table.c.position,
                cascade="all, delete-orphan",
            ),
        },
    )

    mapper_registry.map_imperatively(InvoiceLineItem, invoice_line_item_table)
    mapper_registry.map_imperatively(PriceHistory, item_price_history_table)

    configure_mappers()
    return mapper_registry
