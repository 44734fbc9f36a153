"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import func, select, update
from sqlalchemy.orm.attributes import set_committed_value

from pricebook.adapters.sqlalchemy.mappings import (
    invoice_table,
    item_price_history_table,
    item_table,
    vendor_table,
)
from pricebook.domain.model import (
    ZERO,
    Invoice,
    InvoiceStatus,
    Item,
    PriceHistory,
    Vendor,
    utcnow,
)

if TYPE_CHECKING:
    import uuid
    from collections.abc import Iterable, Sequence

    from sqlalchemy.engine import CursorResult
    from sqlalchemy.orm import Session


class SqlAlchemyRepository[TEntity]:
    """Shared ``add``/``get`` for repositories of one mapped class."""

    def __init__(self, session: Session, entity_cls: type[TEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def get(self, entity_id: uuid.UUID) -> TEntity | None:
        return self.session.get(self._entity_cls, entity_id)


class SqlAlchemyVendorRepository(SqlAlchemyRepository[Vendor]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Vendor)

    def add(self, entity: Vendor) -> None:
        # invoices and items carry no ORM relationship to vendors, flush to order the inserts
        self.session.add(entity)
        self.session.flush()

    def get_by_name(self, name: str) -> Vendor | None:
        stmt = select(Vendor).where(vendor_table.c.name == name).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyItemRepository(SqlAlchemyRepository[Item]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Item)

    def add(self, entity: Item) -> None:
        self.session.add(entity)
        self.session.flush()

    def first_by_name_and_vendor(self, name: str, vendor_id: uuid.UUID) -> Item | None:
        stmt = (
            select(Item)
            .where(item_table.c.name == name)
            .where(item_table.c.vendor_id == vendor_id)
            .order_by(item_table.c.created_at, item_table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def first_by_name(self, name: str) -> Item | None:
        stmt = (
            select(Item)
            .where(item_table.c.name == name)
            .order_by(item_table.c.created_at, item_table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def list_all(self) -> Sequence[Item]:
        stmt = select(Item).order_by(item_table.c.name, item_table.c.id)
        return self.session.execute(stmt).scalars().all()

    def reset_costs(self, item_ids: Iterable[uuid.UUID]) -> int:
        ids = list(item_ids)
        if not ids:
            return 0
        stmt = (
            update(Item)
            .where(item_table.c.id.in_(ids))
            .values(cost_ex_tax=ZERO, markup=ZERO, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        result = cast("CursorResult[tuple[()]]", self.session.execute(stmt))
        return result.rowcount


class SqlAlchemyInvoiceRepository(SqlAlchemyRepository[Invoice]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Invoice)

    def get_for_update(self, invoice_id: uuid.UUID) -> Invoice | None:
        stmt = (
            select(Invoice)
            .where(invoice_table.c.id == invoice_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def mark_posted(self, invoice: Invoice) -> bool:
        self.session.flush()
        posted_at = utcnow()
        stmt = (
            update(invoice_table)
            .where(invoice_table.c.id == invoice.id)
            .where(invoice_table.c.status == InvoiceStatus.PARSED)
            .values(status=InvoiceStatus.POSTED, updated_at=posted_at)
        )
        result = cast("CursorResult[tuple[()]]", self.session.execute(stmt))
        if result.rowcount != 1:
            return False
        set_committed_value(invoice, "status", InvoiceStatus.POSTED)
        set_committed_value(invoice, "updated_at", posted_at)
        return True

    def delete(self, invoice: Invoice) -> None:
        self.session.delete(invoice)


class SqlAlchemyPriceHistoryRepository:
    """Insert-only access to ``item_price_history``."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(self, entry: PriceHistory) -> None:
        # the history row must reach the database before the item changes
        self.session.add(entry)
        self.session.flush()

    def for_item(self, item_id: uuid.UUID, *, limit: int | None = None) -> Sequence[PriceHistory]:
        stmt = (
            select(PriceHistory)
            .where(item_price_history_table.c.item_id == item_id)
            .order_by(
                item_price_history_table.c.changed_at.desc(),
                item_price_history_table.c.id.desc(),
            )
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return self.session.execute(stmt).scalars().all()

    def count_for_item(self, item_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(item_price_history_table)
            .where(item_price_history_table.c.item_id == item_id)
        )
        return self.session.execute(stmt).scalar_one()


if TYPE_CHECKING:
    from pricebook.domain.ports.persistence import (
        InvoiceRepository,
        ItemRepository,
        PriceHistoryRepository,
        VendorRepository,
    )

    _session_stub = cast("Session", object())
    _vendor_repo: VendorRepository = SqlAlchemyVendorRepository(_session_stub)
    _item_repo: ItemRepository = SqlAlchemyItemRepository(_session_stub)
    _invoice_repo: InvoiceRepository = SqlAlchemyInvoiceRepository(_session_stub)
    _history_repo: PriceHistoryRepository = SqlAlchemyPriceHistoryRepository(_session_stub)
