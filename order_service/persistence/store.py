from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Protocol

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from order_service.persistence.models import MAX_INT, BillModel, OrderModel, ProductModel

PRODUCT_SORT_FIELDS = {"id", "name", "price", "weight", "created_at", "updated_at"}
ORDER_SORT_FIELDS = {
    "id",
    "status",
    "shipment_amount",
    "total_amount",
    "total_weight",
    "created_at",
    "updated_at",
}


class StoreGateway(Protocol):
    """What the order domain needs from persistence."""

    def find_products_by_ids(self, ids: Iterable[int]) -> list[ProductModel]: ...

    def create_order(self, **fields: Any) -> OrderModel: ...

    def find_order_by_id(self, order_id: int) -> OrderModel | None: ...

    def update_order_status(
        self,
        order_id: int,
        status: str,
        *,
        unless_status: str | None = None,
    ) -> OrderModel | None: ...

    def create_bill(self, total_amount: Decimal) -> BillModel: ...


def _storable_id(value: int) -> bool:
    # Larger values overflow the driver before the query runs.
    return 1 <= value <= MAX_INT


def _sorted(stmt, model, sort: str | None, allowed: set[str]):
    if sort and sort in allowed:
        return stmt.order_by(getattr(model, sort).asc(), model.id.asc())
    return stmt.order_by(model.id.asc())


class SqlStore:
    def __init__(self, session: Session):
        self.session = session

    # products

    def create_product(self, name: str, price: int, weight: int) -> ProductModel:
        row = ProductModel(name=name, price=price, weight=weight)
        self.session.add(row)
        self.session.flush()
        return row

    def get_product(self, product_id: int) -> ProductModel | None:
        if not _storable_id(product_id):
            return None
        return self.session.get(ProductModel, product_id)

    def list_products(self, sort: str | None = None) -> list[ProductModel]:
        stmt = _sorted(select(ProductModel), ProductModel, sort, PRODUCT_SORT_FIELDS)
        return list(self.session.scalars(stmt).all())

    def find_products_by_ids(self, ids: Iterable[int]) -> list[ProductModel]:
        wanted = sorted(i for i in set(ids) if _storable_id(i))
        if not wanted:
            return []
        stmt = select(ProductModel).where(ProductModel.id.in_(wanted)).order_by(ProductModel.id.asc())
        return list(self.session.scalars(stmt).all())

    def delete_products(self) -> int:
        return self.session.execute(delete(ProductModel)).rowcount

    # orders

    def create_order(self, **fields: Any) -> OrderModel:
        row = OrderModel(**fields)
        self.session.add(row)
        self.session.flush()
        return row

    def find_order_by_id(self, order_id: int) -> OrderModel | None:
        if not _storable_id(order_id):
            return None
        return self.session.get(OrderModel, order_id)

    def list_orders(self, sort: str | None = None) -> list[OrderModel]:
        stmt = _sorted(select(OrderModel), OrderModel, sort, ORDER_SORT_FIELDS)
        return list(self.session.scalars(stmt).all())

    def update_order_status(
        self,
        order_id: int,
        status: str,
        *,
        unless_status: str | None = None,
    ) -> OrderModel | None:
        """Set the status in a single UPDATE.

        With ``unless_status`` the row is only touched when its current status
        differs from it; ``None`` is returned when nothing changed.
        """
        if not _storable_id(order_id):
            return None
        stmt = update(OrderModel).where(OrderModel.id == order_id).values(status=status)
        if unless_status is not None:
            stmt = stmt.where(OrderModel.status != unless_status)
        result = self.session.execute(stmt.execution_options(synchronize_session=False))
        if result.rowcount == 0:
            return None

        order = self.session.get(OrderModel, order_id)
        if order is not None:
            self.session.refresh(order)
        return order

    def delete_orders(self) -> int:
        return self.session.execute(delete(OrderModel)).rowcount

    # bills

    def create_bill(self, total_amount: Decimal) -> BillModel:
        row = BillModel(total_amount=total_amount)
        self.session.add(row)
        self.session.flush()
        return row

    def list_bills(self) -> list[BillModel]:
        return list(self.session.scalars(select(BillModel).order_by(BillModel.id.asc())).all())

    def delete_bills(self) -> int:
        return self.session.execute(delete(BillModel)).rowcount
