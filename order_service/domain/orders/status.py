from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from order_service.domain.errors import InvalidStatusError, NotFoundError
from order_service.persistence.models import BillModel, OrderModel
from order_service.persistence.store import StoreGateway

logger = logging.getLogger(__name__)


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class BillingPolicy(str, Enum):
    # A bill for every request that targets "paid", even on an already paid order.
    ALWAYS = "always"
    # A bill only when the order actually moves into "paid".
    ONCE = "once"


# Any recognized status may follow any other, including itself.
TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(OrderStatus),
    OrderStatus.PAID: frozenset(OrderStatus),
    OrderStatus.CANCELLED: frozenset(OrderStatus),
}


@dataclass(frozen=True)
class StatusChange:
    order: OrderModel
    previous: OrderStatus
    current: OrderStatus
    bill: BillModel | None = None


def parse_status(value: Any) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    if isinstance(value, str):
        try:
            return OrderStatus(value)
        except ValueError:
            pass
    raise InvalidStatusError(value, OrderStatus.values())


def transition(current: OrderStatus | str, requested: Any) -> OrderStatus:
    source = parse_status(current)
    target = parse_status(requested)
    if target not in TRANSITIONS[source]:
        raise InvalidStatusError(target.value, sorted(s.value for s in TRANSITIONS[source]))
    return target


def change_order_status(
    store: StoreGateway,
    order_id: int,
    requested: Any,
    policy: BillingPolicy | str = BillingPolicy.ALWAYS,
) -> StatusChange:
    order = store.find_order_by_id(order_id)
    if order is None:
        raise NotFoundError("order", order_id)

    previous = parse_status(order.status)
    target = transition(previous, requested)
    policy = BillingPolicy(policy)

    if target is OrderStatus.PAID and policy is BillingPolicy.ONCE:
        return _pay_once(store, order, previous)

    bill = None
    if target is OrderStatus.PAID:
        bill = store.create_bill(order.total_amount)
        logger.info("bill emitted: bill_id=%s order_id=%s total_amount=%s", bill.id, order.id, bill.total_amount)

    updated = store.update_order_status(order.id, target.value) or order
    logger.info("order status changed: order_id=%s %s -> %s", order.id, previous.value, target.value)
    return StatusChange(order=updated, previous=previous, current=target, bill=bill)


def _pay_once(store: StoreGateway, order: OrderModel, previous: OrderStatus) -> StatusChange:
    updated = store.update_order_status(order.id, OrderStatus.PAID.value, unless_status=OrderStatus.PAID.value)
    if updated is None:
        logger.info("order already paid, no bill emitted: order_id=%s", order.id)
        return StatusChange(order=order, previous=previous, current=OrderStatus.PAID)

    bill = store.create_bill(updated.total_amount)
    logger.info("bill emitted: bill_id=%s order_id=%s total_amount=%s", bill.id, order.id, bill.total_amount)
    logger.info("order status changed: order_id=%s %s -> %s", order.id, previous.value, OrderStatus.PAID.value)
    return StatusChange(order=updated, previous=previous, current=OrderStatus.PAID, bill=bill)
