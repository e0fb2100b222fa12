from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

from order_service.domain.errors import FieldError, UnknownReferenceError, ValidationError
from order_service.domain.orders.status import OrderStatus
from order_service.domain.pricing import LineItem, PricingResult, compute_pricing
from order_service.persistence.models import MAX_INT, OrderModel
from order_service.persistence.store import StoreGateway

logger = logging.getLogger(__name__)

FIELD = "product_list"


@dataclass(frozen=True)
class AssembledOrder:
    order: OrderModel
    pricing: PricingResult
    product_ids: list[int]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _parse_number(value: Any) -> float | int | None:
    if _is_number(value):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_product_list(raw: Any) -> list[Any]:
    """Check the request shape: a non-empty list of numbers or numeric strings."""
    if raw is None:
        raise ValidationError.for_field(FIELD, '"product_list" is required')
    if not isinstance(raw, (list, tuple)):
        raise ValidationError.for_field(FIELD, '"product_list" must be an array')
    if not raw:
        raise ValidationError.for_field(FIELD, '"product_list" must contain at least 1 item')

    errors = [
        FieldError(key=f"{FIELD}.{index}", message=f'"{index}" must be a number')
        for index, value in enumerate(raw)
        if _parse_number(value) is None
    ]
    if errors:
        raise ValidationError(errors)
    return list(raw)


def coerce_product_ids(raw: list[Any]) -> list[int]:
    """Turn validated entries into product ids, dropping the unusable ones.

    Fractions are truncated toward zero. Values that are not numbers or
    fall outside ``1..MAX_INT`` after truncation are skipped rather than
    rejected. Order of first appearance is kept.
    """
    ids: list[int] = []
    for value in raw:
        number = _parse_number(value)
        if number is None:
            continue
        product_id = int(number)
        if not 1 <= product_id <= MAX_INT or product_id in ids:
            continue
        ids.append(product_id)
    return ids


def assemble_order(store: StoreGateway, raw_product_list: Any) -> AssembledOrder:
    raw = validate_product_list(raw_product_list)

    product_ids = coerce_product_ids(raw)
    if not product_ids:
        raise ValidationError.for_field(FIELD, '"product_list" does not contain any usable product id')

    products = store.find_products_by_ids(set(product_ids))
    if not products:
        raise UnknownReferenceError(key=FIELD)

    pricing = compute_pricing(LineItem(price=p.price, weight=p.weight) for p in products)
    order = store.create_order(
        status=OrderStatus.PENDING.value,
        total_amount=pricing.total_amount,
        shipment_amount=pricing.shipment_amount,
        total_weight=pricing.total_weight,
        product_list=raw,
    )
    logger.info(
        "order created: order_id=%s products=%s total_amount=%s shipment_amount=%s",
        order.id,
        [p.id for p in products],
        pricing.total_amount,
        pricing.shipment_amount,
    )
    return AssembledOrder(order=order, pricing=pricing, product_ids=product_ids)
