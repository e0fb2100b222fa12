"""Order pricing: shipment cost, subtotal and volume discount.

Everything here is pure. Amounts are ``Decimal`` so that the discounted total
stays exact (``1001 * 0.95 == 950.95``); it is never rounded.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

SHIPMENT_PRICE_STEP = 25
SHIPMENT_WEIGHT_STEP = 10
DISCOUNT_THRESHOLD = 1000
DISCOUNT_RATIO = Decimal("0.95")


@dataclass(frozen=True)
class LineItem:
    price: int
    weight: int


@dataclass(frozen=True)
class PricingResult:
    total_weight: int
    shipment_amount: int
    subtotal: int
    total_amount: Decimal

    @property
    def discounted(self) -> bool:
        return self.total_amount != self.subtotal + self.shipment_amount


def shipment_amount_for(total_weight: int) -> int:
    # Half a bracket rounds up: weight 5 already costs one step.
    brackets = (Decimal(total_weight) / SHIPMENT_WEIGHT_STEP).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return SHIPMENT_PRICE_STEP * int(brackets)


def apply_discount(amount: int) -> Decimal:
    total = Decimal(amount)
    if total > DISCOUNT_THRESHOLD:
        total = total * DISCOUNT_RATIO
    return total


def compute_pricing(items: Iterable[LineItem]) -> PricingResult:
    items = list(items)
    total_weight = sum(item.weight for item in items)
    subtotal = sum(item.price for item in items)
    shipment = shipment_amount_for(total_weight)
    return PricingResult(
        total_weight=total_weight,
        shipment_amount=shipment,
        subtotal=subtotal,
        total_amount=apply_discount(subtotal + shipment),
    )
