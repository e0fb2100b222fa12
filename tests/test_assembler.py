from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from order_service.domain.errors import UnknownReferenceError, ValidationError
from order_service.domain.orders import assemble_order, coerce_product_ids, validate_product_list
from order_service.persistence.models import OrderModel


def _count_orders(session) -> int:
    return session.scalar(select(func.count()).select_from(OrderModel))


@pytest.mark.parametrize("raw", [None, "1,2", {"id": 1}, 3, []])
def test_rejects_missing_or_malformed_product_list(raw):
    with pytest.raises(ValidationError) as excinfo:
        validate_product_list(raw)
    assert excinfo.value.errors[0].key == "product_list"


def test_reports_every_non_numeric_entry():
    with pytest.raises(ValidationError) as excinfo:
        validate_product_list([1, "abc", True, None, "2"])

    keys = [e.key for e in excinfo.value.errors]
    assert keys == ["product_list.1", "product_list.2", "product_list.3"]


def test_coercion_truncates_and_drops_unusable_ids():
    assert coerce_product_ids([3, "4", 5.9, "6.2", 0, -1, "-7", 3]) == [3, 4, 5, 6]


def test_creates_pending_order_with_raw_product_list(store, session):
    keyboard = store.create_product(name="keyboard", price=100, weight=5)
    mouse = store.create_product(name="mouse", price=40, weight=2)
    raw = [str(keyboard.id), mouse.id]

    assembled = assemble_order(store, raw)

    order = assembled.order
    assert order.id is not None
    assert order.status == "pending"
    assert order.total_weight == 7
    assert order.shipment_amount == 25
    assert order.total_amount == Decimal("165")
    assert order.product_list == raw
    assert _count_orders(session) == 1


def test_unknown_ids_are_ignored_when_one_exists(store):
    product = store.create_product(name="lamp", price=1001, weight=0)

    assembled = assemble_order(store, [product.id, 99999])

    assert assembled.order.total_amount == Decimal("950.95")
    assert assembled.order.product_list == [product.id, 99999]


def test_duplicate_ids_are_priced_once(store):
    product = store.create_product(name="cable", price=10, weight=1)

    assembled = assemble_order(store, [product.id, product.id])

    assert assembled.pricing.subtotal == 10
    assert assembled.product_ids == [product.id]


def test_all_unusable_ids_fail_validation(store, session):
    with pytest.raises(ValidationError) as excinfo:
        assemble_order(store, [0, -3, "0.4"])

    assert not isinstance(excinfo.value, UnknownReferenceError)
    assert _count_orders(session) == 0


def test_no_existing_product_is_an_unknown_reference(store, session):
    with pytest.raises(UnknownReferenceError) as excinfo:
        assemble_order(store, [424242, 434343])

    assert excinfo.value.errors[0].key == "product_list"
    assert excinfo.value.errors[0].message == "Unknown products"
    assert _count_orders(session) == 0


def test_ids_beyond_integer_column_are_dropped(store):
    product = store.create_product(name="shelf", price=70, weight=4)

    assert coerce_product_ids([product.id, 1e20, "99999999999999999999", 2**31]) == [product.id]

    assembled = assemble_order(store, [product.id, 1e20])
    assert assembled.product_ids == [product.id]


def test_only_oversized_ids_fail_validation(store, session):
    with pytest.raises(ValidationError) as excinfo:
        assemble_order(store, ["99999999999999999999", 1e20])

    assert not isinstance(excinfo.value, UnknownReferenceError)
    assert _count_orders(session) == 0
