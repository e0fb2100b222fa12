from order_service.domain.orders.assembler import (
    AssembledOrder,
    assemble_order,
    coerce_product_ids,
    validate_product_list,
)
from order_service.domain.orders.status import (
    BillingPolicy,
    OrderStatus,
    StatusChange,
    change_order_status,
    parse_status,
    transition,
)

__all__ = [
    "AssembledOrder",
    "BillingPolicy",
    "OrderStatus",
    "StatusChange",
    "assemble_order",
    "change_order_status",
    "coerce_product_ids",
    "parse_status",
    "transition",
    "validate_product_list",
]
