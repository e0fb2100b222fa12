from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from order_service.api.utils import created, isoformat_utc, no_content
from order_service.core.config import get_settings
from order_service.domain.errors import NotFoundError
from order_service.domain.orders import assemble_order, change_order_status
from order_service.persistence.db import get_session
from order_service.persistence.models import OrderModel
from order_service.persistence.store import SqlStore

router = APIRouter(tags=["orders"])


class OrderCreateRequest(BaseModel):
    # Shape is checked by the assembler so the error format stays the same
    # for every entry point.
    product_list: Any = None


class StatusChangeRequest(BaseModel):
    status: Any = None


def order_to_dict(order: OrderModel) -> dict:
    return {
        "id": order.id,
        "status": order.status,
        "shipment_amount": order.shipment_amount,
        "total_amount": order.total_amount,
        "total_weight": order.total_weight,
        "product_list": order.product_list,
        "created_at": isoformat_utc(order.created_at),
        "updated_at": isoformat_utc(order.updated_at),
    }


@router.post("/orders", status_code=201)
def create_order(request: OrderCreateRequest, session: Session = Depends(get_session)):
    assembled = assemble_order(SqlStore(session), request.product_list)
    return created(f"/orders/{assembled.order.id}")


@router.get("/orders")
def list_orders(
    sort: str | None = Query(default=None, description="field to sort by, ascending"),
    session: Session = Depends(get_session),
):
    return [order_to_dict(o) for o in SqlStore(session).list_orders(sort=sort)]


@router.get("/orders/{order_id}")
def get_order(order_id: int, session: Session = Depends(get_session)):
    order = SqlStore(session).find_order_by_id(order_id)
    if order is None:
        raise NotFoundError("order", order_id)
    return order_to_dict(order)


@router.delete("/orders", status_code=204)
def delete_orders(session: Session = Depends(get_session)):
    SqlStore(session).delete_orders()
    return no_content()


@router.put("/orders/{order_id}/status")
def update_order_status(
    order_id: int,
    request: StatusChangeRequest | None = None,
    session: Session = Depends(get_session),
):
    change_order_status(
        SqlStore(session),
        order_id,
        request.status if request is not None else None,
        policy=get_settings().bill_policy,
    )
    return Response(status_code=200)
