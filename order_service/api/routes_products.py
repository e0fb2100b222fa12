from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from order_service.api.utils import created, isoformat_utc, no_content
from order_service.domain.errors import NotFoundError
from order_service.persistence.db import get_session
from order_service.persistence.models import MAX_INT, ProductModel
from order_service.persistence.store import SqlStore

router = APIRouter(tags=["products"])


class ProductCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    price: int = Field(ge=0, le=MAX_INT)
    weight: int = Field(ge=0, le=MAX_INT)


def product_to_dict(product: ProductModel) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "weight": product.weight,
        "created_at": isoformat_utc(product.created_at),
        "updated_at": isoformat_utc(product.updated_at),
    }


@router.post("/products", status_code=201)
def create_product(request: ProductCreateRequest, session: Session = Depends(get_session)):
    product = SqlStore(session).create_product(name=request.name, price=request.price, weight=request.weight)
    return created(f"/products/{product.id}")


@router.get("/products")
def list_products(
    sort: str | None = Query(default=None, description="field to sort by, ascending"),
    session: Session = Depends(get_session),
):
    return [product_to_dict(p) for p in SqlStore(session).list_products(sort=sort)]


@router.get("/products/{product_id}")
def get_product(product_id: int, session: Session = Depends(get_session)):
    product = SqlStore(session).get_product(product_id)
    if product is None:
        raise NotFoundError("product", product_id)
    return product_to_dict(product)


@router.delete("/products", status_code=204)
def delete_products(session: Session = Depends(get_session)):
    SqlStore(session).delete_products()
    return no_content()
