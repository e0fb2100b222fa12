from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from order_service.api.utils import isoformat_utc, no_content
from order_service.persistence.db import get_session
from order_service.persistence.store import SqlStore

router = APIRouter(tags=["bills"])


@router.get("/bills")
def list_bills(session: Session = Depends(get_session)):
    return [
        {
            "id": bill.id,
            "total_amount": bill.total_amount,
            "created_at": isoformat_utc(bill.created_at),
        }
        for bill in SqlStore(session).list_bills()
    ]


@router.delete("/bills", status_code=204)
def delete_bills(session: Session = Depends(get_session)):
    SqlStore(session).delete_bills()
    return no_content()
