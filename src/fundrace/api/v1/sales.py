"""Product and ticket sale endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...realtime import Broadcaster
from ...schemas import SaleCreate, SaleRead
from ...services import leaderboard_service, sale_service
from ...services.points_service import PointsRuleViolation
from ..deps import get_broadcaster

router = APIRouter(prefix="/sales", tags=["sales"])


def _record_sale(db: Session, payload: SaleCreate) -> SaleRead:
    try:
        sale = sale_service.create_sale(
            db,
            product_id=payload.product_id,
            user_id=payload.user_id,
            seller_id=payload.seller_id,
            quantity=payload.quantity,
            payment_method=payload.payment_method,
            amount_paid=payload.amount_paid,
        )
        db.commit()
        db.refresh(sale)
        return SaleRead.model_validate(sale)
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


def _undo_sale(db: Session, sale_id: UUID, seller_id: UUID) -> SaleRead:
    try:
        sale = sale_service.delete_sale(db, sale_id=sale_id, seller_id=seller_id)
        response = SaleRead.model_validate(sale)
        db.commit()
        return response
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post(
    "",
    response_model=SaleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Sell a product",
    responses={
        400: {"description": "Insufficient inventory or student without a team"},
        404: {"description": "Product or user not found"},
    },
)
async def create_sale(
    payload: SaleCreate,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> SaleRead:
    """Sell to a student; stock, donation record and team points change in one transaction."""

    response = await run_in_threadpool(_record_sale, db, payload)
    await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    return response


@router.delete(
    "/{sale_id}",
    response_model=SaleRead,
    summary="Delete a sale",
    responses={
        403: {"description": "Sale was made by another seller"},
        404: {"description": "Sale not found"},
    },
)
async def delete_sale(
    sale_id: UUID,
    seller_id: UUID = Query(..., alias="sellerId", description="Seller undoing their own sale"),
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> SaleRead:
    """Undo a sale, restoring inventory and removing the points it earned."""

    response = await run_in_threadpool(_undo_sale, db, sale_id, seller_id)
    await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    return response
