"""Domain logic for merchandise and ticket sales."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..models import Donation, PointsEventType, Product, Sale
from . import points_service
from .points_service import PointsRuleViolation, ensure_user


def _ensure_product(session: Session, product_id: UUID) -> Product:
    stmt = select(Product).where(Product.product_id == product_id).with_for_update(nowait=False)
    product = session.execute(stmt).scalar_one_or_none()
    if product is None or not product.is_active:
        raise PointsRuleViolation("Product not found or inactive", status_code=404)
    return product


def create_sale(
    session: Session,
    *,
    product_id: UUID,
    user_id: UUID,
    seller_id: UUID,
    quantity: int,
    payment_method: str = "cash",
    amount_paid: Optional[float] = None,
) -> Sale:
    """Sell a product to a student: take stock, record the money raised and credit the team."""

    product = _ensure_product(session, product_id)
    buyer = ensure_user(session, user_id)
    ensure_user(session, seller_id)

    if buyer.team_id is None:
        raise PointsRuleViolation("Student is not on a team.")
    if product.stock < quantity:
        raise PointsRuleViolation("Insufficient inventory")

    product.stock -= quantity

    amount = amount_paid if amount_paid is not None else product.price * quantity
    per_unit = product.points if product.points is not None else get_settings().shirt_sale_points

    donation = Donation(team_id=buyer.team_id, user_id=buyer.user_id, amount=amount)
    sale = Sale(
        product=product,
        team_id=buyer.team_id,
        user_id=buyer.user_id,
        seller_id=seller_id,
        donation=donation,
        quantity=quantity,
        amount_paid=amount,
        payment_method=payment_method,
        points_awarded=per_unit * quantity,
    )
    session.add_all([donation, sale])
    session.flush()

    points_service.apply_points(
        session,
        team_id=buyer.team_id,
        points_delta=sale.points_awarded,
        event_type=PointsEventType.SALE,
        source_id=sale.sale_id,
        reason=f"Sale: {quantity} x {product.name}",
    )

    session.refresh(sale)
    return sale


def delete_sale(session: Session, *, sale_id: UUID, seller_id: UUID) -> Sale:
    """Undo a sale made by ``seller_id``: restore stock, drop its donation and reverse its points.

    The returned instance is deleted once the session flushes; read what you
    need from it before committing.
    """

    stmt = (
        select(Sale)
        .where(Sale.sale_id == sale_id)
        .with_for_update(nowait=False)
        .execution_options(populate_existing=True)
    )
    sale = session.execute(stmt).scalar_one_or_none()
    if sale is None:
        raise PointsRuleViolation("Sale not found", status_code=404)
    if sale.seller_id != seller_id:
        raise PointsRuleViolation("You can only delete sales you made", status_code=403)

    product = session.execute(
        select(Product).where(Product.product_id == sale.product_id).with_for_update(nowait=False)
    ).scalar_one()
    product.stock += sale.quantity

    awarded = points_service.points_awarded_for(session, PointsEventType.SALE, sale.sale_id)
    if awarded:
        points_service.apply_points(
            session,
            team_id=sale.team_id,
            points_delta=-awarded,
            event_type=PointsEventType.SALE_REVERSED,
            source_id=sale.sale_id,
            reason=f"Sale deleted: {sale.quantity} x {product.name}",
        )

    donation = sale.donation
    session.delete(sale)
    session.flush()
    if donation is not None:
        session.delete(donation)
        session.flush()
    return sale
