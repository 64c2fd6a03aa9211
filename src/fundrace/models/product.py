"""Sellable merchandise and ticket catalogue."""

import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Float, Integer, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Product(Base):
    """A shirt, ticket or other item coaches can sell on behalf of a team."""

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="products_stock_positive"),
        CheckConstraint("points >= 0", name="products_points_positive"),
    )

    product_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0)
    points = Column(Integer)
    stock = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    sales = relationship("Sale", back_populates="product")
