"""Product sale model."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Sale(Base):
    """A completed merchandise or ticket sale credited to a team."""

    __tablename__ = "sales"
    __table_args__ = (CheckConstraint("quantity > 0", name="sales_quantity_positive"),)

    sale_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.product_id", ondelete="RESTRICT"), nullable=False)
    team_id = Column(Uuid(as_uuid=True), ForeignKey("teams.team_id", ondelete="RESTRICT"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="SET NULL"))
    seller_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="SET NULL"))
    donation_id = Column(Uuid(as_uuid=True), ForeignKey("donations.donation_id", ondelete="SET NULL"))
    quantity = Column(Integer, nullable=False)
    amount_paid = Column(Float, nullable=False, default=0)
    payment_method = Column(String, nullable=False, default="cash")
    points_awarded = Column(Integer, nullable=False, default=0)
    sold_at = Column(DateTime, default=utcnow, nullable=False)

    product = relationship("Product", back_populates="sales")
    team = relationship("Team", back_populates="sales")
    donation = relationship("Donation")
