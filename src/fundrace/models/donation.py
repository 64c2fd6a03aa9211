"""Donation model."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Donation(Base):
    """Money raised for a team, either directly or through a sale."""

    __tablename__ = "donations"
    __table_args__ = (CheckConstraint("amount >= 0", name="donations_amount_positive"),)

    donation_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    team_id = Column(Uuid(as_uuid=True), ForeignKey("teams.team_id", ondelete="RESTRICT"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="SET NULL"))
    amount = Column(Float, nullable=False)
    currency = Column(String(3), nullable=False, default="usd")
    created_at = Column(DateTime, default=utcnow, nullable=False)

    team = relationship("Team", back_populates="donations")
    user = relationship("User")
