"""Manual points award model."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class ManualPointsAward(Base):
    """Points granted by staff for an activity done outside the app."""

    __tablename__ = "manual_points_awards"
    __table_args__ = (CheckConstraint("points > 0", name="manual_points_awards_points_positive"),)

    award_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    team_id = Column(Uuid(as_uuid=True), ForeignKey("teams.team_id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="SET NULL"))
    awarded_by_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="SET NULL"))
    points = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    team = relationship("Team", back_populates="manual_awards")
