"""Team domain model."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Team(Base):
    """A competing group whose members' contributions yield a score.

    ``total_points`` is a cached copy of the team's points ledger sum and is
    only ever written by ``points_service.apply_points``.
    """

    __tablename__ = "teams"

    team_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False, unique=True)
    is_active = Column(Boolean, nullable=False, default=True)
    total_points = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    members = relationship("User", back_populates="team")
    donations = relationship("Donation", back_populates="team")
    sales = relationship("Sale", back_populates="team")
    photos = relationship("Photo", back_populates="team")
    activity_submissions = relationship("ActivitySubmission", back_populates="team")
    manual_awards = relationship("ManualPointsAward", back_populates="team")
    ledger_entries = relationship("PointsLedger", back_populates="team")
