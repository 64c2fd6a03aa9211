"""Team photo submission model."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Photo(Base):
    """Photo uploaded by a team member, pending until staff approve it."""

    __tablename__ = "photos"

    photo_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    team_id = Column(Uuid(as_uuid=True), ForeignKey("teams.team_id", ondelete="CASCADE"), nullable=False)
    url = Column(String, nullable=False)
    file_name = Column(String)
    approved = Column(Boolean, nullable=False, default=False)
    uploaded_at = Column(DateTime, default=utcnow, nullable=False)
    approved_at = Column(DateTime)

    team = relationship("Team", back_populates="photos")
