"""Activity and activity submission models."""

import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum as SAEnum, ForeignKey, Integer, JSON, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class SubmissionStatus(str, enum.Enum):
    """Review states for an activity submission."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Activity(Base):
    """A challenge students complete for points.

    ``requirements`` holds a list of field definitions, see
    ``schemas.activity.RequirementField``.
    """

    __tablename__ = "activities"

    activity_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    description = Column(String)
    points = Column(Integer, nullable=False, default=0)
    requirements = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    submissions = relationship("ActivitySubmission", back_populates="activity")


class ActivitySubmission(Base):
    """A student's answer to an activity, reviewed by a coach or staff member."""

    __tablename__ = "activity_submissions"

    submission_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    activity_id = Column(Uuid(as_uuid=True), ForeignKey("activities.activity_id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    team_id = Column(Uuid(as_uuid=True), ForeignKey("teams.team_id", ondelete="CASCADE"), nullable=False)
    status = Column(SAEnum(SubmissionStatus, name="submission_status"), nullable=False, default=SubmissionStatus.PENDING)
    submission_data = Column(JSON, nullable=False, default=dict)
    notes = Column(String)
    points_awarded = Column(Integer)
    reviewed_by_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="SET NULL"))
    reviewed_at = Column(DateTime)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    activity = relationship("Activity", back_populates="submissions")
    team = relationship("Team", back_populates="activity_submissions")
    user = relationship("User", foreign_keys=[user_id])
