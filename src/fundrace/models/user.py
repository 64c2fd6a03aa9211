"""User domain model."""

import enum
import uuid

from sqlalchemy import Column, DateTime, Enum as SAEnum, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class UserRole(str, enum.Enum):
    """Dashboard roles."""

    STUDENT = "STUDENT"
    COACH = "COACH"
    STAFF = "STAFF"
    ADMIN = "ADMIN"


class User(Base):
    """Platform user, optionally a member of one team."""

    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)
    role = Column(SAEnum(UserRole, name="user_role"), nullable=False, default=UserRole.STUDENT)
    team_id = Column(Uuid(as_uuid=True), ForeignKey("teams.team_id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=utcnow, nullable=False)

    team = relationship("Team", back_populates="members")
