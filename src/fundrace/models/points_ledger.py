"""Points ledger model capturing every change to a team's score."""

import enum

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class PointsEventType(str, enum.Enum):
    """Ledger event classification."""

    DONATION = "DONATION"
    SALE = "SALE"
    SALE_REVERSED = "SALE_REVERSED"
    PHOTO_APPROVED = "PHOTO_APPROVED"
    PHOTO_REVOKED = "PHOTO_REVOKED"
    ACTIVITY_APPROVED = "ACTIVITY_APPROVED"
    MANUAL_AWARD = "MANUAL_AWARD"
    POINTS_RESET = "POINTS_RESET"


class PointsLedger(Base):
    """Immutable ledger of point deltas for each team."""

    __tablename__ = "points_ledger"
    __table_args__ = (
        CheckConstraint(
            "((event_type IN ('SALE_REVERSED', 'PHOTO_REVOKED') AND points_delta <= 0) "
            "OR (event_type IN ('DONATION', 'SALE', 'PHOTO_APPROVED', 'ACTIVITY_APPROVED', 'MANUAL_AWARD') "
            "AND points_delta >= 0) "
            "OR event_type = 'POINTS_RESET')",
            name="points_ledger_delta_sign",
        ),
    )

    ledger_entry_id = Column(Integer, primary_key=True, autoincrement=True)
    team_id = Column(Uuid(as_uuid=True), ForeignKey("teams.team_id", ondelete="CASCADE"), nullable=False)
    event_type = Column(Enum(PointsEventType, name="points_event_type"), nullable=False)
    points_delta = Column(Integer, nullable=False)
    source_id = Column(Uuid(as_uuid=True))
    reason = Column(String)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    team = relationship("Team", back_populates="ledger_entries")
