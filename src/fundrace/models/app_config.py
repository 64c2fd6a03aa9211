"""Key-value application configuration model."""

from sqlalchemy import Column, DateTime, String, Uuid

from ..core.database import Base
from ..utils.datetime import utcnow


class AppConfig(Base):
    """Admin-editable setting such as ``donationGoal``."""

    __tablename__ = "app_config"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
    updated_by = Column(Uuid(as_uuid=True))
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
