"""Key-value application configuration."""

from __future__ import annotations

import logging
from typing import Optional, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..models import AppConfig
from ..utils.datetime import utcnow

logger = logging.getLogger(__name__)

DONATION_GOAL_KEY = "donationGoal"


def get_config(session: Session) -> dict[str, str]:
    """Return every stored setting as a flat mapping."""

    rows = session.execute(select(AppConfig).order_by(AppConfig.key)).scalars().all()
    return {row.key: row.value for row in rows}


def set_config(
    session: Session,
    *,
    key: str,
    value: Union[str, int, float, bool],
    updated_by: Optional[UUID] = None,
) -> AppConfig:
    """Insert or replace one setting."""

    entry = session.get(AppConfig, key)
    if entry is None:
        entry = AppConfig(key=key)
        session.add(entry)
    entry.value = str(value)
    entry.updated_by = updated_by
    entry.updated_at = utcnow()
    session.flush()
    return entry


def get_donation_goal(session: Session) -> float:
    """Return the configured fundraising goal, or the default when unset or unparseable."""

    default = get_settings().donation_goal_default
    raw = session.execute(select(AppConfig.value).where(AppConfig.key == DONATION_GOAL_KEY)).scalar_one_or_none()
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("ignoring non-numeric %s value %r", DONATION_GOAL_KEY, raw)
        return default
