"""App configuration endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import ConfigUpdate
from ...services import config_service

router = APIRouter(prefix="/config", tags=["config"])


@router.get("", response_model=dict[str, str], summary="All configuration values")
def get_config(db: Session = Depends(get_db)) -> dict[str, str]:
    return config_service.get_config(db)


@router.put("", response_model=dict[str, str], summary="Set a configuration value")
def update_config(payload: ConfigUpdate, db: Session = Depends(get_db)) -> dict[str, str]:
    """Upsert one key, e.g. ``{"key": "donationGoal", "value": 75000}``, and return the full configuration."""

    config_service.set_config(db, key=payload.key, value=payload.value, updated_by=payload.updated_by)
    db.commit()
    return config_service.get_config(db)
