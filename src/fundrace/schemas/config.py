"""Pydantic schemas for the key-value app configuration."""

from typing import Optional, Union
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class ConfigUpdate(CamelModel):
    """Upsert one configuration value; values are stored as strings."""

    key: str = Field(..., min_length=1, max_length=64)
    value: Union[str, int, float, bool]
    updated_by: Optional[UUID] = None
