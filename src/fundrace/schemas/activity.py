"""Pydantic schemas for activities and their submissions.

An activity's ``requirements`` is a list of typed fields. Each field kind
carries its own constraints and ``validate_submission`` checks submitted
data against all of them in one place.
"""

import math
from datetime import datetime
from typing import Annotated, Any, List, Literal, Optional, Union
from urllib.parse import urlparse
from uuid import UUID

from pydantic import Field

from ..models.activity import SubmissionStatus
from .common import CamelModel


class PhotoUrlField(CamelModel):
    kind: Literal["photo_url"] = "photo_url"
    name: str = Field(..., min_length=1, max_length=64)
    required: bool = True


class NumberField(CamelModel):
    kind: Literal["number"] = "number"
    name: str = Field(..., min_length=1, max_length=64)
    required: bool = True
    minimum: Optional[float] = None
    maximum: Optional[float] = None


class TextField(CamelModel):
    kind: Literal["text"] = "text"
    name: str = Field(..., min_length=1, max_length=64)
    required: bool = True
    max_length: int = Field(1000, gt=0)


RequirementField = Annotated[Union[PhotoUrlField, NumberField, TextField], Field(discriminator="kind")]


def _check_photo_url(field: PhotoUrlField, value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return f"{field.name} must be a URL"
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return f"{field.name} must be an http(s) URL"
    return None


def _check_number(field: NumberField, value: Any) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return f"{field.name} must be a number"
    if not math.isfinite(value):
        return f"{field.name} must be a finite number"
    if field.minimum is not None and value < field.minimum:
        return f"{field.name} must be at least {field.minimum:g}"
    if field.maximum is not None and value > field.maximum:
        return f"{field.name} must be at most {field.maximum:g}"
    return None


def _check_text(field: TextField, value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return f"{field.name} must be text"
    if len(value) > field.max_length:
        return f"{field.name} must be at most {field.max_length} characters"
    return None


_CHECKS = {
    "photo_url": _check_photo_url,
    "number": _check_number,
    "text": _check_text,
}


def validate_submission(requirements: List[RequirementField], data: dict[str, Any]) -> List[str]:
    """Return a list of human readable problems; empty when ``data`` satisfies every field."""

    errors: List[str] = []
    for field in requirements:
        value = data.get(field.name)
        if value is None or value == "":
            if field.required:
                errors.append(f"{field.name} is required")
            continue
        problem = _CHECKS[field.kind](field, value)
        if problem:
            errors.append(problem)
    return errors


class ActivityCreate(CamelModel):
    """Request body for creating an activity."""

    title: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = Field(None, max_length=2000)
    points: int = Field(..., ge=0, le=10000)
    requirements: List[RequirementField] = Field(default_factory=list)


class ActivityRead(CamelModel):
    """Activity response payload."""

    activity_id: UUID
    title: str
    description: Optional[str]
    points: int
    requirements: List[RequirementField]
    is_active: bool
    created_at: datetime


class SubmissionCreate(CamelModel):
    """A student's answers for an activity."""

    user_id: UUID
    submission_data: dict[str, Any] = Field(default_factory=dict)
    notes: Optional[str] = Field(None, max_length=1000)


class SubmissionReview(CamelModel):
    """Coach or staff decision on a pending submission."""

    reviewer_id: UUID
    approve: bool
    points_awarded: Optional[int] = Field(None, ge=0, le=10000, description="Defaults to the activity's points.")
    notes: Optional[str] = Field(None, max_length=1000)


class SubmissionRead(CamelModel):
    """Activity submission response payload."""

    submission_id: UUID
    activity_id: UUID
    user_id: UUID
    team_id: UUID
    status: SubmissionStatus
    submission_data: dict[str, Any]
    notes: Optional[str]
    points_awarded: Optional[int]
    reviewed_at: Optional[datetime]
    created_at: datetime
