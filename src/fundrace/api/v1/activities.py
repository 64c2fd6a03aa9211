"""Activity and submission review endpoints."""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...realtime import ACTIVITY_REVIEWED, Broadcaster
from ...schemas import ActivityCreate, ActivityRead, SubmissionCreate, SubmissionRead, SubmissionReview
from ...services import activity_service, leaderboard_service
from ...services.points_service import PointsRuleViolation
from ..deps import get_broadcaster

router = APIRouter(prefix="/activities", tags=["activities"])


@router.post("", response_model=ActivityRead, status_code=status.HTTP_201_CREATED, summary="Create an activity")
def create_activity(payload: ActivityCreate, db: Session = Depends(get_db)) -> ActivityRead:
    """Create an activity with typed requirement fields.

    Example request body::

        {
            "title": "Car wash",
            "points": 100,
            "requirements": [
                {"kind": "photo_url", "name": "proof"},
                {"kind": "number", "name": "cars", "minimum": 1, "maximum": 500}
            ]
        }
    """

    activity = activity_service.create_activity(
        db,
        title=payload.title,
        description=payload.description,
        points=payload.points,
        requirements=payload.requirements,
    )
    db.commit()
    db.refresh(activity)
    return ActivityRead.model_validate(activity)


@router.get("", response_model=List[ActivityRead], summary="List active activities")
def list_activities(db: Session = Depends(get_db)) -> List[ActivityRead]:
    return [ActivityRead.model_validate(activity) for activity in activity_service.list_activities(db)]


@router.post(
    "/{activity_id}/submissions",
    response_model=SubmissionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an activity",
    responses={
        400: {"description": "Inactive activity, student without a team or already approved"},
        404: {"description": "Activity or user not found"},
        422: {"description": "Submission does not satisfy the activity requirements"},
    },
)
def submit_activity(
    activity_id: UUID,
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
) -> SubmissionRead:
    try:
        submission = activity_service.submit_activity(
            db,
            activity_id=activity_id,
            user_id=payload.user_id,
            submission_data=payload.submission_data,
            notes=payload.notes,
        )
        db.commit()
        db.refresh(submission)
        return SubmissionRead.model_validate(submission)
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


def _review(db: Session, submission_id: UUID, payload: SubmissionReview) -> SubmissionRead:
    try:
        submission = activity_service.review_submission(
            db,
            submission_id=submission_id,
            reviewer_id=payload.reviewer_id,
            approve=payload.approve,
            points_awarded=payload.points_awarded,
            notes=payload.notes,
        )
        db.commit()
        db.refresh(submission)
        return SubmissionRead.model_validate(submission)
    except PointsRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post(
    "/submissions/{submission_id}/review",
    response_model=SubmissionRead,
    summary="Approve or reject a submission",
    responses={
        400: {"description": "Submission already reviewed"},
        404: {"description": "Submission or reviewer not found"},
    },
)
async def review_submission(
    submission_id: UUID,
    payload: SubmissionReview,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> SubmissionRead:
    response = await run_in_threadpool(_review, db, submission_id, payload)
    if payload.approve:
        await leaderboard_service.recompute_and_broadcast(db, broadcaster)
    await leaderboard_service.notify_team(
        broadcaster,
        response.team_id,
        ACTIVITY_REVIEWED,
        {
            "submissionId": str(response.submission_id),
            "activityId": str(response.activity_id),
            "status": response.status.value,
            "pointsAwarded": response.points_awarded,
        },
    )
    return response
