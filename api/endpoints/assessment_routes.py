"""
api/endpoints/assessment_routes.py — Routes for assessment submission and review.

POST /api/submit-assessment    — Score, store, and email one questionnaire
GET  /api/assessments          — List assessments (filterable by tier)  [admin]
GET  /api/assessments/stats    — Counts by readiness level              [admin]
GET  /api/assessments/{id}     — Get a single assessment                [admin]

Admin routes require the X-Admin-Key header to match ADMIN_API_KEY.
"""

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.config import settings
from app.db.repository import count_by_readiness_level, get_assessment, list_assessments
from app.db.session import get_db
from app.outreach.mailer import AssessmentMailer, get_mailer
from app.services.assessment_service import submit_assessment
from app.services.errors import PersistenceError, SubmissionValidationError
from app.services.scoring import ReadinessLevel
from app.services.submission import RequestMetadata
from api.schemas import AssessmentOut, AssessmentSubmission, AssessmentSubmitted, ErrorResponse

logger = logging.getLogger(__name__)
router = APIRouter()

SUBMIT_FAILED_MESSAGE = "Failed to submit assessment. Please try again."


def _request_metadata(request: Request) -> RequestMetadata:
    """Pull session id, user agent, and client address from the request."""
    forwarded_for = request.headers.get("x-forwarded-for", "")
    ip_address = forwarded_for.split(",")[0].strip() or (
        request.client.host if request.client else None
    )
    return RequestMetadata(
        session_id=request.headers.get("x-session-id") or "unknown",
        user_agent=request.headers.get("user-agent", ""),
        ip_address=ip_address,
    )


def require_admin_key(x_admin_key: Optional[str] = Header(default=None)) -> None:
    """Reject admin reads without a matching X-Admin-Key. No configured key means no access."""
    expected = settings.admin_api_key
    if not expected or not x_admin_key or not secrets.compare_digest(x_admin_key, expected):
        raise HTTPException(status_code=401, detail="Missing or invalid admin key.")


def _server_error() -> JSONResponse:
    body = ErrorResponse(error="Internal server error", message=SUBMIT_FAILED_MESSAGE)
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


@router.post(
    "/submit-assessment",
    response_model=AssessmentSubmitted,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Submit an AI readiness assessment",
)
def submit(
    payload: AssessmentSubmission,
    request: Request,
    db: Session = Depends(get_db),
    mailer: AssessmentMailer = Depends(get_mailer),
):
    """
    Score the questionnaire, store it, and email the tier results.
    Email delivery is best-effort and never fails the request.
    """
    try:
        outcome = submit_assessment(
            db=db,
            payload=payload.model_dump(),
            metadata=_request_metadata(request),
            mailer=mailer,
        )
    except SubmissionValidationError as exc:
        body = ErrorResponse(error="Missing required field", message=str(exc), field=exc.field)
        return JSONResponse(status_code=400, content=body.model_dump())
    except PersistenceError:
        return _server_error()
    except Exception:
        logger.exception("Assessment submission error")
        return _server_error()

    return AssessmentSubmitted(
        assessment_id=outcome.assessment_id,
        total_score=outcome.total_score,
        readiness_level=outcome.readiness_level,
        message=outcome.message,
    )


@router.get(
    "/assessments",
    response_model=list[AssessmentOut],
    dependencies=[Depends(require_admin_key)],
    summary="List assessments",
)
def list_all(
    readiness_level: Optional[ReadinessLevel] = Query(
        default=None,
        description="Filter by readiness level. Omit to return all assessments.",
    ),
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    """Return the most recent assessments, optionally filtered by tier."""
    return list_assessments(db, limit=limit, readiness_level=readiness_level)


@router.get(
    "/assessments/stats",
    dependencies=[Depends(require_admin_key)],
    summary="Assessment counts by readiness level",
)
def assessment_stats(db: Session = Depends(get_db)):
    """Return aggregate assessment counts grouped by readiness level."""
    stats = {level.value: count for level, count in count_by_readiness_level(db).items()}
    stats["total"] = sum(stats.values())
    return stats


@router.get(
    "/assessments/{assessment_id}",
    response_model=AssessmentOut,
    dependencies=[Depends(require_admin_key)],
    summary="Get assessment by ID",
)
def get_one(assessment_id: int, db: Session = Depends(get_db)):
    """Fetch a single assessment by its database ID."""
    assessment = get_assessment(db, assessment_id)
    if not assessment:
        raise HTTPException(status_code=404, detail=f"Assessment {assessment_id} not found.")
    return assessment
