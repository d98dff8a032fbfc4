"""
app/services/assessment_service.py — Business logic orchestrating the
validation → scoring → persistence → notification pipeline.

The pipeline runs in two phases with separate error channels:
  1. record  — validate, score, classify, and store the assessment.
               Failures here are fatal and reported to the caller.
  2. notify  — render and send the tier email, then flag the record.
               Failures here are logged and never change the outcome.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db import repository
from app.db.models import Assessment
from app.outreach.mailer import AssessmentMailer
from app.outreach.templates import render_assessment_email
from app.services.errors import NotificationError, PersistenceError
from app.services.scoring import ReadinessLevel, calculate_score, classify_readiness
from app.services.submission import RequestMetadata, Submission, parse_submission

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Assessment submitted successfully. Check your email for detailed results."


@dataclass(frozen=True)
class AssessmentOutcome:
    """What the caller gets back for an accepted submission."""
    assessment_id: int
    total_score: int
    readiness_level: ReadinessLevel
    email_sent: bool
    message: str = SUCCESS_MESSAGE


def score_submission(submission: Submission) -> tuple[int, ReadinessLevel]:
    """Compute the score and readiness tier for a validated submission."""
    score = calculate_score(submission)
    return score, classify_readiness(score)


def record_assessment(
    db: Session,
    submission: Submission,
    metadata: RequestMetadata,
) -> Assessment:
    """
    Score a submission and commit it to the store.

    Raises:
        PersistenceError: if the insert or commit fails. Nothing is stored.
    """
    score, level = score_submission(submission)
    try:
        assessment = repository.create_assessment(
            db=db,
            submission=submission,
            total_score=score,
            readiness_level=level,
            metadata=metadata,
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to store assessment for %s: %s", submission.company, exc)
        raise PersistenceError("Failed to store assessment") from exc
    return assessment


def send_results_email(
    db: Session,
    assessment: Assessment,
    mailer: AssessmentMailer,
) -> bool:
    """
    Best-effort delivery of the tier email for a stored assessment.

    Returns:
        True if the email was delivered and the record flagged, False otherwise.
        Never raises.
    """
    assessment_id = assessment.id
    to_address = assessment.email

    try:
        email = render_assessment_email(
            level=assessment.readiness_level,
            name=assessment.name,
            company=assessment.company,
            score=assessment.total_score,
        )
        delivered = mailer.send(to_address=to_address, email=email)
        if not delivered:
            return False

        repository.mark_email_sent(db, assessment_id)
        db.commit()
        return True
    except NotificationError as exc:
        db.rollback()
        logger.error("Email sending failed for assessment %d: %s", assessment_id, exc)
    except Exception:
        db.rollback()
        logger.exception("Unexpected error notifying %s for assessment %d", to_address, assessment_id)
    return False


def submit_assessment(
    db: Session,
    payload: Mapping[str, Any],
    metadata: Optional[RequestMetadata] = None,
    mailer: Optional[AssessmentMailer] = None,
) -> AssessmentOutcome:
    """
    Run the full submission pipeline for one request.

    Args:
        db:       Active SQLAlchemy session (owned by the caller).
        payload:  Decoded questionnaire answers.
        metadata: Session id, user agent, and client address.
        mailer:   Mail transport; a settings-based one is built if omitted.

    Returns:
        AssessmentOutcome for the stored record, whether or not the email went out.

    Raises:
        SubmissionValidationError: a required field is missing.
        PersistenceError:          the assessment could not be stored.
    """
    submission = parse_submission(payload)
    assessment = record_assessment(db, submission, metadata or RequestMetadata())

    # Read before notifying: a rollback in phase 2 expires the instance.
    assessment_id = assessment.id
    total_score = assessment.total_score
    readiness_level = assessment.readiness_level

    email_sent = send_results_email(db, assessment, mailer or AssessmentMailer())

    logger.info(
        "Assessment completed: %s (%s, Score: %d)",
        submission.company, readiness_level.value, total_score,
    )
    return AssessmentOutcome(
        assessment_id=assessment_id,
        total_score=total_score,
        readiness_level=readiness_level,
        email_sent=email_sent,
    )
