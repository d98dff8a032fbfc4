"""
app/db/repository.py — All database read/write operations.

Business logic should never write raw SQL or ORM queries directly —
everything goes through this module. This keeps DB logic centralized
and easy to test/mock.
"""

import json
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models import Assessment
from app.services.scoring import ReadinessLevel
from app.services.submission import RequestMetadata, Submission

logger = logging.getLogger(__name__)


# ── Assessment ────────────────────────────────────────────────────────────────

def create_assessment(
    db: Session,
    submission: Submission,
    total_score: int,
    readiness_level: ReadinessLevel,
    metadata: RequestMetadata,
) -> Assessment:
    """Persist a scored submission. email_sent always starts out False."""
    assessment = Assessment(
        name=submission.name,
        email=submission.email,
        company=submission.company,
        role=submission.role,
        company_size=submission.company_size,
        industry=submission.industry,
        ai_level=submission.ai_level,
        data_infrastructure=submission.data_infrastructure,
        objectives=json.dumps(list(submission.objectives)),
        timeline=submission.timeline,
        budget=submission.budget,
        total_score=total_score,
        readiness_level=readiness_level,
        session_id=metadata.session_id,
        user_agent=metadata.user_agent,
        ip_address=metadata.ip_address,
        email_sent=False,
    )
    db.add(assessment)
    db.flush()  # get the ID without committing
    logger.debug("Created assessment %d for %s", assessment.id, submission.company)
    return assessment


def mark_email_sent(db: Session, assessment_id: int) -> None:
    """Flag an assessment's results email as delivered."""
    db.query(Assessment).filter(Assessment.id == assessment_id).update({"email_sent": True})
    logger.debug("Assessment %d email_sent → True", assessment_id)


def get_assessment(db: Session, assessment_id: int) -> Optional[Assessment]:
    return db.query(Assessment).filter(Assessment.id == assessment_id).first()


def list_assessments(
    db: Session,
    limit: int = 50,
    readiness_level: Optional[ReadinessLevel] = None,
) -> list[Assessment]:
    """Most recent assessments first, optionally filtered by tier."""
    query = db.query(Assessment)
    if readiness_level is not None:
        query = query.filter(Assessment.readiness_level == readiness_level)
    return (
        query
        .order_by(Assessment.created_at.desc(), Assessment.id.desc())
        .limit(limit)
        .all()
    )


def count_by_readiness_level(db: Session) -> dict[ReadinessLevel, int]:
    """Return assessment counts for every tier (zero for tiers with no rows)."""
    rows = (
        db.query(Assessment.readiness_level, func.count(Assessment.id))
        .group_by(Assessment.readiness_level)
        .all()
    )
    counts = {level: 0 for level in ReadinessLevel}
    for level, count in rows:
        counts[ReadinessLevel(level)] = count
    return counts
