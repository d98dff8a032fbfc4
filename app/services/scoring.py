"""
app/services/scoring.py — AI readiness scoring and tier classification.

The score is a weighted sum of the questionnaire answers, scaled by a
company-size multiplier and capped at 100:

    raw   = ai_level + data_infrastructure + 5 * len(objectives) + timeline
    score = min(100, round_half_up(raw * company_size_multiplier))

Unrecognized or missing answers contribute nothing (multiplier 1.0).
"""

import enum
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType

from app.services.submission import Submission

logger = logging.getLogger(__name__)

MAX_SCORE = 100
POINTS_PER_OBJECTIVE = 5

AI_LEVEL_POINTS = MappingProxyType({
    "none": 0,
    "basic": 20,
    "intermediate": 35,
    "advanced": 50,
})

DATA_INFRASTRUCTURE_POINTS = MappingProxyType({
    "poor": 0,
    "basic": 15,
    "good": 25,
    "excellent": 35,
})

TIMELINE_POINTS = MappingProxyType({
    "immediate": 10,
    "short": 7,
    "medium": 5,
    "long": 2,
})

# Decimal keeps the multiplication exact so rounding is predictable.
COMPANY_SIZE_MULTIPLIERS = MappingProxyType({
    "startup": Decimal("1.0"),
    "small": Decimal("1.1"),
    "medium": Decimal("1.2"),
    "enterprise": Decimal("1.3"),
})
DEFAULT_MULTIPLIER = Decimal("1.0")


class ReadinessLevel(str, enum.Enum):
    FOUNDATION = "Foundation Level"
    DEVELOPING = "Developing Level"
    ADVANCED = "Advanced Level"
    AI_READY = "AI-Ready Level"


# Upper bounds are inclusive; anything above the last one is AI-Ready.
LEVEL_THRESHOLDS = (
    (40, ReadinessLevel.FOUNDATION),
    (65, ReadinessLevel.DEVELOPING),
    (85, ReadinessLevel.ADVANCED),
)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-factor contributions behind a final score."""
    ai_level: int
    data_infrastructure: int
    objectives: int
    timeline: int
    multiplier: Decimal
    total: int

    @property
    def subtotal(self) -> int:
        return self.ai_level + self.data_infrastructure + self.objectives + self.timeline


def score_breakdown(submission: Submission) -> ScoreBreakdown:
    """Compute every factor of the readiness score for a submission."""
    ai_level = AI_LEVEL_POINTS.get(submission.ai_level, 0)
    data_infrastructure = DATA_INFRASTRUCTURE_POINTS.get(submission.data_infrastructure, 0)
    objectives = POINTS_PER_OBJECTIVE * len(submission.objectives)
    timeline = TIMELINE_POINTS.get(submission.timeline, 0)
    multiplier = COMPANY_SIZE_MULTIPLIERS.get(submission.company_size, DEFAULT_MULTIPLIER)

    subtotal = ai_level + data_infrastructure + objectives + timeline
    scaled = (Decimal(subtotal) * multiplier).quantize(Decimal("1"), rounding=ROUND_HALF_UP)

    return ScoreBreakdown(
        ai_level=ai_level,
        data_infrastructure=data_infrastructure,
        objectives=objectives,
        timeline=timeline,
        multiplier=multiplier,
        total=min(int(scaled), MAX_SCORE),
    )


def calculate_score(submission: Submission) -> int:
    """
    Compute the 0–100 readiness score for a submission.

    Args:
        submission: A validated Submission.

    Returns:
        Integer score, capped at 100.
    """
    breakdown = score_breakdown(submission)
    logger.debug(
        "Score for %s: subtotal=%d × %s → %d",
        submission.company, breakdown.subtotal, breakdown.multiplier, breakdown.total,
    )
    return breakdown.total


def classify_readiness(score: int) -> ReadinessLevel:
    """Map a score to its readiness tier (boundary values belong to the lower tier)."""
    for upper_bound, level in LEVEL_THRESHOLDS:
        if score <= upper_bound:
            return level
    return ReadinessLevel.AI_READY
