"""
scripts/preview_assessment.py — Score a questionnaire offline and preview its email.

Nothing is written to the database and no email is sent; the tier email is
printed exactly as the dry-run mailer would show it.

Usage:
    python scripts/preview_assessment.py --file payload.json
    python scripts/preview_assessment.py --level "Advanced Level" --score 80
"""

import argparse
import json
import logging
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ── Imports ───────────────────────────────────────────────────────────────────

from app.outreach.mailer import AssessmentMailer
from app.outreach.templates import render_assessment_email
from app.services.errors import SubmissionValidationError
from app.services.scoring import ReadinessLevel, classify_readiness, score_breakdown
from app.services.submission import parse_submission


def preview_payload(path: str) -> int:
    """Score the payload in `path`, print the breakdown and email. Returns an exit code."""
    with open(path, encoding="utf-8") as fh:
        payload = json.load(fh)

    try:
        submission = parse_submission(payload)
    except SubmissionValidationError as exc:
        logger.error("%s", exc)
        return 1

    breakdown = score_breakdown(submission)
    level = classify_readiness(breakdown.total)

    print("\n" + "=" * 55)
    print(f"  Company             : {submission.company}")
    print(f"  AI level            : {breakdown.ai_level}")
    print(f"  Data infrastructure : {breakdown.data_infrastructure}")
    print(f"  Objectives          : {breakdown.objectives}")
    print(f"  Timeline            : {breakdown.timeline}")
    print(f"  Subtotal × size     : {breakdown.subtotal} × {breakdown.multiplier}")
    print(f"  Score               : {breakdown.total}/100")
    print(f"  Readiness level     : {level.value}")
    print("=" * 55)

    email = render_assessment_email(level, submission.name, submission.company, breakdown.total)
    AssessmentMailer(dry_run=True).send(to_address=submission.email, email=email)
    return 0


def preview_level(level: ReadinessLevel, score: int) -> int:
    email = render_assessment_email(level, "Ada", "Acme", score)
    AssessmentMailer(dry_run=True).send(to_address="ada@example.com", email=email)
    return 0


# ── Entry point ───────────────────────────────────────────────────────────────

def main():
    parser = argparse.ArgumentParser(description="AI Readiness — Assessment Preview")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--file", help="Path to a JSON questionnaire payload")
    group.add_argument(
        "--level",
        choices=[level.value for level in ReadinessLevel],
        help="Preview the email template for one readiness level",
    )
    parser.add_argument(
        "--score",
        type=int,
        default=50,
        help="Score shown in a --level preview (default: 50)",
    )
    args = parser.parse_args()

    if args.file:
        sys.exit(preview_payload(args.file))
    sys.exit(preview_level(ReadinessLevel(args.level), args.score))


if __name__ == "__main__":
    main()
