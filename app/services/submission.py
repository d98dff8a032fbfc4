"""
app/services/submission.py — Questionnaire submission and request metadata.

Submission is the immutable, normalized form of an assessment payload.
Only presence of the required fields is checked here; unrecognized category
values are left untouched and simply score zero downstream.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from app.services.errors import SubmissionValidationError

# Checked in this order; the first missing one is reported.
REQUIRED_FIELDS = ("name", "email", "company", "role", "industry")


@dataclass(frozen=True)
class Submission:
    """A validated questionnaire submission."""
    name: str
    email: str
    company: str
    role: str
    industry: str
    company_size: Optional[str] = None
    ai_level: Optional[str] = None
    data_infrastructure: Optional[str] = None
    objectives: tuple[str, ...] = field(default_factory=tuple)
    timeline: Optional[str] = None
    budget: Optional[str] = None


@dataclass(frozen=True)
class RequestMetadata:
    """Request context supplied by the transport layer."""
    session_id: str = "unknown"
    user_agent: str = ""
    ip_address: Optional[str] = None


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def find_missing_field(payload: Mapping[str, Any]) -> Optional[str]:
    """Return the first required field absent from payload, or None if complete."""
    for name in REQUIRED_FIELDS:
        if _is_missing(payload.get(name)):
            return name
    return None


def _normalize_objectives(value: Any) -> tuple[str, ...]:
    """Anything that isn't a list/tuple counts as no objectives."""
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def parse_submission(payload: Mapping[str, Any]) -> Submission:
    """
    Validate a raw payload and build a Submission from it.

    Args:
        payload: Decoded request body (dict-like).

    Returns:
        The normalized Submission.

    Raises:
        SubmissionValidationError: naming the first missing required field.
    """
    missing = find_missing_field(payload)
    if missing is not None:
        raise SubmissionValidationError(missing)

    return Submission(
        name=str(payload["name"]),
        email=str(payload["email"]),
        company=str(payload["company"]),
        role=str(payload["role"]),
        industry=str(payload["industry"]),
        company_size=_optional_str(payload.get("company_size")),
        ai_level=_optional_str(payload.get("ai_level")),
        data_infrastructure=_optional_str(payload.get("data_infrastructure")),
        objectives=_normalize_objectives(payload.get("objectives")),
        timeline=_optional_str(payload.get("timeline")),
        budget=_optional_str(payload.get("budget")),
    )
