"""
api/schemas.py — Pydantic request/response models for all API endpoints.

These are the API contract — separate from DB ORM models so we can
control exactly what data is exposed over HTTP.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.services.scoring import ReadinessLevel


# ── Shared ────────────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Error category plus a human-readable message."""
    error: str
    message: str
    field: Optional[str] = None


# ── Submission ────────────────────────────────────────────────────────────────

class AssessmentSubmission(BaseModel):
    """
    Questionnaire payload. Every field is optional at this layer so that a
    missing required field is reported by name instead of as a schema error.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None
    company_size: Optional[str] = None
    industry: Optional[str] = None
    ai_level: Optional[str] = None
    data_infrastructure: Optional[str] = None
    objectives: Any = None  # normalized by parse_submission
    timeline: Optional[str] = None
    budget: Optional[str] = None


class AssessmentSubmitted(BaseModel):
    success: bool = True
    assessment_id: int = Field(..., serialization_alias="assessmentId")
    total_score: int = Field(..., serialization_alias="totalScore")
    readiness_level: ReadinessLevel = Field(..., serialization_alias="readinessLevel")
    message: str


# ── Assessment ────────────────────────────────────────────────────────────────

class AssessmentOut(BaseModel):
    id: int
    name: str
    email: str
    company: str
    role: str
    company_size: Optional[str] = None
    industry: str
    ai_level: Optional[str] = None
    data_infrastructure: Optional[str] = None
    objectives: list[str] = Field(default_factory=list, validation_alias="objectives_list")
    timeline: Optional[str] = None
    budget: Optional[str] = None
    total_score: int
    readiness_level: ReadinessLevel
    session_id: str
    email_sent: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
