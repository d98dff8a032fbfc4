"""
app/db/models.py — SQLAlchemy ORM models for the assessment service.

Tables:
  - Assessment → one scored questionnaire submission plus request metadata
"""

import json

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Integer,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase

from app.services.scoring import ReadinessLevel


# ── Base ─────────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


# ── Models ───────────────────────────────────────────────────────────────────

class Assessment(Base):
    __tablename__ = "assessments"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Submitter
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    role = Column(Text, nullable=False)
    company_size = Column(Text, nullable=True)
    industry = Column(Text, nullable=False)

    # Questionnaire answers
    ai_level = Column(Text, nullable=True)
    data_infrastructure = Column(Text, nullable=True)
    objectives = Column(Text, nullable=False, default="[]")   # JSON list stored as text
    timeline = Column(Text, nullable=True)
    budget = Column(Text, nullable=True)

    # Computed
    total_score = Column(Integer, nullable=False)              # 0 – 100
    readiness_level = Column(
        Enum(
            ReadinessLevel,
            name="readiness_level",
            values_callable=lambda levels: [level.value for level in levels],
        ),
        nullable=False,
    )

    # Request metadata
    session_id = Column(Text, nullable=False, default="unknown")
    user_agent = Column(Text, nullable=True)
    ip_address = Column(Text, nullable=True)

    email_sent = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    @property
    def objectives_list(self) -> list[str]:
        """Decode the stored objectives back into a list."""
        return json.loads(self.objectives or "[]")

    def __repr__(self) -> str:
        return (
            f"<Assessment id={self.id} company={self.company!r} "
            f"score={self.total_score} level={self.readiness_level}>"
        )
