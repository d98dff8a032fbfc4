"""
api/main.py — FastAPI application entry point.

Run with:
    uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import settings
from app.db.session import engine
from api.endpoints.assessment_routes import router as assessment_router
from api.schemas import ErrorResponse

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ─────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown logic."""
    # Verify DB is reachable on startup
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connection verified.")
    yield
    logger.info("Application shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="AI Readiness Assessment",
    description=(
        "Scores AI readiness questionnaires, stores each assessment, and "
        "emails the submitter tier-specific recommendations."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same error shape as missing fields."""
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request body")
    body = ErrorResponse(
        error="Invalid request",
        message=f"{location}: {message}" if location else message,
    )
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(assessment_router, prefix="/api", tags=["Assessments"])


# ── Health check ─────────────────────────────────────────────────────────────

@app.get("/health", tags=["System"])
def health_check():
    """Returns service liveness status."""
    return {"status": "ok", "service": "ai-readiness-assessment"}


@app.get("/", tags=["System"])
def root():
    return {
        "message": "AI Readiness Assessment API is running.",
        "docs": "/docs",
        "submit": "/api/submit-assessment",
    }
