"""
app/config.py — Central configuration loaded from environment variables.
All modules import settings from here; never read os.environ directly elsewhere.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Runtime ───────────────────────────────────────────────────────────────
    environment: str = Field(
        default="development",
        description="development | production (production enables DB SSL)",
    )
    log_level: str = Field(default="INFO", description="Root log level for the API")

    # ── Admin API ─────────────────────────────────────────────────────────────
    admin_api_key: str = Field(
        default="",
        description="Key required in X-Admin-Key to read stored assessments (empty = reads disabled)",
    )

    # ── Database ──────────────────────────────────────────────────────────────
    database_url: str = Field(..., description="PostgreSQL connection URI")

    # ── Email ─────────────────────────────────────────────────────────────────
    email_service: str = Field(
        default="smtp",
        description="Mail provider: sendgrid, gmail, or smtp (generic)",
    )
    sendgrid_api_key: str = Field(default="", description="SendGrid API key (SMTP relay)")
    sendgrid_from_email: str = Field(default="", description="Verified SendGrid sender")
    email_user: str = Field(default="", description="Gmail sender address")
    email_pass: str = Field(default="", description="Gmail App Password (16 chars)")
    smtp_host: str = Field(default="localhost", description="Generic SMTP host")
    smtp_port: int = Field(default=587, gt=0, description="Generic SMTP port")
    smtp_secure: bool = Field(default=False, description="Use implicit TLS (SMTPS)")
    smtp_user: str = Field(default="", description="Generic SMTP username")
    smtp_pass: str = Field(default="", description="Generic SMTP password")
    mail_from_name: str = Field(default="InsightNext", description="Sender display name")

    # ── Notification ──────────────────────────────────────────────────────────
    mailer_dry_run: bool = Field(
        default=True,
        description="If True, print emails to stdout instead of actually sending",
    )
    app_url: str = Field(
        default="http://localhost:3000",
        description="Public site URL used for call-to-action links in emails",
    )

    @property
    def mail_from_address(self) -> str:
        """First configured sender address across the supported providers."""
        return self.sendgrid_from_email or self.email_user or self.smtp_user


# Singleton — import this everywhere
settings = Settings()
