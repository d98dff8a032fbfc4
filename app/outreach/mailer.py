"""
app/outreach/mailer.py — SMTP mailer with provider selection and dry-run support.

AssessmentMailer sends (or simulates sending) the readiness results email.
The SMTP endpoint is chosen from EMAIL_SERVICE: SendGrid's SMTP relay,
Gmail with an App Password, or any generic SMTP server.
"""

import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional

from app.config import Settings, settings
from app.outreach.templates import RenderedEmail
from app.services.errors import NotificationError

logger = logging.getLogger(__name__)

# Provider SMTP constants
SENDGRID_SMTP_HOST = "smtp.sendgrid.net"
SENDGRID_SMTP_PORT = 587  # STARTTLS
SENDGRID_SMTP_USER = "apikey"
GMAIL_SMTP_HOST = "smtp.gmail.com"
GMAIL_SMTP_PORT = 465  # SSL

SMTP_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class SmtpTransport:
    """Resolved connection parameters for one mail provider."""
    host: str
    port: int
    use_ssl: bool
    username: str
    password: str


def resolve_transport(config: Settings) -> SmtpTransport:
    """Pick SMTP connection parameters for the configured EMAIL_SERVICE."""
    service = config.email_service.strip().lower()

    if service == "sendgrid":
        return SmtpTransport(
            host=SENDGRID_SMTP_HOST,
            port=SENDGRID_SMTP_PORT,
            use_ssl=False,
            username=SENDGRID_SMTP_USER,
            password=config.sendgrid_api_key,
        )
    if service == "gmail":
        return SmtpTransport(
            host=GMAIL_SMTP_HOST,
            port=GMAIL_SMTP_PORT,
            use_ssl=True,
            username=config.email_user,
            password=config.email_pass,
        )
    return SmtpTransport(
        host=config.smtp_host,
        port=config.smtp_port,
        use_ssl=config.smtp_secure,
        username=config.smtp_user,
        password=config.smtp_pass,
    )


class AssessmentMailer:
    """
    Sends assessment results emails over SMTP.

    In dry-run mode (MAILER_DRY_RUN=true) emails are printed to stdout
    and never actually transmitted — safe for development and demos.
    """

    def __init__(self, dry_run: Optional[bool] = None, config: Optional[Settings] = None):
        self.config = config or settings
        self.transport = resolve_transport(self.config)
        self.sender = formataddr((self.config.mail_from_name, self.config.mail_from_address))
        self.dry_run = dry_run if dry_run is not None else self.config.mailer_dry_run

    # ── Public API ────────────────────────────────────────────────────────────

    def send(self, to_address: str, email: RenderedEmail) -> bool:
        """
        Send (or simulate) a single results email.

        Args:
            to_address: Recipient email address.
            email:      Rendered email (subject + html + plain bodies).

        Returns:
            True when the message was handed to the SMTP server,
            False in dry-run mode (nothing was delivered).

        Raises:
            NotificationError: if the SMTP exchange fails.
        """
        if self.dry_run:
            self._print_dry_run(to_address, email)
            logger.info("DRY RUN: email to %s printed (not sent).", to_address)
            return False

        try:
            self._send_via_smtp(to_address, email)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"Failed to send email to {to_address}: {exc}") from exc

        logger.info("Email sent to %s via %s.", to_address, self.transport.host)
        return True

    # ── Private helpers ───────────────────────────────────────────────────────

    def _build_message(self, to_address: str, email: RenderedEmail) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = email.subject
        msg["From"] = self.sender
        msg["To"] = to_address

        # Attach plain text first, HTML second — clients prefer the last part
        msg.attach(MIMEText(email.plain_body, "plain", "utf-8"))
        msg.attach(MIMEText(email.html_body, "html", "utf-8"))
        return msg

    def _send_via_smtp(self, to_address: str, email: RenderedEmail) -> None:
        """Open a connection to the provider, authenticate, and transmit the message."""
        transport = self.transport
        msg = self._build_message(to_address, email)

        smtp_class = smtplib.SMTP_SSL if transport.use_ssl else smtplib.SMTP

        with smtp_class(transport.host, transport.port, timeout=SMTP_TIMEOUT_SECONDS) as server:
            if not transport.use_ssl:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls()
                    server.ehlo()
            if transport.username:
                server.login(transport.username, transport.password)
            server.sendmail(self.config.mail_from_address, [to_address], msg.as_string())

    @staticmethod
    def _print_dry_run(to_address: str, email: RenderedEmail) -> None:
        """Pretty-print the email to stdout for dry-run inspection."""
        separator = "─" * 60
        print(f"\n{separator}")
        print(f"  📧  DRY RUN — Email not sent")
        print(separator)
        print(f"  To      : {to_address}")
        print(f"  Subject : {email.subject}")
        print(separator)
        print(email.plain_body)
        print(f"{separator}\n")


def get_mailer() -> AssessmentMailer:
    """FastAPI dependency returning a mailer built from the current settings."""
    return AssessmentMailer()
