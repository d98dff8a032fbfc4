"""
app/outreach/templates.py — Tier-specific results email rendering.

Each readiness tier has its own subject line, recommendations and
call-to-action. Every template is rendered both as HTML and as a plain-text
alternative, since many clients prefer the latter.
"""

import html
from dataclasses import dataclass
from typing import Optional

from app.config import settings
from app.services.scoring import ReadinessLevel

SIGN_OFF = "The InsightNext Team"


@dataclass
class RenderedEmail:
    """Final email ready to be sent — subject, HTML body, plain-text body."""
    subject: str
    html_body: str
    plain_body: str


@dataclass(frozen=True)
class TierTemplate:
    # Patterns use str.format with {name}, {company}, {score}
    subject: str
    lead: str
    box_heading: str
    box_items: tuple[str, ...]
    closing: str
    button_label: str
    accent_color: str
    box_background: str
    heading_color: str
    items_color: str


FOUNDATION_TEMPLATE = TierTemplate(
    subject="{name}, Your AI Foundation Assessment Results for {company} ({score}/100) - Strategic Roadmap Included",
    lead=(
        "Thank you for completing our AI Readiness Assessment. Your results show "
        "that {company} is at the <strong>Foundation Level</strong> with a score "
        "of <strong>{score}/100</strong>."
    ),
    box_heading="Your Next Steps:",
    box_items=(
        "Develop a comprehensive AI strategy aligned with business goals",
        "Conduct a thorough data infrastructure audit",
        "Build organizational readiness through change management",
        "Establish budget and resource allocation for AI initiatives",
    ),
    closing=(
        "We've prepared a detailed roadmap specifically for organizations at your "
        "stage. <strong>Would you like to schedule a complimentary 30-minute "
        "strategy session</strong> to discuss your AI transformation journey?"
    ),
    button_label="Schedule Strategy Session",
    accent_color="#2563eb",
    box_background="#f3f4f6",
    heading_color="#374151",
    items_color="#4b5563",
)

DEVELOPING_TEMPLATE = TierTemplate(
    subject="{name}, {company} Is Progressing Well ({score}/100) - Accelerate Your AI Journey",
    lead=(
        "Excellent progress! {company} is at the <strong>Developing Level</strong> "
        "with a score of <strong>{score}/100</strong>. You've built solid "
        "foundations and are ready to advance your AI capabilities."
    ),
    box_heading="Recommended Focus Areas:",
    box_items=(
        "Address data infrastructure gaps for better integration",
        "Strengthen technical capabilities and ML skills",
        "Implement pilot AI projects for early wins",
        "Prepare comprehensive change management plans",
    ),
    closing=(
        "You're well-positioned to accelerate your AI implementation. "
        "<strong>Let's discuss how to move to Advanced level</strong> with "
        "targeted improvements in your key opportunity areas."
    ),
    button_label="Book Implementation Consultation",
    accent_color="#2563eb",
    box_background="#eff6ff",
    heading_color="#1e40af",
    items_color="#1e3a8a",
)

ADVANCED_TEMPLATE = TierTemplate(
    subject="{name}, {company} Is AI-Advanced ({score}/100) - Let's Optimize for Maximum Impact",
    lead=(
        "Impressive! {company} has achieved <strong>Advanced Level</strong> "
        "readiness with a score of <strong>{score}/100</strong>. You're among the "
        "leaders in AI adoption and implementation."
    ),
    box_heading="Optimization Opportunities:",
    box_items=(
        "Scale successful AI models across the organization",
        "Implement advanced ML operations and monitoring",
        "Explore cutting-edge AI technologies and applications",
        "Develop AI governance and ethics frameworks",
    ),
    closing=(
        "At your level, the focus shifts to optimization and scaling. "
        "<strong>Let's explore advanced strategies</strong> to maximize ROI from "
        "your AI investments and maintain competitive advantage."
    ),
    button_label="Discuss Advanced Strategies",
    accent_color="#16a34a",
    box_background="#f0fdf4",
    heading_color="#15803d",
    items_color="#166534",
)

AI_READY_TEMPLATE = TierTemplate(
    subject="{name}, Exceptional AI Readiness at {company} ({score}/100) - Partnership Opportunities Await",
    lead=(
        "Outstanding! {company} has achieved <strong>AI-Ready Level</strong> with an "
        "exceptional score of <strong>{score}/100</strong>. You're at the forefront "
        "of AI innovation and implementation."
    ),
    box_heading="Strategic Partnership Areas:",
    box_items=(
        "AI research and development initiatives",
        "Industry thought leadership and innovation",
        "Advanced AI product development",
        "AI consultancy and advisory services",
    ),
    closing=(
        "Given your exceptional AI maturity, we'd love to explore <strong>strategic "
        "partnership opportunities</strong> and discuss how we can collaborate on "
        "cutting-edge AI initiatives."
    ),
    button_label="Explore Partnership Opportunities",
    accent_color="#eab308",
    box_background="#fefce8",
    heading_color="#a16207",
    items_color="#a16207",
)


def select_template(level: ReadinessLevel) -> TierTemplate:
    """Return the template for a tier; anything unrecognized gets the Foundation one."""
    if level == ReadinessLevel.AI_READY:
        return AI_READY_TEMPLATE
    if level == ReadinessLevel.ADVANCED:
        return ADVANCED_TEMPLATE
    if level == ReadinessLevel.DEVELOPING:
        return DEVELOPING_TEMPLATE
    return FOUNDATION_TEMPLATE


def _strip_tags(text: str) -> str:
    return text.replace("<strong>", "").replace("</strong>", "")


def _render_html(template: TierTemplate, name: str, company: str, score: int, contact_url: str) -> str:
    safe_name = html.escape(name, quote=False)
    safe_company = html.escape(company, quote=False)
    lead = template.lead.format(name=safe_name, company=safe_company, score=score)
    items = "\n".join(
        f"              <li>{item}</li>" for item in template.box_items
    )

    return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h2 style="color: #1f2937;">AI Readiness Assessment Results</h2>
          <p>Hi {safe_name},</p>
          <p>{lead}</p>

          <div style="background: {template.box_background}; padding: 20px; border-radius: 8px; margin: 20px 0; border-left: 4px solid {template.accent_color};">
            <h3 style="color: {template.heading_color}; margin-top: 0;">{template.box_heading}</h3>
            <ul style="color: {template.items_color};">
{items}
            </ul>
          </div>

          <p>{template.closing}</p>

          <a href="{html.escape(contact_url)}" style="display: inline-block; background: {template.accent_color}; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; margin: 20px 0;">{template.button_label}</a>

          <p>Best regards,<br>{SIGN_OFF}</p>
        </div>
"""


def _render_plain(template: TierTemplate, name: str, company: str, score: int, contact_url: str) -> str:
    lead = _strip_tags(template.lead).format(name=name, company=company, score=score)
    items = "\n".join(f"  - {item}" for item in template.box_items)
    return (
        f"Hi {name},\n\n"
        f"{lead}\n\n"
        f"{template.box_heading}\n{items}\n\n"
        f"{_strip_tags(template.closing)}\n\n"
        f"{template.button_label}: {contact_url}\n\n"
        f"Best regards,\n{SIGN_OFF}\n"
    )


def render_assessment_email(
    level: ReadinessLevel,
    name: str,
    company: str,
    score: int,
    app_url: Optional[str] = None,
) -> RenderedEmail:
    """
    Render the results email for a readiness tier.

    Args:
        level:   Readiness tier the submission was classified into.
        name:    Submitter's name.
        company: Submitter's company.
        score:   Final 0–100 score.
        app_url: Site base URL for the contact link (defaults to settings.app_url).

    Returns:
        RenderedEmail with subject, HTML body, and plain-text body.
    """
    score = int(score)
    template = select_template(level)
    base_url = (app_url if app_url is not None else settings.app_url).rstrip("/")
    contact_url = f"{base_url}/contact.html"

    return RenderedEmail(
        subject=template.subject.format(name=name, company=company, score=score),
        html_body=_render_html(template, name, company, score, contact_url),
        plain_body=_render_plain(template, name, company, score, contact_url),
    )
