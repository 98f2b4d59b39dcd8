"""HTML formatting of the guidance email sent to the customer."""

from jinja2 import Environment, select_autoescape
from markupsafe import Markup, escape

from app.domain.entities.consultation import Consultation

_RESPONSE_EMAIL_TEMPLATE = """\
<!DOCTYPE html>
<html lang="fr">
<head><meta charset="UTF-8"></head>
<body style="margin:0;padding:0;background:#1a0a10;font-family:'Segoe UI',Arial,sans-serif;">
  <div style="max-width:600px;margin:0 auto;background:linear-gradient(135deg,#2a1520,#1a0a10);border:1px solid rgba(123,45,63,0.4);border-radius:16px;overflow:hidden;">
    <div style="background:linear-gradient(135deg,#7b2d3f,#5c1a2e);padding:32px 24px;text-align:center;">
      <h1 style="color:#d4a76a;margin:0;font-size:24px;letter-spacing:2px;">&#10022; Aura Intuitive &#10022;</h1>
      <p style="color:rgba(255,255,255,0.7);margin:8px 0 0;font-size:14px;">Votre guidance spirituelle</p>
    </div>
    <div style="padding:32px 24px;">
      <p style="color:#e8d5c4;font-size:16px;margin:0 0 8px;">Bonjour <strong>{{ name }}</strong>,</p>
      <p style="color:rgba(232,213,196,0.7);font-size:14px;margin:0 0 24px;">
        Voici la réponse à votre <strong style="color:#d4a76a;">{{ service }}</strong> :
      </p>
      <div style="background:rgba(123,45,63,0.15);border:1px solid rgba(212,167,106,0.3);border-radius:12px;padding:24px;margin:0 0 24px;">
        <p style="color:#d4a76a;font-size:13px;text-transform:uppercase;letter-spacing:1px;margin:0 0 12px;">Ma guidance</p>
        <p style="color:#e8d5c4;font-size:15px;line-height:1.7;margin:0;">{{ response | nl2br }}</p>
      </div>
      <p style="color:rgba(232,213,196,0.5);font-size:13px;margin:0;text-align:center;">
        Merci de votre confiance.<br>
        Avec lumière et bienveillance,<br>
        <strong style="color:#d4a76a;">Sarah — Aura Intuitive</strong>
      </p>
    </div>
    <div style="border-top:1px solid rgba(123,45,63,0.3);padding:16px 24px;text-align:center;">
      <p style="color:rgba(232,213,196,0.3);font-size:11px;margin:0;">
        &copy; {{ year }} Aura Intuitive — Cet email a été envoyé automatiquement, merci de ne pas y répondre.
      </p>
    </div>
  </div>
</body>
</html>
"""


def nl2br(value: str) -> Markup:
    """
    Escape text and turn its line breaks into <br> tags.

    Args:
        value: Plain text

    Returns:
        HTML-safe markup
    """
    normalized = str(value).replace("\r\n", "\n")
    return Markup("<br>").join(escape(line) for line in normalized.split("\n"))


_environment = Environment(autoescape=select_autoescape(default_for_string=True))
_environment.filters["nl2br"] = nl2br
_template = _environment.from_string(_RESPONSE_EMAIL_TEMPLATE)


def render_response_email(consultation: Consultation, response: str) -> str:
    """
    Render the guidance email for an answered consultation.

    Args:
        consultation: Consultation being answered
        response: Admin response text (plain text, newlines preserved)

    Returns:
        HTML email body
    """
    sent_at = consultation.answered_at or consultation.created_at
    return _template.render(
        name=consultation.name or "",
        service=consultation.service,
        response=response,
        year=sent_at.year,
    )
