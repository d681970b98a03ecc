from flask import current_app
from flask_mail import Message
import logging

logger = logging.getLogger(__name__)

def send_email(to_email, subject, body, html_content=None):
    """
    Sends an email using Flask-Mail, supporting both plain text (body)
    and optional HTML content (html_content).

    Delivery is best-effort: returns False instead of raising.
    """
    if not current_app.config.get("MAIL_ENABLED"):
        logger.info(f"Mail disabled, not sending '{subject}' to {to_email}")
        return False
    try:
        mail = current_app.extensions.get('mail')
        sender = current_app.config.get("MAIL_DEFAULT_SENDER")

        msg = Message(
            subject=subject,
            recipients=[to_email],
            body=body,
            html=html_content,
            sender=sender
        )

        mail.send(msg)
        logger.info(f"Email sent to {to_email}")
        return True
    except Exception:
        logger.exception("Failed to send email")
        return False


def send_password_changed(user):
    name = user.get("name") or user["email"]
    body = (
        f"Dear {name},\n\n"
        "The password for your account was just changed.\n"
        "If you did not request this change, contact your administrator.\n\n"
        f"Best regards,\n{current_app.config.get('APP_NAME', 'Health Education')} Team"
    )
    html = (
        f"<p>Dear {name},</p>"
        "<p>The password for your account was just changed.</p>"
        "<p>If you did not request this change, contact your administrator.</p>"
    )
    return send_email(user["email"], "Your password was changed", body, html_content=html)
