# users/emails.py
import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def build_verification_email(user):
    subject = "Verify your Vessel account"
    body = (
        f"Hi {user.name},\n\n"
        f"Your Vessel verification code is {user.verification_code}.\n"
        "It expires in 24 hours.\n"
    )
    return subject, body


def build_password_reset_email(user):
    subject = "Reset your Vessel password"
    link = f"{settings.APP_BASE_URL.rstrip('/')}/reset-password?token={user.reset_token}"
    body = (
        f"Hi {user.name},\n\n"
        f"Use the link below to choose a new password. It expires in 15 minutes.\n\n"
        f"{link}\n\n"
        "If you did not ask for this, you can ignore this email.\n"
    )
    return subject, body


def _deliver(user, subject, body):
    """Send a plain-text mail; delivery problems are logged, never raised."""
    try:
        send_mail(
            subject,
            body,
            settings.DEFAULT_FROM_EMAIL,
            [user.email],
            fail_silently=False,
        )
        logger.info("Email '%s' sent to %s", subject, user.email)
        return True
    except (SMTPException, OSError) as e:
        logger.error("Email send failed for %s: %s", user.email, e)
        return False


def send_verification_email(user):
    return _deliver(user, *build_verification_email(user))


def send_password_reset_email(user):
    return _deliver(user, *build_password_reset_email(user))
