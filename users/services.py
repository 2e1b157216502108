# users/services.py
import logging
import secrets
from typing import Iterable, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError

from .models import hash_contact_identifier, normalize_email, normalize_handle

logger = logging.getLogger(__name__)
User = get_user_model()


class AccountConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "An account with this email or handle already exists."
    default_code = "account_conflict"


def generate_verification_code() -> str:
    return f"{secrets.randbelow(900000) + 100000}"


def generate_reset_token() -> str:
    return secrets.token_hex(32)


def find_by_handle(handle: str) -> Optional[User]:
    normalized = normalize_handle(handle)
    if not normalized:
        return None
    return User.objects.filter(handle=normalized).first()


def find_by_email(email: str) -> Optional[User]:
    normalized = normalize_email(email)
    if not normalized:
        return None
    return User.objects.filter(email=normalized).first()


def find_by_handle_or_id(identifier: str) -> Optional[User]:
    """Profile routes accept either a handle (with or without @) or a user id."""
    user = find_by_handle(identifier)
    if user is not None:
        return user
    try:
        return User.objects.filter(pk=identifier).first()
    except (ValueError, DjangoValidationError):
        return None


def create_user(
    *,
    email: str,
    handle: str,
    name: str,
    password: str,
    church: Optional[str] = None,
    country: Optional[str] = None,
) -> User:
    email = normalize_email(email)
    handle = normalize_handle(handle)
    if User.objects.filter(email=email).exists() or User.objects.filter(handle=handle).exists():
        raise AccountConflict()

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                handle=handle,
                password=password,
                name=name.strip(),
                church=(church or "").strip() or None,
                country=(country or "").strip() or None,
                verification_code=generate_verification_code(),
                verification_code_expires=timezone.now() + settings.VERIFICATION_CODE_TTL,
            )
    except IntegrityError:
        raise AccountConflict()

    logger.info(f"Created user @{user.handle}")
    return user


def verify_by_code(email: str, code: str) -> User:
    user = find_by_email(email)
    now = timezone.now()
    if (
        user is None
        or not user.verification_code
        or user.verification_code != (code or "").strip()
        or user.verification_code_expires is None
        or user.verification_code_expires < now
    ):
        raise ValidationError({"detail": "Invalid or expired verification code."})

    user.is_verified = True
    user.verification_code = None
    user.verification_code_expires = None
    user.save(update_fields=["is_verified", "verification_code", "verification_code_expires", "updated_at"])
    logger.info(f"User @{user.handle} verified their email")
    return user


def refresh_verification_code(email: str) -> User:
    user = find_by_email(email)
    if user is None:
        raise NotFound("Account not found.")
    if user.is_verified:
        raise ValidationError({"detail": "This account is already verified."})

    user.verification_code = generate_verification_code()
    user.verification_code_expires = timezone.now() + settings.VERIFICATION_CODE_TTL
    user.save(update_fields=["verification_code", "verification_code_expires", "updated_at"])
    return user


def create_password_reset_token(email: str) -> Optional[User]:
    """Store a fresh reset token; returns None for unknown accounts."""
    user = find_by_email(email)
    if user is None:
        return None
    user.reset_token = generate_reset_token()
    user.reset_token_expires = timezone.now() + settings.PASSWORD_RESET_TTL
    user.save(update_fields=["reset_token", "reset_token_expires", "updated_at"])
    return user


def reset_password_with_token(token: str, password: str) -> User:
    token = (token or "").strip()
    user = User.objects.filter(reset_token=token).first() if token else None
    if user is None or user.reset_token_expires is None or user.reset_token_expires < timezone.now():
        raise ValidationError({"detail": "Invalid or expired reset token."})

    user.set_password(password)
    user.reset_token = None
    user.reset_token_expires = None
    user.save(update_fields=["password", "reset_token", "reset_token_expires", "updated_at"])
    logger.info(f"User @{user.handle} reset their password")
    return user


def match_by_email_hashes(emails: Iterable[str] = (), hashes: Iterable[str] = ()) -> List[User]:
    wanted = {hash_contact_identifier(email) for email in emails if (email or "").strip()}
    wanted.update(h.strip().lower() for h in hashes if (h or "").strip())
    if not wanted:
        return []
    return list(User.objects.filter(email_hash__in=wanted).order_by("handle"))
