# users/models.py
from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.utils import timezone
import hashlib
import logging
import uuid
from model_utils import FieldTracker

logger = logging.getLogger(__name__)


def normalize_email(value):
    return (value or "").strip().lower()


def normalize_handle(value):
    return (value or "").strip().lstrip("@").lower()


def hash_contact_identifier(value):
    """sha256 of a trimmed, lower-cased contact identifier (e-mail)."""
    return hashlib.sha256((value or "").strip().lower().encode("utf-8")).hexdigest()


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email, handle, password, **extra_fields):
        if not email:
            raise ValueError("An email address is required")
        if not handle:
            raise ValueError("A handle is required")
        user = self.model(
            email=normalize_email(email),
            handle=normalize_handle(handle),
            **extra_fields,
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, handle, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, handle, password, **extra_fields)

    def create_superuser(self, email, handle, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_verified", True)
        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")
        return self._create_user(email, handle, password, **extra_fields)

    def get_by_handle(self, handle):
        return self.get(handle=normalize_handle(handle))


class User(AbstractUser):
    username = None
    first_name = None
    last_name = None

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    handle = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=120)
    email = models.EmailField(unique=True)
    church = models.CharField(max_length=160, blank=True, null=True)
    country = models.CharField(max_length=160, blank=True, null=True)
    photo_url = models.URLField(max_length=500, blank=True, null=True)
    is_verified = models.BooleanField(default=False)
    verification_code = models.CharField(max_length=10, blank=True, null=True)
    verification_code_expires = models.DateTimeField(blank=True, null=True)
    email_hash = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    reset_token = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    reset_token_expires = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    tracker = FieldTracker(["email", "handle"])

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["handle", "name"]

    class Meta:
        db_table = "users_user"
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-created_at"]

    def __str__(self):
        return f"@{self.handle}"

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.handle

    def save(self, *args, **kwargs):
        is_new = self._state.adding
        self.email = normalize_email(self.email)
        self.handle = normalize_handle(self.handle)
        if is_new or self.tracker.has_changed("email") or not self.email_hash:
            self.email_hash = hash_contact_identifier(self.email)
        super().save(*args, **kwargs)

        if not is_new and self.tracker.has_changed("handle"):
            logger.info(
                f"User handle changed from {self.tracker.previous('handle')} to {self.handle}"
            )
