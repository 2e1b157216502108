from datetime import timedelta

import pytest
from django.core import mail
from django.utils import timezone
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken
from rest_framework_simplejwt.tokens import AccessToken

pytestmark = pytest.mark.django_db

SIGNUP = {
    "name": "Grace Hopper",
    "handle": "@Grace_H",
    "email": "Grace@Example.com",
    "password": "secret123",
    "church": "Grace Chapel",
}


@pytest.fixture
def signed_up(api_client, django_user_model):
    api_client.post("/api/auth/signup", SIGNUP, format="json")
    return django_user_model.objects.get(handle="grace_h")


def login(client, email="grace@example.com", password="secret123"):
    return client.post("/api/auth/login", {"email": email, "password": password}, format="json")


def test_signup_creates_unverified_user_and_sends_code(api_client, django_user_model):
    response = api_client.post("/api/auth/signup", SIGNUP, format="json")

    assert response.status_code == 201
    assert response.data["user"]["handle"] == "grace_h"
    assert response.data["user"]["email"] == "grace@example.com"
    assert response.data["user"]["isVerified"] is False

    user = django_user_model.objects.get(handle="grace_h")
    assert len(user.verification_code) == 6
    assert user.verification_code_expires > timezone.now() + timedelta(hours=23)
    assert len(mail.outbox) == 1
    assert user.verification_code in mail.outbox[0].body


def test_signup_conflicts_on_taken_email_or_handle(api_client, signed_up):
    same_email = api_client.post(
        "/api/auth/signup", {**SIGNUP, "handle": "other"}, format="json"
    )
    same_handle = api_client.post(
        "/api/auth/signup", {**SIGNUP, "email": "other@example.com"}, format="json"
    )

    assert same_email.status_code == 409
    assert same_handle.status_code == 409


@pytest.mark.parametrize(
    "override",
    [
        {"handle": "ab"},
        {"handle": "bad handle"},
        {"password": "123"},
        {"email": "not-an-email"},
        {"name": "G"},
    ],
)
def test_signup_validation(api_client, override):
    response = api_client.post("/api/auth/signup", {**SIGNUP, **override}, format="json")

    assert response.status_code == 400


def test_unverified_login_is_forbidden(api_client, signed_up):
    response = login(api_client)

    assert response.status_code == 403
    assert response.data["needsVerification"] is True


def test_login_errors(api_client, signed_up):
    assert login(api_client, email="nobody@example.com").status_code == 404
    assert login(api_client, password="wrong-password").status_code == 401


def test_verify_then_login(api_client, signed_up):
    bad = api_client.post(
        "/api/auth/verify-email", {"email": signed_up.email, "code": "000000"}, format="json"
    )
    good = api_client.post(
        "/api/auth/verify-email",
        {"email": signed_up.email, "code": signed_up.verification_code},
        format="json",
    )

    assert bad.status_code == 400
    assert good.status_code == 200
    signed_up.refresh_from_db()
    assert signed_up.is_verified
    assert signed_up.verification_code is None

    response = login(api_client, email="GRACE@example.com")
    assert response.status_code == 200
    assert response.data["user"]["handle"] == "grace_h"
    claims = AccessToken(response.data["token"])
    assert claims["handle"] == "grace_h"
    assert claims["email"] == "grace@example.com"
    assert claims["user_id"] == str(signed_up.pk)


def test_expired_verification_code(api_client, signed_up):
    signed_up.verification_code_expires = timezone.now() - timedelta(minutes=1)
    signed_up.save()

    response = api_client.post(
        "/api/auth/verify-email",
        {"email": signed_up.email, "code": signed_up.verification_code},
        format="json",
    )

    assert response.status_code == 400


def test_resend_verification(api_client, signed_up, make_user):
    make_user("verified")
    mail.outbox.clear()

    assert api_client.post(
        "/api/auth/resend-verification", {"email": signed_up.email}, format="json"
    ).status_code == 200
    assert len(mail.outbox) == 1
    assert api_client.post(
        "/api/auth/resend-verification", {"email": "verified@example.com"}, format="json"
    ).status_code == 400
    assert api_client.post(
        "/api/auth/resend-verification", {"email": "nobody@example.com"}, format="json"
    ).status_code == 404


def test_logout_blacklists_the_refresh_token(api_client, make_user):
    make_user("grace_h", email="grace@example.com")
    tokens = login(api_client).data

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['token']}")
    response = api_client.post("/api/auth/logout", {"refresh": tokens["refresh"]}, format="json")

    assert response.status_code == 204
    assert BlacklistedToken.objects.count() == 1

    api_client.credentials()
    refreshed = api_client.post(
        "/api/auth/token/refresh", {"refresh": tokens["refresh"]}, format="json"
    )
    assert refreshed.status_code == 401


def test_token_refresh(api_client, make_user):
    make_user("grace_h", email="grace@example.com")
    tokens = login(api_client).data

    response = api_client.post(
        "/api/auth/token/refresh", {"refresh": tokens["refresh"]}, format="json"
    )

    assert response.status_code == 200
    assert "access" in response.data


def test_forgot_password_does_not_reveal_accounts(api_client, make_user):
    make_user("grace_h", email="grace@example.com")

    unknown = api_client.post(
        "/api/auth/forgot-password", {"email": "nobody@example.com"}, format="json"
    )
    known = api_client.post(
        "/api/auth/forgot-password", {"email": "grace@example.com"}, format="json"
    )

    assert unknown.status_code == known.status_code == 200
    assert unknown.data == known.data
    assert len(mail.outbox) == 1
    assert "reset-password?token=" in mail.outbox[0].body


def test_reset_password_with_token(api_client, make_user, django_user_model):
    make_user("grace_h", email="grace@example.com")
    api_client.post("/api/auth/forgot-password", {"email": "grace@example.com"}, format="json")
    token = django_user_model.objects.get(handle="grace_h").reset_token

    response = api_client.post(
        "/api/auth/reset-password", {"token": token, "password": "brand-new-pass"}, format="json"
    )

    assert response.status_code == 200
    assert response.data["user"]["handle"] == "grace_h"
    assert response.data["token"]
    assert login(api_client, password="brand-new-pass").status_code == 200
    assert login(api_client).status_code == 401

    reused = api_client.post(
        "/api/auth/reset-password", {"token": token, "password": "another-pass"}, format="json"
    )
    assert reused.status_code == 400


def test_expired_reset_token(api_client, make_user):
    user = make_user("grace_h", email="grace@example.com")
    user.reset_token = "a" * 64
    user.reset_token_expires = timezone.now() - timedelta(seconds=1)
    user.save()

    response = api_client.post(
        "/api/auth/reset-password", {"token": "a" * 64, "password": "brand-new-pass"}, format="json"
    )

    assert response.status_code == 400
