import itertools

import pytest
from rest_framework.test import APIClient

from follows.models import Follow

_counter = itertools.count(1)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db, django_user_model):
    def _make_user(handle=None, password="secret123", is_verified=True, **extra):
        handle = handle or f"user{next(_counter)}"
        extra.setdefault("name", handle.title())
        extra.setdefault("email", f"{handle}@example.com")
        return django_user_model.objects.create_user(
            handle=handle,
            password=password,
            is_verified=is_verified,
            **extra,
        )

    return _make_user


@pytest.fixture
def follow():
    def _follow(follower, followee, mutual=False):
        Follow.objects.get_or_create(follower=follower, followee=followee)
        if mutual:
            Follow.objects.get_or_create(follower=followee, followee=follower)

    return _follow


@pytest.fixture
def auth_client():
    def _auth_client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _auth_client
