import pytest


@pytest.mark.django_db
def test_health_reports_ok(api_client):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    assert response.data == {"status": "ok"}


@pytest.mark.django_db
def test_health_reports_cache_failure(api_client, monkeypatch):
    def broken_set(*args, **kwargs):
        raise ConnectionError("cache is down")

    monkeypatch.setattr("core.views.cache.set", broken_set)

    response = api_client.get("/api/health")

    assert response.status_code == 503
    assert response.data == {"status": "error", "message": "cache is down"}


@pytest.mark.django_db
def test_health_ignores_bearer_credentials(api_client):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer garbage")

    assert api_client.get("/api/health").status_code == 200