from fastapi.testclient import TestClient

from miledesigns.core.settings import settings


def test_login_rate_limit(client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "RATELIMIT_ENABLED", True)
    monkeypatch.setattr(settings, "RATELIMIT_LOGIN_PER_MIN", 2)

    body = {"email": "nobody@example.com", "password": "whatever-123"}
    codes = [client.post(f"{settings.API_V1_STR}/auth/login", json=body).status_code for _ in range(3)]

    assert codes[:2] == [401, 401]
    assert codes[2] == 429


def test_disabled_by_default(client: TestClient):
    assert settings.RATELIMIT_ENABLED is False
    body = {"email": "nobody@example.com", "password": "whatever-123"}
    for _ in range(15):
        assert client.post(f"{settings.API_V1_STR}/auth/login", json=body).status_code == 401
