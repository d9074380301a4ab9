from fastapi.testclient import TestClient
from miledesigns.core.settings import settings


def test_ping(client: TestClient):
    r = client.get(f"{settings.API_V1_STR}/health/ping")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
