from fastapi.testclient import TestClient

from miledesigns.core.settings import settings
from miledesigns.services import consultant

CONTENT = f"{settings.API_V1_STR}/content"


def test_site_etag_and_304(client: TestClient):
    r = client.get("/delivery/v1/site")
    assert r.status_code == 200
    etag = r.headers["ETag"]
    assert "max-age" in r.headers["Cache-Control"]
    body = r.json()
    assert body["view"]["tags"][0] == "All"
    assert body["view"]["rotatesHomeBackground"] is True
    assert body["view"]["testimonialAvatars"]["t1"] == "https://i.pravatar.cc/150?u=julian"
    assert "social-tiktok" not in [l["id"] for l in body["view"]["visibleSocialLinks"]]

    r = client.get("/delivery/v1/site", headers={"If-None-Match": f'W/"{etag}"'})
    assert r.status_code == 304
    assert r.headers["ETag"] == etag


def test_etag_changes_after_overwrite(client: TestClient, admin_headers):
    etag = client.get("/delivery/v1/site").headers["ETag"]

    data = client.get(CONTENT, headers=admin_headers).json()
    data["projects"] = data["projects"][:2]
    r = client.put(CONTENT, json=data, headers=admin_headers)
    assert r.status_code == 200
    assert len(r.json()["projects"]) == 2

    r = client.get("/delivery/v1/site", headers={"If-None-Match": etag})
    assert r.status_code == 200
    assert r.headers["ETag"] != etag
    assert len(r.json()["content"]["projects"]) == 2


def test_put_rejects_malformed_aggregate(client: TestClient, admin_headers):
    r = client.put(CONTENT, json={"projects": [{"title": "no id"}]}, headers=admin_headers)
    assert r.status_code == 422


def test_content_reset(client: TestClient, admin_headers):
    client.put(CONTENT, json={"projects": []}, headers=admin_headers)
    assert client.get("/delivery/v1/projects").json()["total"] == 0

    r = client.post(f"{CONTENT}/reset", headers=admin_headers)
    assert r.status_code == 200
    assert client.get("/delivery/v1/projects").json()["total"] == 4


def test_content_requires_auth(client: TestClient):
    assert client.get(CONTENT).status_code == 401


def test_estimate_endpoint(client: TestClient):
    r = client.get("/delivery/v1/estimate", params={"area": 1000, "quality": "Luxury", "type": "New"})
    assert r.status_code == 200
    assert r.json()["total"] == 450000
    assert client.get("/delivery/v1/estimate", params={"area": 100}).status_code == 422
    assert client.get("/delivery/v1/estimate", params={"quality": "Gold"}).status_code == 422


def test_consultant_endpoint_never_errors(client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
    r = client.post("/delivery/v1/consultant", json={"prompt": "Hi", "history": []})
    assert r.status_code == 200
    assert r.json()["reply"] == consultant.MISSING_KEY_MESSAGE
    assert r.headers["Cache-Control"] == "no-store"
