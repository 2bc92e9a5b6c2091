"""Tests for API endpoints."""

import re

import pytest


SHORT_CODE = re.compile(r"^[A-Za-z0-9]{6,8}$")
ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


@pytest.mark.asyncio
class TestCreateEndpoint:
    """POST /api/links."""

    async def test_create(self, client, sample_urls):
        response = await client.post("/api/links", json={"url": sample_urls[0]})

        assert response.status_code == 201
        body = response.json()
        data = body["data"]
        assert SHORT_CODE.match(data["short_code"])
        assert body["shortUrl"] == f"http://sho.rt/{data['short_code']}"
        assert data["original_url"] == sample_urls[0]
        assert data["clicks"] == 0
        assert data["last_clicked"] is None
        assert ISO_UTC.match(data["created_at"])
        assert set(data) == {"id", "short_code", "original_url", "clicks", "created_at", "last_clicked"}

    async def test_create_with_custom_code(self, client, sample_urls):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0], "customCode": "myLink1"},
        )

        assert response.status_code == 201
        assert response.json()["data"]["short_code"] == "myLink1"

    async def test_create_accepts_snake_case_alias(self, client, sample_urls):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0], "custom_code": "snake12"},
        )

        assert response.status_code == 201
        assert response.json()["data"]["short_code"] == "snake12"

    async def test_missing_url(self, client):
        response = await client.post("/api/links", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Destination URL is required"}

    async def test_invalid_url(self, client, test_db):
        response = await client.post("/api/links", json={"url": "ftp://example.com"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid URL format")
        assert test_db.rows == {}

    async def test_bad_custom_code(self, client, sample_urls):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0], "customCode": "no!"},
        )

        assert response.status_code == 400
        assert "6-8 characters" in response.json()["error"]

    async def test_reserved_custom_code(self, client, test_db, sample_urls):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0], "customCode": "healthz"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "That code is reserved"}
        assert test_db.rows == {}

        liveness = await client.get("/healthz")
        assert liveness.json()["ok"] is True

    async def test_invalid_host(self, client, test_db):
        response = await client.post("/api/links", json={"url": "http://exa mple.com"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid URL format")
        assert test_db.rows == {}

    async def test_duplicate_custom_code(self, client, sample_urls):
        await client.post("/api/links", json={"url": sample_urls[0], "customCode": "dup12345"})

        response = await client.post(
            "/api/links",
            json={"url": sample_urls[1], "customCode": "dup12345"},
        )

        assert response.status_code == 409
        assert response.json() == {"error": "That code is already taken"}

    async def test_malformed_body(self, client):
        response = await client.post("/api/links", json={"url": ["not", "a", "string"]})

        assert response.status_code == 400
        assert "error" in response.json()

    async def test_storage_failure_is_opaque(self, client, test_db, sample_urls):
        test_db.failure = OSError("could not connect to 10.0.0.5:5432")

        response = await client.post("/api/links", json={"url": sample_urls[0]})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to shorten URL"}


@pytest.mark.asyncio
class TestQueryEndpoints:
    """GET/DELETE /api/links."""

    async def test_list_search_and_sort(self, client):
        for url, code in [
            ("https://example.com/a", "first01"),
            ("https://example.com/b", "second2"),
            ("https://other.org", "third03"),
        ]:
            await client.post("/api/links", json={"url": url, "customCode": code})
        await client.get("/second2", follow_redirects=False)

        response = await client.get("/api/links", params={"search": "EXA", "sort": "most-clicked"})

        assert response.status_code == 200
        assert [link["short_code"] for link in response.json()] == ["second2", "first01"]

    async def test_list_default_newest(self, client):
        for code in ["first01", "second2"]:
            await client.post("/api/links", json={"url": "https://example.com", "customCode": code})

        response = await client.get("/api/links")

        assert [link["short_code"] for link in response.json()] == ["second2", "first01"]

    async def test_list_storage_failure(self, client, test_db):
        test_db.failure = TimeoutError("query timed out")

        response = await client.get("/api/links")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch links"}

    async def test_get_link(self, client, sample_urls):
        await client.post("/api/links", json={"url": sample_urls[1], "customCode": "info123"})

        response = await client.get("/api/links/info123")

        assert response.status_code == 200
        assert response.json()["original_url"] == sample_urls[1]
        assert response.json()["clicks"] == 0

    async def test_get_link_not_found(self, client):
        response = await client.get("/api/links/nothere")

        assert response.status_code == 404
        assert response.json() == {"error": "Link not found"}

    async def test_delete(self, client, sample_urls):
        await client.post("/api/links", json={"url": sample_urls[0], "customCode": "gone123"})

        response = await client.delete("/api/links/gone123")
        assert response.status_code == 200
        assert response.json() == {"message": "Deleted successfully"}

        again = await client.delete("/api/links/gone123")
        assert again.status_code == 404


@pytest.mark.asyncio
class TestRedirectEndpoint:
    """GET /{code}."""

    async def test_redirect_is_302(self, client, sample_urls):
        await client.post("/api/links", json={"url": sample_urls[0], "customCode": "go12345"})

        response = await client.get("/go12345", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[0]

    async def test_redirect_counts_click(self, client, sample_urls):
        await client.post("/api/links", json={"url": sample_urls[0], "customCode": "go12345"})

        await client.get("/go12345", follow_redirects=False)
        await client.get("/go12345", follow_redirects=False)

        data = (await client.get("/api/links/go12345")).json()
        assert data["clicks"] == 2
        assert ISO_UTC.match(data["last_clicked"])

    async def test_unknown_code_is_plain_404(self, client):
        response = await client.get("/zzzzzz", follow_redirects=False)

        assert response.status_code == 404
        assert response.text == "Short URL not found"
        assert response.headers["content-type"].startswith("text/plain")

    async def test_storage_failure_is_plain_500(self, client, test_db):
        test_db.failure = OSError("connection refused")

        response = await client.get("/abc123", follow_redirects=False)

        assert response.status_code == 500
        assert response.text == "Server error"


@pytest.mark.asyncio
class TestHealthEndpoints:

    async def test_healthz(self, client):
        response = await client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["status"] == "running"
        assert data["version"] == "1.0.0"
        assert data["uptime"] >= 0
        assert ISO_UTC.match(data["timestamp"])

    async def test_readiness(self, client, test_db):
        response = await client.get("/api/health")
        assert response.json()["database"] == "healthy"

        test_db.failure = OSError("down")
        response = await client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"


@pytest.mark.asyncio
async def test_full_lifecycle(client):
    """Create, redirect, count, delete, then 404."""
    create = await client.post("/api/links", json={"url": "https://openai.com"})
    assert create.status_code == 201
    code = create.json()["data"]["short_code"]
    assert len(code) == 6

    redirect = await client.get(f"/{code}", follow_redirects=False)
    assert redirect.status_code == 302
    assert redirect.headers["location"] == "https://openai.com"

    info = await client.get(f"/api/links/{code}")
    assert info.json()["clicks"] == 1

    delete = await client.delete(f"/api/links/{code}")
    assert delete.status_code == 200

    after = await client.get(f"/{code}", follow_redirects=False)
    assert after.status_code == 404
