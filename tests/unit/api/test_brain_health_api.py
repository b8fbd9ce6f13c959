"""Tests for the brain sharing and health endpoints."""

API = "/api/v1"
NOT_FOUND_MESSAGE = "The brain you're looking for is not public or invalid."


async def toggle(client, headers, body=None):
    resp = await client.post(f"{API}/brain/share", json=body, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


class TestBrainRoutes:
    async def test_toggle_and_status(self, async_client, auth_headers):
        status = await async_client.get(f"{API}/brain/status", headers=auth_headers)
        assert status.json() == {"isPublic": False, "link": None}

        enabled = await toggle(async_client, auth_headers)
        assert enabled["message"] == "Sharing enabled"
        assert enabled["isPublic"] is True
        assert enabled["link"].startswith("http://test/api/v1/brain/")

        status = await async_client.get(f"{API}/brain/status", headers=auth_headers)
        assert status.json() == {"isPublic": True, "link": enabled["link"]}

        disabled = await toggle(async_client, auth_headers)
        assert disabled == {"message": "Sharing disabled", "link": None, "isPublic": False}

    async def test_explicit_state(self, async_client, auth_headers):
        off = await toggle(async_client, auth_headers, {"isPublic": False})
        assert off["isPublic"] is False

        on = await toggle(async_client, auth_headers, {"isPublic": True})
        again = await toggle(async_client, auth_headers, {"isPublic": True})
        assert on == again

    async def test_public_brain_is_anonymous(self, async_client, auth_headers):
        await async_client.post(
            f"{API}/content",
            json={"title": "Post", "link": "https://x.com", "type": "article", "isShared": True},
            headers=auth_headers,
        )
        link = (await toggle(async_client, auth_headers))["link"]

        resp = await async_client.get(link.replace("http://test", ""))
        assert resp.status_code == 200
        assert [item["title"] for item in resp.json()] == ["Post"]

    async def test_unknown_token_is_404(self, async_client):
        resp = await async_client.get(f"{API}/brain/{'0' * 32}")
        assert resp.status_code == 404
        assert resp.json()["message"] == NOT_FOUND_MESSAGE

    async def test_share_requires_auth(self, async_client):
        resp = await async_client.post(f"{API}/brain/share")
        assert resp.status_code == 401


class TestHealthRoutes:
    async def test_basic_health(self, async_client):
        resp = await async_client.get("/health")
        assert resp.json() == {"status": "ok"}

    async def test_root(self, async_client):
        resp = await async_client.get("/")
        assert resp.status_code == 200
        assert resp.json()["api"] == API

    async def test_detailed_health_without_redis_is_degraded(self, async_client):
        resp = await async_client.get(f"{API}/health/")
        body = resp.json()
        assert body["status"] == "degraded"
        assert body["checks"]["database"]["connected"] is True

    async def test_detailed_health_with_redis(self, async_client, fake_redis):
        resp = await async_client.get(f"{API}/health/")
        assert resp.json()["status"] == "healthy"

        resp = await async_client.get(f"{API}/health/redis")
        assert resp.json()["connected"] is True

    async def test_database_health(self, async_client):
        resp = await async_client.get(f"{API}/health/database")
        assert resp.json()["status"] == "healthy"

    async def test_unreachable_database_returns_503(self, async_client, test_app):
        from secondbrain.api.health import get_health_service
        from secondbrain.core.schemas.common import HealthCheckResponse

        class DownHealthService:
            async def get_health_status(self):
                return HealthCheckResponse(
                    status="unhealthy", version="x", checks={"database": {"connected": False}}
                )

        test_app.dependency_overrides[get_health_service] = DownHealthService
        resp = await async_client.get(f"{API}/health/")
        assert resp.status_code == 503
        assert resp.json()["status"] == "unhealthy"
