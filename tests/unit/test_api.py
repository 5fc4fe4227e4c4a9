"""HTTP surface tests."""

import httpx
import pytest
from httpx import AsyncClient

from aries_jstor.core.config import settings
from tests.fakes import ASSETS_PATH, FakeUpstream, is_id_search, json_response

pytestmark = pytest.mark.anyio


def _single_hit() -> httpx.Response:
    return json_response(
        {
            "total": 1,
            "assets": [
                {
                    "id": 23760225,
                    "filename": "20150110ARCH_0004.tif",
                    "representation_id": "r1",
                }
            ],
        }
    )


# ============================================
# /api/aries
# ============================================


class TestAriesLookup:
    """GET /api/aries/{id} 测试。"""

    async def test_found_returns_descriptor(
        self, async_client: AsyncClient, fake_upstream: FakeUpstream
    ) -> None:
        fake_upstream.add("GET", ASSETS_PATH, _single_hit(), where=is_id_search)
        fake_upstream.add(
            "GET",
            "/assets/23760225/representation/details",
            json_response({"url": "https://img.test/full.jpg", "iiif_url": ""}),
        )

        response = await async_client.get("/api/aries/23760225")

        assert response.status_code == 200
        assert response.json() == {
            "identifier": ["23760225", "20150110ARCH_0004.tif"],
            "service_url": [
                {"url": "https://img.test/full.jpg", "protocol": "image-download"}
            ],
        }

    async def test_not_found_is_plain_text_404(
        self, async_client: AsyncClient, fake_upstream: FakeUpstream
    ) -> None:
        fake_upstream.add("GET", ASSETS_PATH, json_response({"total": 0}))

        response = await async_client.get("/api/aries/missing-42")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "missing-42 not found"

    async def test_unreachable_catalog_is_also_404(
        self, async_client: AsyncClient, fake_upstream: FakeUpstream
    ) -> None:
        fake_upstream.add("GET", ASSETS_PATH, httpx.ConnectError("down"))

        response = await async_client.get("/api/aries/23760225")

        assert response.status_code == 404

    async def test_ping(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/aries")

        assert response.status_code == 200
        assert response.text == "JSTOR Aries API"


# ============================================
# 服务端点
# ============================================


class TestServiceEndpoints:
    async def test_version(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/version")

        assert response.status_code == 200
        assert response.text == f"Aries JSTOR version {settings.VERSION}"

    async def test_favicon(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/favicon.ico")

        assert response.status_code == 200
        assert response.content == b""

    async def test_healthcheck_reachable(
        self, async_client: AsyncClient, fake_upstream: FakeUpstream
    ) -> None:
        fake_upstream.add("GET", ASSETS_PATH, json_response({"total": 12, "assets": []}))

        response = await async_client.get("/healthcheck")

        assert response.status_code == 200
        assert response.json() == {"AriesJSTOR": "true", "JSTOR": "true"}
        [probe] = fake_upstream.searches
        assert probe.url.params["limit"] == "0"

    async def test_healthcheck_unreachable_does_not_log_in(
        self, async_client: AsyncClient, fake_upstream: FakeUpstream
    ) -> None:
        fake_upstream.add("GET", ASSETS_PATH, httpx.Response(403))

        response = await async_client.get("/healthcheck")

        assert response.status_code == 200
        assert response.json() == {"AriesJSTOR": "true", "JSTOR": "false"}
        assert fake_upstream.logins == []
