"""
pytest 配置和共享 fixtures。

上游模拟见 tests/fakes.py。

使用方法：
    # 运行所有测试
    uv run pytest

    # 运行带覆盖率
    uv run pytest --cov=aries_jstor --cov-report=html
"""

from collections.abc import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from aries_jstor.modules.aries.application.endpoints import Endpoints
from aries_jstor.modules.aries.application.resolver import IdentifierResolver
from aries_jstor.modules.sessions.domain.entities import Credentials
from aries_jstor.modules.sessions.infrastructure.authenticator import (
    HttpAuthenticator,
)
from aries_jstor.modules.sessions.infrastructure.session_store import (
    InMemorySessionStore,
)
from aries_jstor.modules.upstream.infrastructure.client import UpstreamClient
from tests.fakes import CATALOG_URL, PROJECT, PUBLIC_URL, FakeUpstream, login_response


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ============================================
# 模拟上游
# ============================================


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    upstream = FakeUpstream()
    upstream.add("POST", "/account", login_response())
    upstream.add(
        "GET",
        "/api/secure/userinfo",
        httpx.Response(200, headers=[("set-cookie", "AWSELB=public; Path=/")]),
    )
    return upstream


# ============================================
# 组件 Fixtures
# ============================================


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(email="aries@example.edu", password="s3cret")


@pytest.fixture
def authenticator(
    session_store: InMemorySessionStore,
    credentials: Credentials,
    fake_upstream: FakeUpstream,
) -> HttpAuthenticator:
    return HttpAuthenticator(
        session_store,
        credentials,
        catalog_url=CATALOG_URL,
        public_url=PUBLIC_URL,
        timeout_sec=1.0,
        transport=fake_upstream.transport,
    )


@pytest.fixture
def upstream_client(
    session_store: InMemorySessionStore,
    authenticator: HttpAuthenticator,
    fake_upstream: FakeUpstream,
) -> UpstreamClient:
    return UpstreamClient(
        session_store,
        authenticator,
        timeout_sec=1.0,
        transport=fake_upstream.transport,
    )


@pytest.fixture
def endpoints() -> Endpoints:
    return Endpoints(
        catalog_url=CATALOG_URL,
        project=PROJECT,
        public_url=PUBLIC_URL,
        public_host="library.test",
    )


@pytest.fixture
def resolver(upstream_client: UpstreamClient, endpoints: Endpoints) -> IdentifierResolver:
    return IdentifierResolver(upstream_client, endpoints)


# ============================================
# HTTP Client Fixtures
# ============================================


@pytest.fixture
async def async_client(
    upstream_client: UpstreamClient, endpoints: Endpoints
) -> AsyncGenerator[AsyncClient, None]:
    """异步 HTTP 客户端（用于 API 测试，不执行 lifespan 登录）。"""
    from aries_jstor.modules.aries.application import dependencies as aries_app_deps
    from main import app

    saved_overrides = dict(app.dependency_overrides)
    app.dependency_overrides[aries_app_deps.get_upstream_client] = (
        lambda: upstream_client
    )
    app.dependency_overrides[aries_app_deps.get_endpoints] = lambda: endpoints

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
    app.dependency_overrides.update(saved_overrides)
