"""Aries JSTOR - JSTOR Forum 标识符解析服务入口。"""

import sentry_sdk
from fastapi import Depends, FastAPI, Response
from fastapi.concurrency import asynccontextmanager
from fastapi.responses import PlainTextResponse
from loguru import logger

from aries_jstor.core.config import settings
from aries_jstor.core.domain.exceptions import DomainException
from aries_jstor.core.infrastructure.logging import setup_logging
from aries_jstor.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
)
from aries_jstor.core.interfaces.http.routers import api_router
from aries_jstor.modules.aries.application import dependencies as aries_app_deps
from aries_jstor.modules.aries.application.endpoints import Endpoints
from aries_jstor.modules.aries.application.health import check_catalog_health
from aries_jstor.modules.sessions.application.bootstrap import establish_sessions
from aries_jstor.modules.sessions.domain.entities import Credentials
from aries_jstor.modules.sessions.infrastructure.authenticator import (
    HttpAuthenticator,
)
from aries_jstor.modules.sessions.infrastructure.session_store import (
    InMemorySessionStore,
)
from aries_jstor.modules.upstream.infrastructure import dependencies as upstream_deps
from aries_jstor.modules.upstream.infrastructure.client import UpstreamClient

# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        environment=settings.ENVIRONMENT,
        release=settings.VERSION,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    启动前必须登录 JSTOR 与 ARTSTOR，任一失败则抛出 AuthError，服务不会开始接收请求。
    """
    setup_logging()
    logger.info("===> Aries JSTOR service starting up <===")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    missing = settings.missing_required()
    if missing:
        logger.warning(f"Missing required configuration: {', '.join(missing)}")

    store = InMemorySessionStore()
    authenticator = HttpAuthenticator(
        store,
        Credentials(email=settings.JSTOR_EMAIL, password=settings.JSTOR_PASSWORD),
    )
    await establish_sessions(authenticator, attempts=settings.STARTUP_LOGIN_ATTEMPTS)

    app.state.session_store = store
    app.state.upstream_client = UpstreamClient(store, authenticator)

    logger.info(f"Start Aries JSTOR v{settings.VERSION} on port {settings.SERVER_PORT}")
    yield

    logger.info("Shutting down Aries JSTOR...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "将外部标识符解析为 Aries 描述（标识符、服务地址、公开访问地址）。\n\n"
        "查询 JSTOR Forum 管理 API，已发布资产额外查询 Artstor 公共 API。"
    ),
    version=settings.VERSION,
    lifespan=lifespan,
)

# Dependency overrides (application -> infrastructure)
app.dependency_overrides[aries_app_deps.get_upstream_client] = (
    upstream_deps.get_upstream_client
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(api_router, prefix="/api")


@app.get("/favicon.ico", include_in_schema=False)
async def favicon() -> Response:
    """Silence browser favicon requests."""
    return Response(status_code=200)


@app.get("/version", tags=["health"], response_class=PlainTextResponse)
async def version() -> str:
    """Report the service version."""
    return f"Aries JSTOR version {settings.VERSION}"


@app.get("/healthcheck", tags=["health"])
async def health_check(
    client: UpstreamClient = Depends(aries_app_deps.get_upstream_client),
    endpoints: Endpoints = Depends(aries_app_deps.get_endpoints),
) -> dict[str, str]:
    """Health check endpoint.

    用 limit=0 的查询探测 JSTOR 是否可达；探测不会触发重新登录。
    """
    catalog_health = await check_catalog_health(client, endpoints)
    return {
        "AriesJSTOR": "true",
        "JSTOR": "true" if catalog_health.reachable else "false",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
