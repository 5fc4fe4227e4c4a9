"""Authenticated upstream HTTP client."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from loguru import logger

from aries_jstor.core.config import settings
from aries_jstor.core.infrastructure.logging import BusinessEvents
from aries_jstor.modules.sessions.domain.entities import UpstreamSystem
from aries_jstor.modules.sessions.domain.exceptions import AuthError
from aries_jstor.modules.sessions.domain.repository import (
    Authenticator,
    SessionStore,
)
from aries_jstor.modules.upstream.domain.entities import UpstreamResult

AUTH_FAILURE_CODES = frozenset({401, 403})
MAX_REAUTH_ATTEMPTS = 1


class UpstreamClient:
    """Issue cookie-authenticated requests against an upstream system.

    A 401/403 usually means the server dropped the session. The client then
    logs in again and repeats the request once; a second auth failure is
    returned as a rejection.
    """

    def __init__(
        self,
        store: SessionStore,
        authenticator: Authenticator,
        *,
        timeout_sec: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.store = store
        self.authenticator = authenticator
        self.timeout_sec = timeout_sec or settings.UPSTREAM_TIMEOUT_SEC
        self._transport = transport

    async def call(
        self,
        system: UpstreamSystem,
        method: str,
        url: str,
        *,
        data: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
        reauthenticate: bool = True,
    ) -> UpstreamResult:
        """Send one request and return a tagged result.

        Args:
            system: 目标上游系统（决定使用哪个会话）
            method: HTTP 方法
            url: 完整请求 URL（查询参数已编码）
            data: 表单请求体
            json: JSON 请求体
            headers: 额外请求头
            reauthenticate: 遇到 401/403 时是否重新登录并重试一次
        """
        reauth_attempts = 0
        while True:
            session = self.store.get(system)
            if session.is_empty:
                logger.debug(f"No {system.value} session yet, sending without cookies")
            logger.debug(f"{method} {url}")
            try:
                response = await self._send(
                    method,
                    url,
                    cookies=session.cookies,
                    data=data,
                    json=json,
                    headers=headers,
                )
            except TimeoutError:
                logger.warning(f"Timeout calling {url}: exceeded {self.timeout_sec}s")
                return UpstreamResult.transport_error(
                    url,
                    f"Timeout: exceeded {self.timeout_sec}s",
                    reauthenticated=reauth_attempts > 0,
                )
            except httpx.TimeoutException as exc:
                logger.warning(f"Timeout calling {url}: {exc}")
                return UpstreamResult.transport_error(
                    url, f"Timeout: {exc}", reauthenticated=reauth_attempts > 0
                )
            except httpx.HTTPError as exc:
                logger.warning(f"Unable to {method} {url}: {exc}")
                return UpstreamResult.transport_error(
                    url, f"Error: {exc}", reauthenticated=reauth_attempts > 0
                )

            if response.status_code in AUTH_FAILURE_CODES:
                if reauthenticate and reauth_attempts < MAX_REAUTH_ATTEMPTS:
                    reauth_attempts += 1
                    BusinessEvents.upstream_reauth(
                        system=system.value,
                        url=url,
                        status_code=response.status_code,
                    )
                    try:
                        await self.authenticator.login(system)
                    except AuthError as exc:
                        return UpstreamResult.transport_error(
                            url, exc.message, reauthenticated=True
                        )
                    continue

                logger.warning(
                    f"Unable to {method} {url}: HTTP {response.status_code} "
                    "after session refresh"
                )
                return UpstreamResult.rejected(
                    url,
                    response.status_code,
                    response.text,
                    reauthenticated=reauth_attempts > 0,
                )

            if not response.is_success:
                logger.warning(f"{method} {url} failed: HTTP {response.status_code}")
                return UpstreamResult.rejected(
                    url,
                    response.status_code,
                    response.text,
                    reauthenticated=reauth_attempts > 0,
                )

            return UpstreamResult.success(
                url,
                response.text,
                response.status_code,
                reauthenticated=reauth_attempts > 0,
            )

    async def get(self, system: UpstreamSystem, url: str, **kwargs: Any) -> UpstreamResult:
        return await self.call(system, "GET", url, **kwargs)

    async def post(self, system: UpstreamSystem, url: str, **kwargs: Any) -> UpstreamResult:
        return await self.call(system, "POST", url, **kwargs)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        cookies: dict[str, str],
        data: dict[str, str] | None,
        json: Any,
        headers: dict[str, str] | None,
    ) -> httpx.Response:
        """Send one request. The whole exchange, body included, shares one deadline."""

        async def _request() -> httpx.Response:
            async with httpx.AsyncClient(
                timeout=self.timeout_sec,
                cookies=cookies,
                follow_redirects=False,
                transport=self._transport,
            ) as client:
                return await client.request(
                    method,
                    url,
                    data=data,
                    json=json,
                    headers=headers,
                )

        return await asyncio.wait_for(_request(), timeout=self.timeout_sec)
