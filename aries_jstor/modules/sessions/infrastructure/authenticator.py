"""HTTP login handshakes for the catalog and public APIs."""

from __future__ import annotations

import asyncio
from http.cookies import CookieError, SimpleCookie

import httpx
from loguru import logger

from aries_jstor.core.config import settings
from aries_jstor.core.infrastructure.logging import BusinessEvents
from aries_jstor.modules.sessions.domain.entities import (
    Credentials,
    Session,
    UpstreamSystem,
)
from aries_jstor.modules.sessions.domain.exceptions import AuthError
from aries_jstor.modules.sessions.domain.repository import SessionStore


class HttpAuthenticator:
    """Log in to an upstream system and store the resulting cookies.

    The catalog answers a bad password with a 200 and an anonymous cookie
    set, so HTTP status is never used to decide success here. Only
    transport failures and the overall deadline raise ``AuthError``.
    """

    def __init__(
        self,
        store: SessionStore,
        credentials: Credentials,
        *,
        catalog_url: str | None = None,
        public_url: str | None = None,
        timeout_sec: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.store = store
        self.credentials = credentials
        self.catalog_url = (catalog_url or settings.JSTOR_URL).rstrip("/")
        self.public_url = (public_url or settings.JSTOR_PUBLIC_URL).rstrip("/")
        self.timeout_sec = timeout_sec or settings.UPSTREAM_TIMEOUT_SEC
        self._transport = transport

    async def login(self, system: UpstreamSystem) -> Session:
        """Run the login handshake for ``system`` and replace its session."""
        if system == UpstreamSystem.CATALOG:
            logger.info("Logging into JSTOR...")
        else:
            logger.info("Get ARTSTOR session...")

        try:
            response, cookies = await asyncio.wait_for(
                self._login_exchange(system), timeout=self.timeout_sec
            )
        except TimeoutError as exc:
            logger.error(f"Login to {system.value} timed out after {self.timeout_sec}s")
            raise AuthError(
                system.value, f"timed out after {self.timeout_sec}s"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error(f"Login to {system.value} failed: {exc}")
            raise AuthError(system.value, str(exc) or type(exc).__name__) from exc

        session = Session.from_cookies(system, cookies)
        self.store.replace(session)
        if session.is_empty:
            logger.warning(f"{system.value} login returned no cookies")

        BusinessEvents.upstream_login(
            system=system.value,
            cookie_count=len(cookies),
            status_code=response.status_code,
        )
        logger.info(f"{system.value} session started with {len(cookies)} cookies")
        return session

    async def _login_exchange(
        self, system: UpstreamSystem
    ) -> tuple[httpx.Response, dict[str, str]]:
        async with httpx.AsyncClient(
            timeout=self.timeout_sec,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = await self._handshake(client, system)
            cookies = {cookie.name: cookie.value for cookie in client.cookies.jar}
        cookies.update(_set_cookie_values(response))
        return response, cookies

    async def _handshake(
        self, client: httpx.AsyncClient, system: UpstreamSystem
    ) -> httpx.Response:
        if system == UpstreamSystem.CATALOG:
            return await client.post(
                f"{self.catalog_url}/account",
                data={
                    "email": self.credentials.email,
                    "password": self.credentials.password,
                },
            )
        return await client.get(f"{self.public_url}/api/secure/userinfo")


def _set_cookie_values(response: httpx.Response) -> dict[str, str]:
    """Every cookie set along the redirect chain, whatever its Domain attribute.

    The client jar drops cookies scoped to another domain; the session keeps
    them all.
    """
    cookies: dict[str, str] = {}
    for hop in (*response.history, response):
        for header in hop.headers.get_list("set-cookie"):
            parsed = SimpleCookie()
            try:
                parsed.load(header)
            except CookieError as exc:
                logger.warning(f"Ignoring malformed Set-Cookie from {hop.url}: {exc}")
                continue
            cookies.update({name: morsel.value for name, morsel in parsed.items()})
    return cookies
