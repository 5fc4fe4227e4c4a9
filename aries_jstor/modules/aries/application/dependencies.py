"""Aries module application dependencies."""

from typing import NoReturn

from fastapi import Depends

from aries_jstor.core.config import settings
from aries_jstor.modules.aries.application.endpoints import Endpoints
from aries_jstor.modules.aries.application.resolver import IdentifierResolver
from aries_jstor.modules.upstream.infrastructure.client import UpstreamClient


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_upstream_client() -> UpstreamClient:
    _missing_dependency("UpstreamClient")


async def get_endpoints() -> Endpoints:
    return Endpoints.from_settings(settings)


async def get_identifier_resolver(
    client: UpstreamClient = Depends(get_upstream_client),
    endpoints: Endpoints = Depends(get_endpoints),
) -> IdentifierResolver:
    return IdentifierResolver(client, endpoints)
