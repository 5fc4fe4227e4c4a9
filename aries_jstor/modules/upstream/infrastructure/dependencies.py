"""Upstream module dependencies."""

from fastapi import Request

from aries_jstor.modules.upstream.infrastructure.client import UpstreamClient


async def get_upstream_client(request: Request) -> UpstreamClient:
    """Client built at startup; it shares the process-wide session store."""
    return request.app.state.upstream_client
