"""Catalog reachability probe.

Issues a zero-limit asset search. The probe never re-authenticates, so it
leaves the stored sessions untouched.
"""

import time

from loguru import logger

from aries_jstor.core.infrastructure.health import HealthStatus, UpstreamHealthResult
from aries_jstor.modules.aries.application.endpoints import Endpoints
from aries_jstor.modules.sessions.domain.entities import UpstreamSystem
from aries_jstor.modules.upstream.infrastructure.client import UpstreamClient


async def check_catalog_health(
    client: UpstreamClient, endpoints: Endpoints
) -> UpstreamHealthResult:
    """Check whether the catalog API answers an authenticated request."""
    start_time = time.time()
    result = await client.get(
        UpstreamSystem.CATALOG, endpoints.probe(), reauthenticate=False
    )
    latency_ms = int((time.time() - start_time) * 1000)

    if not result.is_success:
        logger.warning(f"HealthCheck JSTOR ping failed: {result.error_message}")
        return UpstreamHealthResult(
            status=HealthStatus.ERROR,
            system=UpstreamSystem.CATALOG.value,
            latency_ms=latency_ms,
            error=result.error_message,
        )

    return UpstreamHealthResult(
        status=HealthStatus.OK,
        system=UpstreamSystem.CATALOG.value,
        latency_ms=latency_ms,
    )
