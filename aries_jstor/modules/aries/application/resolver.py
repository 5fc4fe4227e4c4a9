"""Identifier resolution service.

把外部标识符解析为 Aries 描述：
1. 按优先级依次尝试过滤器（SSID 精确匹配 → 文件名前缀匹配），首个唯一命中即为结果
2. 命中后拉取 representation 详情，补充下载 / IIIF 链接
3. 若资产已发布，再到 Public API 查询公开 ID，补充访问链接

富化与公开链接解析失败只会让结果变少，不会把已找到的资产变成未找到。
"""

import re

from loguru import logger

from aries_jstor.core.domain.exceptions import UpstreamError
from aries_jstor.core.infrastructure.logging import BusinessEvents
from aries_jstor.modules.aries.application.endpoints import Endpoints
from aries_jstor.modules.aries.domain.entities import (
    AriesDescriptor,
    CatalogAsset,
    CatalogRepresentation,
    CatalogSearchPage,
    DescriptorBuilder,
    PublicSearchPage,
    SearchFilter,
    ServiceProtocol,
)
from aries_jstor.modules.aries.domain.exceptions import (
    AmbiguousMatchError,
    AssetNotFoundError,
)
from aries_jstor.modules.aries.domain.filters import decode, encode, lookup_filters
from aries_jstor.modules.sessions.domain.entities import UpstreamSystem
from aries_jstor.modules.upstream.infrastructure.client import UpstreamClient

# Only published assets have a public record.
PUBLISHED_MARKER = re.compile(r'"status"\s*:\s*"Published"')


class IdentifierResolver:
    """Resolve external identifiers against the catalog and public APIs."""

    def __init__(self, client: UpstreamClient, endpoints: Endpoints):
        self.client = client
        self.endpoints = endpoints

    async def resolve(self, external_id: str) -> AriesDescriptor:
        """Resolve ``external_id`` into a descriptor.

        Raises:
            AssetNotFoundError: 所有过滤器都没有唯一命中（包括全部请求失败的情况）
        """
        for search_filter in lookup_filters(external_id):
            try:
                asset, raw_response = await self._search(search_filter)
            except AmbiguousMatchError as exc:
                logger.info(exc.message)
                continue
            except (UpstreamError, ValueError) as exc:
                logger.warning(f"Query filter {search_filter.label} failed: {exc}")
                BusinessEvents.lookup_filter_failed(
                    external_id=external_id,
                    filter_label=search_filter.label,
                    reason=str(exc),
                )
                continue

            if asset is None:
                continue

            builder = DescriptorBuilder(
                identifiers=[str(asset.asset_id), asset.filename]
            )
            await self._add_service_urls(asset, builder)

            if PUBLISHED_MARKER.search(raw_response):
                logger.info(f"{external_id} is published, looking for public URL")
                await self._add_access_url(asset, builder)

            descriptor = builder.build()
            BusinessEvents.asset_resolved(
                external_id=external_id,
                asset_id=asset.asset_id,
                filter_label=search_filter.label,
                service_urls=len(descriptor.service_urls),
                access_urls=len(descriptor.access_urls),
            )
            return descriptor

        BusinessEvents.asset_not_found(external_id=external_id)
        raise AssetNotFoundError(external_id)

    async def _search(
        self, search_filter: SearchFilter
    ) -> tuple[CatalogAsset | None, str]:
        """Run one single-hit catalog search.

        Returns the matched asset (``None`` when nothing matched) and the raw
        response text.
        """
        encoded = encode(search_filter.terms())
        logger.debug(f"Catalog search with filter {decode(encoded)}")
        url = self.endpoints.asset_search(encoded)
        result = await self.client.get(UpstreamSystem.CATALOG, url)
        raw_response = result.unwrap()

        page = CatalogSearchPage.model_validate_json(raw_response)
        if page.total == 0:
            return None, raw_response
        if page.total > 1:
            raise AmbiguousMatchError(search_filter.label, page.total)
        if not page.assets:
            raise ValueError("catalog reported one hit but returned no assets")
        return page.assets[0], raw_response

    async def _add_service_urls(
        self, asset: CatalogAsset, builder: DescriptorBuilder
    ) -> None:
        url = self.endpoints.representation(asset.asset_id, asset.representation_id)
        result = await self.client.get(UpstreamSystem.CATALOG, url)
        if not result.is_success:
            BusinessEvents.feature_degraded(
                feature="representation_details",
                reason=result.error_message or "request failed",
                asset_id=asset.asset_id,
                reauthenticated=result.reauthenticated,
            )
            return

        try:
            representation = CatalogRepresentation.model_validate_json(result.body)
        except ValueError as exc:
            logger.warning(f"Unable to parse representation of {asset.asset_id}: {exc}")
            BusinessEvents.feature_degraded(
                feature="representation_details",
                reason=str(exc),
                asset_id=asset.asset_id,
            )
            return

        builder.add_service_url(
            representation.download_url, ServiceProtocol.IMAGE_DOWNLOAD
        )
        builder.add_service_url(
            representation.presentation_url, ServiceProtocol.IIIF_PRESENTATION
        )

    async def _add_access_url(
        self, asset: CatalogAsset, builder: DescriptorBuilder
    ) -> None:
        public_id = await self._find_public_id(asset.asset_id)
        if public_id:
            builder.access_urls.append(self.endpoints.public_asset(public_id))

    async def _find_public_id(self, asset_id: int) -> str | None:
        """Look up the public ID of a published asset; ``None`` on any failure."""
        body = {
            "limit": 1,
            "start": 0,
            "content_types": ["art"],
            "query": f"ssid:{asset_id}",
        }
        headers = {"Content-Type": "application/json"}
        if self.endpoints.public_host:
            headers["authority"] = self.endpoints.public_host

        result = await self.client.post(
            UpstreamSystem.PUBLIC,
            self.endpoints.public_search(),
            json=body,
            headers=headers,
        )
        if not result.is_success:
            BusinessEvents.feature_degraded(
                feature="public_url",
                reason=result.error_message or "request failed",
                asset_id=asset_id,
                reauthenticated=result.reauthenticated,
            )
            return None

        try:
            page = PublicSearchPage.model_validate_json(result.body)
        except ValueError as exc:
            logger.warning(f"Unable to parse public search response: {exc}")
            return None

        if page.total != 1 or not page.results or not page.results[0].public_id:
            logger.info(f"No matches from public search for {asset_id}")
            return None

        public_id = page.results[0].public_id
        logger.info(f"Catalog ID {asset_id} = public ID {public_id}")
        return public_id
