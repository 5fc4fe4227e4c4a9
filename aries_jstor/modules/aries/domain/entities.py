"""Aries lookup domain models.

Catalog/Public payload models mirror the upstream JSON; anything the
upstream omits falls back to an empty value.
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FilterKind(str, Enum):
    """Catalog filter value types."""

    NUMERIC = "numeric"
    STRING = "string"


@dataclass(frozen=True)
class SearchFilter:
    """One structured constraint of a catalog ``filter`` query parameter."""

    field: str
    field_name: str  # label shown in the catalog UI
    kind: FilterKind
    value: str
    comparison: str | None = None

    @property
    def label(self) -> str:
        return f"{self.field_name}={self.value}"

    def terms(self) -> dict[str, str]:
        terms = {
            "type": self.kind.value,
            "field": self.field,
            "fieldName": self.field_name,
            "value": self.value,
        }
        if self.comparison:
            terms["comparison"] = self.comparison
        return terms


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class CatalogAsset(_UpstreamModel):
    """A catalog search hit."""

    asset_id: int = Field(0, alias="id", description="Catalog internal ID (SSID)")
    filename: str = Field("", description="原始文件名")
    representation_id: str = Field("", description="Representation ID")


class CatalogSearchPage(_UpstreamModel):
    """Catalog ``/projects/{project}/assets`` response."""

    total: int = 0
    assets: list[CatalogAsset] = Field(default_factory=list)


class CatalogRepresentation(_UpstreamModel):
    """Catalog representation details of an asset."""

    download_url: str = Field("", alias="url")
    presentation_url: str = Field("", alias="iiif_url")


class PublicRecord(_UpstreamModel):
    """A public search hit."""

    public_id: str = Field("", alias="artstorid")


class PublicSearchPage(_UpstreamModel):
    """Public search API response."""

    total: int = 0
    results: list[PublicRecord] = Field(default_factory=list)


class ServiceProtocol(str, Enum):
    """Protocol tags attached to service URLs."""

    IMAGE_DOWNLOAD = "image-download"
    IIIF_PRESENTATION = "iiif-presentation"


@dataclass(frozen=True)
class ServiceURL:
    url: str
    protocol: ServiceProtocol


@dataclass(frozen=True)
class AriesDescriptor:
    """Resolution result returned to Aries clients."""

    identifiers: tuple[str, ...] = ()
    service_urls: tuple[ServiceURL, ...] = ()
    access_urls: tuple[str, ...] = ()


@dataclass
class DescriptorBuilder:
    """Collects descriptor parts while a lookup is running."""

    identifiers: list[str] = field(default_factory=list)
    service_urls: list[ServiceURL] = field(default_factory=list)
    access_urls: list[str] = field(default_factory=list)

    def add_service_url(self, url: str, protocol: ServiceProtocol) -> None:
        if url:
            self.service_urls.append(ServiceURL(url=url, protocol=protocol))

    def build(self) -> AriesDescriptor:
        return AriesDescriptor(
            identifiers=tuple(self.identifiers),
            service_urls=tuple(self.service_urls),
            access_urls=tuple(self.access_urls),
        )
