"""Upstream URL templates."""

from dataclasses import dataclass
from urllib.parse import quote

from aries_jstor.core.config import Settings
from aries_jstor.modules.aries.domain.filters import filter_param

SEARCH_QUERY = "with_meta=false&start=0&limit={limit}&sort=id&dir=DESC"


@dataclass(frozen=True)
class Endpoints:
    """Builds catalog and public API URLs from the configured bases."""

    catalog_url: str
    project: str
    public_url: str
    public_host: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "Endpoints":
        return cls(
            catalog_url=settings.JSTOR_URL,
            project=settings.JSTOR_PROJECT,
            public_url=settings.JSTOR_PUBLIC_URL,
            public_host=settings.public_host,
        )

    @property
    def assets(self) -> str:
        return f"{self.catalog_url.rstrip('/')}/projects/{quote(self.project, safe='')}/assets"

    def asset_search(self, *encoded_filters: str) -> str:
        """Single-hit search; the filters must already be encoded."""
        query = SEARCH_QUERY.format(limit=1)
        return f"{self.assets}?{query}&filter={filter_param(*encoded_filters)}"

    def probe(self) -> str:
        """Zero-limit search used to check that the catalog is reachable."""
        return f"{self.assets}?with_meta=false&start=0&limit=0"

    def representation(self, asset_id: int, representation_id: str) -> str:
        return (
            f"{self.catalog_url.rstrip('/')}/assets/{asset_id}"
            f"/representation/details?_dc={quote(representation_id, safe='')}"
        )

    def public_search(self) -> str:
        return f"{self.public_url.rstrip('/')}/api/search/v1.0/search"

    def public_asset(self, public_id: str) -> str:
        return f"{self.public_url.rstrip('/')}/#/asset/{public_id}"
