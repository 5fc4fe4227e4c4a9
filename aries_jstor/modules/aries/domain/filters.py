"""Catalog filter query encoding.

The catalog expects ``filter=[<obj>,<obj>,...]`` where every object is a
percent-encoded JSON document. The brackets and commas between objects stay
literal.
"""

import json
from collections.abc import Mapping
from urllib.parse import quote, unquote

from aries_jstor.modules.aries.domain.entities import FilterKind, SearchFilter


def encode(terms: Mapping[str, str]) -> str:
    """Serialize ``terms`` to compact JSON and percent-encode every reserved char.

    Keys are sorted so equal mappings always produce identical output.
    """
    payload = json.dumps(
        dict(terms),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return quote(payload, safe="")


def decode(encoded: str) -> str:
    """Readable form of an encoded filter, for logging."""
    return unquote(encoded)


def filter_param(*encoded: str) -> str:
    """Wrap already encoded filter objects in a single ``[...]`` group."""
    return f"[{','.join(encoded)}]"


def id_filter(external_id: str) -> SearchFilter:
    """Numeric equality on the catalog internal ID (SSID)."""
    return SearchFilter(
        field="id",
        field_name="SSID",
        kind=FilterKind.NUMERIC,
        value=external_id,
        comparison="eq",
    )


def filename_filter(external_id: str) -> SearchFilter:
    """Filename prefix match; finds multi-page scans sharing an ID stem."""
    return SearchFilter(
        field="filename",
        field_name="Filename",
        kind=FilterKind.STRING,
        value=f"{external_id}*",
    )


def lookup_filters(external_id: str) -> tuple[SearchFilter, ...]:
    """Filters tried for a lookup, in priority order."""
    return (id_filter(external_id), filename_filter(external_id))
