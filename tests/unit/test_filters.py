"""Catalog filter encoding tests."""

import json
from urllib.parse import unquote

from aries_jstor.modules.aries.application.endpoints import Endpoints
from aries_jstor.modules.aries.domain.entities import FilterKind
from aries_jstor.modules.aries.domain.filters import (
    decode,
    encode,
    filename_filter,
    filter_param,
    id_filter,
    lookup_filters,
)


class TestEncode:
    """encode() 测试。"""

    def test_encode_is_deterministic(self):
        terms = {"type": "numeric", "comparison": "eq", "value": "42", "field": "id"}
        assert encode(terms) == encode(terms)
        assert encode(terms) == encode(dict(terms))

    def test_field_order_does_not_matter(self):
        first = {"field": "id", "value": "42", "type": "numeric"}
        second = {"type": "numeric", "value": "42", "field": "id"}
        assert encode(first) == encode(second)

    def test_encodes_every_reserved_character(self):
        encoded = encode({"value": "a b/c?d&e=f*", "field": "filename"})
        for reserved in '{}":,/?&= ':
            assert reserved not in encoded
        assert "%7B" in encoded
        assert "%22" in encoded

    def test_encoded_value_is_compact_sorted_json(self):
        encoded = encode({"value": "20150110ARCH*", "field": "filename"})
        assert unquote(encoded) == '{"field":"filename","value":"20150110ARCH*"}'

    def test_decode_round_trips_for_logging(self):
        terms = {"field": "id", "value": "23760225"}
        assert json.loads(decode(encode(terms))) == terms

    def test_non_ascii_values_are_utf8_encoded(self):
        encoded = encode({"value": "é"})
        assert "%C3%A9" in encoded


class TestFilterParam:
    def test_single_filter_wrapped_in_brackets(self):
        assert filter_param("abc") == "[abc]"

    def test_multiple_filters_comma_joined_once(self):
        assert filter_param("a", "b", "c") == "[a,b,c]"


class TestLookupFilters:
    """查找过滤器构造测试。"""

    def test_id_filter_terms(self):
        search_filter = id_filter("23760225")
        assert search_filter.kind == FilterKind.NUMERIC
        assert search_filter.terms() == {
            "type": "numeric",
            "comparison": "eq",
            "value": "23760225",
            "field": "id",
            "fieldName": "SSID",
        }

    def test_filename_filter_is_prefix_match(self):
        search_filter = filename_filter("20150110ARCH")
        assert search_filter.terms() == {
            "type": "string",
            "field": "filename",
            "fieldName": "Filename",
            "value": "20150110ARCH*",
        }

    def test_id_filter_is_tried_first(self):
        filters = lookup_filters("123")
        assert [f.field for f in filters] == ["id", "filename"]

    def test_search_url_embeds_encoded_filter(self):
        endpoints = Endpoints(
            catalog_url="https://forum.test/",
            project="proj",
            public_url="https://library.test",
        )
        encoded = encode(id_filter("7").terms())
        url = endpoints.asset_search(encoded)
        assert url == (
            "https://forum.test/projects/proj/assets?"
            "with_meta=false&start=0&limit=1&sort=id&dir=DESC"
            f"&filter=[{encoded}]"
        )
