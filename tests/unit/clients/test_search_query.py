"""
Search Query Builder Tests

Tests for build_search_query:
- Empty / absent parameters produce no query string
- One encoded pair per present field, in the fixed wire order
- Values are encoded like encodeURIComponent
"""

import pytest

from ovsx_client.clients.search_query import (
    SEARCH_QUERY_RULES,
    QueryRule,
    build_search_query,
    encode_component,
)
from ovsx_client.models.registry import VSXSearchParam

# =============================================================================
# Empty Parameters
# =============================================================================


class TestEmptySearchQuery:
    """Tests for parameter sets with no field present."""

    def test_none_param_builds_empty_query(self) -> None:
        assert build_search_query(None) == ""

    def test_default_param_builds_empty_query(self) -> None:
        assert build_search_query(VSXSearchParam()) == ""

    def test_falsy_values_are_treated_as_absent(self) -> None:
        """size=0, offset=0, empty strings and False are left out."""
        param = VSXSearchParam(
            query="",
            size=0,
            offset=0,
            include_all_versions=False,
        )

        assert build_search_query(param) == ""


# =============================================================================
# Field Order and Encoding
# =============================================================================


class TestSearchQueryFields:
    """Tests for present fields."""

    def test_single_field_is_prefixed_with_question_mark(self) -> None:
        assert build_search_query(VSXSearchParam(query="python")) == "?query=python"

    def test_all_fields_in_fixed_order(self) -> None:
        param = VSXSearchParam(
            include_all_versions=True,
            sort_by="downloadCount",
            sort_order="desc",
            offset=20,
            size=10,
            category="Programming Languages",
            query="rust analyzer",
        )

        assert build_search_query(param) == (
            "?query=rust%20analyzer"
            "&category=Programming%20Languages"
            "&size=10"
            "&offset=20"
            "&sortOrder=desc"
            "&sortBy=downloadCount"
            "&includeAllVersions=true"
        )

    def test_one_pair_per_present_field(self) -> None:
        param = VSXSearchParam(category="Themes", offset=5)

        query = build_search_query(param)

        assert query == "?category=Themes&offset=5"
        assert query.count("=") == 2

    def test_params_accept_wire_names(self) -> None:
        param = VSXSearchParam.model_validate({"sortBy": "timestamp", "includeAllVersions": True})

        assert build_search_query(param) == "?sortBy=timestamp&includeAllVersions=true"

    def test_rule_order_matches_wire_contract(self) -> None:
        keys = [rule.key for rule in SEARCH_QUERY_RULES]

        assert keys == [
            "query",
            "category",
            "size",
            "offset",
            "sortOrder",
            "sortBy",
            "includeAllVersions",
        ]


class TestEncodeComponent:
    """encode_component mirrors JavaScript's encodeURIComponent."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("a b", "a%20b"),
            ("c++ & c#", "c%2B%2B%20%26%20c%23"),
            ("a/b?c=d", "a%2Fb%3Fc%3Dd"),
            ("keep-_.!~*'()", "keep-_.!~*'()"),
            ("ünïcode", "%C3%BCn%C3%AFcode"),
        ],
    )
    def test_encodes_like_encode_uri_component(self, value: str, expected: str) -> None:
        assert encode_component(value) == expected

    def test_rule_renders_none_for_missing_attribute_value(self) -> None:
        rule = QueryRule("category", "category", encode_component)

        assert rule.render(VSXSearchParam()) is None
        assert rule.render(VSXSearchParam(category="Linters")) == "category=Linters"
