"""
Search Query Builder

Builds the query string of ``GET api/-/search`` from a VSXSearchParam using an
explicit, ordered rule table. Each rule names the parameter attribute, the wire
key and the formatter for its value. A field is emitted only when it is set
and truthy, so ``size=0``, ``offset=0`` and ``include_all_versions=False``
are left out just like unset fields.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final
from urllib.parse import quote

from ovsx_client.models.registry import VSXSearchParam

# Characters left unescaped by JavaScript's encodeURIComponent besides
# the alphanumerics and ``-_.~`` that quote() never escapes.
_URI_COMPONENT_SAFE: Final[str] = "!*'()"


def encode_component(value: Any) -> str:
    """Percent-encode a value the way encodeURIComponent does."""
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def format_int(value: int) -> str:
    return str(int(value))


def format_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class QueryRule:
    """One optional search field: where to read it, its key, how to render it."""

    attribute: str
    key: str
    formatter: Callable[[Any], str]

    def render(self, param: VSXSearchParam) -> str | None:
        """Return ``key=value`` for this field, or None when it is absent."""
        value = getattr(param, self.attribute)
        if not value:
            return None
        return f"{self.key}={self.formatter(value)}"


# Field order is part of the wire contract.
SEARCH_QUERY_RULES: Final[tuple[QueryRule, ...]] = (
    QueryRule("query", "query", encode_component),
    QueryRule("category", "category", encode_component),
    QueryRule("size", "size", format_int),
    QueryRule("offset", "offset", format_int),
    QueryRule("sort_order", "sortOrder", encode_component),
    QueryRule("sort_by", "sortBy", encode_component),
    QueryRule("include_all_versions", "includeAllVersions", format_bool),
)


def build_search_query(param: VSXSearchParam | None = None) -> str:
    """Build the query string for a search request.

    Args:
        param: Search parameters; None behaves like an empty parameter set

    Returns:
        ``?key=value&...`` with one pair per present field, or an empty string
        when no field is present
    """
    if param is None:
        return ""
    pairs = [
        pair
        for pair in (rule.render(param) for rule in SEARCH_QUERY_RULES)
        if pair is not None
    ]
    if not pairs:
        return ""
    return "?" + "&".join(pairs)
