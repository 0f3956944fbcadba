"""Wire models for the extension registry API."""

from ovsx_client.models.registry import (
    SortBy,
    SortOrder,
    VSXAllVersions,
    VSXExtensionRaw,
    VSXExtensionRawFiles,
    VSXQueryParam,
    VSXQueryResult,
    VSXSearchEntry,
    VSXSearchParam,
    VSXSearchResult,
    VSXUser,
)

__all__ = [
    "SortBy",
    "SortOrder",
    "VSXAllVersions",
    "VSXExtensionRaw",
    "VSXExtensionRawFiles",
    "VSXQueryParam",
    "VSXQueryResult",
    "VSXSearchEntry",
    "VSXSearchParam",
    "VSXSearchResult",
    "VSXUser",
]
