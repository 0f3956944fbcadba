"""
Registry Wire Models

Pydantic models for the Open VSX registry API. Field names are snake_case in
Python and camelCase on the wire (``include_all_versions`` <-> ``includeAllVersions``).

Response models allow extra fields so that anything the registry adds is
kept on the parsed object.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SortOrder = Literal["asc", "desc"]
SortBy = Literal["averageRating", "downloadCount", "relevance", "timestamp"]

# Key of the host engine inside an ``engines`` mapping
VSCODE_ENGINE = "vscode"


class RegistryModel(BaseModel):
    """Base for all registry payloads (camelCase aliases, extras preserved)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict:
        """Serialize to the registry's JSON shape, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EngineAwareModel(RegistryModel):
    """A record carrying an optional ``engines`` mapping."""

    engines: dict[str, Any] | None = None

    @property
    def engine_range(self) -> str | None:
        """The ``engines.vscode`` range, or None unless it is a non-empty string."""
        if not self.engines:
            return None
        engine = self.engines.get(VSCODE_ENGINE)
        if isinstance(engine, str) and engine:
            return engine
        return None


# =============================================================================
# Request Models
# =============================================================================


class VSXSearchParam(RegistryModel):
    """Optional search parameters for ``GET api/-/search``."""

    model_config = ConfigDict(extra="forbid")

    query: str | None = None
    category: str | None = None
    size: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    sort_order: SortOrder | None = None
    sort_by: SortBy | None = None
    include_all_versions: bool | None = None


class VSXQueryParam(RegistryModel):
    """Body of ``POST api/-/query``."""

    model_config = ConfigDict(extra="forbid")

    namespace_name: str | None = None
    extension_name: str | None = None
    extension_version: str | None = None
    extension_id: str | None = None
    extension_uuid: str | None = None
    namespace_uuid: str | None = None
    include_all_versions: bool | None = None


# =============================================================================
# Response Models
# =============================================================================
#
# Only ``version`` is required. Everything else the registry may omit or
# send as null without failing the whole response.


class VSXUser(RegistryModel):
    """Publisher account of an extension version."""

    login_name: str | None = None
    homepage: str | None = None


class VSXExtensionRawFiles(RegistryModel):
    """Download and resource links of an extension version."""

    download: str | None = None
    manifest: str | None = None
    readme: str | None = None
    license: str | None = None
    icon: str | None = None


class VSXAllVersions(EngineAwareModel):
    """One entry of a search entry's version listing."""

    version: str
    url: str | None = None


class VSXExtensionRaw(EngineAwareModel):
    """Full metadata of a single extension version."""

    version: str
    name: str | None = None
    namespace: str | None = None
    error: str | None = None
    namespace_url: str | None = None
    reviews_url: str | None = None
    published_by: VSXUser | None = None
    namespace_access: str | None = None
    files: VSXExtensionRawFiles | None = None
    all_versions: dict[str, Any] | None = None
    average_rating: float | None = None
    download_count: int | None = None
    review_count: int | None = None
    timestamp: str | None = None
    preview: bool | None = None
    verified: bool | None = None
    display_name: str | None = None
    description: str | None = None
    categories: list[str] | None = None
    tags: list[str] | None = None
    license: str | None = None
    homepage: str | None = None
    repository: str | None = None
    bugs: str | None = None
    dependencies: list[Any] | None = None
    bundled_extensions: list[Any] | None = None

    @property
    def extension_id(self) -> str | None:
        """``namespace.name`` identifier, when both parts are known."""
        if not self.namespace or not self.name:
            return None
        return f"{self.namespace}.{self.name}"


class VSXSearchEntry(RegistryModel):
    """A single hit of a search request."""

    version: str
    url: str | None = None
    name: str | None = None
    namespace: str | None = None
    files: VSXExtensionRawFiles | None = None
    all_versions: list[VSXAllVersions] | None = None
    average_rating: float | None = None
    download_count: int | None = None
    timestamp: str | None = None
    display_name: str | None = None
    description: str | None = None


class VSXSearchResult(RegistryModel):
    """Response of ``GET api/-/search``."""

    error: str | None = None
    offset: int | None = None
    total_size: int | None = None
    extensions: list[VSXSearchEntry] | None = None


class VSXQueryResult(RegistryModel):
    """Response of ``POST api/-/query``."""

    extensions: list[VSXExtensionRaw] | None = None
