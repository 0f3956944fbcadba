"""
Open VSX Registry Client

Async client for the extension registry HTTP API:
- search: GET api/-/search with optional query parameters
- query: POST api/-/query by extension id, name, version or uuid
- latest compatible version: first listed version whose ``engines.vscode``
  range accepts the configured host API version

Patterns Applied:
- Immutable options owned by the client
- Transport injected through RegistryTransportProtocol (FakeRegistryTransport in tests)
- Custom namespaced exceptions; transport errors propagate unchanged
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Final, TypeVar
from urllib.parse import urljoin

from pydantic import BaseModel, ValidationError

from ovsx_client.clients.compatibility import find_first_compatible, is_engine_supported
from ovsx_client.clients.protocols import RegistryTransportProtocol
from ovsx_client.clients.search_query import build_search_query
from ovsx_client.clients.transport import HttpRegistryTransport
from ovsx_client.core.config import OVSXClientOptions, Settings, get_settings
from ovsx_client.core.exceptions import ExtensionNotFoundError, RegistryTransportError
from ovsx_client.core.logging import configure_logging, get_logger
from ovsx_client.core.tracing import configure_tracing, registry_span
from ovsx_client.models.registry import (
    VSXAllVersions,
    VSXExtensionRaw,
    VSXQueryParam,
    VSXQueryResult,
    VSXSearchParam,
    VSXSearchResult,
)

logger = get_logger(__name__)

SEARCH_PATH: Final[str] = "api/-/search"
QUERY_PATH: Final[str] = "api/-/query"

ModelT = TypeVar("ModelT", bound=BaseModel)


class OVSXClient:
    """Client for an Open VSX compatible registry.

    Attributes:
        options: Immutable API version and base URL
    """

    def __init__(
        self,
        options: OVSXClientOptions,
        transport: RegistryTransportProtocol | None = None,
        owns_transport: bool | None = None,
    ) -> None:
        """Initialize the registry client.

        Args:
            options: Host API version and registry base URL
            transport: Transport to issue requests with; an
                HttpRegistryTransport owned by this client when omitted
            owns_transport: Whether close() closes the transport. Defaults to
                True only when the client creates the transport itself
        """
        self.options = options
        if owns_transport is None:
            owns_transport = transport is None
        self._owns_transport = owns_transport
        self._transport: RegistryTransportProtocol = transport or HttpRegistryTransport()

    async def __aenter__(self) -> OVSXClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the transport if this client owns it."""
        if self._owns_transport:
            await self._transport.close()

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    async def search(self, param: VSXSearchParam | None = None) -> VSXSearchResult:
        """Search the registry.

        No pagination is done here; page through results with
        ``param.size`` and ``param.offset``.

        Args:
            param: Optional search parameters

        Returns:
            The registry's search result
        """
        url = self.build_search_url(param)
        with registry_span("ovsx.search", url=url):
            logger.debug("registry_search", url=url)
            data = await self._fetch_json(url)
            return self._parse(VSXSearchResult, data, url)

    def build_search_url(self, param: VSXSearchParam | None = None) -> str:
        """Absolute search URL for ``param`` against the configured base URL."""
        return self._resolve(SEARCH_PATH + build_search_query(param))

    # -------------------------------------------------------------------------
    # Query
    # -------------------------------------------------------------------------

    async def query(self, param: VSXQueryParam) -> VSXQueryResult:
        """POST an arbitrary query to ``api/-/query``.

        Unlike get_extension, an empty result is returned as is.
        """
        url = self._resolve(QUERY_PATH)
        payload = param.to_wire()
        with registry_span("ovsx.query", url=url, extension_id=param.extension_id):
            logger.debug("registry_query", url=url, payload=payload)
            data = await self._post_json(url, payload)
            return self._parse(VSXQueryResult, data, url)

    async def get_extension(self, extension_id: str) -> VSXExtensionRaw:
        """Get the current version of an extension.

        Args:
            extension_id: ``namespace.name`` identifier

        Raises:
            ExtensionNotFoundError: The registry has no such extension
        """
        extensions = await self._query_extensions(
            VSXQueryParam(extension_id=extension_id)
        )
        return extensions[0]

    async def get_all_versions(self, extension_id: str) -> list[VSXExtensionRaw]:
        """Get all versions of the given extension, in registry order.

        Args:
            extension_id: ``namespace.name`` identifier

        Raises:
            ExtensionNotFoundError: The registry has no such extension
        """
        return await self._query_extensions(
            VSXQueryParam(extension_id=extension_id, include_all_versions=True)
        )

    async def _query_extensions(self, param: VSXQueryParam) -> list[VSXExtensionRaw]:
        result = await self.query(param)
        if result.extensions:
            return result.extensions
        url = self._resolve(QUERY_PATH)
        logger.info("extension_not_found", extension_id=param.extension_id, url=url)
        raise ExtensionNotFoundError(param.extension_id or "", url)

    # -------------------------------------------------------------------------
    # Compatibility
    # -------------------------------------------------------------------------

    async def get_latest_compatible_extension_version(
        self, extension_id: str
    ) -> VSXExtensionRaw | None:
        """Get the latest compatible version of an extension.

        An extension version is compatible when its ``engines.vscode`` range
        is supported (see is_engine_supported). Versions are taken in the
        order the registry returns them.

        Args:
            extension_id: ``namespace.name`` identifier

        Returns:
            The first compatible version, or None if there is none
        """
        extensions = await self.get_all_versions(extension_id)
        compatible = find_first_compatible(extensions, self.options.api_version)
        if compatible is None:
            logger.info(
                "no_compatible_version",
                extension_id=extension_id,
                api_version=self.options.api_version,
                versions=len(extensions),
            )
        else:
            logger.debug(
                "compatible_version_found",
                extension_id=extension_id,
                version=compatible.version,
            )
        return compatible

    def get_latest_compatible_version(
        self, versions: Sequence[VSXAllVersions]
    ) -> VSXAllVersions | None:
        """Get the latest compatible entry of a version listing.

        Args:
            versions: The ``all_versions`` listing of a search entry

        Returns:
            The first compatible entry, or None if there is none
        """
        return find_first_compatible(versions, self.options.api_version)

    def is_engine_supported(self, engine: str | None) -> bool:
        """True if ``engine`` is ``*`` or is satisfied by the configured API version."""
        return is_engine_supported(self.options.api_version, engine)

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def fetch_text(self, url: str) -> str:
        """GET ``url`` and return the raw body."""
        with registry_span("ovsx.fetch_text", url=url):
            return await self._transport.fetch_text(url)

    async def _fetch_json(self, url: str) -> Any:
        return await self._transport.fetch_json(url)

    async def _post_json(self, url: str, payload: dict[str, Any]) -> Any:
        return await self._transport.post_json(url, payload)

    def _resolve(self, path: str) -> str:
        return urljoin(self.options.api_url, path)

    def _parse(self, model: type[ModelT], data: Any, url: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RegistryTransportError(
                f"Unexpected response from {url}: {e.error_count()} validation error(s)",
                url=url,
            ) from e


def create_client(settings: Settings | None = None) -> OVSXClient:
    """Build an OVSXClient from environment settings.

    Configures logging and, when enabled, tracing, then wires a pooled
    HttpRegistryTransport owned by the returned client.

    Args:
        settings: Settings to use instead of reading the environment
    """
    settings = settings or get_settings()
    configure_logging(log_level=settings.log_level, json_output=settings.log_json)
    if settings.tracing_enabled:
        configure_tracing(console_export=settings.tracing_console_export)

    transport = HttpRegistryTransport(
        timeout=settings.timeout,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
    )
    return OVSXClient(
        settings.client_options(), transport=transport, owns_transport=True
    )
