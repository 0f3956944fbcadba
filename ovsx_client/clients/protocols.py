"""
ovsx-client - Client Protocols

Defines Protocol interfaces for duck typing support.

Patterns Applied:
- Protocol typing for duck typing
- Structural subtyping (no inheritance required)

Anti-Patterns Avoided:
- Tight coupling to concrete implementations
"""

from collections.abc import Sequence
from typing import Any, Protocol

from ovsx_client.models.registry import (
    VSXAllVersions,
    VSXExtensionRaw,
    VSXQueryParam,
    VSXQueryResult,
    VSXSearchParam,
    VSXSearchResult,
)


class RegistryTransportProtocol(Protocol):
    """Protocol for the HTTP transport used by OVSXClient.

    Enables FakeRegistryTransport for testing without real HTTP calls.
    Every method raises RegistryTransportError on a non-200 response,
    a network failure or an undecodable body.
    """

    async def fetch_text(self, url: str) -> str:
        """GET ``url`` and return the body as text."""
        ...

    async def fetch_json(self, url: str) -> Any:
        """GET ``url`` with ``Accept: application/json`` and decode the body."""
        ...

    async def post_json(self, url: str, payload: Any) -> Any:
        """POST ``payload`` as JSON to ``url`` and decode the JSON response."""
        ...

    async def close(self) -> None:
        """Release any connections held by the transport."""
        ...


class OVSXClientProtocol(Protocol):
    """Protocol for registry clients.

    Lets consumers depend on the operations rather than on OVSXClient itself.
    """

    async def search(self, param: VSXSearchParam | None = None) -> VSXSearchResult:
        ...

    async def query(self, param: VSXQueryParam) -> VSXQueryResult:
        ...

    async def get_extension(self, extension_id: str) -> VSXExtensionRaw:
        ...

    async def get_all_versions(self, extension_id: str) -> list[VSXExtensionRaw]:
        ...

    async def get_latest_compatible_extension_version(
        self, extension_id: str
    ) -> VSXExtensionRaw | None:
        ...

    def get_latest_compatible_version(
        self, versions: Sequence[VSXAllVersions]
    ) -> VSXAllVersions | None:
        ...

    async def fetch_text(self, url: str) -> str:
        ...
