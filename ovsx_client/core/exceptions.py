"""
ovsx-client - Custom Exceptions

Anti-Patterns Avoided:
- Exception Shadowing: custom namespaced exceptions. Use RegistryTransportError
  instead of shadowing builtins like ConnectionError or TimeoutError.
"""

from __future__ import annotations


class OVSXClientError(Exception):
    """Base exception for ovsx-client.

    All custom exceptions inherit from this base class.
    """
    pass


class ExtensionNotFoundError(OVSXClientError):
    """Raised when the registry reports no extension for a requested id.

    Attributes:
        extension_id: The requested extension id (``namespace.name``)
        url: The query URL that returned no extensions
    """

    def __init__(self, extension_id: str, url: str) -> None:
        super().__init__(f"Extension with id {extension_id} not found at {url}")
        self.extension_id = extension_id
        self.url = url


class RegistryTransportError(OVSXClientError):
    """Raised when a registry request fails below the API level.

    Covers non-200 responses, connection failures, timeouts and
    response bodies that are not the expected JSON.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ConfigurationError(OVSXClientError):
    """Raised when client configuration is invalid or missing."""
    pass
