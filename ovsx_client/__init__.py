"""ovsx-client: async client for Open VSX style extension registries.

Provides:
- Extension search and query against the registry HTTP API
- Typed wire models for registry responses
- Selection of the latest extension version compatible with a host API version
"""

from ovsx_client.clients.ovsx import OVSXClient, create_client
from ovsx_client.core.config import OVSXClientOptions
from ovsx_client.core.exceptions import (
    ConfigurationError,
    ExtensionNotFoundError,
    OVSXClientError,
    RegistryTransportError,
)

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "ExtensionNotFoundError",
    "OVSXClient",
    "OVSXClientError",
    "OVSXClientOptions",
    "RegistryTransportError",
    "__version__",
    "create_client",
]
