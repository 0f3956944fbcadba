"""
Registry clients.

HTTP client for Open VSX compatible extension registries.
"""

from ovsx_client.clients.compatibility import find_first_compatible, is_engine_supported
from ovsx_client.clients.ovsx import OVSXClient, create_client
from ovsx_client.clients.protocols import OVSXClientProtocol, RegistryTransportProtocol
from ovsx_client.clients.search_query import SEARCH_QUERY_RULES, build_search_query
from ovsx_client.clients.transport import FakeRegistryTransport, HttpRegistryTransport

__all__ = [
    "FakeRegistryTransport",
    "HttpRegistryTransport",
    "OVSXClient",
    "OVSXClientProtocol",
    "RegistryTransportProtocol",
    "SEARCH_QUERY_RULES",
    "build_search_query",
    "create_client",
    "find_first_compatible",
    "is_engine_supported",
]
