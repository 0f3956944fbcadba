"""
Engine Compatibility

Decides whether an extension version declares support for the host API
version, and selects the first compatible entry of a version listing.

Range matching follows npm semantics (comparator sets, ``||``, hyphen
ranges, caret/tilde shorthand, pre-release exclusion) via node-semver.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from nodesemver import satisfies

from ovsx_client.models.registry import EngineAwareModel

WILDCARD_ENGINE = "*"

EntryT = TypeVar("EntryT", bound=EngineAwareModel)


def is_engine_supported(api_version: str, engine: str | None) -> bool:
    """Check an engine range against the host API version.

    Args:
        api_version: Host application API version (e.g. ``1.84.0``)
        engine: The declared ``engines.vscode`` range, if any

    Returns:
        True if the range is ``*`` or is satisfied by ``api_version``.
        A missing, empty or unparsable range is never supported.
    """
    if not engine:
        return False
    if engine == WILDCARD_ENGINE:
        return True
    try:
        return bool(satisfies(api_version, engine))
    except ValueError:
        return False


def find_first_compatible(
    entries: Iterable[EntryT],
    api_version: str,
) -> EntryT | None:
    """Return the first entry whose engine range supports ``api_version``.

    The listing is scanned in the order given; it is not sorted, so the
    result is the latest compatible version only when the registry lists
    newest versions first.
    """
    for entry in entries:
        if is_engine_supported(api_version, entry.engine_range):
            return entry
    return None
