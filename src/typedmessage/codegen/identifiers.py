"""Generated identifier sanitization.

Maps arbitrary message keys to Python identifiers that are safe as class
attributes of a generated MessageCatalog subclass.

Rules, applied in order:
    1. Every character outside [A-Za-z0-9_] becomes '_'
    2. An empty result becomes '_'
    3. A leading character other than a letter or '_' gets a '_' prefix
    4. A reserved word gets a '_' prefix
    5. A leading double underscore gets an '_m' prefix (class-private names
       are mangled inside the catalog class body)
    6. A name already used in the current pass gets '_1', '_2', ... appended

The used-name set is owned by the caller (or an IdentifierAllocator) for a
single generation pass. Results depend on call order, so callers must feed
keys in a stable order to get reproducible output.
"""

from __future__ import annotations

import keyword
import re
from collections.abc import Iterable

__all__ = [
    "RESERVED_WORDS",
    "IdentifierAllocator",
    "allocate_identifier",
    "ensure_unique_identifier",
    "sanitize_identifier",
]

# Python keywords plus the public members of MessageCatalog, which the
# generated class must not shadow.
RESERVED_WORDS: frozenset[str] = frozenset(
    (*keyword.kwlist, "find_by_key", "get", "items", "keys", "values")
)

_INVALID_CHARS: re.Pattern[str] = re.compile(r"[^A-Za-z0-9_]")
_VALID_START: re.Pattern[str] = re.compile(r"[A-Za-z_]")


def sanitize_identifier(key: str) -> str:
    """Normalize a message key into a Python identifier.

    Args:
        key: Original message key

    Returns:
        Identifier free of invalid characters and reserved words

    Example:
        >>> sanitize_identifier("HELLO-WORLD")
        'HELLO_WORLD'
        >>> sanitize_identifier("404.title")
        '_404_title'
        >>> sanitize_identifier("class")
        '_class'
        >>> sanitize_identifier("")
        '_'
    """
    sanitized = _INVALID_CHARS.sub("_", key)

    if not sanitized:
        sanitized = "_"

    if not _VALID_START.match(sanitized):
        sanitized = f"_{sanitized}"

    if sanitized in RESERVED_WORDS:
        sanitized = f"_{sanitized}"

    if sanitized.startswith("__"):
        sanitized = f"_m{sanitized}"

    return sanitized


def ensure_unique_identifier(base_identifier: str, used_identifiers: set[str]) -> str:
    """Make an identifier unique within a generation pass.

    Registers the returned identifier in ``used_identifiers``.

    Args:
        base_identifier: Preferred identifier
        used_identifiers: Identifiers already assigned (mutated)

    Returns:
        ``base_identifier`` or ``base_identifier_N`` for the smallest free N >= 1

    Example:
        >>> used = {"HELLO_WORLD"}
        >>> ensure_unique_identifier("HELLO_WORLD", used)
        'HELLO_WORLD_1'
        >>> sorted(used)
        ['HELLO_WORLD', 'HELLO_WORLD_1']
    """
    candidate = base_identifier
    index = 1
    while candidate in used_identifiers:
        candidate = f"{base_identifier}_{index}"
        index += 1
    used_identifiers.add(candidate)
    return candidate


def allocate_identifier(key: str, used_identifiers: set[str]) -> str:
    """Sanitize a key and make the result unique within ``used_identifiers``."""
    return ensure_unique_identifier(sanitize_identifier(key), used_identifiers)


class IdentifierAllocator:
    """Owns the used-identifier set of one generation pass.

    Example:
        >>> allocator = IdentifierAllocator()
        >>> allocator.allocate("HELLO-WORLD")
        'HELLO_WORLD'
        >>> allocator.allocate("HELLO_WORLD")
        'HELLO_WORLD_1'
    """

    __slots__ = ("_assigned", "_used")

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        """Initialize allocator.

        Args:
            reserved: Extra identifiers that must not be assigned
        """
        self._used: set[str] = set(reserved)
        self._assigned: dict[str, str] = {}

    def allocate(self, key: str) -> str:
        """Assign an identifier to a key.

        Each call assigns a new identifier, even for a key seen before.

        Args:
            key: Original message key

        Returns:
            Unique identifier
        """
        identifier = allocate_identifier(key, self._used)
        self._assigned.setdefault(key, identifier)
        return identifier

    def assign_all(self, keys: Iterable[str]) -> dict[str, str]:
        """Assign identifiers to keys in iteration order.

        Returns:
            Mapping of key -> identifier
        """
        return {key: self.allocate(key) for key in keys}

    @property
    def assigned(self) -> dict[str, str]:
        """Get key -> identifier for every key allocated so far (first assignment)."""
        return dict(self._assigned)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._used

    def __len__(self) -> int:
        return len(self._used)
