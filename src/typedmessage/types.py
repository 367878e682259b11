"""Data model shared by the generator and the runtime.

All records are frozen slotted dataclasses. Reconciliation produces new
AggregatedMessage values and never mutates the ParsedMessage records it
reads.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from typedmessage.enums import LocaleLoadStatus, PlaceholderType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Type aliases
    "LocaleCode",
    "MessageKey",
    "MessageDictionary",
    # Parsing
    "PlaceholderInfo",
    "ParsedMessage",
    # Reconciliation
    "AggregatedMessage",
    "TypeConflict",
    "MessageWarning",
    "ReconcileResult",
    # Runtime
    "LocaleControllerState",
]

type LocaleCode = str
"""Locale name as used for file basenames (e.g., 'en', 'ja', 'fallback')."""

type MessageKey = str
"""Message key as written in a locale file (e.g., 'WELCOME_USER')."""

type MessageDictionary = Mapping[str, str]
"""Runtime dictionary: message key -> template text for one locale."""


@dataclass(frozen=True, slots=True)
class PlaceholderInfo:
    """A single placeholder token found in a template.

    Attributes:
        name: Parameter name (case-sensitive)
        type: Asserted type token; 'string' when the token has no suffix.
            Unrecognized tokens are kept verbatim.
        position: Zero-based index of the token in the template
    """

    name: str
    type: str
    position: int

    @property
    def is_explicit(self) -> bool:
        """Check if the placeholder asserts a type other than the default."""
        return self.type != PlaceholderType.STRING


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    """One message as read from one locale file.

    Attributes:
        key: Message key
        template: Raw template text
        placeholders: Placeholders in template order
        fallback: Text used when no runtime dictionary supplies the key
    """

    key: MessageKey
    template: str
    placeholders: tuple[PlaceholderInfo, ...]
    fallback: str


@dataclass(frozen=True, slots=True)
class AggregatedMessage:
    """A message merged across every locale file that defines it.

    Attributes:
        key: Message key
        fallback: Fallback text chosen by processing order (last file wins)
        placeholders: Placeholders of the selected message with reconciled types
    """

    key: MessageKey
    fallback: str
    placeholders: tuple[PlaceholderInfo, ...]

    @property
    def has_params(self) -> bool:
        """Check if the message takes parameters."""
        return len(self.placeholders) > 0

    def unique_placeholders(self) -> tuple[PlaceholderInfo, ...]:
        """Get placeholders with repeated names collapsed to their first occurrence."""
        seen: set[str] = set()
        result: list[PlaceholderInfo] = []
        for placeholder in self.placeholders:
            if placeholder.name not in seen:
                seen.add(placeholder.name)
                result.append(placeholder)
        return tuple(result)


@dataclass(frozen=True, slots=True)
class TypeConflict:
    """Disagreeing placeholder types for one parameter across locale files.

    Attributes:
        parameter_name: Placeholder name
        per_locale_types: (locale file, asserted type) pairs in processing order
    """

    parameter_name: str
    per_locale_types: tuple[tuple[str, str], ...]

    @property
    def types_by_file(self) -> dict[str, str]:
        """Get asserted types keyed by locale file."""
        return dict(self.per_locale_types)

    @property
    def distinct_types(self) -> frozenset[str]:
        """Get the set of distinct asserted types."""
        return frozenset(asserted for _, asserted in self.per_locale_types)

    def describe(self) -> str:
        """Format as 'name: file: type, file: type'."""
        details = ", ".join(f"{file}: {asserted}" for file, asserted in self.per_locale_types)
        return f"{self.parameter_name}: {details}"


@dataclass(frozen=True, slots=True)
class MessageWarning:
    """Type conflicts recorded for one message key."""

    key: MessageKey
    conflicts: tuple[TypeConflict, ...]

    @property
    def parameter_names(self) -> tuple[str, ...]:
        """Get names of the conflicting parameters."""
        return tuple(conflict.parameter_name for conflict in self.conflicts)


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Output of the type reconciler.

    Attributes:
        messages: Aggregated messages keyed by message key, in first-seen order
        warnings: Per-key type conflict warnings
        invalid_files: Locale files that failed to read or parse
    """

    messages: Mapping[MessageKey, AggregatedMessage]
    warnings: tuple[MessageWarning, ...] = ()
    invalid_files: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Freeze the message mapping."""
        if not isinstance(self.messages, MappingProxyType):
            object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    @property
    def has_warnings(self) -> bool:
        """Check if any type conflicts were recorded."""
        return len(self.warnings) > 0

    @property
    def has_invalid_files(self) -> bool:
        """Check if any locale file failed to parse."""
        return len(self.invalid_files) > 0

    def warning_for(self, key: MessageKey) -> MessageWarning | None:
        """Get the warning recorded for a key, if any."""
        for warning in self.warnings:
            if warning.key == key:
                return warning
        return None


@dataclass(frozen=True, slots=True)
class LocaleControllerState:
    """Snapshot of a LocaleController's observable state.

    Attributes:
        locale: Active locale (last successfully applied)
        status: Load status of the active locale
        dictionary: Message dictionary of the active locale
        error: Exception captured by the latest failed load, if any
    """

    locale: LocaleCode
    status: LocaleLoadStatus
    dictionary: MessageDictionary
    error: Any = None

    @property
    def is_ready(self) -> bool:
        """Check if the active dictionary finished loading."""
        return self.status == LocaleLoadStatus.READY
