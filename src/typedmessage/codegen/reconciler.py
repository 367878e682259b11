"""Cross-locale placeholder type reconciliation.

For every message key found in any locale file:

1. The last file (in processing order) that defines the key supplies the
   selected message: its fallback text and its placeholder order.
2. Every placeholder name is checked across all defining files. When the
   files assert two or more distinct types a TypeConflict is recorded. The
   implicit default ('string') counts as an asserted type.
3. The final type of each placeholder is the first explicit (non-string)
   type met in processing order, or 'string' when there is none.

A file that fails to read or parse is listed in ``invalid_files`` and
contributes nothing; one malformed file never aborts the run. Conflicts are
advisory and never remove a message.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from pathlib import Path

from typedmessage.enums import PlaceholderType
from typedmessage.errors import LocaleFileError
from typedmessage.placeholders import parse_message
from typedmessage.sources import read_locale_source
from typedmessage.types import (
    AggregatedMessage,
    MessageWarning,
    ParsedMessage,
    PlaceholderInfo,
    ReconcileResult,
    TypeConflict,
)

__all__ = [
    "load_locale_messages",
    "reconcile",
    "reconcile_messages",
]

logger = logging.getLogger(__name__)

type LocaleMessages = dict[str, dict[str, ParsedMessage]]
"""locale file -> message key -> parsed message"""


def load_locale_messages(
    locale_files: Iterable[str],
    locale_dir: Path | str,
) -> tuple[LocaleMessages, tuple[str, ...]]:
    """Parse every locale file independently.

    Args:
        locale_files: File names in processing order
        locale_dir: Directory containing the files

    Returns:
        Tuple of (parsed messages per valid file, invalid file names)
    """
    directory = Path(locale_dir)
    parsed: LocaleMessages = {}
    invalid: list[str] = []

    for filename in locale_files:
        try:
            entries = read_locale_source(directory / filename)
        except LocaleFileError as e:
            logger.warning("Error reading locale file %s: %s", filename, e.reason)
            invalid.append(filename)
            continue

        parsed[filename] = {
            key: parse_message(key, template, template) for key, template in entries.items()
        }
        logger.debug("Parsed %d messages from %s", len(entries), filename)

    return parsed, tuple(invalid)


def _collect_types(
    key: str,
    locale_files: Iterable[str],
    parsed: Mapping[str, Mapping[str, ParsedMessage]],
) -> dict[str, dict[str, str]]:
    """Map placeholder name -> {locale file: asserted type} for one key."""
    types_by_name: dict[str, dict[str, str]] = {}
    for filename in locale_files:
        message = parsed.get(filename, {}).get(key)
        if message is None:
            continue
        for placeholder in message.placeholders:
            types_by_name.setdefault(placeholder.name, {})[filename] = placeholder.type
    return types_by_name


def _resolve_type(placeholder: PlaceholderInfo, types_by_file: Mapping[str, str]) -> PlaceholderInfo:
    """Prefer the first explicit type over the implicit default."""
    for asserted in types_by_file.values():
        if asserted != PlaceholderType.STRING:
            if asserted == placeholder.type:
                return placeholder
            return replace(placeholder, type=asserted)
    return placeholder


def reconcile_messages(
    locale_files: Iterable[str],
    parsed: Mapping[str, Mapping[str, ParsedMessage]],
    invalid_files: Iterable[str] = (),
) -> ReconcileResult:
    """Reconcile already-parsed locale messages.

    Args:
        locale_files: File names in processing order (lowest precedence first)
        parsed: Parsed messages per valid file; files missing here are skipped
        invalid_files: Names of files that failed to parse

    Returns:
        ReconcileResult with aggregated messages, warnings and invalid files
    """
    ordered_files = tuple(locale_files)

    # Union of keys in first-seen order keeps output stable across runs.
    all_keys: dict[str, None] = {}
    for filename in ordered_files:
        for key in parsed.get(filename, {}):
            all_keys.setdefault(key, None)

    messages: dict[str, AggregatedMessage] = {}
    warnings: list[MessageWarning] = []

    for key in all_keys:
        selected: ParsedMessage | None = None
        for filename in reversed(ordered_files):
            selected = parsed.get(filename, {}).get(key)
            if selected is not None:
                break
        if selected is None:
            continue

        types_by_name = _collect_types(key, ordered_files, parsed)

        conflicts = tuple(
            TypeConflict(parameter_name=name, per_locale_types=tuple(types_by_file.items()))
            for name, types_by_file in types_by_name.items()
            if len(set(types_by_file.values())) > 1
        )
        if conflicts:
            warnings.append(MessageWarning(key=key, conflicts=conflicts))

        placeholders = tuple(
            _resolve_type(placeholder, types_by_name.get(placeholder.name, {}))
            for placeholder in selected.placeholders
        )
        messages[key] = AggregatedMessage(
            key=key,
            fallback=selected.fallback,
            placeholders=placeholders,
        )

    return ReconcileResult(
        messages=messages,
        warnings=tuple(warnings),
        invalid_files=tuple(invalid_files),
    )


def reconcile(locale_files: Iterable[str], locale_dir: Path | str) -> ReconcileResult:
    """Parse locale files and reconcile their messages.

    Args:
        locale_files: File names in processing order, as returned by scan_locale_files()
        locale_dir: Directory containing the files

    Returns:
        ReconcileResult with aggregated messages, warnings and invalid files

    Example:
        >>> files = scan_locale_files("locale", ["en", "fallback"])
        >>> result = reconcile(files, "locale")
        >>> for warning in result.warnings:
        ...     print(warning.key, warning.parameter_names)
    """
    ordered_files = tuple(locale_files)
    parsed, invalid_files = load_locale_messages(ordered_files, locale_dir)
    return reconcile_messages(ordered_files, parsed, invalid_files)
