"""Locale source discovery and processing order.

Processing order decides which file wins when several locales define the
same key: files are processed in order and the last definition wins.

Ordering rules:
    1. Per basename only the best-ranked extension is kept
       (.json5 > .jsonc > .json), regardless of priority order.
    2. Basenames absent from the priority list come first, alphabetically.
    3. Basenames in the priority list follow, with the first list entry
       processed last. With priority ['en', 'fallback'] the order is
       [..., 'fallback', 'en'], so 'en' overrides 'fallback'.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from typedmessage.constants import LOCALE_EXTENSIONS
from typedmessage.sources import locale_name

__all__ = [
    "fallback_locale",
    "locale_symbols",
    "order_locale_files",
    "scan_locale_files",
    "select_locale_variants",
]

logger = logging.getLogger(__name__)


def select_locale_variants(
    filenames: Iterable[str],
    extensions: Sequence[str] = LOCALE_EXTENSIONS,
) -> dict[str, str]:
    """Pick the best-ranked file per basename.

    Args:
        filenames: Candidate file names (files with unknown extensions are ignored)
        extensions: Recognized extensions, most preferred first

    Returns:
        Mapping of basename -> selected file name, in sorted basename order

    Example:
        >>> select_locale_variants(["en.json", "en.json5", "ja.jsonc", "notes.txt"])
        {'en': 'en.json5', 'ja': 'ja.jsonc'}
    """
    ranks = {ext: rank for rank, ext in enumerate(extensions)}
    selected: dict[str, tuple[int, str]] = {}

    for filename in filenames:
        ext = next((e for e in extensions if filename.endswith(e)), None)
        if ext is None:
            continue
        basename = filename[: -len(ext)]
        if not basename:
            continue
        rank = ranks[ext]
        current = selected.get(basename)
        if current is None or rank < current[0]:
            selected[basename] = (rank, filename)

    return {basename: selected[basename][1] for basename in sorted(selected)}


def order_locale_files(
    filenames: Iterable[str],
    priority_order: Sequence[str],
) -> tuple[str, ...]:
    """Order locale files for processing (lowest precedence first).

    Args:
        filenames: One file per basename
        priority_order: Locale basenames, highest precedence first

    Returns:
        File names in processing order
    """
    priority = {name: index for index, name in enumerate(dict.fromkeys(priority_order))}

    def sort_key(filename: str) -> tuple[int, int, str]:
        basename = locale_name(filename)
        index = priority.get(basename)
        if index is None:
            return (0, 0, basename)
        # Listed entries after unlisted ones; first listed entry last.
        return (1, -index, basename)

    return tuple(sorted(filenames, key=sort_key))


def scan_locale_files(
    locale_dir: Path | str,
    priority_order: Sequence[str],
    extensions: Sequence[str] = LOCALE_EXTENSIONS,
) -> tuple[str, ...]:
    """Discover locale files under a directory in processing order.

    A missing directory is not an error: it yields an empty tuple so the
    caller can decide whether to warn.

    Args:
        locale_dir: Directory containing one file per locale
        priority_order: Locale basenames, highest precedence first
        extensions: Recognized extensions, most preferred first

    Returns:
        File names (without directory) in processing order
    """
    directory = Path(locale_dir)
    if not directory.is_dir():
        logger.debug("Locale directory not found: %s", directory)
        return ()

    candidates = [entry.name for entry in directory.iterdir() if entry.is_file()]
    variants = select_locale_variants(candidates, extensions)
    ordered = order_locale_files(variants.values(), priority_order)
    logger.debug("Locale files in processing order: %s", ", ".join(ordered))
    return ordered


def fallback_locale(priority_order: Sequence[str]) -> str | None:
    """Get the designated ultimate fallback locale (last priority entry)."""
    return priority_order[-1] if priority_order else None


def locale_symbols(
    locale_files: Iterable[str],
    priority_order: Sequence[str],
) -> tuple[str, ...]:
    """Get locale names for the generated module.

    Every discovered basename except the ultimate fallback locale, in
    processing order.

    Example:
        >>> locale_symbols(["ja.json", "fallback.json", "en.json"], ["en", "fallback"])
        ('ja', 'en')
    """
    excluded = fallback_locale(priority_order)
    return tuple(
        name for name in (locale_name(f) for f in locale_files) if name != excluded
    )
