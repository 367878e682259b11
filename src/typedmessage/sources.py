"""Locale source file reading.

Locale files map message keys to template strings. All recognized formats
(.json5, .jsonc, .json) are parsed with the JSON5 parser, which accepts
comments, trailing commas and unquoted keys and is a superset of JSON.
"""

from __future__ import annotations

import logging
from pathlib import Path

import json5

from typedmessage.constants import LOCALE_EXTENSIONS
from typedmessage.errors import LocaleFileError

__all__ = [
    "locale_name",
    "parse_locale_source",
    "read_locale_source",
]

logger = logging.getLogger(__name__)


def locale_name(filename: str) -> str:
    """Get the locale name of a locale file (basename without extension).

    Example:
        >>> locale_name("en.json5")
        'en'
        >>> locale_name("pt-BR.json")
        'pt-BR'
    """
    for ext in LOCALE_EXTENSIONS:
        if filename.endswith(ext):
            return filename[: -len(ext)]
    return Path(filename).stem


def parse_locale_source(source: str, filename: str) -> dict[str, str]:
    """Parse locale file content into a key -> template mapping.

    Non-string values are ignored. The top-level value must be an object.

    Args:
        source: File content
        filename: File name used in error messages

    Returns:
        Dictionary of string entries in file order

    Raises:
        LocaleFileError: If the content is not valid JSON5 or not an object
    """
    try:
        data = json5.loads(source)
    except ValueError as e:
        raise LocaleFileError(filename, str(e)) from e
    except RecursionError as e:
        msg = "nesting too deep"
        raise LocaleFileError(filename, msg) from e

    if not isinstance(data, dict):
        msg = f"expected an object at top level, got {type(data).__name__}"
        raise LocaleFileError(filename, msg)

    entries: dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, str):
            entries[str(key)] = value
        else:
            logger.debug("Skipping non-string value for key '%s' in %s", key, filename)
    return entries


def read_locale_source(path: Path) -> dict[str, str]:
    """Read and parse one locale file.

    Args:
        path: Path to the locale file

    Returns:
        Dictionary of string entries in file order

    Raises:
        LocaleFileError: If the file cannot be read or parsed
    """
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LocaleFileError(path.name, str(e)) from e
    return parse_locale_source(source, path.name)
