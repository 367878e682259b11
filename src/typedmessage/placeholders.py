"""Placeholder parsing and substitution.

Placeholder syntax:
    {name}          - parameter with the implicit 'string' type
    {name:type}     - parameter with an explicit type token

Names and type tokens are ASCII word-character sequences. Type tokens are
not validated here: an unknown token is kept verbatim and only matters to
the reconciler when locales disagree.

Thread Safety:
    All functions in this module are pure functions with no shared state.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from typing import Any

from typedmessage.enums import PlaceholderType
from typedmessage.locale_utils import resolve_babel_locale
from typedmessage.types import ParsedMessage, PlaceholderInfo

__all__ = [
    "PLACEHOLDER_PATTERN",
    "format_message",
    "parse_message",
    "parse_placeholders",
    "render_value",
]

# Group 1: name, group 2: optional type token.
PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(r"\{(\w+)(?::(\w+))?\}", re.ASCII)


def parse_placeholders(template: str) -> tuple[PlaceholderInfo, ...]:
    """Extract placeholders from a template in left-to-right order.

    Every token yields one entry, so a name referenced twice appears twice
    with different positions.

    Args:
        template: Message template text

    Returns:
        Tuple of PlaceholderInfo in template order

    Example:
        >>> parse_placeholders("Hello {name}, you are {age:number}")
        (PlaceholderInfo(name='name', type='string', position=0),
         PlaceholderInfo(name='age', type='number', position=1))
    """
    return tuple(
        PlaceholderInfo(
            name=match.group(1),
            type=match.group(2) or PlaceholderType.STRING.value,
            position=position,
        )
        for position, match in enumerate(PLACEHOLDER_PATTERN.finditer(template))
    )


def parse_message(key: str, template: str, fallback: str) -> ParsedMessage:
    """Build a ParsedMessage for one (locale file, key) pair."""
    return ParsedMessage(
        key=key,
        template=template,
        placeholders=parse_placeholders(template),
        fallback=fallback,
    )


def render_value(value: Any, *, locale: str | None = None) -> str:
    """Render a parameter value for substitution.

    Dates (including datetimes) are formatted as a locale-aware medium date
    through Babel. Booleans render as 'true'/'false' to match the boolean
    literals used in locale files. Everything else uses str().

    Args:
        value: Parameter value
        locale: Locale name used for date formatting (None = default)

    Returns:
        Rendered string
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        from babel.dates import format_date  # noqa: PLC0415

        return format_date(value, format="medium", locale=resolve_babel_locale(locale))
    return str(value)


def format_message(
    template: str,
    params: Mapping[str, Any] | None,
    *,
    locale: str | None = None,
) -> str:
    """Substitute parameters into a template.

    Tokens whose name is not a key of ``params`` are left in the output
    unchanged, type suffix included. Never raises for missing parameters.

    Args:
        template: Message template text
        params: Parameter values keyed by placeholder name
        locale: Locale name used for date formatting

    Returns:
        Formatted message

    Example:
        >>> format_message(
        ...     "Hello {firstName} {lastName}, you are {age:number} years old",
        ...     {"age": 25, "lastName": "Tanaka", "firstName": "Taro"},
        ... )
        'Hello Taro Tanaka, you are 25 years old'
        >>> format_message("Hello {name}", {})
        'Hello {name}'
    """
    if not params:
        return template

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in params:
            return render_value(params[name], locale=locale)
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, template)
