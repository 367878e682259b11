"""Locale utilities for Babel interop.

Locale names in typedmessage are file basenames ('en', 'pt-BR', 'fallback').
Babel expects POSIX identifiers, and pseudo locales such as 'fallback' are
unknown to CLDR. These helpers normalize names and resolve them to a Babel
Locale with a logged fallback.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from typedmessage.constants import DEFAULT_BABEL_LOCALE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "normalize_locale",
    "resolve_babel_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale code to POSIX format for Babel.

    Args:
        locale_code: Locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.strip().replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


@functools.lru_cache(maxsize=128)
def resolve_babel_locale(locale_code: str | None) -> Locale:
    """Resolve a locale name to a Babel Locale, falling back to en_US.

    Never raises for unknown names: 'fallback' and other pseudo locales are
    legitimate locale file basenames, so a warning is logged once per name
    and the default Babel locale is used instead.

    Args:
        locale_code: Locale name, or None for the default

    Returns:
        Babel Locale object
    """
    from babel import UnknownLocaleError  # noqa: PLC0415

    if not locale_code or not locale_code.strip():
        return get_babel_locale(DEFAULT_BABEL_LOCALE)
    try:
        return get_babel_locale(locale_code)
    except UnknownLocaleError as e:
        logger.warning(
            "Unknown locale '%s': %s. Falling back to %s", locale_code, e, DEFAULT_BABEL_LOCALE
        )
    except ValueError as e:
        logger.warning(
            "Invalid locale format '%s': %s. Falling back to %s",
            locale_code,
            e,
            DEFAULT_BABEL_LOCALE,
        )
    return get_babel_locale(DEFAULT_BABEL_LOCALE)
