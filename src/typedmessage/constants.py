"""Shared constants for typedmessage.

Centralized defaults used by both the build-time generator and the runtime
controller. Placing constants here avoids circular imports between the
codegen and runtime packages.

Constants are grouped by domain:
- Locale sources: directory, extensions and their ranking
- Generator defaults: output location and fallback priority order
- Runtime defaults: literal fallback locale, lookup markers
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale sources
    "DEFAULT_LOCALE_DIR",
    "LOCALE_EXTENSIONS",
    # Generator defaults
    "DEFAULT_OUTPUT_PATH",
    "DEFAULT_FALLBACK_PRIORITY_ORDER",
    "PYPROJECT_TOOL_TABLE",
    # Runtime defaults
    "DEFAULT_FALLBACK_LOCALE",
    "DEFAULT_BABEL_LOCALE",
    "MESSAGE_NOT_FOUND_PREFIX",
]

# ============================================================================
# LOCALE SOURCES
# ============================================================================

# Directory holding one file per locale, relative to the project root.
DEFAULT_LOCALE_DIR: str = "locale"

# Recognized locale file extensions, ranked from most to least preferred.
# When several variants share a basename only the first match in this tuple
# is used: JSON5 and JSONC tolerate comments, plain JSON does not.
LOCALE_EXTENSIONS: tuple[str, ...] = (".json5", ".jsonc", ".json")

# ============================================================================
# GENERATOR DEFAULTS
# ============================================================================

DEFAULT_OUTPUT_PATH: str = "src/generated/messages.py"

# The last element names the ultimate fallback locale. It is excluded from
# the generated locale symbol list.
DEFAULT_FALLBACK_PRIORITY_ORDER: tuple[str, ...] = ("en", "fallback")

# pyproject.toml table consulted by the CLI: [tool.typedmessage]
PYPROJECT_TOOL_TABLE: str = "typedmessage"

# ============================================================================
# RUNTIME DEFAULTS
# ============================================================================

# Locale used by the controller when no other hint is available.
DEFAULT_FALLBACK_LOCALE: str = "fallback"

# Babel locale used for date rendering when the active locale is unknown
# to CLDR (e.g. the "fallback" pseudo locale).
DEFAULT_BABEL_LOCALE: str = "en_US"

# Marker returned by dynamic lookups for missing keys.
MESSAGE_NOT_FOUND_PREFIX: str = "MESSAGE_NOT_FOUND: "
