"""Locale dictionary loaders for LocaleController.

A loader is any callable that takes a locale name and returns its message
dictionary, either directly or as an awaitable:

    async def load(locale: str) -> dict[str, str]: ...
    def load(locale: str) -> dict[str, str]: ...

PathLocaleLoader is the filesystem implementation. It reads the same locale
files the generator reads, so the generated fallbacks and the runtime
dictionaries come from one source.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from typedmessage.constants import LOCALE_EXTENSIONS
from typedmessage.sources import read_locale_source
from typedmessage.types import LocaleCode, MessageDictionary

__all__ = [
    "LocaleLoader",
    "PathLocaleLoader",
]

logger = logging.getLogger(__name__)

type LocaleLoader = Callable[[LocaleCode], MessageDictionary | Awaitable[MessageDictionary]]
"""Callable resolving a locale name to its dictionary (sync or async)."""


@dataclass(frozen=True, slots=True)
class PathLocaleLoader:
    """Loads locale dictionaries from a locale directory.

    For locale 'ja' the loader picks the first existing file among
    ja.json5, ja.jsonc and ja.json. Files are read in a worker thread so the
    event loop is never blocked on disk I/O.

    Security:
        Locale names containing path separators or '..' are rejected, and
        the resolved file must stay inside the locale directory.

    Example:
        >>> loader = PathLocaleLoader("locale")
        >>> controller = LocaleController(loader, locales=["ja", "en"])

    Attributes:
        locale_dir: Directory holding one file per locale
        extensions: Recognized extensions, most preferred first
    """

    locale_dir: Path | str
    extensions: Sequence[str] = LOCALE_EXTENSIONS
    _resolved_dir: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache the resolved locale directory.

        Raises:
            ValueError: If no extensions are configured
        """
        if not self.extensions:
            msg = "At least one locale file extension is required"
            raise ValueError(msg)
        object.__setattr__(self, "_resolved_dir", Path(self.locale_dir).resolve())

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        """Validate a locale name for path traversal attacks.

        Raises:
            ValueError: If the locale is empty or contains unsafe path components
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    def find_file(self, locale: LocaleCode) -> Path | None:
        """Get the locale file that would be loaded for ``locale``.

        Raises:
            ValueError: If the locale name is unsafe
        """
        self._validate_locale(locale)
        for ext in self.extensions:
            candidate = (self._resolved_dir / f"{locale}{ext}").resolve()
            if not candidate.is_relative_to(self._resolved_dir):
                msg = f"Path traversal detected: resolved path escapes locale directory: '{locale}'"
                raise ValueError(msg)
            if candidate.is_file():
                return candidate
        return None

    def load(self, locale: LocaleCode) -> dict[str, str]:
        """Load a locale dictionary synchronously.

        Args:
            locale: Locale name (file basename)

        Returns:
            Dictionary of message key -> template (string values only)

        Raises:
            ValueError: If the locale name is unsafe
            FileNotFoundError: If no file exists for the locale
            LocaleFileError: If the file cannot be read or parsed
        """
        path = self.find_file(locale)
        if path is None:
            candidates = ", ".join(f"{locale}{ext}" for ext in self.extensions)
            msg = f"No locale file for '{locale}' in {self._resolved_dir} (tried {candidates})"
            raise FileNotFoundError(msg)

        entries = read_locale_source(path)
        logger.debug("Loaded %d messages for locale '%s' from %s", len(entries), locale, path.name)
        return entries

    async def __call__(self, locale: LocaleCode) -> dict[str, str]:
        """Load a locale dictionary in a worker thread."""
        return await asyncio.to_thread(self.load, locale)
