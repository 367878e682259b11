"""Runtime locale switching with caching and persistence.

LocaleController owns the active locale and its message dictionary:

- every load (initial, switch, preload) is serialized through one
  asyncio.Lock, so loads complete in request order and a locale is never
  fetched twice;
- loaded dictionaries are cached for the controller's lifetime;
- the last applied locale is persisted (best effort) when a storage key is
  configured, and restored as the initial locale next time;
- a failed switch leaves the previous locale and dictionary active, records
  the error and re-raises it to the caller.

Example:
    >>> async def main() -> None:
    ...     async with LocaleController(PathLocaleLoader("locale"), locales=["ja", "en"]) as ctl:
    ...         resolver = MessageResolver(ctl)
    ...         print(resolver.get_message(messages.WELCOME))
    ...         await ctl.set_locale("ja")
    ...         print(resolver.get_message(messages.WELCOME))
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from typedmessage.constants import DEFAULT_FALLBACK_LOCALE
from typedmessage.enums import LocaleLoadStatus
from typedmessage.runtime.loading import LocaleLoader
from typedmessage.runtime.storage import LocaleStorage, MemoryLocaleStorage
from typedmessage.types import LocaleCode, LocaleControllerState, MessageDictionary

__all__ = ["LocaleController"]

logger = logging.getLogger(__name__)

_EMPTY_DICTIONARY: MessageDictionary = MappingProxyType({})


def _clean(value: str | None) -> str | None:
    """Strip a locale name; blank becomes None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _clean_names(names: Iterable[str]) -> tuple[str, ...]:
    """Strip names, drop blanks and duplicates (order-preserving)."""
    cleaned = (_clean(name) for name in names)
    return tuple(dict.fromkeys(name for name in cleaned if name is not None))


class LocaleController:
    """Loads, caches and switches locale dictionaries.

    Observable state (``locale``, ``status``, ``dictionary``, ``error``) is
    only mutated on the event loop, between awaits, so readers always see a
    consistent snapshot through ``state``.

    Initial locale, first non-blank value wins:
        1. The persisted locale (only when ``storage_key`` is set)
        2. ``initial_locale``
        3. The first entry of ``locales``
        4. ``fallback_locale``
        5. 'fallback'

    Attributes:
        locale: Active locale (last successfully applied)
        status: Load status of the active locale
        dictionary: Message dictionary of the active locale (read-only)
        error: Exception from the latest failed switch, or None
    """

    __slots__ = (
        "_cache",
        "_closed",
        "_dictionary",
        "_error",
        "_load_locale",
        "_locale",
        "_locales",
        "_lock",
        "_on_change",
        "_started",
        "_status",
        "_storage",
        "_storage_key",
    )

    def __init__(
        self,
        load_locale: LocaleLoader,
        *,
        initial_locale: str | None = None,
        fallback_locale: str | None = None,
        locales: Iterable[str] | None = None,
        storage_key: str | None = None,
        storage: LocaleStorage | None = None,
        on_change: Callable[[LocaleControllerState], None] | None = None,
    ) -> None:
        """Initialize controller. Nothing is loaded until start().

        Args:
            load_locale: Callable returning a dictionary (or awaitable of one)
                for a locale name
            initial_locale: Locale to load first when nothing is persisted
            fallback_locale: Locale used when no other hint is available
            locales: Locales to preload on start(); the first one doubles as
                an initial locale hint
            storage_key: Key under which the applied locale is persisted.
                None disables persistence.
            storage: Persistence backend (default: MemoryLocaleStorage when
                storage_key is set)
            on_change: Callback invoked with a state snapshot after every
                state transition. Exceptions it raises are logged, not propagated.

        Raises:
            TypeError: If load_locale is not callable
        """
        if not callable(load_locale):
            msg = f"load_locale must be callable, got {type(load_locale).__name__}"
            raise TypeError(msg)

        self._load_locale: LocaleLoader = load_locale
        self._locales: tuple[LocaleCode, ...] = _clean_names(locales or ())
        self._storage_key = _clean(storage_key)
        self._storage: LocaleStorage | None = None
        if self._storage_key is not None:
            self._storage = storage if storage is not None else MemoryLocaleStorage()
        self._on_change = on_change

        self._cache: dict[LocaleCode, MessageDictionary] = {}
        self._lock = asyncio.Lock()
        self._closed = False
        self._started = False

        self._locale: LocaleCode = self._resolve_initial_locale(initial_locale, fallback_locale)
        self._status = LocaleLoadStatus.IDLE
        self._dictionary: MessageDictionary = _EMPTY_DICTIONARY
        self._error: BaseException | None = None

    def _read_stored_locale(self) -> str | None:
        if self._storage is None or self._storage_key is None:
            return None
        try:
            stored = self._storage.get_item(self._storage_key)
        except Exception as e:  # noqa: BLE001 - persistence is best effort
            logger.debug("Failed to read persisted locale '%s': %s", self._storage_key, e)
            return None
        return _clean(stored) if isinstance(stored, str) else None

    def _persist_locale(self, locale: LocaleCode) -> None:
        if self._storage is None or self._storage_key is None:
            return
        try:
            self._storage.set_item(self._storage_key, locale)
        except Exception as e:  # noqa: BLE001 - persistence is best effort
            logger.debug("Failed to persist locale '%s': %s", locale, e)

    def _resolve_initial_locale(
        self, initial_locale: str | None, fallback_locale: str | None
    ) -> LocaleCode:
        candidates = (
            self._read_stored_locale(),
            _clean(initial_locale),
            self._locales[0] if self._locales else None,
            _clean(fallback_locale),
        )
        for candidate in candidates:
            if candidate is not None:
                return candidate
        return DEFAULT_FALLBACK_LOCALE

    # ========================================================================
    # OBSERVABLE STATE
    # ========================================================================

    @property
    def locale(self) -> LocaleCode:
        """Get the active locale."""
        return self._locale

    @property
    def status(self) -> LocaleLoadStatus:
        """Get the load status of the active locale."""
        return self._status

    @property
    def dictionary(self) -> MessageDictionary:
        """Get the active message dictionary."""
        return self._dictionary

    @property
    def error(self) -> BaseException | None:
        """Get the error of the latest failed switch, if any."""
        return self._error

    @property
    def state(self) -> LocaleControllerState:
        """Get a snapshot of the observable state."""
        return LocaleControllerState(
            locale=self._locale,
            status=self._status,
            dictionary=self._dictionary,
            error=self._error,
        )

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Get the locales preloaded on start()."""
        return self._locales

    @property
    def load_locale(self) -> LocaleLoader:
        """Get the loader used for subsequent loads."""
        return self._load_locale

    @load_locale.setter
    def load_locale(self, loader: LocaleLoader) -> None:
        """Replace the loader. Cached dictionaries are kept."""
        if not callable(loader):
            msg = f"load_locale must be callable, got {type(loader).__name__}"
            raise TypeError(msg)
        self._load_locale = loader

    @property
    def closed(self) -> bool:
        """Check if the controller has been closed."""
        return self._closed

    def is_cached(self, locale: str) -> bool:
        """Check if a locale's dictionary is already loaded."""
        name = _clean(locale)
        return name is not None and name in self._cache

    def __repr__(self) -> str:
        return (
            f"LocaleController(locale={self._locale!r}, status={self._status.value!r}, "
            f"cached={sorted(self._cache)!r})"
        )

    # ========================================================================
    # STATE TRANSITIONS
    # ========================================================================

    def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self.state)
        except Exception:
            logger.exception("on_change callback failed for locale '%s'", self._locale)

    def _apply(self, locale: LocaleCode, dictionary: MessageDictionary) -> None:
        if self._closed:
            return
        self._dictionary = dictionary
        self._locale = locale
        self._status = LocaleLoadStatus.READY
        self._error = None
        self._persist_locale(locale)
        logger.debug("Applied locale '%s' (%d messages)", locale, len(dictionary))
        self._notify()

    async def _call_loader(self, locale: LocaleCode) -> MessageDictionary:
        result: Any = self._load_locale(locale)
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, Mapping):
            msg = (
                f"load_locale must return a mapping for locale '{locale}', "
                f"got {type(result).__name__}"
            )
            raise TypeError(msg)
        return MappingProxyType(dict(result))

    async def _load(self, locale: LocaleCode, *, apply: bool) -> None:
        """Load a locale under the lock, optionally making it active.

        Raises:
            Exception: Whatever the loader raised
        """
        async with self._lock:
            if self._closed:
                return

            cached = self._cache.get(locale)
            if cached is not None:
                if apply:
                    self._apply(locale, cached)
                return

            previous_status = self._status
            previous_error = self._error
            if apply:
                self._status = LocaleLoadStatus.LOADING
                self._error = None
                self._notify()

            try:
                dictionary = await self._call_loader(locale)
            except asyncio.CancelledError:
                logger.debug("Load of locale '%s' cancelled", locale)
                if apply and not self._closed:
                    self._status = previous_status
                    self._error = previous_error
                    self._notify()
                raise
            except Exception as e:
                logger.warning("Failed to load locale '%s': %s", locale, e)
                if apply and not self._closed:
                    self._status = LocaleLoadStatus.ERROR
                    self._error = e
                    self._notify()
                raise

            if self._closed:
                logger.debug("Discarding locale '%s' loaded after close", locale)
                return

            self._cache[locale] = dictionary
            logger.debug("Cached locale '%s'", locale)
            if apply:
                self._apply(locale, dictionary)

    # ========================================================================
    # PUBLIC OPERATIONS
    # ========================================================================

    async def start(self) -> None:
        """Load the initial locale and preload the configured locales.

        Failure to load the initial locale is not raised; it is reported via
        ``status`` and ``error``. Preload failures are ignored. Calling
        start() again has no effect.
        """
        if self._started or self._closed:
            return
        self._started = True

        try:
            await self._load(self._locale, apply=True)
        except Exception as e:  # noqa: BLE001 - surfaced through status/error
            logger.debug("Initial locale '%s' unavailable: %s", self._locale, e)

        if self._locales:
            try:
                await self.preload(self._locales)
            except Exception as e:  # noqa: BLE001 - active locale stays unchanged
                logger.debug("Preloading locales failed: %s", e)

    async def set_locale(self, locale: str) -> None:
        """Switch the active locale.

        Blank input is ignored. Requesting the active locale again re-applies
        its cached dictionary without calling the loader.

        Args:
            locale: Locale name (surrounding whitespace is stripped)

        Raises:
            Exception: Whatever the loader raised; the previous locale and
                dictionary stay active and ``status`` becomes 'error'
        """
        name = _clean(locale)
        if name is None:
            return

        if name == self._locale:
            cached = self._cache.get(name)
            if cached is not None:
                self._apply(name, cached)
                return

        await self._load(name, apply=True)

    async def preload(self, locales: Iterable[str]) -> None:
        """Load dictionaries into the cache without changing the active locale.

        Every name is attempted even if an earlier one fails.

        Args:
            locales: Locale names (stripped, blanks and duplicates dropped)

        Raises:
            Exception: The first loader failure, after all names were attempted
        """
        first_error: Exception | None = None
        for name in _clean_names(locales):
            try:
                await self._load(name, apply=False)
            except Exception as e:  # noqa: BLE001 - re-raised below
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def close(self) -> None:
        """Stop accepting results. Loads still in flight are discarded."""
        self._closed = True

    async def __aenter__(self) -> LocaleController:
        """Start the controller."""
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Close the controller. Does not suppress exceptions."""
        self.close()
