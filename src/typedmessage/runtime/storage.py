"""Persistent storage for the selected locale.

LocaleController remembers the last applied locale under a storage key when
persistence is enabled. Storage is a small key/value protocol so callers can
plug in whatever backend their application already has.

Persistence is best effort: the controller catches and logs storage
failures, so implementations may raise freely.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Protocol

__all__ = [
    "JsonFileLocaleStorage",
    "LocaleStorage",
    "MemoryLocaleStorage",
]

logger = logging.getLogger(__name__)


class LocaleStorage(Protocol):
    """Protocol for key/value locale persistence.

    Example:
        >>> class RedisStorage:
        ...     def __init__(self, client):
        ...         self._client = client
        ...     def get_item(self, key: str) -> str | None:
        ...         value = self._client.get(key)
        ...         return value.decode() if value is not None else None
        ...     def set_item(self, key: str, value: str) -> None:
        ...         self._client.set(key, value)
    """

    def get_item(self, key: str) -> str | None:
        """Get the stored value for a key, or None if absent."""

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key."""


class MemoryLocaleStorage:
    """Process-local storage backed by a dict."""

    __slots__ = ("_items", "_lock")

    def __init__(self) -> None:
        self._items: dict[str, str] = {}
        self._lock = threading.Lock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value


class JsonFileLocaleStorage:
    """Storage backed by a JSON object file.

    The file is read on every lookup and rewritten on every store, so
    several processes can share it. A missing or unreadable file behaves
    like an empty store on read.

    Example:
        >>> storage = JsonFileLocaleStorage("~/.config/myapp/settings.json")
        >>> storage.set_item("locale", "ja")
        >>> storage.get_item("locale")
        'ja'
    """

    __slots__ = ("_lock", "_path")

    def __init__(self, path: Path | str) -> None:
        """Initialize storage.

        Args:
            path: JSON file path ('~' is expanded). Parent directories are
                created on first write.
        """
        self._path = Path(path).expanduser()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """Get the backing file path."""
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.debug("Ignoring unreadable locale storage %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.debug("Ignoring non-object locale storage %s", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
                encoding="utf-8",
            )
