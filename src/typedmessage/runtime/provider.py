"""Message resolution against a runtime dictionary.

MessageResolver turns generated message items (or raw keys) into display
text using the active dictionary:

    resolver = MessageResolver({"WELCOME": "Bienvenue"})
    resolver.get_message(messages.WELCOME)              # 'Bienvenue'
    resolver.get_message(messages.GREETING, {"name": "Ana"})

message_provider() binds a resolver to the current context (thread or
asyncio task) so code deep in a call stack can look messages up without
passing the resolver around:

    with message_provider(controller):
        get_message = use_typed_message()
        print(get_message(messages.WELCOME))

Thread Safety:
    The provider binding uses contextvars, so concurrent tasks and threads
    each see their own resolver.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from typedmessage.catalog import AnyMessageItem, MessageItem, SimpleMessageItem
from typedmessage.constants import MESSAGE_NOT_FOUND_PREFIX
from typedmessage.errors import MessageContextError
from typedmessage.placeholders import format_message
from typedmessage.runtime.controller import LocaleController
from typedmessage.types import MessageDictionary

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "MessageResolver",
    "DynamicMessageFunctions",
    # Context binding
    "message_provider",
    "current_resolver",
    "use_typed_message",
    "use_typed_message_dynamic",
    "typed_message",
]

_EMPTY_DICTIONARY: MessageDictionary = MappingProxyType({})

type MessageSource = Mapping[str, str] | LocaleController | None
"""Anything a resolver can read templates from."""

_current_resolver: ContextVar[MessageResolver | None] = ContextVar(
    "typedmessage_resolver", default=None
)


class MessageResolver:
    """Resolves message items and keys to formatted text.

    Lookup order for items: the dictionary entry for ``item.key`` unless it
    is missing or empty, then ``item.fallback``. Parameters are substituted
    into whichever template was chosen.

    When constructed from a LocaleController the resolver always reads the
    controller's current dictionary and locale, so it never needs to be
    rebuilt after a locale switch.
    """

    __slots__ = ("_locale", "_source")

    def __init__(self, messages: MessageSource = None, *, locale: str | None = None) -> None:
        """Initialize resolver.

        Args:
            messages: Dictionary of key -> template, a LocaleController, or
                None for an empty dictionary (fallbacks only)
            locale: Locale used for date formatting. Defaults to the
                controller's locale when ``messages`` is a controller.
        """
        if isinstance(messages, LocaleController) or messages is None:
            self._source: Mapping[str, str] | LocaleController = (
                messages if messages is not None else _EMPTY_DICTIONARY
            )
        else:
            self._source = MappingProxyType(dict(messages))
        self._locale = locale

    @property
    def dictionary(self) -> MessageDictionary:
        """Get the dictionary currently used for lookups."""
        if isinstance(self._source, LocaleController):
            return self._source.dictionary
        return self._source

    @property
    def locale(self) -> str | None:
        """Get the locale used for date formatting."""
        if self._locale is not None:
            return self._locale
        if isinstance(self._source, LocaleController):
            return self._source.locale
        return None

    def get_message[P: Mapping[str, Any]](
        self,
        item: SimpleMessageItem | MessageItem[P],
        params: P | None = None,
    ) -> str:
        """Resolve a generated message item.

        Args:
            item: Message item from a generated catalog
            params: Placeholder values (parameterized items)

        Returns:
            Formatted message. Placeholders without a value stay literal.

        Example:
            >>> resolver = MessageResolver({})
            >>> resolver.get_message(MessageItem(key="HI", fallback="Hi {name}"), {"name": "Ana"})
            'Hi Ana'
        """
        template = self.dictionary.get(item.key) or item.fallback
        return format_message(template, params, locale=self.locale)

    def try_get_message_dynamic(
        self, key: str, params: Mapping[str, Any] | None = None
    ) -> str | None:
        """Resolve a message by runtime key.

        No fallback text is available for raw keys, so a missing or empty
        entry yields None.

        Args:
            key: Message key
            params: Placeholder values

        Returns:
            Formatted message, or None if the dictionary has no text for key
        """
        template = self.dictionary.get(key)
        if not template:
            return None
        return format_message(template, params, locale=self.locale)

    def get_message_dynamic(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        """Resolve a message by runtime key, with a visible marker when missing.

        Returns:
            Formatted message, or 'MESSAGE_NOT_FOUND: <key>'
        """
        result = self.try_get_message_dynamic(key, params)
        if result is None:
            return f"{MESSAGE_NOT_FOUND_PREFIX}{key}"
        return result

    def __repr__(self) -> str:
        return f"MessageResolver(locale={self.locale!r}, messages={len(self.dictionary)})"


@dataclass(frozen=True, slots=True)
class DynamicMessageFunctions:
    """Key-based lookup helpers returned by use_typed_message_dynamic().

    Attributes:
        get_message_dynamic: Returns the message or 'MESSAGE_NOT_FOUND: <key>'
        try_get_message_dynamic: Returns the message or None
    """

    get_message_dynamic: Callable[..., str]
    try_get_message_dynamic: Callable[..., str | None]


@contextmanager
def message_provider(
    messages: MessageSource | MessageResolver = None,
    *,
    locale: str | None = None,
) -> Iterator[MessageResolver]:
    """Bind a resolver to the current context for the duration of the block.

    Providers nest: the innermost binding wins and the previous one is
    restored on exit.

    Args:
        messages: Dictionary, LocaleController, existing MessageResolver, or None
        locale: Locale used for date formatting (ignored for a MessageResolver)

    Yields:
        The bound MessageResolver
    """
    resolver = (
        messages if isinstance(messages, MessageResolver)
        else MessageResolver(messages, locale=locale)
    )
    token = _current_resolver.set(resolver)
    try:
        yield resolver
    finally:
        _current_resolver.reset(token)


def current_resolver(caller: str = "current_resolver") -> MessageResolver:
    """Get the resolver bound by the innermost message_provider().

    Raises:
        MessageContextError: If no provider is active
    """
    resolver = _current_resolver.get()
    if resolver is None:
        msg = f"{caller} must be used within a message_provider"
        raise MessageContextError(msg)
    return resolver


def use_typed_message() -> Callable[..., str]:
    """Get the get_message function of the active provider.

    Raises:
        MessageContextError: If no provider is active
    """
    return current_resolver("use_typed_message").get_message


def use_typed_message_dynamic() -> DynamicMessageFunctions:
    """Get the key-based lookup helpers of the active provider.

    Raises:
        MessageContextError: If no provider is active
    """
    resolver = current_resolver("use_typed_message_dynamic")
    return DynamicMessageFunctions(
        get_message_dynamic=resolver.get_message_dynamic,
        try_get_message_dynamic=resolver.try_get_message_dynamic,
    )


def typed_message(item: AnyMessageItem, params: Mapping[str, Any] | None = None) -> str:
    """Resolve one item through the active provider.

    Raises:
        MessageContextError: If no provider is active
    """
    return current_resolver("typed_message").get_message(item, params)
