"""Runtime types referenced by generated message modules.

A generated module declares one ``MessageCatalog`` subclass whose class
attributes are message items:

    class Messages(MessageCatalog):
        __slots__ = ()

        WELCOME: Final[SimpleMessageItem] = SimpleMessageItem(key="WELCOME", fallback="Welcome")
        GREETING: Final[MessageItem[GREETING_Params]] = MessageItem(
            key="GREETING", fallback="Hello {name}"
        )

Parameter types exist only as static annotations; at runtime an item is
just a key and a fallback. The ``has_params`` tag distinguishes the two
shapes without inspecting the template.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar

__all__ = [
    "AnyMessageItem",
    "MessageCatalog",
    "MessageItem",
    "SimpleMessageItem",
]


@dataclass(frozen=True, slots=True)
class SimpleMessageItem:
    """Message that takes no parameters.

    Attributes:
        key: Key looked up in the runtime dictionary
        fallback: Text used when the dictionary has no entry for the key
    """

    key: str
    fallback: str

    has_params: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class MessageItem[P: Mapping[str, Any]]:
    """Message that takes parameters of type ``P``.

    ``P`` is a TypedDict generated from the message's placeholders. It is
    never inspected at runtime; type checkers use it to validate the
    ``params`` argument of MessageResolver.get_message().

    Attributes:
        key: Key looked up in the runtime dictionary
        fallback: Template used when the dictionary has no entry for the key
    """

    key: str
    fallback: str

    has_params: ClassVar[bool] = True


type AnyMessageItem = SimpleMessageItem | MessageItem[Any]


class MessageCatalog(Mapping[str, AnyMessageItem]):
    """Read-only mapping of generated identifiers to message items.

    Subclasses declare items as class attributes. The mapping view is built
    once per subclass when the class is created; instances carry no state.

    Identifiers never collide with the Mapping methods (``get``, ``items``,
    ``keys``, ``values``): the identifier sanitizer treats those names as
    reserved.

    Example:
        >>> from generated.messages import messages
        >>> messages.WELCOME.key
        'WELCOME'
        >>> messages["WELCOME"] is messages.WELCOME
        True
        >>> sorted(messages)
        ['GREETING', 'WELCOME']
    """

    __slots__ = ()

    __entries__: ClassVar[Mapping[str, AnyMessageItem]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        entries: dict[str, AnyMessageItem] = {}
        for base in reversed(cls.__mro__[:-1]):
            for name, value in vars(base).items():
                if isinstance(value, (SimpleMessageItem, MessageItem)):
                    entries[name] = value
        cls.__entries__ = MappingProxyType(entries)

    def __getitem__(self, identifier: str) -> AnyMessageItem:
        return self.__entries__[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self.__entries__)

    def __len__(self) -> int:
        return len(self.__entries__)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} messages)"

    def find_by_key(self, key: str) -> AnyMessageItem | None:
        """Get the item whose original message key is ``key``.

        Args:
            key: Message key as written in the locale files

        Returns:
            Matching item, or None if the catalog has no such key
        """
        for item in self.__entries__.values():
            if item.key == key:
                return item
        return None
