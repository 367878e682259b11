"""Runtime side of typedmessage.

Submodules:
    controller - LocaleController (async loading, caching, switching)
    loading    - LocaleLoader type alias, PathLocaleLoader
    storage    - LocaleStorage protocol, MemoryLocaleStorage, JsonFileLocaleStorage
    provider   - MessageResolver and context-bound lookup helpers
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from typedmessage.runtime.controller import LocaleController
from typedmessage.runtime.loading import LocaleLoader, PathLocaleLoader
from typedmessage.runtime.provider import (
    DynamicMessageFunctions,
    MessageResolver,
    current_resolver,
    message_provider,
    typed_message,
    use_typed_message,
    use_typed_message_dynamic,
)
from typedmessage.runtime.storage import (
    JsonFileLocaleStorage,
    LocaleStorage,
    MemoryLocaleStorage,
)

__all__ = [
    # Locale switching
    "LocaleController",
    "LocaleLoader",
    "PathLocaleLoader",
    # Persistence
    "LocaleStorage",
    "MemoryLocaleStorage",
    "JsonFileLocaleStorage",
    # Message resolution
    "MessageResolver",
    "DynamicMessageFunctions",
    "message_provider",
    "current_resolver",
    "use_typed_message",
    "use_typed_message_dynamic",
    "typed_message",
]
