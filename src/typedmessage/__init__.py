"""typedmessage - Typed message catalogs generated from locale files (Python 3.13+).

Build time: a directory of JSON/JSONC/JSON5 locale files is turned into a
Python module exposing one typed item per message key, with a TypedDict per
parameterized message and the fallback text baked in.

Run time: a LocaleController loads, caches and switches locale dictionaries;
a MessageResolver formats generated items against the active dictionary.

Public API:
    MessageCatalog, MessageItem, SimpleMessageItem - Types used by generated modules
    LocaleController - Async locale loading, caching and switching
    PathLocaleLoader - Loads locale dictionaries from a locale directory
    MessageResolver - Formats items and keys against a dictionary
    message_provider - Binds a resolver to the current context
    use_typed_message, use_typed_message_dynamic - Context-bound lookup helpers
    GeneratorOptions, generate_message_file - Build-time generation
    format_message - Placeholder substitution

Exceptions:
    TypedMessageError - Base exception class
    LocaleFileError - Malformed locale file
    MessageContextError - Lookup helper used outside a provider

Submodules:
    typedmessage.codegen - Scanner, reconciler, identifiers, generator, pipeline
    typedmessage.runtime - Controller, loaders, storage, provider
    typedmessage.cli - Command-line entry point
"""

# Essential Public API - catalog types first: generated modules import them
from .catalog import MessageCatalog, MessageItem, SimpleMessageItem
from .codegen import GenerationResult, GeneratorOptions, generate_message_file
from .enums import LocaleLoadStatus, PlaceholderType
from .errors import LocaleFileError, MessageContextError, TypedMessageError
from .placeholders import format_message
from .runtime import (
    JsonFileLocaleStorage,
    LocaleController,
    MemoryLocaleStorage,
    MessageResolver,
    PathLocaleLoader,
    message_provider,
    use_typed_message,
    use_typed_message_dynamic,
)
from .types import LocaleControllerState

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("typedmessage")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "GenerationResult",
    "GeneratorOptions",
    "JsonFileLocaleStorage",
    "LocaleController",
    "LocaleControllerState",
    "LocaleFileError",
    "LocaleLoadStatus",
    "MemoryLocaleStorage",
    "MessageCatalog",
    "MessageContextError",
    "MessageItem",
    "MessageResolver",
    "PathLocaleLoader",
    "PlaceholderType",
    "SimpleMessageItem",
    "TypedMessageError",
    "__version__",
    "format_message",
    "generate_message_file",
    "message_provider",
    "use_typed_message",
    "use_typed_message_dynamic",
]
