"""Build-time code generation.

Turns a directory of locale files into a typed Python message module.

Submodules:
    scanner     - Locale file discovery and processing order
    reconciler  - Cross-locale placeholder type reconciliation
    identifiers - Message key -> Python identifier sanitization
    generator   - Python source rendering
    pipeline    - GeneratorOptions, generate_message_file, should_regenerate
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from typedmessage.codegen.generator import generate_module_source
from typedmessage.codegen.identifiers import (
    IdentifierAllocator,
    allocate_identifier,
    ensure_unique_identifier,
    sanitize_identifier,
)
from typedmessage.codegen.pipeline import (
    GenerationResult,
    GeneratorOptions,
    generate_message_file,
    should_regenerate,
)
from typedmessage.codegen.reconciler import reconcile, reconcile_messages
from typedmessage.codegen.scanner import fallback_locale, locale_symbols, scan_locale_files

__all__ = [
    # Pipeline
    "GeneratorOptions",
    "GenerationResult",
    "generate_message_file",
    "should_regenerate",
    # Stages
    "scan_locale_files",
    "fallback_locale",
    "locale_symbols",
    "reconcile",
    "reconcile_messages",
    "generate_module_source",
    # Identifiers
    "IdentifierAllocator",
    "allocate_identifier",
    "ensure_unique_identifier",
    "sanitize_identifier",
]
