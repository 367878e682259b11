"""Python source generation for reconciled message catalogs.

The generated module is self-contained apart from importing the runtime
item types from typedmessage. Layout:

    header comment
    imports
    invalid locale file listing (only when some files failed to parse)
    __all__
    locales          - locale symbols (all locales but the ultimate fallback)
    <id>_Params      - one TypedDict per parameterized message
    class Messages   - one Final attribute per message, annotated with
                       '#:' comments (key, fallback, type conflicts)
    messages         - primary export (catalog instance)
    default          - default-style export (same instance)

Generation is deterministic: identical input yields byte-identical output.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from typedmessage.codegen.identifiers import IdentifierAllocator
from typedmessage.enums import PlaceholderType
from typedmessage.types import AggregatedMessage, MessageWarning, PlaceholderInfo

__all__ = [
    "CATALOG_CLASS_NAME",
    "generate_module_source",
    "python_type_name",
]

CATALOG_CLASS_NAME: str = "Messages"

_HEADER = (
    "# This file is auto-generated by typedmessage\n"
    "# Do not edit manually\n"
)

_PYTHON_TYPES: dict[str, str] = {
    PlaceholderType.STRING: "str",
    PlaceholderType.NUMBER: "float",
    PlaceholderType.BOOLEAN: "bool",
    PlaceholderType.DATE: "date",
}

# Characters that would end a comment line or are rejected in source code.
_COMMENT_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\0": "\\x00"})

_INDENT = "    "

# Names the class body looks up while it executes; entries must not shadow them.
_CLASS_BODY_NAMES = ("MessageItem", "SimpleMessageItem")


def python_type_name(placeholder_type: str) -> str:
    """Map a placeholder type token to a Python annotation name.

    Unrecognized tokens map to 'str'.

    Example:
        >>> python_type_name("number")
        'float'
        >>> python_type_name("currency")
        'str'
    """
    return _PYTHON_TYPES.get(placeholder_type, "str")


def _comment(text: str) -> str:
    # Lone surrogates are valid in JSON5 strings but cannot be written as UTF-8.
    escaped = text.translate(_COMMENT_ESCAPES)
    return escaped.encode("utf-8", "backslashreplace").decode("utf-8")


def _params_name(identifier: str) -> str:
    return f"{identifier}_Params"


def _params_typeddict(identifier: str, placeholders: Iterable[PlaceholderInfo]) -> str:
    fields = ", ".join(
        f"{placeholder.name!r}: {python_type_name(placeholder.type)}"
        for placeholder in placeholders
    )
    name = _params_name(identifier)
    return f"{name} = TypedDict({name!r}, {{{fields}}})\n"


def _entry_comment(message: AggregatedMessage, warning: MessageWarning | None) -> list[str]:
    lines = [f"#: {_comment(message.key)}: {_comment(message.fallback)}"]
    if warning is not None:
        lines.append("#: Warning: Placeholder types do not match across locales")
        lines.extend(f"#: - {_comment(conflict.describe())}" for conflict in warning.conflicts)
    return lines


def _entry(identifier: str, message: AggregatedMessage, warning: MessageWarning | None) -> str:
    if message.has_params:
        annotation = f"MessageItem[{_params_name(identifier)}]"
        constructor = "MessageItem"
    else:
        annotation = "SimpleMessageItem"
        constructor = "SimpleMessageItem"

    lines = _entry_comment(message, warning)
    lines.append(
        f"{identifier}: Final[{annotation}] = {constructor}("
        f"key={message.key!r}, fallback={message.fallback!r})"
    )
    return "".join(f"{_INDENT}{line}\n" for line in lines)


def _invalid_files_block(invalid_files: Iterable[str]) -> str:
    files = list(invalid_files)
    if not files:
        return ""
    lines = ["# Warning: Failed to load the following locale files"]
    lines.extend(f"#   - {_comment(filename)}" for filename in files)
    lines.append("# These files are not included in the generated code.")
    return "\n".join(lines) + "\n\n"


def _tuple_literal(values: Iterable[str]) -> str:
    items = [repr(value) for value in values]
    if len(items) == 1:
        return f"({items[0]},)"
    return f"({', '.join(items)})"


def _imports(messages: Iterable[AggregatedMessage]) -> str:
    has_simple = False
    has_params = False
    has_date = False
    for message in messages:
        if message.has_params:
            has_params = True
            has_date = has_date or any(
                python_type_name(p.type) == "date" for p in message.placeholders
            )
        else:
            has_simple = True

    typing_names = ["Final", "TypedDict"] if has_params else ["Final"]
    runtime_names = ["MessageCatalog"]
    if has_params:
        runtime_names.append("MessageItem")
    if has_simple:
        runtime_names.append("SimpleMessageItem")

    lines = ["from __future__ import annotations", ""]
    if has_date:
        lines.append("from datetime import date")
    lines.append(f"from typing import {', '.join(typing_names)}")
    lines.append("")
    lines.append(f"from typedmessage import {', '.join(runtime_names)}")
    return "\n".join(lines) + "\n\n"


def generate_module_source(
    messages: Mapping[str, AggregatedMessage],
    warnings: Iterable[MessageWarning],
    invalid_files: Iterable[str],
    locales: Iterable[str],
) -> str:
    """Render a reconciled message set as a Python module.

    Every message gets an entry; warnings only add annotations.

    Args:
        messages: Aggregated messages keyed by message key, in output order
        warnings: Type conflict warnings (matched to messages by key)
        invalid_files: Locale files that failed to parse
        locales: Locale symbols to export

    Returns:
        Python source text
    """
    warning_map = {warning.key: warning for warning in warnings}
    allocator = IdentifierAllocator(reserved=_CLASS_BODY_NAMES)
    identifiers = allocator.assign_all(messages)

    params_blocks = [
        _params_typeddict(identifiers[key], message.unique_placeholders())
        for key, message in messages.items()
        if message.has_params
    ]
    entries = [
        _entry(identifiers[key], message, warning_map.get(key))
        for key, message in messages.items()
    ]

    parts = [
        _HEADER,
        "\n",
        _imports(messages.values()),
        _invalid_files_block(invalid_files),
        f"__all__ = ['{CATALOG_CLASS_NAME}', 'default', 'locales', 'messages']\n\n",
        "#: All known locale symbols\n",
        f"locales: Final[tuple[str, ...]] = {_tuple_literal(locales)}\n",
    ]
    if params_blocks:
        parts.append("\n")
        parts.extend(params_blocks)
    parts.extend([
        "\n\n",
        f"class {CATALOG_CLASS_NAME}(MessageCatalog):\n",
        f'{_INDENT}"""Typed message catalog generated from locale files."""\n',
        "\n",
        f"{_INDENT}__slots__ = ()\n",
    ])
    for entry in entries:
        parts.append("\n")
        parts.append(entry)
    parts.extend([
        "\n\n",
        f"messages: Final[{CATALOG_CLASS_NAME}] = {CATALOG_CLASS_NAME}()\n",
        f"default: Final[{CATALOG_CLASS_NAME}] = messages\n",
    ])
    return "".join(parts)
