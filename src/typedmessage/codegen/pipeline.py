"""Build-time generation pipeline.

Wires the scanner, reconciler and code generator into a single call that
turns a locale directory into a generated Python module:

    options = GeneratorOptions.from_pyproject("pyproject.toml")
    result = generate_message_file(options, root_dir=".")

Paths in GeneratorOptions are relative to ``root_dir`` unless absolute.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from typedmessage.codegen.generator import generate_module_source
from typedmessage.codegen.reconciler import reconcile
from typedmessage.codegen.scanner import locale_symbols, scan_locale_files
from typedmessage.constants import (
    DEFAULT_FALLBACK_PRIORITY_ORDER,
    DEFAULT_LOCALE_DIR,
    DEFAULT_OUTPUT_PATH,
    PYPROJECT_TOOL_TABLE,
)
from typedmessage.types import MessageWarning

__all__ = [
    "GenerationResult",
    "GeneratorOptions",
    "generate_message_file",
    "should_regenerate",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GeneratorOptions:
    """Configuration for one generation target.

    Attributes:
        locale_dir: Directory holding one locale file per locale
        output_path: Destination of the generated module
        fallback_priority_order: Locale basenames, highest precedence first.
            The last entry is the ultimate fallback locale.
    """

    locale_dir: str = DEFAULT_LOCALE_DIR
    output_path: str = DEFAULT_OUTPUT_PATH
    fallback_priority_order: tuple[str, ...] = DEFAULT_FALLBACK_PRIORITY_ORDER

    def __post_init__(self) -> None:
        """Validate and normalize option values.

        Raises:
            ValueError: If a path is blank or the priority order contains blanks
        """
        if not str(self.locale_dir).strip():
            msg = "locale_dir cannot be empty"
            raise ValueError(msg)
        if not str(self.output_path).strip():
            msg = "output_path cannot be empty"
            raise ValueError(msg)

        priority = tuple(self.fallback_priority_order)
        for name in priority:
            if not isinstance(name, str) or not name.strip():
                msg = f"fallback_priority_order entries must be non-empty strings, got: {name!r}"
                raise ValueError(msg)
        object.__setattr__(self, "fallback_priority_order", tuple(n.strip() for n in priority))

    @classmethod
    def from_mapping(cls, table: Mapping[str, Any]) -> GeneratorOptions:
        """Build options from a ``[tool.typedmessage]`` style table.

        Both dashed (``locale-dir``) and underscored (``locale_dir``) keys
        are accepted. Missing keys keep their defaults.

        Raises:
            ValueError: If a value has the wrong type or an unknown key is present
        """
        known = {"locale_dir", "output_path", "fallback_priority_order"}
        values: dict[str, Any] = {}
        for raw_key, value in table.items():
            key = raw_key.replace("-", "_")
            if key not in known:
                msg = f"Unknown [tool.{PYPROJECT_TOOL_TABLE}] option: '{raw_key}'"
                raise ValueError(msg)
            values[key] = value

        priority = values.get("fallback_priority_order")
        if priority is not None:
            if isinstance(priority, str) or not isinstance(priority, list | tuple):
                msg = f"fallback-priority-order must be a list of strings, got: {priority!r}"
                raise ValueError(msg)
            values["fallback_priority_order"] = tuple(priority)

        for key in ("locale_dir", "output_path"):
            if key in values and not isinstance(values[key], str):
                msg = f"{key.replace('_', '-')} must be a string, got: {values[key]!r}"
                raise ValueError(msg)

        return cls(**values)

    @classmethod
    def from_pyproject(cls, path: Path | str) -> GeneratorOptions:
        """Read options from the ``[tool.typedmessage]`` table of a pyproject.toml.

        A missing file or missing table yields the defaults.

        Args:
            path: Path to pyproject.toml

        Returns:
            GeneratorOptions

        Raises:
            tomllib.TOMLDecodeError: If the file is not valid TOML
            ValueError: If the table holds invalid values
        """
        pyproject = Path(path)
        if not pyproject.is_file():
            logger.debug("No pyproject.toml at %s, using default options", pyproject)
            return cls()

        with pyproject.open("rb") as f:
            data = tomllib.load(f)

        table = data.get("tool", {}).get(PYPROJECT_TOOL_TABLE)
        if table is None:
            return cls()
        return cls.from_mapping(table)

    def resolve_locale_dir(self, root_dir: Path | str) -> Path:
        """Get the locale directory resolved against ``root_dir``."""
        return (Path(root_dir) / self.locale_dir).resolve()

    def resolve_output_path(self, root_dir: Path | str) -> Path:
        """Get the output path resolved against ``root_dir``."""
        return (Path(root_dir) / self.output_path).resolve()


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Summary of one successful generation run.

    Attributes:
        output_path: Path of the written module
        key_count: Number of message entries written
        locales: Locale symbols exported by the module
        locale_files: Locale files in processing order
        warnings: Type conflict warnings
        invalid_files: Locale files that failed to parse
    """

    output_path: Path
    key_count: int
    locales: tuple[str, ...]
    locale_files: tuple[str, ...]
    warnings: tuple[MessageWarning, ...] = ()
    invalid_files: tuple[str, ...] = ()

    @property
    def has_problems(self) -> bool:
        """Check if any warning or invalid file was reported."""
        return bool(self.warnings or self.invalid_files)


def generate_message_file(
    options: GeneratorOptions,
    root_dir: Path | str = ".",
) -> GenerationResult | None:
    """Generate the message module described by ``options``.

    A missing locale directory is reported with a warning log and nothing is
    written. Malformed locale files and type conflicts never abort the run.

    Args:
        options: Generation options
        root_dir: Project root that relative option paths are resolved against

    Returns:
        GenerationResult, or None if the locale directory does not exist
    """
    locale_dir = options.resolve_locale_dir(root_dir)
    output_path = options.resolve_output_path(root_dir)

    if not locale_dir.is_dir():
        logger.warning("Locale directory not found: %s", locale_dir)
        return None

    locale_files = scan_locale_files(locale_dir, options.fallback_priority_order)
    result = reconcile(locale_files, locale_dir)
    locales = locale_symbols(locale_files, options.fallback_priority_order)

    for warning in result.warnings:
        for conflict in warning.conflicts:
            logger.warning(
                "Placeholder type mismatch in message '%s': %s", warning.key, conflict.describe()
            )
    if result.invalid_files:
        logger.warning(
            "Skipped invalid locale files: %s", ", ".join(result.invalid_files)
        )

    source = generate_module_source(
        result.messages, result.warnings, result.invalid_files, locales
    )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(source, encoding="utf-8", newline="\n")
    logger.info("Generated %s with %d message keys", output_path, len(result.messages))

    return GenerationResult(
        output_path=output_path,
        key_count=len(result.messages),
        locales=locales,
        locale_files=locale_files,
        warnings=result.warnings,
        invalid_files=result.invalid_files,
    )


def should_regenerate(
    options: GeneratorOptions,
    root_dir: Path | str,
    changed_path: Path | str,
) -> bool:
    """Check if a changed file should trigger regeneration.

    Watchers call this for every changed path; only files inside the locale
    directory are relevant.

    Args:
        options: Generation options
        root_dir: Project root
        changed_path: Path reported by the watcher (relative to root_dir or absolute)

    Returns:
        True if the path lies under the locale directory
    """
    locale_dir = options.resolve_locale_dir(root_dir)
    candidate = (Path(root_dir) / changed_path).resolve()
    return candidate.is_relative_to(locale_dir) and candidate != locale_dir
