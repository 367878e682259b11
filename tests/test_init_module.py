"""Tests for the typedmessage package __init__.py module and packaging metadata.

Covers:
- __all__ integrity: every exported name is accessible
- __version__ is populated
- Declared interpreter floor matches the language features the package uses
"""

from __future__ import annotations

import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


class TestAllExports:
    """__all__ integrity: every exported name must be accessible from typedmessage."""

    def test_all_exports_are_accessible(self) -> None:
        """Every name in typedmessage.__all__ resolves without error."""
        import typedmessage

        for name in typedmessage.__all__:
            assert hasattr(typedmessage, name), (
                f"typedmessage.__all__ contains {name!r} but "
                f"typedmessage.{name} raises AttributeError"
            )

    def test_generated_module_imports_are_exported(self) -> None:
        """Generated modules import these names from the package root."""
        import typedmessage

        for name in ("MessageCatalog", "MessageItem", "SimpleMessageItem"):
            assert name in typedmessage.__all__

    def test_version_is_string(self) -> None:
        """__version__ is set whether or not the package is installed."""
        import typedmessage

        assert isinstance(typedmessage.__version__, str)
        assert typedmessage.__version__


class TestPackagingMetadata:
    """pyproject.toml declarations."""

    def test_requires_python_313(self) -> None:
        """The interpreter floor is Python 3.13."""
        project = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]
        assert project["requires-python"] == ">=3.13"

    def test_no_classifier_below_floor(self) -> None:
        """Classifiers do not advertise interpreters below the floor."""
        project = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]
        assert "Programming Language :: Python :: 3.12" not in project["classifiers"]
        assert "Programming Language :: Python :: 3.13" in project["classifiers"]

    def test_ruff_target_matches_floor(self) -> None:
        """Lint target version tracks requires-python."""
        tool = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["tool"]
        assert tool["ruff"]["target-version"] == "py313"
