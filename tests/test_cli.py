"""Tests for the typedmessage command-line interface."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from typedmessage.cli import build_parser, main

if TYPE_CHECKING:
    from tests.conftest import LocaleWriter


class TestParser:
    """Argument parsing."""

    def test_command_required(self) -> None:
        """Running without a subcommand is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2

    def test_priority_repeatable(self) -> None:
        """--priority accumulates in order."""
        args = build_parser().parse_args(["generate", "--priority", "ja", "--priority", "en"])
        assert args.priority == ["ja", "en"]


class TestGenerateCommand:
    """typedmessage generate."""

    def test_generate(
        self, tmp_path: Path, write_locale: LocaleWriter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The module is written and a summary printed."""
        write_locale("en.json", {"HELLO": "Hello"})
        write_locale("ja.json", {"HELLO": "こんにちは"})

        exit_code = main(["generate", "--root", str(tmp_path)])

        assert exit_code == 0
        assert (tmp_path / "src" / "generated" / "messages.py").is_file()
        out = capsys.readouterr().out
        assert "[OK]" in out
        assert "1 messages" in out
        assert "locales: ja, en" in out

    def test_output_override(self, tmp_path: Path, write_locale: LocaleWriter) -> None:
        """--output replaces the configured path."""
        write_locale("en.json", {"HELLO": "Hello"})
        assert main(["generate", "--root", str(tmp_path), "--output", "msgs.py"]) == 0
        assert (tmp_path / "msgs.py").is_file()

    def test_pyproject_settings(self, tmp_path: Path) -> None:
        """Options are read from the project's pyproject.toml."""
        (tmp_path / "pyproject.toml").write_text(
            '[tool.typedmessage]\nlocale-dir = "i18n"\noutput-path = "app/messages.py"\n',
            encoding="utf-8",
        )
        (tmp_path / "i18n").mkdir()
        (tmp_path / "i18n" / "en.json").write_text('{"A": "a"}', encoding="utf-8")

        assert main(["generate", "--root", str(tmp_path)]) == 0
        assert (tmp_path / "app" / "messages.py").is_file()

    def test_command_line_overrides_pyproject(self, tmp_path: Path) -> None:
        """--locale-dir wins over the pyproject value."""
        (tmp_path / "pyproject.toml").write_text(
            '[tool.typedmessage]\nlocale-dir = "missing"\n', encoding="utf-8"
        )
        (tmp_path / "i18n").mkdir()
        assert main(["generate", "--root", str(tmp_path), "--locale-dir", "i18n"]) == 0

    def test_missing_locale_dir(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A missing locale directory exits with 1."""
        assert main(["generate", "--root", str(tmp_path)]) == 1
        assert "Locale directory not found" in capsys.readouterr().err

    def test_invalid_files_warn_but_succeed(
        self, tmp_path: Path, write_locale: LocaleWriter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """generate reports malformed files but still succeeds."""
        write_locale("en.json", {"HELLO": "Hello"})
        write_locale("broken.json", "{")

        assert main(["generate", "--root", str(tmp_path)]) == 0
        assert "[WARN] Invalid locale file skipped: broken.json" in capsys.readouterr().out

    def test_invalid_configuration(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Bad pyproject values exit with 2."""
        (tmp_path / "pyproject.toml").write_text(
            '[tool.typedmessage]\nlocale-directory = "i18n"\n', encoding="utf-8"
        )
        assert main(["generate", "--root", str(tmp_path)]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_malformed_pyproject(self, tmp_path: Path) -> None:
        """Unparseable TOML exits with 2."""
        (tmp_path / "pyproject.toml").write_text("[tool.typedmessage\n", encoding="utf-8")
        assert main(["generate", "--root", str(tmp_path)]) == 2


class TestCheckCommand:
    """typedmessage check."""

    def test_valid(
        self, tmp_path: Path, write_locale: LocaleWriter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Valid files pass and nothing is written."""
        write_locale("en.json", {"HELLO": "Hello {name}"})
        write_locale("fallback.json", {"HELLO": "Hello {name}"})

        assert main(["check", "--root", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "2 locale files, 1 messages, locales: en" in out
        assert "[OK] Locale files are valid" in out
        assert not (tmp_path / "src").exists()

    def test_type_conflict_is_warning(
        self, tmp_path: Path, write_locale: LocaleWriter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Type conflicts are printed but do not fail the check."""
        write_locale("fallback.json", {"M": "{n}"})
        write_locale("en.json", {"M": "{n:number}"})

        assert main(["check", "--root", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "[WARN] M: placeholder types do not match across locales" in out
        assert "n: fallback.json: string, en.json: number" in out

    def test_invalid_files_fail(
        self, tmp_path: Path, write_locale: LocaleWriter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Malformed files make the check fail."""
        write_locale("en.json", "[1, 2]")

        assert main(["check", "--root", str(tmp_path)]) == 1
        captured = capsys.readouterr()
        assert "en.json" in captured.out
        assert "1 invalid locale files" in captured.err

    def test_missing_locale_dir(self, tmp_path: Path) -> None:
        """A missing locale directory exits with 1."""
        assert main(["check", "--root", str(tmp_path)]) == 1
