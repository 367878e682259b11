"""Tests for locale source reading (JSON, JSONC, JSON5)."""

from __future__ import annotations

from pathlib import Path

import pytest

from typedmessage.errors import LocaleFileError, TypedMessageError
from typedmessage.sources import locale_name, parse_locale_source, read_locale_source


class TestLocaleName:
    """Basename extraction."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("en.json", "en"),
            ("en.jsonc", "en"),
            ("en.json5", "en"),
            ("pt-BR.json", "pt-BR"),
            ("fallback.json5", "fallback"),
            ("notes.txt", "notes"),
        ],
    )
    def test_locale_name(self, filename: str, expected: str) -> None:
        """Recognized extensions are stripped whole."""
        assert locale_name(filename) == expected


class TestParseLocaleSource:
    """Content parsing."""

    def test_plain_json(self) -> None:
        """Standard JSON objects parse in file order."""
        result = parse_locale_source('{"B": "b", "A": "a"}', "en.json")
        assert list(result.items()) == [("B", "b"), ("A", "a")]

    def test_json5_features(self) -> None:
        """Comments, trailing commas, unquoted keys and single quotes are accepted."""
        source = """
        // greeting messages
        {
            WELCOME: 'Welcome',
            /* block comment */
            "GOODBYE": "Bye {name}",
        }
        """
        result = parse_locale_source(source, "en.json5")
        assert result == {"WELCOME": "Welcome", "GOODBYE": "Bye {name}"}

    def test_non_string_values_skipped(self) -> None:
        """Only string values become messages."""
        result = parse_locale_source('{"A": "a", "N": 1, "L": [], "O": {}, "X": null}', "en.json")
        assert result == {"A": "a"}

    def test_empty_object(self) -> None:
        """An empty object is valid and has no messages."""
        assert parse_locale_source("{}", "en.json") == {}

    @pytest.mark.parametrize("source", ["[1, 2]", '"text"', "42", "null"])
    def test_non_object_top_level_rejected(self, source: str) -> None:
        """The top-level value must be an object."""
        with pytest.raises(LocaleFileError, match="expected an object"):
            parse_locale_source(source, "en.json")

    @pytest.mark.parametrize("source", ["{", "{invalid json}", "", '{"A": "a" "B": "b"}'])
    def test_malformed_content_rejected(self, source: str) -> None:
        """Syntax errors raise LocaleFileError naming the file."""
        with pytest.raises(LocaleFileError) as exc_info:
            parse_locale_source(source, "broken.json")
        assert exc_info.value.filename == "broken.json"
        assert "broken.json" in str(exc_info.value)

    def test_excessive_nesting_rejected(self) -> None:
        """Nesting deeper than the recursion limit raises LocaleFileError."""
        source = '{"B": ' + "[" * 50000 + "]" * 50000 + "}"
        with pytest.raises(LocaleFileError, match="nesting too deep"):
            parse_locale_source(source, "deep.json")

    def test_lone_surrogate_escape_kept(self) -> None:
        """A \\ud800 escape is valid JSON5 and survives parsing."""
        assert parse_locale_source('{"B": "bad \\ud800 text"}', "en.json") == {
            "B": "bad \ud800 text"
        }

    def test_locale_file_error_is_typed_message_error(self) -> None:
        """LocaleFileError belongs to the package hierarchy."""
        with pytest.raises(TypedMessageError):
            parse_locale_source("{", "x.json")


class TestReadLocaleSource:
    """Reading from disk."""

    def test_reads_utf8(self, tmp_path: Path) -> None:
        """Files are decoded as UTF-8."""
        path = tmp_path / "ja.json"
        path.write_text('{"HELLO": "こんにちは"}', encoding="utf-8")
        assert read_locale_source(path) == {"HELLO": "こんにちは"}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Unreadable files raise LocaleFileError."""
        with pytest.raises(LocaleFileError) as exc_info:
            read_locale_source(tmp_path / "missing.json")
        assert exc_info.value.filename == "missing.json"

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Undecodable bytes raise LocaleFileError."""
        path = tmp_path / "bad.json"
        path.write_bytes(b'{"A": "\xff\xfe"}')
        with pytest.raises(LocaleFileError):
            read_locale_source(path)
