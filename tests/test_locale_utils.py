"""Tests for locale_utils: normalization and Babel locale resolution."""

import logging

import pytest
from babel import Locale, UnknownLocaleError
from hypothesis import event, given
from hypothesis import strategies as st

from typedmessage.locale_utils import get_babel_locale, normalize_locale, resolve_babel_locale


class TestNormalizeLocale:
    """BCP-47 to POSIX conversion."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("en-US", "en_US"),
            ("pt-BR", "pt_BR"),
            ("en", "en"),
            (" ja ", "ja"),
            ("zh_Hant_TW", "zh_Hant_TW"),
        ],
    )
    def test_normalize(self, code: str, expected: str) -> None:
        """Hyphens become underscores; whitespace is stripped."""
        assert normalize_locale(code) == expected

    @given(st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-_", max_size=12))
    def test_idempotent(self, code: str) -> None:
        """Property: normalizing twice equals normalizing once."""
        event(f"has_hyphen={'-' in code}")
        once = normalize_locale(code)
        assert normalize_locale(once) == once
        assert "-" not in once


class TestGetBabelLocale:
    """Cached Babel lookups."""

    def test_known_locale(self) -> None:
        """Known locales resolve to Babel Locale objects."""
        locale = get_babel_locale("en-US")
        assert isinstance(locale, Locale)
        assert (locale.language, locale.territory) == ("en", "US")

    def test_cached(self) -> None:
        """Repeated lookups return the same object."""
        assert get_babel_locale("ja") is get_babel_locale("ja")

    def test_unknown_locale_raises(self) -> None:
        """Unknown locales raise UnknownLocaleError."""
        with pytest.raises(UnknownLocaleError):
            get_babel_locale("xx")


class TestResolveBabelLocale:
    """Lenient resolution used for date rendering."""

    def test_known_locale(self) -> None:
        """Known locales resolve directly."""
        assert resolve_babel_locale("de").language == "de"

    @pytest.mark.parametrize("code", [None, "", "   "])
    def test_missing_uses_default(self, code: str | None) -> None:
        """No locale means en_US."""
        assert str(resolve_babel_locale(code)) == "en_US"

    def test_pseudo_locale_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Pseudo locales such as 'fallback' use en_US with a warning."""
        resolve_babel_locale.cache_clear()
        with caplog.at_level(logging.WARNING, logger="typedmessage.locale_utils"):
            assert str(resolve_babel_locale("fallback")) == "en_US"
        assert "fallback" in caplog.text
