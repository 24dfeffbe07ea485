"""Tests for locale_utils.py.

Covers locale normalization, Babel locale lookup, and system locale
detection.

Python 3.13+.
"""

from unittest.mock import patch

import pytest
from babel import Locale, UnknownLocaleError
from hypothesis import given
from hypothesis import strategies as st

from ftlcontext.locale_utils import (
    first_known_locale,
    get_babel_locale,
    get_system_locale,
    normalize_locale,
    normalize_locales,
)


class TestNormalizeLocale:
    """Test normalize_locale function."""

    def test_bcp47_to_posix(self) -> None:
        assert normalize_locale("en-US") == "en_US"

    def test_already_normalized(self) -> None:
        assert normalize_locale("en_US") == "en_US"

    def test_multiple_hyphens(self) -> None:
        assert normalize_locale("zh-Hans-CN") == "zh_Hans_CN"

    @given(st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCZ-_", max_size=20))
    def test_idempotent(self, code: str) -> None:
        """PROPERTY: normalize(normalize(x)) == normalize(x)."""
        once = normalize_locale(code)

        assert normalize_locale(once) == once
        assert "-" not in once


class TestNormalizeLocales:
    """Test normalize_locales function."""

    def test_single_string(self) -> None:
        assert normalize_locales("en-US") == ("en_US",)

    def test_chain_keeps_order(self) -> None:
        assert normalize_locales(["lv-LV", "en-US", "en"]) == ("lv_LV", "en_US", "en")

    def test_empty_entries_dropped(self) -> None:
        assert normalize_locales(["", "de"]) == ("de",)

    @pytest.mark.parametrize("locales", ["", [], ["", ""]])
    def test_nothing_usable(self, locales: str | list[str]) -> None:
        with pytest.raises(ValueError, match="At least one locale"):
            normalize_locales(locales)


class TestGetBabelLocale:
    """Test get_babel_locale function."""

    def test_bcp47_accepted(self) -> None:
        locale = get_babel_locale("en-US")

        assert isinstance(locale, Locale)
        assert locale.language == "en"
        assert locale.territory == "US"

    def test_cached(self) -> None:
        assert get_babel_locale("de_DE") is get_babel_locale("de_DE")

    def test_unknown(self) -> None:
        with pytest.raises(UnknownLocaleError):
            get_babel_locale("xx")


class TestFirstKnownLocale:
    """Test first_known_locale function."""

    def test_skips_unknown(self) -> None:
        locale = first_known_locale(["xx", "de-DE", "en"])

        assert locale is not None
        assert str(locale) == "de_DE"

    def test_none_known(self) -> None:
        assert first_known_locale(["xx", "yy"]) is None


class TestGetSystemLocale:
    """Test get_system_locale function."""

    def test_from_getlocale(self) -> None:
        with patch("locale.getlocale", return_value=("de_DE", "UTF-8")):
            assert get_system_locale() == "de_DE"

    def test_c_locale_falls_through_to_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LC_ALL", "fr_FR.UTF-8")

        with patch("locale.getlocale", return_value=("C", None)):
            assert get_system_locale() == "fr_FR"

    def test_env_order(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LC_ALL", raising=False)
        monkeypatch.setenv("LC_MESSAGES", "POSIX")
        monkeypatch.setenv("LANG", "pt-BR.UTF-8")

        with patch("locale.getlocale", return_value=(None, None)):
            assert get_system_locale() == "pt_BR"

    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
            monkeypatch.delenv(var, raising=False)

        with patch("locale.getlocale", return_value=(None, None)):
            assert get_system_locale() == "en_US"

    def test_raise_on_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
            monkeypatch.delenv(var, raising=False)

        with (
            patch("locale.getlocale", return_value=(None, None)),
            pytest.raises(RuntimeError, match="Could not determine system locale"),
        ):
            get_system_locale(raise_on_failure=True)
