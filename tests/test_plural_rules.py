"""Tests for CLDR plural category selection through Babel."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ftlcontext.runtime.plural_rules import select_category, select_plural_category

_CATEGORIES = {"zero", "one", "two", "few", "many", "other"}


class TestSelectPluralCategory:
    """Test select_plural_category()."""

    @pytest.mark.parametrize(
        ("n", "locale", "expected"),
        [
            (1, "en_US", "one"),
            (2, "en_US", "other"),
            (0, "lv_LV", "zero"),
            (1, "lv_LV", "one"),
            (2, "ru_RU", "few"),
            (5, "ru_RU", "many"),
            (2, "ar_SA", "two"),
            (42, "ja_JP", "other"),
            (1, "en-US", "one"),
        ],
    )
    def test_categories(self, n: int, locale: str, expected: str) -> None:
        assert select_plural_category(n, locale) == expected

    def test_decimal_keeps_visible_fraction(self) -> None:
        assert select_plural_category(Decimal("1.0"), "en_US") == "other"

    def test_unknown_locale_falls_back_to_one_other(self) -> None:
        assert select_plural_category(1, "xx_YY") == "one"
        assert select_plural_category(-1, "xx_YY") == "one"
        assert select_plural_category(3, "xx_YY") == "other"

    @given(st.integers(min_value=0, max_value=10**6), st.sampled_from(["en", "lv", "ru", "pl"]))
    def test_always_a_cldr_category(self, n: int, locale: str) -> None:
        """PROPERTY: Every number maps to one of the six CLDR categories."""
        assert select_plural_category(n, locale) in _CATEGORIES


class TestSelectCategory:
    """Test select_category() over a locale chain and number text."""

    def test_first_known_locale_wins(self) -> None:
        assert select_category(("xx_YY", "ru_RU"), "3") == "few"

    def test_number_text(self) -> None:
        assert select_category(("en_US",), "1") == "one"
        assert select_category(("en_US",), "1.0") == "other"

    @pytest.mark.parametrize("text", ["abc", "NaN", "Infinity", ""])
    def test_not_a_finite_number(self, text: str) -> None:
        assert select_category(("en_US",), text) == "other"

    def test_uses_select_plural_category(self) -> None:
        with patch(
            "ftlcontext.runtime.plural_rules.select_plural_category", return_value="few"
        ) as selector:
            assert select_category(("xx_YY", "lv_LV"), "1.5") == "few"

        selector.assert_called_once_with(Decimal("1.5"), "lv_LV")

    def test_no_known_locale(self) -> None:
        assert select_category(("xx_YY",), "1") == "one"
        assert select_category(("xx_YY",), "2") == "other"
