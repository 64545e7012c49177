"""Unit tests for Chinese-aware sort keys."""

from __future__ import annotations

from hanzi_finder.collation import radical_sort_key, romanization_sort_key, strip_tone_marks


def test_strip_tone_marks_folds_vowels_and_v() -> None:
    assert strip_tone_marks("Hǎo") == "hao"
    assert strip_tone_marks("nǚ") == "nü"
    assert strip_tone_marks("lv") == "lü"


def test_romanization_sorts_by_base_letters_before_tones() -> None:
    words = ["zǐ", "hǎo", "ài", "mù", "hāo", "āi"]

    assert sorted(words, key=romanization_sort_key) == ["āi", "ài", "hāo", "hǎo", "mù", "zǐ"]


def test_radicals_sort_by_reading_not_code_point() -> None:
    radicals = ["子", "女", "木"]

    # Code-point order would be 女 (U+5973), 子 (U+5B50), 木 (U+6728).
    assert sorted(radicals, key=radical_sort_key) == ["木", "女", "子"]


def test_u_umlaut_shares_primary_weight_with_u() -> None:
    words = ["luó", "lǜ", "luàn", "lù"]

    assert sorted(words, key=romanization_sort_key) == ["lù", "lǜ", "luàn", "luó"]


def test_plain_u_sorts_before_u_umlaut_with_same_tone() -> None:
    assert sorted(["nü", "nu"], key=romanization_sort_key) == ["nu", "nü"]
    assert sorted(["lv", "lu"], key=romanization_sort_key) == ["lu", "lv"]


def test_radical_with_u_umlaut_reading_sorts_like_u() -> None:
    # 女 reads nǚ and 诺 reads nuò; "nu" precedes "nuo".
    assert sorted(["诺", "女"], key=radical_sort_key) == ["女", "诺"]
