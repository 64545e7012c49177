"""Chinese-aware sort keys for radicals and pinyin romanizations.

Plain code-point order scatters tone-marked vowels after ``z`` and orders Hanzi
by Unicode block. The keys here follow the conventions of zh-CN collation
instead: Hanzi are ordered by their pinyin reading and pinyin strings compare on
their base letters first with the tone as a secondary key.
"""

from __future__ import annotations

from pypinyin import Style, lazy_pinyin

TONE_MARKS = {
    "ā": ("a", 1),
    "á": ("a", 2),
    "ǎ": ("a", 3),
    "à": ("a", 4),
    "ē": ("e", 1),
    "é": ("e", 2),
    "ě": ("e", 3),
    "è": ("e", 4),
    "ī": ("i", 1),
    "í": ("i", 2),
    "ǐ": ("i", 3),
    "ì": ("i", 4),
    "ō": ("o", 1),
    "ó": ("o", 2),
    "ǒ": ("o", 3),
    "ò": ("o", 4),
    "ū": ("u", 1),
    "ú": ("u", 2),
    "ǔ": ("u", 3),
    "ù": ("u", 4),
    "ǖ": ("ü", 1),
    "ǘ": ("ü", 2),
    "ǚ": ("ü", 3),
    "ǜ": ("ü", 4),
    "ń": ("n", 2),
    "ň": ("n", 3),
    "ǹ": ("n", 4),
    "ḿ": ("m", 2),
}


def strip_tone_marks(text: str) -> str:
    """Fold tone-marked vowels to their base letters and lowercase.

    Args:
        text: Pinyin string that may contain tone marks.

    Returns:
        Tone-free lowercase pinyin where ``v`` is normalized to ``ü``.
    """

    chars: list[str] = []
    for ch in text.lower():
        if ch in TONE_MARKS:
            chars.append(TONE_MARKS[ch][0])
        elif ch == "v":
            chars.append("ü")
        else:
            chars.append(ch)
    return "".join(chars)


def _collation_base(text: str) -> str:
    """Fold tones and the umlaut away so ``ü`` shares its primary weight with ``u``."""

    return strip_tone_marks(text).replace("ü", "u")


def _secondary_weights(text: str) -> tuple[tuple[int, int], ...]:
    """Return ``(tone, umlaut)`` pairs for each vowel that carries a tone or umlaut.

    Unmarked vowels get tone ``0`` so a plain syllable sorts before its toned
    forms, and ``u`` sorts before ``ü`` when the tones agree.
    """

    weights: list[tuple[int, int]] = []
    for ch in text.lower():
        if ch in TONE_MARKS:
            base, tone = TONE_MARKS[ch]
            weights.append((tone, 1 if base == "ü" else 0))
        elif ch in ("ü", "v"):
            weights.append((0, 1))
    return tuple(weights)


RomanizationKey = tuple[str, tuple[tuple[int, int], ...], str]


def romanization_sort_key(text: str) -> RomanizationKey:
    """Build a sort key comparing pinyin by base letters, then tones and umlauts.

    ``ü`` compares as ``u`` on the primary level, as in zh-CN collation, so
    ``lǜ`` sorts before ``luàn``.

    Args:
        text: Pinyin romanization such as ``hǎo``.

    Returns:
        Key tuple ``(base_letters, secondary_weights, original)``.
    """

    return (_collation_base(text), _secondary_weights(text), text)


def radical_sort_key(radical: str) -> tuple[int, RomanizationKey, str]:
    """Build a sort key ordering Hanzi radicals by pinyin reading.

    The tone-marked reading goes through :func:`romanization_sort_key`, so
    radicals follow the same collation as romanized results. Radicals without a
    reading (rare component forms) sort after all readable radicals, by code
    point.

    Args:
        radical: Radical glyph.

    Returns:
        Key tuple ``(unreadable_flag, reading_key, glyph)``.
    """

    readings = lazy_pinyin(radical, style=Style.TONE, errors="ignore")
    if not readings:
        return (1, ("", (), ""), radical)
    return (0, romanization_sort_key(" ".join(readings)), radical)
