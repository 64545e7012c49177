"""Parsing and validation of the raw character corpus payload."""

from __future__ import annotations

from typing import Any

from hanzi_finder.errors import CorpusLoadError
from hanzi_finder.models import CharacterRecord

RECORD_TEXT_FIELDS = ("oldword", "strokes", "pinyin", "radicals", "explanation", "more")


def _text(value: Any) -> str:
    """Coerce an optional scalar payload value to a string."""

    if value is None:
        return ""
    return str(value)


def dedupe_records(records: list[CharacterRecord]) -> tuple[CharacterRecord, ...]:
    """Drop repeated characters, keeping the first occurrence of each glyph.

    Args:
        records: Records in corpus order.

    Returns:
        Records with unique ``word`` values in first-seen order.
    """

    seen: set[str] = set()
    unique: list[CharacterRecord] = []
    for record in records:
        if record.word in seen:
            continue
        seen.add(record.word)
        unique.append(record)
    return tuple(unique)


def parse_character_records(payload: Any) -> tuple[CharacterRecord, ...]:
    """Convert a decoded corpus JSON array into deduplicated records.

    Every entry must be an object with a non-empty string ``word``. The other
    fields are optional and coerced to strings. A payload with any invalid
    entry is rejected as a whole.

    Args:
        payload: Decoded JSON document returned by a corpus source.

    Returns:
        Immutable tuple of records with unique glyphs, in corpus order.

    Raises:
        CorpusLoadError: If the payload is not a list or contains invalid entries.
    """

    if not isinstance(payload, list):
        raise CorpusLoadError(
            f"Corpus payload must be a JSON array, got {type(payload).__name__}"
        )

    errors: list[str] = []
    records: list[CharacterRecord] = []
    for idx, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            errors.append(f"Entry {idx}: expected an object, got {type(item).__name__}")
            continue
        word = item.get("word")
        if not isinstance(word, str) or not word.strip():
            errors.append(f"Entry {idx}: missing or empty word")
            continue
        records.append(
            CharacterRecord(
                word=word.strip(),
                **{name: _text(item.get(name)) for name in RECORD_TEXT_FIELDS},
            )
        )

    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:25])
        rest = len(errors) - min(25, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise CorpusLoadError(f"Corpus validation failed with {len(errors)} errors:\n{preview}{more}")

    return dedupe_records(records)
