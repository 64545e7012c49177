"""Linguistics oracle contract, its failure-tolerant wrapper and a table adapter.

The engine never talks to a linguistics library directly. It consumes the
:class:`LinguisticsOracle` protocol through :class:`SafeOracle`, which turns any
per-character failure into the documented empty value so a single bad glyph
cannot fail a whole index build or query.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
import json
import logging
from pathlib import Path
from typing import Any, Protocol, Sequence

from pypinyin import Style, pinyin

from hanzi_finder.models import FIVE_ELEMENTS

logger = logging.getLogger(__name__)


class LinguisticsOracle(Protocol):
    """Per-character linguistic lookups consumed by the engine."""

    def radicals_of(self, char: str) -> Sequence[str]: ...

    def five_element_of(self, char: str) -> str | None: ...

    def stroke_count_of(self, char: str) -> Any: ...

    def romanization_of(self, char: str) -> str: ...

    def structure_of(self, char: str) -> str: ...


def normalize_stroke_count(value: Any) -> int:
    """Coerce an oracle stroke-count answer to a non-negative integer.

    Args:
        value: Raw answer. Integers, integral floats, digit strings and
            singleton lists of those are accepted.

    Returns:
        Stroke count, or ``0`` for any other shape.
    """

    if isinstance(value, (list, tuple)):
        if len(value) != 1:
            return 0
        value = value[0]
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value >= 0 else 0
    if isinstance(value, float):
        if value.is_integer() and value >= 0:
            return int(value)
        return 0
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


class SafeOracle:
    """Wrap an oracle so every call degrades to an empty value on failure.

    Degraded values: ``()`` for radicals, ``None`` for five elements, ``0`` for
    stroke counts and ``""`` for romanization and structure. Failures are
    logged with the offending character.
    """

    def __init__(self, oracle: LinguisticsOracle) -> None:
        self._oracle = oracle

    def radicals_of(self, char: str) -> tuple[str, ...]:
        try:
            result = self._oracle.radicals_of(char)
        except Exception:
            logger.warning("Radical lookup failed for %r", char, exc_info=True)
            return ()
        if not result:
            return ()
        return tuple(item for item in result if isinstance(item, str) and item)

    def five_element_of(self, char: str) -> str | None:
        try:
            result = self._oracle.five_element_of(char)
        except Exception:
            logger.warning("Five-element lookup failed for %r", char, exc_info=True)
            return None
        if result in FIVE_ELEMENTS:
            return result
        return None

    def stroke_count_of(self, char: str) -> int:
        try:
            result = self._oracle.stroke_count_of(char)
        except Exception:
            logger.warning("Stroke count lookup failed for %r", char, exc_info=True)
            return 0
        return normalize_stroke_count(result)

    def romanization_of(self, char: str) -> str:
        try:
            result = self._oracle.romanization_of(char)
        except Exception:
            logger.warning("Romanization lookup failed for %r", char, exc_info=True)
            return ""
        return result if isinstance(result, str) else ""

    def structure_of(self, char: str) -> str:
        try:
            result = self._oracle.structure_of(char)
        except Exception:
            logger.warning("Structure lookup failed for %r", char, exc_info=True)
            return ""
        return result if isinstance(result, str) else ""


@dataclass(frozen=True)
class TableOracle:
    """Oracle backed by a JSON character table plus pypinyin readings.

    The table is a JSON object keyed by character. Each value may carry
    ``radicals`` (list of strings), ``fiveElement``, ``strokes``,
    ``structure`` and ``pinyin``. Characters missing from the table answer
    with empty values; romanization falls back to pypinyin tone-marked output.
    """

    path: Path

    @cached_property
    def table(self) -> dict[str, dict[str, Any]]:
        """Load and cache the character table from disk.

        Returns:
            Mapping of character to its raw table entry.

        Raises:
            FileNotFoundError: If the configured table path does not exist.
            ValueError: If the file is not a JSON object.
        """

        if not self.path.exists():
            raise FileNotFoundError(f"Oracle data file not found: {self.path}")

        with self.path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)

        if not isinstance(data, dict):
            raise ValueError(f"Oracle data file must contain a JSON object: {self.path}")

        table = {char: entry for char, entry in data.items() if isinstance(entry, dict)}
        logger.info("Loaded oracle table with %d characters from %s", len(table), self.path)
        return table

    def _entry(self, char: str) -> dict[str, Any]:
        return self.table.get(char, {})

    def radicals_of(self, char: str) -> list[str]:
        return list(self._entry(char).get("radicals") or [])

    def five_element_of(self, char: str) -> str | None:
        return self._entry(char).get("fiveElement") or None

    def stroke_count_of(self, char: str) -> Any:
        return self._entry(char).get("strokes", 0)

    def romanization_of(self, char: str) -> str:
        stored = self._entry(char).get("pinyin")
        if stored:
            return str(stored)
        readings = pinyin(char, style=Style.TONE, errors="ignore")
        if readings and readings[0]:
            return readings[0][0]
        return ""

    def structure_of(self, char: str) -> str:
        return str(self._entry(char).get("structure") or "")
