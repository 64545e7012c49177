"""AND/OR radical queries over a built radical index."""

from __future__ import annotations

from typing import Sequence

from hanzi_finder.models import SEARCH_MODES, CharacterRecord, RadicalIndex


def search_by_radicals(
    index: RadicalIndex,
    radicals: Sequence[str],
    mode: str = "OR",
) -> tuple[CharacterRecord, ...]:
    """Find characters containing any (OR) or all (AND) of ``radicals``.

    An empty radical list matches nothing in either mode. Radicals missing from
    the index behave as empty buckets. OR results are deduplicated and ordered
    by first appearance walking radicals in the given order; AND results keep
    the first radical's bucket order. A single-radical AND query returns that
    radical's bucket as is.

    Args:
        index: Radical index.
        radicals: Selected radicals in selection order.
        mode: ``"AND"`` or ``"OR"``.

    Returns:
        Matching records.

    Raises:
        ValueError: If ``mode`` is not a known search mode.
    """

    if mode not in SEARCH_MODES:
        raise ValueError(f"Unknown search mode: {mode!r}")
    if not radicals:
        return ()

    if mode == "OR":
        seen: set[str] = set()
        results: list[CharacterRecord] = []
        for radical in radicals:
            for record in index.get(radical, ()):
                if record.word in seen:
                    continue
                seen.add(record.word)
                results.append(record)
        return tuple(results)

    first_bucket = index.get(radicals[0], ())
    if len(radicals) == 1:
        return first_bucket

    other_words = [{record.word for record in index.get(radical, ())} for radical in radicals[1:]]
    return tuple(
        record for record in first_bucket if all(record.word in words for words in other_words)
    )
