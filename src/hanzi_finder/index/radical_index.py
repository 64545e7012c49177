"""Radical index construction and its build-once cache."""

from __future__ import annotations

import logging
import threading
from typing import Sequence

from hanzi_finder.collation import radical_sort_key
from hanzi_finder.models import CharacterRecord, RadicalIndex
from hanzi_finder.oracle import SafeOracle

logger = logging.getLogger(__name__)


def build_radical_index(corpus: Sequence[CharacterRecord], oracle: SafeOracle) -> RadicalIndex:
    """Group corpus records under every radical the oracle decomposes them into.

    A record appears in the bucket of each of its radicals, in corpus order.
    Records without any radical are left out of the index.

    Args:
        corpus: Deduplicated records in corpus order.
        oracle: Failure-tolerant oracle used for radical decomposition.

    Returns:
        Mapping of radical to an immutable tuple of records.
    """

    mapping: dict[str, list[CharacterRecord]] = {}
    skipped = 0
    for record in corpus:
        radicals = oracle.radicals_of(record.word)
        if not radicals:
            skipped += 1
            continue
        for radical in dict.fromkeys(radicals):
            mapping.setdefault(radical, []).append(record)

    if skipped:
        logger.debug("%d characters have no radical decomposition", skipped)
    return {radical: tuple(records) for radical, records in mapping.items()}


class RadicalIndexCache:
    """Build the radical index once and serve it, with its sorted keys, afterwards.

    The cache belongs to one corpus; construct a new cache for a new corpus.
    """

    def __init__(self, oracle: SafeOracle) -> None:
        self._oracle = oracle
        self._lock = threading.Lock()
        self._cached: tuple[RadicalIndex, tuple[str, ...]] | None = None

    @property
    def built(self) -> bool:
        return self._cached is not None

    def _get_or_build(
        self, corpus: Sequence[CharacterRecord]
    ) -> tuple[RadicalIndex, tuple[str, ...]]:
        cached = self._cached
        if cached is not None:
            return cached

        with self._lock:
            if self._cached is None:
                index = build_radical_index(corpus, self._oracle)
                self._cached = (index, tuple(sorted(index, key=radical_sort_key)))
                logger.info(
                    "Built radical index with %d radicals over %d characters",
                    len(index),
                    len(corpus),
                )
            return self._cached

    def build(self, corpus: Sequence[CharacterRecord]) -> RadicalIndex:
        """Return the cached index, building it from ``corpus`` on first use.

        Args:
            corpus: Deduplicated records; ignored once the index is built.

        Returns:
            Radical index shared by all later callers.
        """

        return self._get_or_build(corpus)[0]

    def all_radicals(self, corpus: Sequence[CharacterRecord]) -> tuple[str, ...]:
        """Return index keys in Chinese collation order, building the index if needed."""

        return self._get_or_build(corpus)[1]
