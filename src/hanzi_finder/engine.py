"""Wiring of corpus loader, radical index cache and oracle for one process."""

from __future__ import annotations

from typing import Sequence

from hanzi_finder.corpus.loader import CorpusLoader
from hanzi_finder.index.radical_index import RadicalIndexCache, build_radical_index
from hanzi_finder.models import CharacterRecord, RadicalIndex
from hanzi_finder.oracle import LinguisticsOracle, SafeOracle
from hanzi_finder.search.radicals import search_by_radicals


class CharacterEngine:
    """Query facade over the memoized corpus and radical index.

    The radical index is memoized only once the corpus has loaded
    successfully; while the loader keeps failing, queries run against a
    throwaway index of the empty corpus so a later successful load is not
    masked by a cached empty index.
    """

    def __init__(self, loader: CorpusLoader, oracle: LinguisticsOracle) -> None:
        self.loader = loader
        self.oracle = oracle if isinstance(oracle, SafeOracle) else SafeOracle(oracle)
        self.index_cache = RadicalIndexCache(self.oracle)

    def corpus(self) -> tuple[CharacterRecord, ...]:
        return self.loader.load()

    def index(self) -> RadicalIndex:
        corpus = self.loader.load()
        if not self.loader.loaded:
            return build_radical_index(corpus, self.oracle)
        return self.index_cache.build(corpus)

    def all_radicals(self) -> tuple[str, ...]:
        corpus = self.loader.load()
        if not self.loader.loaded:
            return ()
        return self.index_cache.all_radicals(corpus)

    def search(self, radicals: Sequence[str], mode: str = "OR") -> tuple[CharacterRecord, ...]:
        if not radicals:
            return ()
        return search_by_radicals(self.index(), radicals, mode)
