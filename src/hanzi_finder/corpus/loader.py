"""Process-lifetime cache for the parsed character corpus."""

from __future__ import annotations

import logging
import threading

from hanzi_finder.corpus.parser import parse_character_records
from hanzi_finder.corpus.sources import CorpusSource
from hanzi_finder.models import CharacterRecord

logger = logging.getLogger(__name__)


class CorpusLoader:
    """Fetch, parse and cache the corpus on first use.

    Concurrent first callers wait on a lock so only one fetch is in flight.
    Only successful loads are cached: a failed fetch logs, returns an empty
    tuple and is attempted again on the next call. A failure is logged at
    warning level once, and identical repeats only at debug level.
    """

    def __init__(self, source: CorpusSource) -> None:
        self._source = source
        self._lock = threading.Lock()
        self._records: tuple[CharacterRecord, ...] | None = None
        self._last_error: str | None = None

    @property
    def loaded(self) -> bool:
        """Whether a successful load is cached."""

        return self._records is not None

    def _log_failure(self, exc: Exception) -> None:
        """Warn once per distinct failure; repeats of the same error go to debug."""

        message = f"{type(exc).__name__}: {exc}"
        if message == self._last_error:
            logger.debug("Error loading character data (repeated): %s", message)
            return
        self._last_error = message
        logger.warning("Error loading character data: %s", message, exc_info=exc)

    def load(self) -> tuple[CharacterRecord, ...]:
        """Return the deduplicated corpus, fetching it on the first call.

        Returns:
            Cached records, or ``()`` when the fetch or parse failed.
        """

        cached = self._records
        if cached is not None:
            return cached

        with self._lock:
            if self._records is not None:
                return self._records
            try:
                records = parse_character_records(self._source())
            except Exception as exc:
                self._log_failure(exc)
                return ()
            self._records = records
            self._last_error = None
            logger.info("Loaded %d unique characters", len(records))
            return records
