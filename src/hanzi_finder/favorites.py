"""JSON-file backed favorites list."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
import threading

from hanzi_finder.corpus.parser import parse_character_records
from hanzi_finder.errors import CorpusLoadError
from hanzi_finder.models import CharacterRecord

logger = logging.getLogger(__name__)


class FavoritesRepository:
    """Ordered, duplicate-free favorites persisted to a JSON array file.

    The file is read on first access. Every change rewrites it atomically
    through a temporary file and ``os.replace``.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._records: list[CharacterRecord] | None = None

    def _load(self) -> list[CharacterRecord]:
        if self._records is not None:
            return self._records
        if not self.path.exists():
            self._records = []
            return self._records

        with self.path.open("r", encoding="utf-8") as handle:
            try:
                payload = json.load(handle)
            except ValueError as exc:
                raise ValueError(f"Favorites file is not valid JSON: {self.path}") from exc
        try:
            self._records = list(parse_character_records(payload))
        except CorpusLoadError as exc:
            raise ValueError(f"Invalid favorites file {self.path}: {exc}") from exc
        return self._records

    def _save(self, records: list[CharacterRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as handle:
                payload = [record.to_dict() for record in records]
                json.dump(payload, handle, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        finally:
            if tmp.exists():
                tmp.unlink()
        self._records = records

    @property
    def records(self) -> tuple[CharacterRecord, ...]:
        with self._lock:
            return tuple(self._load())

    def contains(self, word: str) -> bool:
        with self._lock:
            return any(record.word == word for record in self._load())

    def add(self, record: CharacterRecord) -> bool:
        """Append ``record`` unless already present.

        Returns:
            ``True`` if the list changed.
        """

        with self._lock:
            records = self._load()
            if any(existing.word == record.word for existing in records):
                return False
            self._save([*records, record])
            logger.debug("Added %s to favorites", record.word)
            return True

    def remove(self, word: str) -> bool:
        """Remove the favorite for ``word``.

        Returns:
            ``True`` if the list changed.
        """

        with self._lock:
            records = self._load()
            remaining = [record for record in records if record.word != word]
            if len(remaining) == len(records):
                return False
            self._save(remaining)
            return True

    def clear(self) -> None:
        with self._lock:
            self._save([])
