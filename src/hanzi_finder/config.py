"""Configuration for corpus, oracle and favorites locations."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Mapping

from hanzi_finder.corpus.sources import CorpusSource, FileCorpusSource, HttpCorpusSource


@dataclass
class CorpusConfig:
    url: str | None = None
    path: Path | None = None
    timeout: float = 10.0


@dataclass
class OracleConfig:
    data_path: Path = Path("data") / "characters.json"


@dataclass
class FavoritesConfig:
    path: Path = Path("data") / "favorites.json"


@dataclass
class AppConfig:
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    oracle: OracleConfig = field(default_factory=OracleConfig)
    favorites: FavoritesConfig = field(default_factory=FavoritesConfig)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Build configuration from ``HANZI_FINDER_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            Configuration with defaults for unset variables.

        Raises:
            ValueError: If ``HANZI_FINDER_TIMEOUT`` is not a number.
        """

        env = os.environ if environ is None else environ
        config = cls()
        if env.get("HANZI_FINDER_CORPUS_URL"):
            config.corpus.url = env["HANZI_FINDER_CORPUS_URL"]
        if env.get("HANZI_FINDER_CORPUS_PATH"):
            config.corpus.path = Path(env["HANZI_FINDER_CORPUS_PATH"])
        if env.get("HANZI_FINDER_TIMEOUT"):
            try:
                config.corpus.timeout = float(env["HANZI_FINDER_TIMEOUT"])
            except ValueError as exc:
                raise ValueError(
                    f"HANZI_FINDER_TIMEOUT must be a number: {env['HANZI_FINDER_TIMEOUT']!r}"
                ) from exc
        if env.get("HANZI_FINDER_ORACLE_DATA"):
            config.oracle.data_path = Path(env["HANZI_FINDER_ORACLE_DATA"])
        if env.get("HANZI_FINDER_FAVORITES"):
            config.favorites.path = Path(env["HANZI_FINDER_FAVORITES"])
        return config


def build_corpus_source(config: CorpusConfig) -> CorpusSource:
    """Pick the corpus source, preferring a local file over a URL.

    Raises:
        ValueError: If neither a path nor a URL is configured.
    """

    if config.path is not None:
        return FileCorpusSource(config.path)
    if config.url:
        return HttpCorpusSource(config.url, timeout=config.timeout)
    raise ValueError("No corpus source configured; set a corpus path or URL.")
