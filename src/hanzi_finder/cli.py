"""CLI entrypoint for radical and five-element character search."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from hanzi_finder.config import AppConfig, build_corpus_source
from hanzi_finder.corpus.loader import CorpusLoader
from hanzi_finder.detail import describe_character
from hanzi_finder.engine import CharacterEngine
from hanzi_finder.favorites import FavoritesRepository
from hanzi_finder.models import FIVE_ELEMENTS, SEARCH_MODES, SORT_MODES, CharacterRecord
from hanzi_finder.oracle import SafeOracle, TableOracle
from hanzi_finder.session import SearchSession


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def _result_rows(records: Sequence[CharacterRecord], oracle: SafeOracle) -> list[list[str]]:
    return [
        [
            record.word,
            record.pinyin or oracle.romanization_of(record.word),
            str(oracle.stroke_count_of(record.word)),
            oracle.five_element_of(record.word) or "",
        ]
        for record in records
    ]


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Parser with ``radicals``, ``search``, ``show`` and ``favorites`` commands.
    """

    parser = argparse.ArgumentParser(
        description="Find Chinese characters by radical and five-element classification."
    )
    parser.add_argument("--corpus-url", default=None, help="URL of the corpus JSON array.")
    parser.add_argument("--corpus-path", type=Path, default=None, help="Local corpus JSON file.")
    parser.add_argument(
        "--oracle-data", type=Path, default=None, help="Character table JSON for the oracle."
    )
    parser.add_argument("--favorites", type=Path, default=None, help="Favorites JSON file.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    commands = parser.add_subparsers(dest="command", required=True)

    radicals = commands.add_parser("radicals", help="List indexed radicals.")
    radicals.add_argument("--filter", default="", help="Pinyin substring to narrow radicals.")

    search = commands.add_parser("search", help="Search characters.")
    search.add_argument(
        "--radical", action="append", default=[], help="Radical to match (repeatable)."
    )
    search.add_argument(
        "--element",
        action="append",
        default=[],
        choices=FIVE_ELEMENTS,
        help="Five-element label to keep (repeatable).",
    )
    search.add_argument("--mode", choices=SEARCH_MODES, default="OR", help="Radical combination.")
    search.add_argument("--sort", choices=SORT_MODES, default="default", help="Result order.")

    show = commands.add_parser("show", help="Show character details.")
    show.add_argument("char", help="Character to describe.")

    favorites = commands.add_parser("favorites", help="Manage favorites.")
    favorites.add_argument("action", choices=["list", "add", "remove", "clear"])
    favorites.add_argument("chars", nargs="*", default=[], help="Characters to add or remove.")
    return parser


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    config = AppConfig.from_env()
    if args.corpus_url:
        config.corpus.url = args.corpus_url
        config.corpus.path = None
    if args.corpus_path is not None:
        config.corpus.path = args.corpus_path
    if args.oracle_data is not None:
        config.oracle.data_path = args.oracle_data
    if args.favorites is not None:
        config.favorites.path = args.favorites
    return config


def _run_search(session: SearchSession, args: argparse.Namespace) -> None:
    session.set_search_mode(args.mode)
    session.set_sort_mode(args.sort)
    for element in dict.fromkeys(args.element):
        session.toggle_element(element)
    for radical in dict.fromkeys(args.radical):
        session.toggle_radical(radical)

    results = session.results
    if not results:
        print("No characters matched.")
        return

    oracle = session.engine.oracle
    print(_format_table(["char", "pinyin", "strokes", "element"], _result_rows(results, oracle)))
    counts = session.element_counts()
    print(f"\nFound {len(results)} characters.")
    print(_format_table(["element", "count"], [[label, str(counts[label])] for label in counts]))


def _run_show(engine: CharacterEngine, char: str) -> int:
    record = next((item for item in engine.corpus() if item.word == char), None)
    if record is None:
        print(f"Character not in corpus: {char}")
        return 1

    detail = describe_character(record, engine.oracle)
    rows = [
        ["character", record.word],
        ["traditional", record.oldword],
        ["pinyin", detail.romanization],
        ["strokes", str(detail.stroke_count)],
        ["element", detail.five_element or ""],
        ["structure", detail.structure],
        ["radicals", " ".join(detail.radical_components)],
        ["explanation", record.explanation],
    ]
    if record.more:
        rows.append(["more", record.more])
    print(_format_table(["field", "value"], rows))
    return 0


def _run_favorites(
    engine: CharacterEngine, repo: FavoritesRepository, args: argparse.Namespace
) -> int:
    if args.action == "list":
        rows = _result_rows(repo.records, engine.oracle)
        if not rows:
            print("No favorites.")
        else:
            print(_format_table(["char", "pinyin", "strokes", "element"], rows))
        return 0
    if args.action == "clear":
        repo.clear()
        print("Cleared favorites.")
        return 0

    by_word = {record.word: record for record in engine.corpus()}
    status = 0
    for char in args.chars:
        if args.action == "add":
            record = by_word.get(char)
            if record is None:
                print(f"Character not in corpus: {char}")
                status = 1
            elif repo.add(record):
                print(f"Added {char}")
            else:
                print(f"Already a favorite: {char}")
        elif repo.remove(char):
            print(f"Removed {char}")
        else:
            print(f"Not a favorite: {char}")
    return status


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through printed output.

    Returns:
        Zero exit status on success, one when a requested character is unknown.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _resolve_config(args)
    try:
        source = build_corpus_source(config.corpus)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    if not config.oracle.data_path.exists():
        raise SystemExit(f"Oracle data file not found: {config.oracle.data_path}")

    engine = CharacterEngine(CorpusLoader(source), TableOracle(config.oracle.data_path))

    if args.command == "radicals":
        session = SearchSession(engine)
        radicals = session.filter_radicals(args.filter)
        print(" ".join(radicals) if radicals else "No radicals.")
        return 0
    if args.command == "search":
        _run_search(SearchSession(engine), args)
        return 0
    if args.command == "show":
        return _run_show(engine, args.char)
    return _run_favorites(engine, FavoritesRepository(config.favorites.path), args)


if __name__ == "__main__":
    raise SystemExit(main())
