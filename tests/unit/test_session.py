"""Unit tests for the selection state machine and its pure recompute step."""

from __future__ import annotations

import threading

import pytest

from hanzi_finder.corpus.loader import CorpusLoader
from hanzi_finder.engine import CharacterEngine
from hanzi_finder.errors import CorpusLoadError
from hanzi_finder.models import SelectionState
from hanzi_finder.session import SearchSession, recompute


def _words(records) -> list[str]:
    return [record.word for record in records]


@pytest.fixture
def session(engine) -> SearchSession:
    return SearchSession(engine)


def test_new_session_is_empty(session) -> None:
    state = session.state

    assert state == SelectionState()
    assert session.search_mode == "OR"
    assert session.sort_mode == "default"
    assert session.results == ()


def test_toggle_radical_searches_and_toggle_back_restores(session) -> None:
    session.toggle_radical("女")
    before = session.state
    assert _words(session.results) == ["好", "女"]

    session.toggle_radical("木")
    assert _words(session.results) == ["好", "女", "木", "林", "森"]

    session.toggle_radical("木")
    assert session.state == before
    assert session.results == before.results


def test_retoggled_radical_moves_to_end(session) -> None:
    session.toggle_radical("女")
    session.toggle_radical("木")
    session.toggle_radical("女")
    session.toggle_radical("女")

    assert session.selected_radicals == ("木", "女")
    assert _words(session.results) == ["木", "林", "森", "好", "女"]


def test_search_mode_change_recomputes_only_with_radicals(session) -> None:
    session.set_search_mode("AND")
    assert session.search_mode == "AND"
    assert session.results == ()

    session.toggle_radical("女")
    session.toggle_radical("子")
    assert _words(session.results) == ["好"]

    session.set_search_mode("OR")
    assert _words(session.results) == ["好", "女"]


def test_elements_alone_filter_the_full_corpus(session) -> None:
    session.toggle_element("木")
    assert _words(session.results) == ["木", "林", "森"]

    session.toggle_element("土")
    assert _words(session.results) == ["木", "林", "森", "一"]


def test_elements_narrow_radical_results(session) -> None:
    session.toggle_radical("女")
    session.toggle_radical("木")
    session.toggle_element("水")

    assert _words(session.results) == ["好", "女"]

    session.clear_elements()
    assert session.selected_elements == ()
    assert _words(session.results) == ["好", "女", "木", "林", "森"]


def test_clear_radicals_does_not_fall_back_to_element_results(session) -> None:
    session.toggle_element("木")
    session.toggle_radical("木")
    assert _words(session.results) == ["木", "林", "森"]

    session.clear_radicals()

    assert session.selected_radicals == ()
    assert session.selected_elements == ("木",)
    assert session.results == ()


def test_sort_mode_reorders_without_refiltering(session, fake_oracle) -> None:
    session.toggle_radical("木")
    session.toggle_radical("女")
    fake_oracle.calls.clear()

    session.set_sort_mode("stroke-desc")
    assert _words(session.results) == ["森", "林", "好", "木", "女"]
    assert all(method == "strokes" for method, _ in fake_oracle.calls)

    session.set_sort_mode("default")
    assert _words(session.results) == ["木", "林", "森", "好", "女"]


def test_sort_mode_is_kept_for_later_searches(session) -> None:
    session.set_sort_mode("stroke-asc")
    assert session.results == ()

    session.toggle_radical("木")
    assert _words(session.results) == ["木", "林", "森"]


def test_invalid_values_are_rejected(session) -> None:
    with pytest.raises(ValueError):
        session.toggle_element("风")
    with pytest.raises(ValueError):
        session.set_search_mode("XOR")
    with pytest.raises(ValueError):
        session.set_sort_mode("random")
    assert session.state == SelectionState()


def test_element_counts_reflect_current_results(session) -> None:
    session.toggle_radical("女")
    session.toggle_radical("木")

    assert session.element_counts() == {"金": 0, "木": 3, "水": 2, "火": 0, "土": 0}


def test_filter_radicals_matches_toneless_romanization(session) -> None:
    assert session.all_radicals() == ("木", "女", "子")
    assert session.filter_radicals("") == ("木", "女", "子")
    assert session.filter_radicals("MU") == ("木",)
    assert session.filter_radicals("nü") == ("女",)
    assert session.filter_radicals("x") == ()
    assert session.results == ()


def test_recompute_resolves_failures_to_empty_results(fake_oracle) -> None:
    class ExplodingEngine(CharacterEngine):
        def search(self, radicals, mode="OR"):
            raise RuntimeError("index unavailable")

    engine = ExplodingEngine(CorpusLoader(lambda: []), fake_oracle)
    stale = SelectionState(selected_radicals=("木",), results=("stale",), unsorted_results=("stale",))

    state = recompute(stale, engine)

    assert state.results == ()
    assert state.unsorted_results == ()
    assert state.selected_radicals == ("木",)


def test_failed_corpus_load_yields_empty_results_then_recovers(corpus_payload, fake_oracle) -> None:
    outcomes = [CorpusLoadError("timeout"), corpus_payload]

    def source():
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    session = SearchSession(CharacterEngine(CorpusLoader(source), fake_oracle))

    session.toggle_radical("木")
    assert session.results == ()
    assert session.all_radicals() == ("木", "女", "子")

    session.toggle_radical("木")
    session.toggle_radical("木")
    assert _words(session.results) == ["木", "林", "森"]


def test_concurrent_toggles_apply_in_serial_order(session) -> None:
    radicals = ["女", "子", "木"]
    threads = [threading.Thread(target=session.toggle_radical, args=(r,)) for r in radicals * 2]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert session.selected_radicals == ()
    assert session.results == ()
