"""Interactive selection state for one browsing session.

:func:`recompute` is the whole query pipeline as a pure function of a
:class:`~hanzi_finder.models.SelectionState` snapshot. :class:`SearchSession`
owns the current snapshot and serializes every mutation through one lock, so
mutations apply in issue order and each one replaces the results computed by
the previous one.
"""

from __future__ import annotations

import dataclasses
import logging
import threading

from hanzi_finder.collation import strip_tone_marks
from hanzi_finder.engine import CharacterEngine
from hanzi_finder.models import (
    FIVE_ELEMENTS,
    SEARCH_MODES,
    SORT_MODES,
    CharacterRecord,
    SelectionState,
)
from hanzi_finder.oracle import SafeOracle
from hanzi_finder.search.elements import count_five_elements, filter_by_five_elements
from hanzi_finder.search.sorting import sort_results

logger = logging.getLogger(__name__)


def _toggle(items: tuple[str, ...], item: str) -> tuple[str, ...]:
    """Remove ``item`` if present, otherwise append it."""

    if item in items:
        return tuple(existing for existing in items if existing != item)
    return (*items, item)


def recompute(state: SelectionState, engine: CharacterEngine) -> SelectionState:
    """Run query, element filter and sort for the selections in ``state``.

    With no radicals and no elements selected the result is empty. With only
    elements selected the full corpus is filtered. Any failure is logged and
    yields empty results.

    Args:
        state: Snapshot whose selection fields drive the pipeline.
        engine: Corpus/index/oracle facade.

    Returns:
        Copy of ``state`` with fresh ``results`` and ``unsorted_results``.
    """

    if not state.selected_radicals and not state.selected_elements:
        return dataclasses.replace(state, results=(), unsorted_results=())

    try:
        if state.selected_radicals:
            base = engine.search(state.selected_radicals, state.search_mode)
        else:
            base = engine.corpus()
        filtered = tuple(filter_by_five_elements(base, state.selected_elements, engine.oracle))
        ordered = sort_results(filtered, state.sort_mode, engine.oracle)
    except Exception:
        logger.exception(
            "Search failed for radicals=%s elements=%s",
            state.selected_radicals,
            state.selected_elements,
        )
        return dataclasses.replace(state, results=(), unsorted_results=())

    logger.debug(
        "Search %s %s elements=%s sort=%s -> %d results",
        state.search_mode,
        state.selected_radicals,
        state.selected_elements,
        state.sort_mode,
        len(ordered),
    )
    return dataclasses.replace(state, results=ordered, unsorted_results=filtered)


def filter_radicals(radicals: tuple[str, ...], text: str, oracle: SafeOracle) -> tuple[str, ...]:
    """Narrow a radical list by substring match on tone-less romanization.

    Args:
        radicals: Radicals to narrow, already in display order.
        text: User filter text; blank keeps every radical.
        oracle: Failure-tolerant oracle supplying romanizations.

    Returns:
        Matching radicals in their original order.
    """

    needle = strip_tone_marks(text.strip()).replace(" ", "")
    if not needle:
        return radicals
    return tuple(
        radical
        for radical in radicals
        if needle in strip_tone_marks(oracle.romanization_of(radical)).replace(" ", "")
    )


class SearchSession:
    """Single-owner selection state machine backed by a :class:`CharacterEngine`."""

    def __init__(self, engine: CharacterEngine) -> None:
        self.engine = engine
        self._lock = threading.RLock()
        self._state = SelectionState()

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def results(self) -> tuple[CharacterRecord, ...]:
        return self._state.results

    @property
    def selected_radicals(self) -> tuple[str, ...]:
        return self._state.selected_radicals

    @property
    def selected_elements(self) -> tuple[str, ...]:
        return self._state.selected_elements

    @property
    def search_mode(self) -> str:
        return self._state.search_mode

    @property
    def sort_mode(self) -> str:
        return self._state.sort_mode

    def _apply(self, state: SelectionState) -> SelectionState:
        self._state = recompute(state, self.engine)
        return self._state

    def toggle_radical(self, radical: str) -> SelectionState:
        """Select or deselect ``radical`` and refresh results."""

        with self._lock:
            state = dataclasses.replace(
                self._state, selected_radicals=_toggle(self._state.selected_radicals, radical)
            )
            return self._apply(state)

    def toggle_element(self, element: str) -> SelectionState:
        """Select or deselect a five-element label and refresh results.

        Raises:
            ValueError: If ``element`` is not one of ``FIVE_ELEMENTS``.
        """

        if element not in FIVE_ELEMENTS:
            raise ValueError(f"Unknown five-element label: {element!r}")
        with self._lock:
            state = dataclasses.replace(
                self._state, selected_elements=_toggle(self._state.selected_elements, element)
            )
            return self._apply(state)

    def set_search_mode(self, mode: str) -> SelectionState:
        """Switch between AND and OR; results refresh only when radicals are selected.

        Raises:
            ValueError: If ``mode`` is not a known search mode.
        """

        if mode not in SEARCH_MODES:
            raise ValueError(f"Unknown search mode: {mode!r}")
        with self._lock:
            state = dataclasses.replace(self._state, search_mode=mode)
            if state.selected_radicals:
                return self._apply(state)
            self._state = state
            return state

    def set_sort_mode(self, sort_mode: str) -> SelectionState:
        """Change the sort mode, reordering current results without refiltering.

        Raises:
            ValueError: If ``sort_mode`` is not a known sort mode.
        """

        if sort_mode not in SORT_MODES:
            raise ValueError(f"Unknown sort mode: {sort_mode!r}")
        with self._lock:
            state = dataclasses.replace(self._state, sort_mode=sort_mode)
            if state.results:
                try:
                    ordered = sort_results(state.unsorted_results, sort_mode, self.engine.oracle)
                except Exception:
                    logger.exception("Sorting failed for sort mode %s", sort_mode)
                    state = dataclasses.replace(state, results=(), unsorted_results=())
                else:
                    state = dataclasses.replace(state, results=ordered)
            self._state = state
            return state

    def clear_radicals(self) -> SelectionState:
        """Drop the radical selection and all results, even with elements selected."""

        with self._lock:
            self._state = dataclasses.replace(
                self._state, selected_radicals=(), results=(), unsorted_results=()
            )
            return self._state

    def clear_elements(self) -> SelectionState:
        """Drop the element selection and refresh results from radicals alone."""

        with self._lock:
            return self._apply(dataclasses.replace(self._state, selected_elements=()))

    def element_counts(self) -> dict[str, int]:
        """Five-element distribution of the current results."""

        return count_five_elements(self._state.results, self.engine.oracle)

    def all_radicals(self) -> tuple[str, ...]:
        return self.engine.all_radicals()

    def filter_radicals(self, text: str) -> tuple[str, ...]:
        """Radicals whose romanization contains ``text``; presentation only."""

        return filter_radicals(self.engine.all_radicals(), text, self.engine.oracle)
