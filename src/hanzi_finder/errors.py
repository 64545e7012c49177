"""Exception types raised by hanzi_finder."""

from __future__ import annotations


class HanziFinderError(Exception):
    """Base class for errors raised by this package."""


class CorpusLoadError(HanziFinderError):
    """Raised when the character corpus cannot be fetched or parsed."""
