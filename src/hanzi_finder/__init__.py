"""Radical and five-element character search engine package."""

from .models import FIVE_ELEMENTS, CharacterRecord, SelectionState

__all__ = ["CharacterRecord", "SelectionState", "FIVE_ELEMENTS"]
