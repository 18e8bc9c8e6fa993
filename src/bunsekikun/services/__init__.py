"""Bunsekikun services module."""

from .errors import (
    BunsekikunError,
    DictionaryLookupError,
    InputError,
    LoadFailure,
    NotReadyError,
    TaggerLoadError,
    TokenizeError,
)
from .grouping import continues_word, group
from .jisho import DictionaryEntry, JishoClient, Sense
from .selection import Failed, Idle, Loaded, Loading, SelectionController
from .tagger import SudachiTagger, TaggerLifecycle, TaggerState, TaggerStatus
from .tokens import AnalysisResult, MorphToken, PartOfSpeech, PosDetail, Word

__all__ = [
    # Tokens
    "AnalysisResult",
    "MorphToken",
    "PartOfSpeech",
    "PosDetail",
    "Word",
    # Grouping
    "continues_word",
    "group",
    # Tagger
    "SudachiTagger",
    "TaggerLifecycle",
    "TaggerState",
    "TaggerStatus",
    # Dictionary
    "DictionaryEntry",
    "JishoClient",
    "Sense",
    # Selection
    "Failed",
    "Idle",
    "Loaded",
    "Loading",
    "SelectionController",
    # Errors
    "BunsekikunError",
    "DictionaryLookupError",
    "InputError",
    "LoadFailure",
    "NotReadyError",
    "TaggerLoadError",
    "TokenizeError",
]
