"""Analysis service - ties the tagger, grouping and selection together.

- TextAnalyzer.analyze: text -> AnalysisResult, gated on tagger readiness
- ReaderSession: the latest analysis plus the word selected from it
"""

import logging

from bunsekikun.services.errors import InputError, NotReadyError
from bunsekikun.services.grouping import group
from bunsekikun.services.jisho import DictionaryClient
from bunsekikun.services.selection import Loading, LookupOutcome, SelectionController
from bunsekikun.services.tagger import TaggerLifecycle, TaggerStatus
from bunsekikun.services.tokens import AnalysisResult

logger = logging.getLogger(__name__)

EXAMPLE_TEXTS = (
    "吾輩は猫である。名前はまだ無い",
    "どこで生れたかとんと見当がつかぬ",
    "何でも薄暗いじめじめした所でニャーニャー泣いていた事だけは記憶している。",
)


class TextAnalyzer:
    """Tokenizes text with the tagger and groups the morphemes into words."""

    def __init__(self, lifecycle: TaggerLifecycle) -> None:
        self.lifecycle = lifecycle

    def check(self, text: str) -> None:
        """Raise InputError or NotReadyError if `text` cannot be analyzed right now."""
        if not text or not text.strip():
            raise InputError("Please enter some text to analyze.")
        if not self.lifecycle.is_ready:
            raise NotReadyError(f"Tagger is not ready (state: {self.lifecycle.status.state})")

    def analyze(self, text: str) -> AnalysisResult:
        """
        Analyze Japanese text.

        Raises:
            InputError: text is empty or only whitespace.
            NotReadyError: the tagger has not finished loading.
            TokenizeError: the tagger failed on this text.
        """
        self.check(text)
        tokens = self.lifecycle.tokenize(text)
        words = group(tokens)
        logger.debug("Analyzed text", extra={"tokens": len(tokens), "words": len(words)})
        return AnalysisResult(text=text, words=tuple(words))


class ReaderSession:
    """
    One reader's view: the current analysis and the selected word.

    A new analysis replaces the old one and clears the selection; selecting
    is by position in the current analysis.
    """

    def __init__(self, analyzer: TextAnalyzer, dictionary: DictionaryClient) -> None:
        self.analyzer = analyzer
        self.dictionary = dictionary
        self.selection = SelectionController(dictionary)
        self.result: AnalysisResult | None = None

    @property
    def tagger_status(self) -> TaggerStatus:
        return self.analyzer.lifecycle.status

    async def load_tagger(self) -> TaggerStatus:
        return await self.analyzer.lifecycle.ensure_ready()

    def analyze(self, text: str) -> AnalysisResult:
        """
        Replace the current analysis.

        Rejected input and an unready tagger leave the current analysis and
        selection untouched; once tokenizing starts, both are discarded even
        if it fails.
        """
        self.analyzer.check(text)
        self.selection.clear()
        self.result = None
        self.result = self.analyzer.analyze(text)
        return self.result

    def select(self, index: int) -> Loading:
        """Select the word at `index`; raises IndexError if there is none."""
        if self.result is None:
            raise IndexError("No analysis to select from")
        if not 0 <= index < len(self.result):
            raise IndexError(f"No word at index {index}")
        return self.selection.select(self.result[index])

    def close(self) -> None:
        self.selection.clear()

    @property
    def outcome(self) -> LookupOutcome:
        return self.selection.state
