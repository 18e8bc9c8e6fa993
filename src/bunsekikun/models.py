"""Pydantic models for Bunsekikun API requests and responses."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from bunsekikun.services.jisho import DictionaryEntry
from bunsekikun.services.selection import Failed, Loaded, Loading, LookupOutcome
from bunsekikun.services.tagger import TaggerStatus
from bunsekikun.services.tokens import AnalysisResult, MorphToken, Word


# ============================================================================
# Request Models
# ============================================================================


class AnalyzeRequest(BaseModel):
    """Request body for text analysis."""
    text: str = Field(..., max_length=10000, description="Japanese text to analyze")


class SelectRequest(BaseModel):
    """Request body for selecting a word of the current analysis."""
    index: int = Field(..., ge=0, description="Position of the word in the last analysis")


# ============================================================================
# Response Components
# ============================================================================


class TokenResponse(BaseModel):
    """Single morpheme inside a word."""
    surface: str = Field(..., description="Surface form (as written)")
    reading: str = Field(..., description="Reading in hiragana")
    pos: str = Field(..., description="Part of speech")
    pos_detail_1: str = "*"
    pos_detail_2: str = "*"
    pos_detail_3: str = "*"
    conjugated_type: str = "*"
    conjugated_form: str = "*"
    base_form: str = Field(..., description="Dictionary form")

    @classmethod
    def from_token(cls, token: MorphToken) -> "TokenResponse":
        return cls(**token.to_dict())


class WordResponse(BaseModel):
    """A grouped word."""
    surface: str = Field(..., description="Concatenated surface of all tokens")
    reading: str = Field(..., description="Concatenated reading of all tokens")
    pos: str = Field(..., description="Part of speech of the first token")
    parts_of_speech: list[str] = Field(default_factory=list, description="POS of every token")
    tokens: list[TokenResponse]

    @classmethod
    def from_word(cls, word: Word) -> "WordResponse":
        return cls(
            surface=word.surface,
            reading=word.reading,
            pos=str(word.part_of_speech),
            parts_of_speech=[str(p) for p in word.parts_of_speech],
            tokens=[TokenResponse.from_token(t) for t in word.tokens],
        )


class SenseResponse(BaseModel):
    english_definitions: list[str] = Field(default_factory=list)
    parts_of_speech: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    info: list[str] = Field(default_factory=list)
    see_also: list[str] = Field(default_factory=list)


class JapaneseFormResponse(BaseModel):
    word: str | None = None
    reading: str | None = None


class DictionaryEntryResponse(BaseModel):
    """A Jisho entry."""
    slug: str
    is_common: bool = False
    jlpt: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    japanese: list[JapaneseFormResponse] = Field(default_factory=list)
    senses: list[SenseResponse] = Field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: DictionaryEntry) -> "DictionaryEntryResponse":
        return cls.model_validate(entry.to_dict())


# ============================================================================
# Response Models
# ============================================================================


class AnalyzeResponse(BaseModel):
    """Response body for text analysis."""
    text: str
    words: list[WordResponse]
    count: int = Field(..., description="Number of words found")

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalyzeResponse":
        return cls(
            text=result.text,
            words=[WordResponse.from_word(w) for w in result.words],
            count=len(result),
        )


class TaggerStatusResponse(BaseModel):
    state: Literal["idle", "loading", "ready", "failed"]
    reason: Literal["network", "build", "timeout"] | None = None
    message: str = ""

    @classmethod
    def from_status(cls, status: TaggerStatus) -> "TaggerStatusResponse":
        return cls(**status.to_dict())


class SelectionResponse(BaseModel):
    """Current selection and lookup outcome."""
    state: Literal["idle", "loading", "loaded", "failed"]
    generation: int | None = None
    word: WordResponse | None = None
    entry: DictionaryEntryResponse | None = Field(None, description="Best match; null if none found")
    error: str | None = None

    @classmethod
    def from_outcome(cls, outcome: LookupOutcome) -> "SelectionResponse":
        if isinstance(outcome, Loading):
            return cls(state="loading", generation=outcome.generation, word=WordResponse.from_word(outcome.word))
        if isinstance(outcome, Loaded):
            return cls(
                state="loaded",
                generation=outcome.generation,
                word=WordResponse.from_word(outcome.word),
                entry=DictionaryEntryResponse.from_entry(outcome.entry) if outcome.entry else None,
            )
        if isinstance(outcome, Failed):
            return cls(
                state="failed",
                generation=outcome.generation,
                word=WordResponse.from_word(outcome.word),
                error=outcome.error,
            )
        return cls(state="idle")


class JishoProxyResponse(BaseModel):
    """Raw Jisho search data, wrapped the way the web client expects."""
    data: list[dict[str, Any]]
