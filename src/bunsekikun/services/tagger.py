"""Tagger readiness and the SudachiPy-backed tagger.

The tagger is loaded once, asynchronously, by a `TaggerLifecycle` that the
application owns. Analysis asks the lifecycle for tokens and fails fast with
`NotReadyError` until loading has finished.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Awaitable, Callable, Protocol, Self

import jaconv
from sudachipy import Dictionary, Morpheme, SplitMode

from bunsekikun.services.errors import (
    LoadFailure,
    NotReadyError,
    TaggerLoadError,
    TokenizeError,
)
from bunsekikun.services.tokens import MorphToken, PartOfSpeech

logger = logging.getLogger(__name__)

DEFAULT_LOAD_TIMEOUT = 10.0


class Tagger(Protocol):
    def tokenize(self, text: str) -> list[MorphToken]:
        ...


TaggerLoader = Callable[[], Awaitable[Tagger]]


class TaggerState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class TaggerStatus:
    """Snapshot of the tagger lifecycle."""

    state: TaggerState
    reason: LoadFailure | None = None
    message: str = ""

    def to_dict(self) -> dict[str, str | None]:
        return {
            "state": str(self.state),
            "reason": str(self.reason) if self.reason else None,
            "message": self.message,
        }


class TaggerLifecycle:
    """Owns the tagger instance and its Idle/Loading/Ready/Failed state."""

    def __init__(self, loader: TaggerLoader, timeout: float = DEFAULT_LOAD_TIMEOUT) -> None:
        self._loader = loader
        self._timeout = timeout
        self._tagger: Tagger | None = None
        self._status = TaggerStatus(TaggerState.IDLE)
        self._task: asyncio.Task[TaggerStatus] | None = None

    @classmethod
    def ready(cls, tagger: Tagger) -> Self:
        """Wrap an already-built tagger."""

        async def _loaded() -> Tagger:
            return tagger

        lifecycle = cls(_loaded)
        lifecycle._tagger = tagger
        lifecycle._status = TaggerStatus(TaggerState.READY)
        return lifecycle

    @property
    def status(self) -> TaggerStatus:
        return self._status

    @property
    def is_ready(self) -> bool:
        return self._status.state is TaggerState.READY

    async def ensure_ready(self) -> TaggerStatus:
        """
        Load the tagger if it is not loaded yet and return the resulting status.

        Concurrent callers share a single load attempt. After a failure the
        next call starts a fresh attempt.
        """
        if self.is_ready:
            return self._status
        if self._task is None or self._task.done():
            self._status = TaggerStatus(TaggerState.LOADING)
            self._task = asyncio.create_task(self._load())
        return await asyncio.shield(self._task)

    async def _load(self) -> TaggerStatus:
        logger.info("Loading tagger", extra={"timeout": self._timeout})
        try:
            tagger = await asyncio.wait_for(self._loader(), timeout=self._timeout)
        except TimeoutError:
            return self._fail(LoadFailure.TIMEOUT, f"Tagger did not load within {self._timeout:g}s")
        except TaggerLoadError as e:
            return self._fail(e.reason, str(e))
        except (ConnectionError, OSError) as e:
            return self._fail(LoadFailure.NETWORK, f"Failed to fetch tagger resources: {e}")
        except Exception as e:
            logger.exception("Tagger build raised")
            return self._fail(LoadFailure.BUILD, f"Failed to build tagger: {e}")

        self._tagger = tagger
        self._status = TaggerStatus(TaggerState.READY)
        logger.info("Tagger ready")
        return self._status

    def _fail(self, reason: LoadFailure, message: str) -> TaggerStatus:
        self._tagger = None
        self._status = TaggerStatus(TaggerState.FAILED, reason=reason, message=message)
        logger.error("Tagger failed to load", extra={"reason": str(reason), "detail": message})
        return self._status

    def tokenize(self, text: str) -> list[MorphToken]:
        """Tokenize with the loaded tagger; never waits for loading."""
        if self._tagger is None or not self.is_ready:
            raise NotReadyError(f"Tagger is not ready (state: {self._status.state})")
        try:
            return list(self._tagger.tokenize(text))
        except Exception as e:
            logger.warning("Tokenization failed", extra={"error": str(e)})
            raise TokenizeError(f"Failed to tokenize text: {e}") from e


# ============================================================================
# SudachiPy
# ============================================================================


def parse_split_mode(mode: str) -> SplitMode:
    """Resolve 'A', 'B' or 'C' to a SudachiPy split mode."""
    modes = {"A": SplitMode.A, "B": SplitMode.B, "C": SplitMode.C}
    try:
        return modes[mode.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown split mode: {mode!r} (expected A, B or C)") from None


def morpheme_to_token(morpheme: Morpheme) -> MorphToken:
    """
    Convert a SudachiPy morpheme to a MorphToken.

    Sudachi tags suffixes such as たち or さん as (接尾辞, 名詞的); they are
    folded into the IPADIC shape (名詞, 接尾) so the grouping rules see a
    suffix noun.
    """
    pos = tuple(morpheme.part_of_speech()) + ("*",) * 6
    main, sub1, sub2, sub3, conj_type, conj_form = pos[:6]

    part_of_speech = PartOfSpeech.from_tag(main)
    if main == "接尾辞" and sub1 == "名詞的":
        part_of_speech, sub1 = PartOfSpeech.NOUN, "接尾"

    surface = morpheme.surface()
    reading_kata = morpheme.reading_form()
    return MorphToken(
        surface=surface,
        reading=jaconv.kata2hira(reading_kata) if reading_kata else surface,
        part_of_speech=part_of_speech,
        pos_detail_1=sub1,
        pos_detail_2=sub2,
        pos_detail_3=sub3,
        conjugated_type=conj_type,
        conjugated_form=conj_form,
        base_form=morpheme.dictionary_form() or surface,
    )


class SudachiTagger:
    """Tagger backed by a SudachiPy tokenizer."""

    def __init__(self, tokenizer, split_mode: SplitMode = SplitMode.A) -> None:
        self._tokenizer = tokenizer
        self._split_mode = split_mode

    def tokenize(self, text: str) -> list[MorphToken]:
        return [morpheme_to_token(m) for m in self._tokenizer.tokenize(text, self._split_mode)]


def sudachi_loader(dict_name: str = "core", split_mode: str = "A") -> TaggerLoader:
    """Return a loader that builds a SudachiTagger off the event loop."""
    mode = parse_split_mode(split_mode)

    async def load() -> Tagger:
        tokenizer = await asyncio.to_thread(lambda: Dictionary(dict=dict_name).create())
        return SudachiTagger(tokenizer, mode)

    return load
