"""Word selection and definition lookup.

Each `select` bumps a generation counter and starts a lookup tagged with that
generation. Lookups are never cancelled; when one finishes, its result is
applied only if its generation is still the current one, so a slow lookup for
an earlier word can never overwrite the state of a later selection.

All transitions run on a single asyncio event loop. The generation check and
the state assignment in `_apply` happen without an intervening await, which
makes them atomic with respect to other completions.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Union

from bunsekikun.services.errors import DictionaryLookupError
from bunsekikun.services.jisho import DictionaryClient, DictionaryEntry
from bunsekikun.services.tokens import Word

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Loading:
    generation: int
    word: Word


@dataclass(frozen=True, slots=True)
class Loaded:
    generation: int
    word: Word
    entry: DictionaryEntry | None  # None: the dictionary had no match


@dataclass(frozen=True, slots=True)
class Failed:
    generation: int
    word: Word
    error: str


LookupOutcome = Union[Idle, Loading, Loaded, Failed]

IDLE = Idle()


class SelectionController:
    """
    Tracks the selected word and the outcome of its dictionary lookup.

    `on_change` is called with every state that is applied. An exception it
    raises is logged and does not affect the transition.
    """

    def __init__(
        self,
        dictionary: DictionaryClient,
        on_change: Callable[[LookupOutcome], None] | None = None,
    ) -> None:
        self._dictionary = dictionary
        self._on_change = on_change
        self._generation = 0
        self._state: LookupOutcome = IDLE
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> LookupOutcome:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def select(self, word: Word) -> Loading:
        """Select `word` and start its lookup; returns the Loading state."""
        self._generation += 1
        loading = Loading(self._generation, word)
        self._set_state(loading)
        logger.debug(
            "Lookup started",
            extra={"generation": loading.generation, "keyword": word.lookup_key},
        )
        task = asyncio.create_task(self._lookup(loading.generation, word))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return loading

    def clear(self) -> None:
        """Drop the selection; results still in flight will be ignored."""
        self._set_state(IDLE)

    async def settle(self) -> None:
        """Wait until every lookup started so far has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def _lookup(self, generation: int, word: Word) -> None:
        try:
            entries = await self._dictionary.lookup(word.lookup_key)
        except DictionaryLookupError as e:
            self._apply(generation, Failed(generation, word, str(e)))
        except Exception as e:
            logger.exception("Dictionary lookup raised", extra={"generation": generation})
            self._apply(generation, Failed(generation, word, str(e) or type(e).__name__))
        else:
            self._apply(generation, Loaded(generation, word, entries[0] if entries else None))

    def _apply(self, generation: int, outcome: LookupOutcome) -> None:
        current = self._state
        if isinstance(current, Idle) or generation != self._generation:
            logger.debug(
                "Discarding superseded lookup result",
                extra={"generation": generation, "current_generation": self._generation},
            )
            return
        if isinstance(outcome, Failed):
            logger.info(
                "Lookup failed",
                extra={"generation": generation, "keyword": outcome.word.lookup_key, "error": outcome.error},
            )
        self._set_state(outcome)

    def _set_state(self, state: LookupOutcome) -> None:
        self._state = state
        if self._on_change is None:
            return
        try:
            self._on_change(state)
        except Exception:
            logger.exception("Selection listener raised", extra={"state": type(state).__name__})
