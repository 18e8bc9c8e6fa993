"""Jisho.org dictionary client.

API: https://jisho.org/api/v1/search/words?keyword=<word>
Entries come back ordered by relevance; the first one is the best match.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from bunsekikun.services.errors import DictionaryLookupError

logger = logging.getLogger(__name__)

JISHO_SEARCH_URL = "https://jisho.org/api/v1/search/words"
API_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True, slots=True)
class JapaneseForm:
    word: str | None = None
    reading: str | None = None


@dataclass(frozen=True, slots=True)
class Sense:
    english_definitions: list[str] = field(default_factory=list)
    parts_of_speech: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    info: list[str] = field(default_factory=list)
    see_also: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class DictionaryEntry:
    """A single Jisho search hit."""

    slug: str
    is_common: bool = False
    jlpt: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    japanese: list[JapaneseForm] = field(default_factory=list)
    senses: list[Sense] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "DictionaryEntry":
        return cls(
            slug=data.get("slug", ""),
            is_common=bool(data.get("is_common", False)),
            jlpt=list(data.get("jlpt") or []),
            tags=list(data.get("tags") or []),
            japanese=[
                JapaneseForm(word=j.get("word"), reading=j.get("reading"))
                for j in data.get("japanese") or []
            ],
            senses=[
                Sense(
                    english_definitions=list(s.get("english_definitions") or []),
                    parts_of_speech=list(s.get("parts_of_speech") or []),
                    tags=list(s.get("tags") or []),
                    info=list(s.get("info") or []),
                    see_also=list(s.get("see_also") or []),
                )
                for s in data.get("senses") or []
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "is_common": self.is_common,
            "jlpt": self.jlpt,
            "tags": self.tags,
            "japanese": [{"word": j.word, "reading": j.reading} for j in self.japanese],
            "senses": [
                {
                    "english_definitions": s.english_definitions,
                    "parts_of_speech": s.parts_of_speech,
                    "tags": s.tags,
                    "info": s.info,
                    "see_also": s.see_also,
                }
                for s in self.senses
            ],
        }


class DictionaryClient(Protocol):
    async def search(self, keyword: str) -> list[dict[str, Any]]:
        ...

    async def lookup(self, word: str) -> list[DictionaryEntry]:
        ...


class JishoClient:
    """Async client for the Jisho word search API."""

    def __init__(
        self,
        base_url: str = JISHO_SEARCH_URL,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def search(self, keyword: str) -> list[dict[str, Any]]:
        """Return the raw `data` array for a keyword.

        Raises:
            DictionaryLookupError: on transport errors, non-2xx responses or
                an unexpected payload.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await _fetch_with_retry(client, self.base_url, {"keyword": keyword})
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Jisho API HTTP error", extra={"keyword": keyword, "status_code": status})
            raise DictionaryLookupError(
                f"Jisho API call failed with status: {status}", status_code=status
            ) from e
        except httpx.RequestError as e:
            logger.warning(
                "Jisho API request error",
                extra={"keyword": keyword, "error_type": type(e).__name__},
            )
            raise DictionaryLookupError(f"Jisho API request failed: {e}") from e
        except ValueError as e:
            raise DictionaryLookupError("Jisho API returned invalid JSON") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            logger.warning("Unexpected response shape from Jisho API", extra={"keyword": keyword})
            raise DictionaryLookupError("Jisho API returned an unexpected payload")

        logger.debug("Jisho lookup successful", extra={"keyword": keyword, "entry_count": len(data)})
        return data

    async def lookup(self, word: str) -> list[DictionaryEntry]:
        return [DictionaryEntry.from_api(d) for d in await self.search(word)]


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
async def _fetch_with_retry(
    client: httpx.AsyncClient, url: str, params: dict[str, str]
) -> httpx.Response:
    """GET with automatic retry on transient failures."""
    return await client.get(url, params=params)
