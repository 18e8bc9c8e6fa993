"""Bunsekikun FastAPI application - Japanese sentence analyzer."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bunsekikun.config import Settings
from bunsekikun.logging_utils import setup_structured_logging
from bunsekikun.models import (
    AnalyzeRequest,
    AnalyzeResponse,
    JishoProxyResponse,
    SelectionResponse,
    SelectRequest,
    TaggerStatusResponse,
)
from bunsekikun.services.analysis import EXAMPLE_TEXTS, ReaderSession, TextAnalyzer
from bunsekikun.services.errors import (
    DictionaryLookupError,
    InputError,
    NotReadyError,
    TokenizeError,
)
from bunsekikun.services.jisho import JishoClient
from bunsekikun.services.tagger import TaggerLifecycle, sudachi_loader

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

settings = Settings.from_env()


def build_session(settings: Settings) -> ReaderSession:
    """Wire the tagger lifecycle and Jisho client from settings. Nothing is loaded yet."""
    lifecycle = TaggerLifecycle(
        sudachi_loader(settings.sudachi_dict, settings.split_mode),
        timeout=settings.tagger_timeout,
    )
    dictionary = JishoClient(settings.jisho_url, timeout=settings.jisho_timeout)
    return ReaderSession(TextAnalyzer(lifecycle), dictionary)


# ============================================================================
# Application Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start loading the tagger in the background; requests may arrive before it is ready."""
    setup_structured_logging(settings.log_level, settings.log_json)
    session: ReaderSession = app.state.session
    warmup = asyncio.create_task(session.load_tagger())
    yield
    if not warmup.done():
        warmup.cancel()


# ============================================================================
# FastAPI Application
# ============================================================================


app = FastAPI(
    title="Bunsekikun API",
    description="""Japanese sentence analyzer.

## Features
- **Grouping**: Split text into morphemes and regroup them into words
- **Readings**: Hiragana reading for every word
- **Definitions**: English meanings from Jisho.org for the selected word

## Endpoints
- `/analyze` - Group a sentence into words
- `/selection` - Select a word and follow its dictionary lookup
- `/tagger` - Tagger readiness
- `/api/jisho` - Jisho.org search proxy
""",
    version=VERSION,
    lifespan=lifespan,
)
app.state.session = build_session(settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_session(request: Request) -> ReaderSession:
    return request.app.state.session


# ============================================================================
# Health Endpoints
# ============================================================================


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "service": "bunsekikun", "version": VERSION}


@app.get("/health", tags=["Health"])
async def health(session: ReaderSession = Depends(get_session)) -> dict[str, str]:
    """Detailed health check."""
    return {"status": "healthy", "version": VERSION, "tagger": str(session.tagger_status.state)}


# ============================================================================
# Tagger Endpoints
# ============================================================================


@app.get("/tagger", response_model=TaggerStatusResponse, tags=["Tagger"])
async def tagger_status(session: ReaderSession = Depends(get_session)) -> TaggerStatusResponse:
    return TaggerStatusResponse.from_status(session.tagger_status)


@app.post("/tagger/load", response_model=TaggerStatusResponse, tags=["Tagger"])
async def load_tagger(session: ReaderSession = Depends(get_session)) -> TaggerStatusResponse:
    """Load the tagger, or retry after a failed load, and wait for the result."""
    return TaggerStatusResponse.from_status(await session.load_tagger())


# ============================================================================
# Analysis Endpoints
# ============================================================================


@app.get("/examples", tags=["Analysis"])
async def examples() -> dict[str, list[str]]:
    """Sample sentences to try."""
    return {"examples": list(EXAMPLE_TEXTS)}


@app.post("/analyze", response_model=AnalyzeResponse, tags=["Analysis"])
async def analyze_endpoint(
    request: AnalyzeRequest, session: ReaderSession = Depends(get_session)
) -> AnalyzeResponse:
    """
    Analyze Japanese text and return grouped words.

    The previous analysis and any selected word are discarded.
    """
    try:
        return AnalyzeResponse.from_result(session.analyze(request.text))
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except NotReadyError as e:
        raise HTTPException(status_code=503, detail="Tokenizer is not ready yet. Please wait.") from e
    except TokenizeError as e:
        raise HTTPException(status_code=500, detail="Failed to analyze text.") from e


# ============================================================================
# Selection Endpoints
# ============================================================================


@app.post("/selection", response_model=SelectionResponse, tags=["Selection"])
async def select_endpoint(
    request: SelectRequest, session: ReaderSession = Depends(get_session)
) -> SelectionResponse:
    """Select a word and start looking it up. Returns immediately in the loading state."""
    try:
        return SelectionResponse.from_outcome(session.select(request.index))
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.get("/selection", response_model=SelectionResponse, tags=["Selection"])
async def selection_endpoint(
    wait: bool = False, session: ReaderSession = Depends(get_session)
) -> SelectionResponse:
    """Current lookup outcome. With `wait=true`, lookups in flight finish first."""
    if wait:
        await session.selection.settle()
    return SelectionResponse.from_outcome(session.outcome)


@app.delete("/selection", response_model=SelectionResponse, tags=["Selection"])
async def clear_selection(session: ReaderSession = Depends(get_session)) -> SelectionResponse:
    session.close()
    return SelectionResponse.from_outcome(session.outcome)


# ============================================================================
# Dictionary Proxy
# ============================================================================


@app.get("/api/jisho", response_model=JishoProxyResponse, tags=["Dictionary"])
async def jisho_proxy(keyword: str | None = None, session: ReaderSession = Depends(get_session)):
    """Search Jisho.org for a keyword."""
    if not keyword:
        return JSONResponse({"error": "Keyword is required"}, status_code=400)
    try:
        data = await session.dictionary.search(keyword)
    except DictionaryLookupError as e:
        logger.warning("Jisho proxy error", extra={"keyword": keyword, "error": str(e)})
        return JSONResponse({"error": "Failed to fetch data from Jisho API"}, status_code=500)
    return JishoProxyResponse(data=data)


# ============================================================================
# CLI Entry Point
# ============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bunsekikun.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
