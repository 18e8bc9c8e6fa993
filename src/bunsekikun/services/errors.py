"""Error types raised by the analysis and lookup services."""

from enum import StrEnum


class BunsekikunError(Exception):
    """Base class for recoverable analysis and lookup failures."""


class InputError(BunsekikunError, ValueError):
    """Text to analyze is empty or blank."""


class NotReadyError(BunsekikunError):
    """Analysis was requested before the tagger finished loading."""


class TokenizeError(BunsekikunError):
    """The tagger raised while tokenizing."""


class DictionaryLookupError(BunsekikunError):
    """The dictionary service could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LoadFailure(StrEnum):
    """Why the tagger failed to become ready."""

    NETWORK = "network"
    BUILD = "build"
    TIMEOUT = "timeout"


class TaggerLoadError(BunsekikunError):
    """The tagger could not be loaded."""

    def __init__(self, reason: LoadFailure, message: str = "") -> None:
        super().__init__(message or f"Tagger failed to load ({reason})")
        self.reason = reason
