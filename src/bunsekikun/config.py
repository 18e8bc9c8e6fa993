"""Runtime configuration read from environment variables."""

import os
from dataclasses import dataclass, field

from bunsekikun.services.jisho import API_TIMEOUT_SECONDS, JISHO_SEARCH_URL
from bunsekikun.services.tagger import DEFAULT_LOAD_TIMEOUT, parse_split_mode

ENV_PREFIX = "BUNSEKIKUN_"


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default)


def _env_float(name: str, default: float) -> float:
    raw = _env(name, str(default))
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {raw!r}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name, "1" if default else "0")
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    sudachi_dict: str = "core"
    split_mode: str = "A"
    tagger_timeout: float = DEFAULT_LOAD_TIMEOUT
    jisho_url: str = JISHO_SEARCH_URL
    jisho_timeout: float = API_TIMEOUT_SECONDS
    log_level: str = "INFO"
    log_json: bool = True
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        split_mode = _env("SPLIT_MODE", "A")
        parse_split_mode(split_mode)  # fail at startup, not on first load

        origins = [o.strip() for o in _env("CORS_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            sudachi_dict=_env("SUDACHI_DICT", "core"),
            split_mode=split_mode.strip().upper(),
            tagger_timeout=_env_float("TAGGER_TIMEOUT", DEFAULT_LOAD_TIMEOUT),
            jisho_url=_env("JISHO_URL", JISHO_SEARCH_URL),
            jisho_timeout=_env_float("JISHO_TIMEOUT", API_TIMEOUT_SECONDS),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            log_json=_env_bool("LOG_JSON", True),
            cors_origins=origins or ["*"],
        )
