import os
from dataclasses import dataclass
from functools import lru_cache

_LANGUAGE_ALIASES = {
    "go": "go",
    "golang": "go",
}

_DEFAULT_MAX_TRIAL_PARSES = 64


@dataclass(frozen=True)
class Settings:
    go_language: str = "go"
    max_trial_parses: int = _DEFAULT_MAX_TRIAL_PARSES


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized)
    if resolved is None:
        raise ValueError(f"Unsupported Go grammar '{language}'. Supported: {sorted(_LANGUAGE_ALIASES)}")
    return resolved


def _parse_trial_limit(raw: str) -> int:
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"TEMPL_PARSER_MAX_TRIAL_PARSES must be an integer, got {raw!r}") from None
    if limit < 0:
        raise ValueError(f"TEMPL_PARSER_MAX_TRIAL_PARSES must not be negative, got {limit}")
    return limit


def load_settings() -> Settings:
    return Settings(
        go_language=normalize_language(os.getenv("TEMPL_PARSER_GO_LANGUAGE", "go")),
        max_trial_parses=_parse_trial_limit(
            os.getenv("TEMPL_PARSER_MAX_TRIAL_PARSES", str(_DEFAULT_MAX_TRIAL_PARSES))
        ),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
