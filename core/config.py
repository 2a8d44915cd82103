from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import (
    DEFAULT_PLAYBOOK,
    HEAD_MATCH_TOKENS,
    NEAR_DUPLICATE_THRESHOLD,
)


class EnvConfig(BaseSettings):
    """Infra settings from .env. Loaded once at import."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AGENCY_",
    )

    db_path: str = "data/agency.db"
    log_level: str = "INFO"
    default_language: str = "es"


@dataclass
class RuntimeConfig:
    """Tunable drafting knobs. Callers may override per process."""

    draft_max_attempts: int = 3
    draft_max_chars: int = 220
    draft_min_chars: int = 1
    default_playbook: str = DEFAULT_PLAYBOOK
    near_duplicate_threshold: float = NEAR_DUPLICATE_THRESHOLD
    head_match_tokens: int = HEAD_MATCH_TOKENS


# Module-level singletons
env = EnvConfig()
runtime = RuntimeConfig()
