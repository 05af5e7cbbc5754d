"""Process Settings - environment-driven directories and logging via pydantic-settings.

Invariants:
    - config.toml is read from MATRIX_BOT_CONFIG_DIR, state records from
      MATRIX_BOT_DATA_DIR; both default to the process working directory
    - get_settings() is cached (lru_cache) - single instance per process
    - Bot behaviour lives in config.toml; only process-level knobs live here

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - env_prefix keeps every variable under MATRIX_BOT_
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = "config.toml"


class Settings(BaseSettings):
    """Process settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MATRIX_BOT_", env_file=".env", case_sensitive=False,
        extra="ignore",
    )

    # Directories
    config_dir: Path = Path(".")
    data_dir: Path = Path(".")

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILENAME


@lru_cache
def get_settings() -> Settings:
    return Settings()
