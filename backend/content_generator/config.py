import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

from content_generator.domain.exceptions import ConfigError

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "AI Content Generator"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./articles.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # OpenRouter configuration
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_app_name: str = "AI Content Generator"
    openrouter_site_url: str = "http://localhost:3000"
    request_timeout_seconds: float = 120.0

    # Article generation
    generation_model: str = "deepseek/deepseek-r1:free"
    generation_max_tokens: int = 500
    generation_temperature: float = 0.7
    generation_top_p: float = 0.9
    previous_titles_limit: int = 10

    # Topic validation (advisory)
    validation_model: str = "google/gemini-2.0-flash-exp:free"
    validation_max_tokens: int = 10
    validation_temperature: float = 0.1

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_pipeline: str = "INFO"         # ArticleGenerationService pipeline
    log_level_openrouter: str = "INFO"       # OpenRouter client

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def require_openrouter_api_key(self) -> str:
        """Return the OpenRouter key or raise ConfigError if it is blank."""
        key = self.openrouter_api_key.strip()
        if not key:
            _config_logger.error("OPENROUTER_API_KEY is not configured")
            raise ConfigError("openrouter_api_key", "OpenRouter API key is not configured")
        return key


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
