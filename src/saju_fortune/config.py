import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

DEFAULT_GEMINI_MODELS = (
    "gemini-1.5-flash",
    "gemini-1.5-flash-latest",
    "gemini-1.5-pro",
    "gemini-1.5-pro-latest",
    "gemini-2.0-flash",
    "gemini-2.0-flash-lite",
)


def _split_csv(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if not value:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


def _optional_float(value: str | None) -> float | None:
    if value is None or value.strip() == "":
        return None
    return float(value)


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Gemini
    gemini_models: tuple[str, ...] = _split_csv(os.getenv("GEMINI_MODELS"), DEFAULT_GEMINI_MODELS)
    gemini_request_timeout: float | None = _optional_float(os.getenv("GEMINI_REQUEST_TIMEOUT"))

    # Cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "1800"))  # 30 minutes
    cache_max_entries: int = int(os.getenv("CACHE_MAX_ENTRIES", "200"))

    # Rate limit hint sent with 429 responses
    retry_after_seconds: int = int(os.getenv("RETRY_AFTER_SECONDS", "20"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"
    cors_origins: tuple[str, ...] = _split_csv(os.getenv("CORS_ORIGINS"), ("*",))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_dir: str | None = os.getenv("LOG_DIR") or None

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds")

        if self.cache_max_entries <= 0:
            raise ValueError("CACHE_MAX_ENTRIES must be a positive integer")

        if self.retry_after_seconds < 0:
            raise ValueError("RETRY_AFTER_SECONDS must not be negative")

        if self.gemini_request_timeout is not None and self.gemini_request_timeout <= 0:
            raise ValueError(
                f"GEMINI_REQUEST_TIMEOUT must be positive when set, got {self.gemini_request_timeout}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_gemini_api_key() -> str | None:
    """Read the Gemini credential from the environment.

    Looked up on every call so a key added after startup is picked up
    without a restart.
    """
    return os.getenv("GEMINI_API_KEY") or None
