"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Single .env at project root
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)


def _bool_env(key: str, default: bool) -> bool:
    v = os.getenv(key)
    if v is None or not v.strip():
        return default
    return v.strip().lower() not in ("0", "false", "no", "off")


def _float_env(key: str, default: float) -> float:
    v = os.getenv(key)
    if not v:
        return default
    return float(v)


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Generative service
    llm_provider: str = "groq"
    llm_model: Optional[str] = None
    llm_timeout_seconds: float = 30.0

    # Trending cache / sessions
    trending_ttl_hours: float = 24.0
    session_retention_hours: float = 2.0

    # Background jobs
    background_jobs: bool = True
    session_sweep_interval_seconds: float = 3600.0
    midnight_check_interval_seconds: float = 60.0

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
            llm_provider=os.getenv("LLM_PROVIDER", "groq").strip().lower() or "groq",
            llm_model=os.getenv("LLM_MODEL") or None,
            llm_timeout_seconds=_float_env("LLM_TIMEOUT_SECONDS", 30.0),
            trending_ttl_hours=_float_env("TRENDING_TTL_HOURS", 24.0),
            session_retention_hours=_float_env("SESSION_RETENTION_HOURS", 2.0),
            background_jobs=_bool_env("BACKGROUND_JOBS", True),
            session_sweep_interval_seconds=_float_env("SESSION_SWEEP_INTERVAL_SECONDS", 3600.0),
            midnight_check_interval_seconds=_float_env("MIDNIGHT_CHECK_INTERVAL_SECONDS", 60.0),
        )

    @property
    def trending_ttl(self) -> timedelta:
        return timedelta(hours=self.trending_ttl_hours)

    @property
    def session_retention(self) -> timedelta:
        return timedelta(hours=self.session_retention_hours)

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.trending_ttl_hours <= 0:
            errors.append(f"TRENDING_TTL_HOURS must be positive, got {self.trending_ttl_hours}")

        if self.session_retention_hours <= 0:
            errors.append(f"SESSION_RETENTION_HOURS must be positive, got {self.session_retention_hours}")

        if self.session_sweep_interval_seconds <= 0:
            errors.append("SESSION_SWEEP_INTERVAL_SECONDS must be positive")

        if self.midnight_check_interval_seconds <= 0:
            errors.append("MIDNIGHT_CHECK_INTERVAL_SECONDS must be positive")

        return len(errors) == 0, errors


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
