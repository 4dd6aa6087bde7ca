"""Centralized configuration — all env vars in one place."""

import logging
import os

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%r, using default %d", name, raw, default)
        return default


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = _int_env("PORT", 3000)

        # Query cache
        self.cache_ttl_seconds: int = _int_env("CACHE_TTL_SECONDS", 60)
        self.cache_check_period_seconds: int = _int_env("CACHE_CHECK_PERIOD_SECONDS", 120)
        self.cache_max_entries: int = _int_env("CACHE_MAX_ENTRIES", 0)

        # Search parameters
        self.default_max_results: int = _int_env("DEFAULT_MAX_RESULTS", 10)
        self.max_results_limit: int = _int_env("MAX_RESULTS_LIMIT", 50)
        self.search_fetch_limit: int = _int_env("SEARCH_FETCH_LIMIT", 50)

        # Rate limiting (0 disables)
        self.rate_limit_requests: int = _int_env("RATE_LIMIT_REQUESTS", 40)
        self.rate_limit_window_seconds: int = _int_env("RATE_LIMIT_WINDOW_SECONDS", 60)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return a list of problems with the current configuration."""
        problems = []
        if self.cache_ttl_seconds <= 0:
            problems.append("CACHE_TTL_SECONDS must be positive")
        if self.max_results_limit < 1:
            problems.append("MAX_RESULTS_LIMIT must be at least 1")
        if not 1 <= self.default_max_results <= max(self.max_results_limit, 1):
            problems.append("DEFAULT_MAX_RESULTS must be within [1, MAX_RESULTS_LIMIT]")
        if self.search_fetch_limit < self.max_results_limit:
            problems.append("SEARCH_FETCH_LIMIT is below MAX_RESULTS_LIMIT; large requests will be short")
        if self.rate_limit_requests > 0 and self.rate_limit_window_seconds <= 0:
            problems.append("RATE_LIMIT_WINDOW_SECONDS must be positive when rate limiting is on")
        return problems


settings = Settings()
