"""Probe configuration management via pydantic-settings.

Centralize the tunable defaults of the Apache status probe. Load settings from
environment variables and/or a `.env` file. Command-line flags override the
per-invocation values (timeout, user agent); everything else is read here.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Probe-wide configuration settings.

    Attributes:
        PROJECT_NAME: Display name used in help output.
        VERSION: Semantic version string reported by ``--version``.
        ENVIRONMENT: Deployment environment identifier, selects the log renderer.
        LOG_LEVEL: Minimum logging verbosity level.
        LOGGING_NOISY_MODULES: Third-party loggers clamped to WARNING.
        STATUS_PATH: Path of the mod_status page on the target host.
        DEFAULT_TIMEOUT: HTTP timeout in seconds when ``-t`` is not given.
        ALARM_GRACE_SECONDS: Extra seconds before the hard alarm fires.
        DEFAULT_USER_AGENT: User-Agent sent when ``-a`` is not given.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="APACHESTATUS_",
        case_sensitive=True,
        extra="ignore",
    )

    # ==========================================================================
    # PROJECT METADATA
    # ==========================================================================
    PROJECT_NAME: str = "Apache Monitor for Nagios"
    VERSION: str = "1.5"

    # ==========================================================================
    # ENVIRONMENT & LOGGING
    # ==========================================================================
    ENVIRONMENT: Literal["development", "staging", "production"] = "production"
    LOG_LEVEL: Literal["debug", "info", "warning", "error", "critical"] = "warning"
    LOGGING_NOISY_MODULES: list[str] = [
        "urllib3",
        "http.client",
    ]

    # ==========================================================================
    # PROBE DEFAULTS
    # ==========================================================================
    STATUS_PATH: str = "/server-status"
    DEFAULT_TIMEOUT: int = 15
    ALARM_GRACE_SECONDS: int = 5
    DEFAULT_USER_AGENT: Optional[str] = None

    @field_validator("DEFAULT_TIMEOUT", "ALARM_GRACE_SECONDS")
    @classmethod
    def validate_positive_seconds(cls, v: int) -> int:
        """Reject zero or negative durations.

        Raises:
            ValueError: If the duration is not strictly positive.
        """
        if v <= 0:
            raise ValueError(f"Duration must be a positive number of seconds, got {v}")
        return v

    @field_validator("STATUS_PATH")
    @classmethod
    def validate_status_path(cls, v: str) -> str:
        """Ensure the status path is absolute so it can be appended to a host."""
        if not v.startswith("/"):
            raise ValueError(f"STATUS_PATH must start with '/', got {v!r}")
        return v


# ==============================================================================
# SETTINGS ACCESS
# ==============================================================================


@lru_cache()
def get_settings() -> Settings:
    """Return a cached singleton instance of the probe settings.

    Returns:
        The singleton Settings instance.
    """
    return Settings()
