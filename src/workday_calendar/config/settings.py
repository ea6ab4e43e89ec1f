"""
Application configuration.

Centralizes environment variables, constants, and settings
using dataclasses for type safety and immutability.
"""

import os
from dataclasses import dataclass, field
from typing import Tuple


def _split_env_list(name: str) -> Tuple[str, ...]:
    """Read a comma-separated environment variable as a tuple of entries."""
    raw = os.environ.get(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class WorkdaySettings:
    """Workday window and holiday settings."""

    # "HH:MM" clock times
    start: str = field(
        default_factory=lambda: os.environ.get("WORKDAY_START", "08:00")
    )
    stop: str = field(
        default_factory=lambda: os.environ.get("WORKDAY_STOP", "16:00")
    )

    # One-time holidays as YYYY-MM-DD
    holidays: Tuple[str, ...] = field(
        default_factory=lambda: _split_env_list("HOLIDAYS")
    )

    # Recurring holidays as MM-DD
    recurring_holidays: Tuple[str, ...] = field(
        default_factory=lambda: _split_env_list("RECURRING_HOLIDAYS")
    )

    # Largest |amount| accepted by the HTTP API
    max_increment: float = field(
        default_factory=lambda: float(os.environ.get("MAX_WORKDAY_INCREMENT", 10000))
    )


@dataclass(frozen=True)
class Settings:
    """Main application settings."""

    workday: WorkdaySettings = field(default_factory=WorkdaySettings)
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", 8080)))
    debug: bool = field(default_factory=lambda: os.environ.get("DEBUG", "false").lower() == "true")


# Singleton settings instance
settings = Settings()
