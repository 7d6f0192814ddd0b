"""Configuration loader for the rating engine.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables.

    Attributes:
        environment: Current environment (dev/prod).
        log_level: Logging level name (DEBUG, INFO, WARNING, ...).
        signal_policy: Name of the signal policy to run ("reduced" or "full").
        lookback_days: Calendar days of daily bars to fetch per ticker.
    """

    environment: str
    log_level: str
    signal_policy: str
    lookback_days: int


def load_config() -> Config:
    """Load configuration from environment variables.

    Returns:
        Config object with all settings.

    Raises:
        ValueError: If LOOKBACK_DAYS is not a positive integer.
    """
    raw_lookback = os.getenv("LOOKBACK_DAYS", "300")
    try:
        lookback_days = int(raw_lookback)
    except ValueError:
        raise ValueError(f"LOOKBACK_DAYS must be an integer, got {raw_lookback!r}") from None
    if lookback_days < 1:
        raise ValueError(f"LOOKBACK_DAYS must be positive, got {lookback_days}")

    return Config(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        signal_policy=os.getenv("SIGNAL_POLICY", "full").lower(),
        lookback_days=lookback_days,
    )
