#!/usr/bin/env python3
"""
Pydantic-based configuration for the daily picks generator.
Output locations and the pick cap are code constants; only market data and
logging knobs are read from DAILY_PICKS_* variables or a .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class DailyPicksConfig(BaseSettings):
    """Settings for a single daily picks run"""

    model_config = SettingsConfigDict(
        env_prefix="DAILY_PICKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env
    )

    # =====================
    # Market Data
    # =====================
    history_period: str = Field(default="1y", description="yfinance history period for daily bars")
    include_fundamentals: bool = Field(default=True, description="Fetch Ticker.info fundamentals per symbol")

    # =====================
    # Logging
    # =====================
    log_path: str = Field(default="daily_stocks.log", description="Log file path")

    @field_validator("history_period")
    @classmethod
    def history_period_valid(cls, v):
        """Scorers need at least ~200 daily bars"""
        if v not in ("1y", "2y", "5y", "10y", "max"):
            raise ValueError(f"history_period ({v}) must be one of 1y, 2y, 5y, 10y, max")
        return v


# Global config instance
_config: Optional[DailyPicksConfig] = None


def get_config(reload: bool = False) -> DailyPicksConfig:
    """
    Get the global config instance.

    Args:
        reload: Force reload config from environment

    Returns:
        Validated DailyPicksConfig instance
    """
    global _config
    if _config is None or reload:
        _config = DailyPicksConfig()
    return _config


if __name__ == "__main__":
    try:
        config = get_config()
        print("[OK] Configuration is valid!")
        for key, value in config.model_dump().items():
            print(f"  {key}: {value}")
    except Exception as e:
        print(f"[X] Configuration validation failed:\n{e}")
