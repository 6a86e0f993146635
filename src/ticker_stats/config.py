"""Configuration management."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class AggregationConfig(BaseModel):
    """Configuration for the single-pass aggregator."""

    strict_order: bool = Field(
        default=True,
        description="Raise on order violations instead of logging a warning",
    )
    check_dates: bool = Field(default=True, description="Check dates ascend within each run")


class ColumnMap(BaseModel):
    """DataFrame column names for each record field."""

    ticker: str = Field(default="Ticker")
    date: str = Field(default="Date")
    open_price: str = Field(default="Open")
    close_price: str = Field(default="Close")
    volume: str = Field(default="Volume")


class DataConfig(BaseModel):
    """Configuration for reading records from tabular data."""

    columns: ColumnMap = Field(default_factory=ColumnMap)
    normalize_tickers: bool = Field(default=True, description="Uppercase and strip ticker symbols")


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(
        default_factory=lambda: os.environ.get("TICKER_STATS_LOG_LEVEL", "INFO"),
        description="Log level; TICKER_STATS_LOG_LEVEL sets it when the config file does not",
    )
    json_output: bool = Field(default=False, description="Render log lines as JSON instead of console text")


class Settings(BaseModel):
    """Main settings container."""

    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """
    Load settings from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config/settings.yaml

    Returns:
        Settings object with validated configuration
    """
    if config_path is None:
        # Look for config relative to project root
        config_path = Path(__file__).parent.parent.parent / "config" / "settings.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Settings()

    with open(config_path) as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    return Settings(**data)


# Global settings instance (lazy loaded)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
