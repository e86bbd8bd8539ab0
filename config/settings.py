"""Configuration management using Pydantic Settings."""

import os
from enum import Enum
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file at module import time
load_dotenv()


class PnLChartMode(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


class TagSortKey(str, Enum):
    TAG = "tag"
    TRADE_COUNT = "trade_count"
    WIN_RATE = "win_rate"
    REALIZED_PNL = "realized_pnl"
    AVG_PNL_PER_TRADE = "avg_pnl_per_trade"


class SymbolSortKey(str, Enum):
    SYMBOL = "symbol"
    POSITION_QTY = "position_qty"
    AVG_COST = "avg_cost"
    TOTAL_BUY_AMOUNT = "total_buy_amount"
    TOTAL_SELL_AMOUNT = "total_sell_amount"
    REALIZED_PNL = "realized_pnl"
    CURRENT_PRICE = "current_price"
    POSITION_VALUE = "position_value"
    UNREALIZED_PNL = "unrealized_pnl"
    WIN_RATE = "win_rate"


class TagFilterMode(str, Enum):
    AND = "AND"
    OR = "OR"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class StatsSettings(BaseSettings):
    """Statistics and report configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STATS_",
        env_file=".env",
        extra="ignore",
    )

    # Monthly buckets
    month_label_format: str = Field(
        default="{year}년 {month}월",
        description="Label for a YYYY-MM bucket; month is rendered without zero padding",
    )
    other_bucket_key: str = Field(
        default="Other", description="Bucket for daily keys shorter than YYYY-MM"
    )

    # Tag table
    tag_sort_key: TagSortKey = Field(
        default=TagSortKey.TRADE_COUNT, description="Default tag table sort column"
    )
    tag_sort_descending: bool = Field(default=True, description="Sort tag table descending")

    # Boundary validation
    reject_oversell: bool = Field(
        default=False,
        description="Reject journals where a sell exceeds the quantity held",
    )

    @field_validator("month_label_format")
    @classmethod
    def check_label_placeholders(cls, v: str) -> str:
        """Require both placeholders so every month renders distinctly."""
        if "{year}" not in v or "{month}" not in v:
            raise ValueError("month_label_format must contain {year} and {month}")
        return v


class RiskSettings(BaseSettings):
    """Position risk and loss alert configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RISK_",
        env_file=".env",
        extra="ignore",
    )

    max_position_percent: float = Field(
        default=20, ge=0, le=100, description="Max % of account in one symbol"
    )
    max_daily_loss_percent: float = Field(
        default=3, ge=0, le=100, description="Daily loss % that triggers an alert (0 = off)"
    )
    max_daily_loss_amount: float = Field(
        default=0, ge=0, description="Daily loss amount that triggers an alert (0 = off)"
    )
    alert_enabled: bool = Field(default=True, description="Evaluate daily loss alerts")

    @field_validator("max_position_percent", "max_daily_loss_percent")
    @classmethod
    def round_to_decimals(cls, v: float) -> float:
        """Round float values to reasonable precision."""
        return round(v, 4)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        extra="ignore",
    )

    level: str = Field(default="INFO", description="Log level")
    file: Path = Field(default=Path("logs/tradebook.log"), description="Log file path")


class Settings(BaseSettings):
    """Main settings container."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    stats: StatsSettings = Field(default_factory=StatsSettings)
    risk: RiskSettings = Field(default_factory=RiskSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, config_path: Path = Path("config/config.yaml")) -> "Settings":
        """Load settings from YAML file, with env vars taking precedence."""
        yaml_config = {}
        if config_path.exists():
            with open(config_path) as f:
                yaml_config = yaml.safe_load(f) or {}

        stats_config = yaml_config.get("stats") or {}
        risk_config = yaml_config.get("risk") or {}
        logging_config = yaml_config.get("logging") or {}

        # Environment variables take precedence over YAML
        for section, prefix in (
            (stats_config, "STATS_"),
            (risk_config, "RISK_"),
            (logging_config, "LOG_"),
        ):
            for key in list(section):
                if os.environ.get(f"{prefix}{key.upper()}"):
                    section.pop(key)

        return cls(
            stats=StatsSettings(**stats_config),
            risk=RiskSettings(**risk_config),
            logging=LoggingSettings(**logging_config),
        )


def load_settings(config_path: Path = Path("config/config.yaml")) -> Settings:
    """Load settings from config file and environment."""
    if config_path.exists():
        return Settings.from_yaml(config_path)
    return Settings()
