"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

#: Asset code -> ccxt unified perpetual symbol on Kraken Futures.
DEFAULT_SYMBOLS: dict[str, str] = {
    "BTC": "BTC/USD:USD",
    "ETH": "ETH/USD:USD",
    "SOL": "SOL/USD:USD",
    "XRP": "XRP/USD:USD",
    "LINK": "LINK/USD:USD",
    "LTC": "LTC/USD:USD",
    "DOGE": "DOGE/USD:USD",
    "ADA": "ADA/USD:USD",
    "AVAX": "AVAX/USD:USD",
}


class AnalysisSettings(BaseSettings):
    """Funding-rate z-score analysis parameters.

    All fields configurable via ANALYSIS_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_")

    lookback_periods: int = 90  # ~30 days at 8h funding intervals
    min_history: int = 90  # below this the analysis is skipped as insufficient
    min_zscore_samples: int = 10
    trend_window: int = 6  # ~2 days at 8h intervals
    extreme_proximity: Decimal = Decimal("0.9")  # fraction of window max/min


class SizingSettings(BaseSettings):
    """Position sizing caps shared by every risk profile."""

    model_config = SettingsConfigDict(env_prefix="SIZING_")

    stop_loss_percent: Decimal = Decimal("0.015")  # 1.5% stop
    reward_risk_ratio: Decimal = Decimal("2")  # take profit = 2x stop
    max_risk_fraction: Decimal = Decimal("0.10")  # never risk more than 10%
    max_leverage: int = 15
    max_position_fraction: Decimal = Decimal("0.40")  # max 40% of capital


class ProgressSettings(BaseSettings):
    """Capital goal tracked by the progress endpoint."""

    model_config = SettingsConfigDict(env_prefix="PROGRESS_")

    start_capital: Decimal = Decimal("5000")
    goal_capital: Decimal = Decimal("100000")


class MarketDataSettings(BaseSettings):
    """Public market data source configuration."""

    model_config = SettingsConfigDict(env_prefix="MARKET_")

    exchange_id: str = "krakenfutures"
    symbols: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SYMBOLS))
    history_limit: int = 100  # funding records fetched per symbol
    chart_points: int = 30  # samples returned for charting
    request_timeout_ms: int = 10000


class DashboardSettings(BaseSettings):
    """Dashboard server configuration."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8080
    enabled: bool = True


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production
    analysis: AnalysisSettings = AnalysisSettings()
    sizing: SizingSettings = SizingSettings()
    progress: ProgressSettings = ProgressSettings()
    market: MarketDataSettings = MarketDataSettings()
    dashboard: DashboardSettings = DashboardSettings()
