from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Only the console facade reads these values; the engine and analytics
    functions take the same settings as explicit parameters.
    """
    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"

    # Snapshot directory for the JSON record source
    data_dir: str = "sample_data"

    # Stock alert thresholds
    low_stock_threshold: int = 10
    critical_stock_threshold: int = 5
    stock_alert_limit: int = 20

    # Expiry windows (days)
    expire_soon_window_days: int = 30
    expire_critical_window_days: int = 7

    # List pages
    page_size: int = 10

    # Activity feed
    activity_limit: int = 8
    activity_sales_window: Optional[int] = 10
    activity_purchases_window: Optional[int] = 9

    # Notification dropdown
    notification_window_days: int = 7
    notification_limit: int = 10

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
