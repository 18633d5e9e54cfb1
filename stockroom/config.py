# Inspired by https://github.com/databricks-solutions/brickhouse-brands-demo/blob/main/backend/app/auth.py
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Databricks
    databricks_host: Optional[str] = None
    databricks_token: Optional[str] = None
    databricks_client_id: Optional[str] = None
    databricks_client_secret: Optional[str] = None

    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"

    # Data paths
    data_dir: str = "sample_data"

    # Auth
    default_user_id: Optional[str] = None
    identity_headers: List[str] = ["X-Forwarded-Email", "X-Forwarded-User"]

    # UI settings
    page_size: int = 5
    page_radius: int = 2
    recent_products_limit: int = 5
    low_stock_metric_max_quantity: int = 5

    # Seed data settings
    default_seed_products: int = 40
    default_seed_weeks: int = 16
    default_seed_value: int = 42

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

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
