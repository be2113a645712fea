from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"

    # AI analysis (any OpenAI-compatible chat completions endpoint)
    ai_api_key: Optional[str] = None
    ai_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    ai_model: str = "gemini-2.5-flash"
    ai_timeout_seconds: float = 30.0
    analysis_language: str = "English"

    # Inventory source
    inventory_source: str = "mock"
    mock_item_count: int = 25
    mock_latency_seconds: float = 0.8
    mock_seed: Optional[int] = None

    # UI settings
    warehouses: List[str] = ["Main warehouse (Moscow)", "North warehouse (St. Petersburg)"]
    categories: List[str] = ["Electronics", "Spare parts", "Tools", "Raw materials", "Packaging"]

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
