"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./uzhavar.db"
    seed_reference_data: bool = True

    # Service
    service_name: str = "uzhavar-gateway"
    log_level: str = "INFO"

    # Settlement and notifications
    system_name: str = "Uzhavar360"
    currency_symbol: str = "₹"
    market_fee_rate: Decimal = Decimal("0.05")

    # Assistant (Gemini generateContent REST API)
    assistant_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    assistant_api_key: str = ""
    assistant_model: str = "gemini-3-flash-preview"
    assistant_temperature: float = 0.7

    # HTTP Client
    http_timeout_seconds: float = 15.0


settings = Settings()
