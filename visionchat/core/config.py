"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here; no scattered magic strings.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        environment: Deployment environment ("development" or "production").
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_heavy: Rate limit for LLM-backed endpoints.

    Session, mail, Google and LLM credentials are optional so the API can
    start locally without them; the features that need them report a clear
    error (or log instead of mailing) when they are missing.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "VisionChat"
    version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    rate_limit_default: str = "60/minute"
    rate_limit_heavy: str = "10/minute"

    # --- Database ---
    database_url: Optional[str] = None
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "visionchat"

    # --- Sessions ---
    jwt_secret: str = "your-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # --- Accounts ---
    site_url: str = "http://localhost:3000"
    verification_token_hours: int = 24
    password_min_length: int = 6

    # --- Email (SMTP) ---
    email_address: Optional[str] = None
    email_password: Optional[str] = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    email_sender_name: str = "VisionChat AI"

    # --- Google sign-in ---
    google_client_id: Optional[str] = None

    # --- LLM (OpenRouter-compatible chat completions) ---
    llm_api_key: Optional[str] = None
    llm_base_url: str = "https://openrouter.ai/api/v1"
    llm_app_title: str = "VisionChat AI"
    llm_timeout_seconds: float = 60.0
    chat_model: str = "openai/gpt-4o"
    chat_max_tokens: int = 1000
    chat_temperature: float = 0.7
    title_model: str = "openai/gpt-4o-mini"

    # --- Market data ---
    binance_api_base: str = "https://api.binance.com/api/v3"
    coingecko_api_base: str = "https://api.coingecko.com/api/v3"
    cryptocompare_news_url: str = (
        "https://min-api.cryptocompare.com/data/v2/news/"
    )
    market_timeout_seconds: float = 5.0
    global_cache_seconds: int = 60

    def get_database_dsn(self) -> str:
        """Return the effective database DSN.

        Priority:
        1. Explicit `DATABASE_URL`
        2. Build DSN from postgres_* values (useful for Docker Compose or local setups)
        """
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    def cors_origins(self) -> list[str]:
        """Return allowed CORS origins: the site itself in production, any otherwise."""
        if self.environment == "production":
            return [self.site_url]
        return ["*"]


settings = Settings()
