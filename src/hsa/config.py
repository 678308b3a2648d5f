from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database (single-file SQLite by default)
    database_url: str = "sqlite+aiosqlite:///./hsa.db"
    db_echo: bool = False

    # JWT
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "hsa-demo"
    jwt_access_expire_minutes: int = 60

    # Registration
    password_min_length: int = 6

    # Cards
    card_expiry_years: int = 3

    # Transactions
    recent_transactions_limit: int = 5

    # Money / amounts
    currency: str = "USD"


settings = Settings()
