from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """POS service settings, read from POS_SERVICE_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="POS_SERVICE_", env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./pos.db"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    log_timezone: str = "UTC"
    seed_products: bool = True
