from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """POS client settings, read from POS_CLIENT_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="POS_CLIENT_", env_file=".env", extra="ignore")

    api_url: str = "http://localhost:3000"
    request_timeout: float = 10.0
    log_level: str = "WARNING"
    log_timezone: str = "UTC"
