"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings

APP_VERSION = "0.1.0"


class Settings(BaseSettings):
    # Webhook verification (empty disables signature enforcement)
    webhook_secret: str = ""

    # Read endpoint gate (empty disables the token check)
    events_token: str = ""

    # Event log
    event_store_capacity: int = 200
    events_page_size: int = 50
    raw_excerpt_limit: int = 2000

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    json_logs: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "HOOKLOG_",
    }


settings = Settings()
