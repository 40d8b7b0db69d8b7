from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Task store backend: "file" (JSON documents on disk) or "sql"
    task_repo_backend: str = "file"
    task_store_dir: str = "./data/tasks"
    database_url: str = "sqlite:///./taskking.db"

    # When false, error responses carry only the fixed message and the
    # store's own error text is not sent to clients.
    expose_store_errors: bool = True

    # Unset falls back to UVICORN_LOG_LEVEL, then INFO
    log_level: Optional[str] = Field(default=None, validation_alias=AliasChoices("APP_LOG_LEVEL", "LOG_LEVEL"))

    # Client
    api_url: str = "http://localhost:5000"
    api_timeout: float = 10.0
    notification_seconds: float = 3.0


@lru_cache()
def get_settings() -> Settings:
    return Settings()
