from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SPACEAPI_", env_file=".env", extra="ignore")

    app_name: str = "SpaceAPI Server"

    # HTTP
    host: str = "127.0.0.1"
    port: int = 8000

    # Store: "sqlite" (local file) or "redis"
    store_backend: Literal["sqlite", "redis"] = "sqlite"
    redis_url: str = "redis://127.0.0.1:6379/0"
    # must be a file path, every pooled connection opens it separately
    sqlite_path: str = Field(default="spaceapi.db")
    store_pool_size: int = Field(default=4, ge=1)
    store_pool_timeout_seconds: float = Field(default=5.0, gt=0)

    # Static status document, sensors and modifiers.
    # None = packaged config/default_status.json
    status_path: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_file: str = "spaceapi.log"  # "" disables the file handler


settings = Settings()
