from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, ge=0, le=65535, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")
    gzip_minimum_size: int = Field(default=1000, ge=0, alias="GZIP_MINIMUM_SIZE")
    seed_customers: bool = Field(default=True, alias="SEED_CUSTOMERS")

    startup_timeout_seconds: float = Field(default=10.0, gt=0, alias="STARTUP_TIMEOUT_SECONDS")
    shutdown_grace_seconds: float = Field(default=1.0, ge=1.0, le=5.0, alias="SHUTDOWN_GRACE_SECONDS")
    shutdown_timeout_seconds: float = Field(default=5.0, ge=1.0, le=5.0, alias="SHUTDOWN_TIMEOUT_SECONDS")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
