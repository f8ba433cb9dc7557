import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "devops-helper"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    metrics_port: int = Field(default=9090, alias="METRICS_PORT")
    metrics_server_enabled: bool = Field(default=True, alias="METRICS_SERVER_ENABLED")

    # Name of the variable /info reports as the deployment environment.
    environment_variable: str = Field(default="APP_ENVIRONMENT", alias="ENVIRONMENT_VARIABLE")
    config_redact_ignore_case: bool = Field(default=False, alias="CONFIG_REDACT_IGNORE_CASE")

    chaos_max_timeout_seconds: int = Field(default=3600, alias="CHAOS_MAX_TIMEOUT_SECONDS")
    load_max_cpu_seconds: int = Field(default=600, alias="LOAD_MAX_CPU_SECONDS")
    load_max_memory_mb: int = Field(default=4096, alias="LOAD_MAX_MEMORY_MB")

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
