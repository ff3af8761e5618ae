from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RAILWAY_API_ENDPOINT = "https://backboard.railway.app/graphql/v2"


class Settings(BaseSettings):
    APP_NAME: str = Field("railway-restarter", alias="APP_NAME")
    VERSION: str = Field("0.1.0", alias="APP_VERSION")

    # Railway API
    RAILWAY_API_TOKEN: str = Field(..., alias="RAILWAY_API_TOKEN")
    RAILWAY_API_ENDPOINT: str = Field(DEFAULT_RAILWAY_API_ENDPOINT, alias="RAILWAY_API_ENDPOINT")
    RAILWAY_PROJECT_ID: str = Field(..., alias="RAILWAY_PROJECT_ID")

    # Restart target
    RAILWAY_ENVIRONMENT_NAME: str = Field(..., alias="RAILWAY_ENVIRONMENT_NAME")
    RAILWAY_ENVIRONMENT_ID: Optional[str] = Field(None, alias="RAILWAY_ENVIRONMENT_ID")
    TARGET_SERVICE_NAME: str = Field(..., alias="TARGET_SERVICE_NAME")

    # Memory threshold
    MAX_RAM_GB: Optional[float] = Field(None, alias="MAX_RAM_GB", gt=0)
    RESTART_THRESHOLD_INCLUSIVE: bool = Field(True, alias="RESTART_THRESHOLD_INCLUSIVE")

    # Schedules (a workflow is enabled only when its expression is set)
    MAX_RAM_CRON_INTERVAL_CHECK: Optional[str] = Field(None, alias="MAX_RAM_CRON_INTERVAL_CHECK")
    CRON_INTERVAL_RESTART: Optional[str] = Field(None, alias="CRON_INTERVAL_RESTART")
    SCHEDULER_TIMEZONE: str = Field("UTC", alias="SCHEDULER_TIMEZONE")

    # HTTP surface
    CONTROL_API_TOKEN: Optional[str] = Field(None, alias="CONTROL_API_TOKEN")
    HOST: str = Field("0.0.0.0", alias="HOST")
    PORT: int = Field(8080, alias="PORT")
    LOG_LEVEL: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", populate_by_name=True, extra="ignore")

    @model_validator(mode="after")
    def _check_threshold_schedule(self) -> "Settings":
        if self.MAX_RAM_CRON_INTERVAL_CHECK and self.MAX_RAM_GB is None:
            raise ValueError("MAX_RAM_GB is required when MAX_RAM_CRON_INTERVAL_CHECK is set")
        return self

    @property
    def threshold_check_enabled(self) -> bool:
        return bool(self.MAX_RAM_CRON_INTERVAL_CHECK)

    @property
    def force_restart_enabled(self) -> bool:
        return bool(self.CRON_INTERVAL_RESTART)


@lru_cache
def get_settings() -> Settings:
    return Settings()
