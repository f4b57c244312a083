"""Settings for the command monitor."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    mongodb_uri: str = Field(..., validation_alias="MONGODB_URI")
    monitor_commands: bool = Field(True, validation_alias="MONITOR_COMMANDS")
    event_name: str = Field("commandSucceeded", validation_alias="EVENT_NAME")
    database_name: str = Field("admin", validation_alias="DATABASE_NAME")
    database_connection_timeout_ms: int = Field(5000, validation_alias="DATABASE_CONNECTION_TIMEOUT_MS")

    database_backend: str = Field("mongo", validation_alias="DATABASE_BACKEND")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_json: bool = Field(False, validation_alias="LOG_JSON")
