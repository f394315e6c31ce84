from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)

    http_timeout: float = Field(10.0, gt=0, alias="HTTP_TIMEOUT")
    http_user_agent: str = Field(
        "okofeed/0.1 (+https://oko.press; RSS bridge)",
        alias="HTTP_USER_AGENT",
    )

    server_host: str = Field("0.0.0.0", alias="SERVER_HOST")
    shutdown_grace_period: float = Field(5.0, ge=0, alias="SHUTDOWN_GRACE_PERIOD")
    log_level: str = Field("INFO", alias="LOG_LEVEL")


class FeedConfig(BaseModel):
    """Operator-supplied parameters read from the JSON config file."""

    model_config = ConfigDict(frozen=True)

    url: HttpUrl = Field(description="Upstream API endpoint")
    thumbnail_compression: str = Field(
        description="Prefix prepended to every article image URL"
    )
    interval: int = Field(ge=0, description="Process lifetime in seconds")


def load_feed_config(path: str | Path) -> FeedConfig:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot open config file {path}: {exc}") from exc
    try:
        return FeedConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc


@lru_cache
def get_settings() -> Settings:
    return Settings()
