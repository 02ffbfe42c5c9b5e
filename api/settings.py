"""Responder Settings — environment-driven configuration via pydantic-settings.

Every setting can be overridden with a ``RESPONDER_`` prefixed environment
variable, e.g. ``RESPONDER_DATA_KEY=data``.  ``get_settings()`` is cached, so
settings are read once per process.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from models.responder_config import (
    DEFAULT_DATA_KEY,
    DEFAULT_ERRORS_KEY,
    DEFAULT_STATUS_KEY,
    ResponderConfig,
)


class ResponderSettings(BaseSettings):
    """Responder settings from environment variables."""

    model_config = SettingsConfigDict(env_prefix="RESPONDER_", env_file=".env", extra="ignore")

    # Envelope keys
    status_key: str = DEFAULT_STATUS_KEY
    data_key: str = DEFAULT_DATA_KEY
    errors_key: str = DEFAULT_ERRORS_KEY

    # Negotiation
    default_content_type: str = "application/json"
    callback_param: str = "callback"
    always200_param: str = "always200"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def responder_config(self) -> ResponderConfig:
        return ResponderConfig(
            status_key=self.status_key,
            data_key=self.data_key,
            errors_key=self.errors_key,
        )


@lru_cache
def get_settings() -> ResponderSettings:
    return ResponderSettings()
