"""Configuration management for the authorization reconciler."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from azdo_authz.utils.http import normalize_org_url

_config_logger = logging.getLogger(__name__)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")


class AzureDevOpsSettings(BaseModel):
    org_service_url: str | None = Field(
        default=None,
        description="Organization URL (e.g. https://dev.azure.com/contoso)",
    )
    personal_access_token: str | None = Field(default=None, repr=False)
    api_version: str = Field(default="5.1-preview.1")
    timeout_seconds: float = Field(default=30.0, gt=0, le=600)

    @field_validator("org_service_url")
    @classmethod
    def _validate_org_service_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return normalize_org_url(value)


class Settings(BaseModel):
    azure_devops: AzureDevOpsSettings = Field(default_factory=AzureDevOpsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


ENV_KEYS = {
    "org_service_url": "AZDO_ORG_SERVICE_URL",
    "personal_access_token": "AZDO_PERSONAL_ACCESS_TOKEN",
    "api_version": "AZDO_API_VERSION",
    "timeout_seconds": "AZDO_HTTP_TIMEOUT_SECONDS",
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
}


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        _config_logger.warning(
            "Invalid float value for %s: %r, using default %s", key, value, default
        )
        return default


def _env_str(key: str) -> str | None:
    value = os.getenv(key)
    if value is None:
        return None
    return value.strip() or None


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=Path.cwd() / ".env")
    log_file_env = _env_str(ENV_KEYS["log_file"])

    settings_data: dict[str, object] = {
        "azure_devops": {
            "org_service_url": _env_str(ENV_KEYS["org_service_url"]),
            "personal_access_token": _env_str(ENV_KEYS["personal_access_token"]),
            "api_version": os.getenv(ENV_KEYS["api_version"], AzureDevOpsSettings().api_version),
            "timeout_seconds": _env_float(
                ENV_KEYS["timeout_seconds"],
                AzureDevOpsSettings().timeout_seconds,
            ),
        },
        "logging": {
            "level": os.getenv(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": str(Path(log_file_env).expanduser().resolve()) if log_file_env else None,
        },
    }

    try:
        settings = Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    return settings
