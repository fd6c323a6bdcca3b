"""
Environment-based settings for the voice bot.

All connection strings, keys and endpoints come from the environment (or a
``.env`` file in the working directory). Missing required values stop the
server from starting.
"""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from voicebot.config.constants import DEFAULT_OPENAI_API_VERSION

REQUIRED_VARIABLES: Dict[str, str] = {
    "AZURE_COG_SERVICES_KEY": "cognitive_services_key",
    "AZURE_COG_SERVICES_ENDPOINT": "cognitive_services_endpoint",
    "ACS_CONNECTION_STRING": "acs_connection_string",
    "ACS_PHONE_NUMBER": "acs_phone_number",
    "OPENAI_ENDPOINT": "openai_endpoint",
    "OPENAI_KEY": "openai_key",
    "OPENAI_DEPLOYMENT_NAME": "openai_deployment_name",
    "HOST_NAME": "host_name",
}


class ConfigurationError(ValueError):
    """Raised when required configuration is absent."""

    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(
            f"Missing required configuration: {', '.join(missing)}. "
            "Set them in the environment or the .env file."
        )


class Settings(BaseModel):
    """Resolved application settings."""

    model_config = ConfigDict(frozen=True)

    cognitive_services_key: str
    cognitive_services_endpoint: str
    acs_connection_string: str
    acs_phone_number: str
    openai_endpoint: str
    openai_key: str
    openai_deployment_name: str
    host_name: str = Field(..., description="Public base URL used in callback URLs")
    openai_api_version: str = DEFAULT_OPENAI_API_VERSION

    @field_validator("host_name")
    def strip_trailing_slash(cls, v):
        """Callback URLs are built as host_name + path."""
        return v.rstrip("/")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        environ: Mapping to read instead of ``os.environ`` (used by tests).
            When omitted, ``.env`` is loaded first if present.

    Returns:
        The resolved settings

    Raises:
        ConfigurationError: If any required variable is unset or blank
    """
    if environ is None:
        env_path = Path(".") / ".env"
        if env_path.exists():
            dotenv.load_dotenv(env_path)
        environ = os.environ

    values = {}
    missing = []
    for variable, field_name in REQUIRED_VARIABLES.items():
        value = (environ.get(variable) or "").strip()
        if value:
            values[field_name] = value
        else:
            missing.append(variable)

    if missing:
        raise ConfigurationError(missing)

    api_version = (environ.get("OPENAI_API_VERSION") or "").strip()
    if api_version:
        values["openai_api_version"] = api_version

    return Settings(**values)
