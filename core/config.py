# =============================================================================
# core/config.py  —  Runtime Settings for the Hotel Content Adapter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads every tunable of the adapter from environment variables (and a
#   local .env file) into frozen pydantic-settings models:
#     - UpstreamSettings  → where the vendor API lives and how to talk to it
#     - SearchDefaults    → constants injected into every location search
#     - ServerSettings    → which MCP transport to run and where
#
# MALFORMED VALUES:
#   A number that does not parse, or is out of range, falls back to its
#   default with a warning.  So does an unknown LOG_LEVEL.  An unknown
#   MCP_TRANSPORT is a ValidationError: the server cannot guess where to
#   listen.
#
# NOTHING HERE TOUCHES THE NETWORK.  Tests build Settings(...) directly.
# =============================================================================

import logging
from typing import Any, Literal, Optional

from pydantic import Field, ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


DEFAULT_FEED_ID = "1714d37c-2a14-460d-8344-cdff5cf02018"
DEFAULT_SEARCH_PATH = "/generic-api-service/royal/hotel/search-by-location"
DEFAULT_RESERVATION_TEMPLATE = (
    "https://www.etstur.com/checkout/checkout/hotel/step1"
    "?bookingUuid=de8af0a4-4134-4a09-96c2-9316e89cbed1"
    " here is the link to the reservation. Have a wonderful stay with ETSTUR!"
)
DEFAULT_LOG_LEVEL = "INFO"


def normalize_log_level(value: Any) -> str:
    """Upper-case a level name; unknown names become INFO (with a warning)."""
    level = str(value or "").strip().upper()
    if not level:
        return DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring LOG_LEVEL=%r (unknown level), using %s", value, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return level


def _default_on_malformed(model: type[BaseSettings], value: Any, handler, info: ValidationInfo):
    try:
        return handler(value)
    except ValidationError:
        default = model.model_fields[info.field_name].default
        logger.warning("Ignoring %s=%r (invalid), using %s", info.field_name, value, default)
        return default


_ENV_CONFIG = dict(
    env_file=".env",
    env_ignore_empty=True,
    extra="ignore",
    frozen=True,
    populate_by_name=True,
)


class UpstreamSettings(BaseSettings):
    """Connection details for the vendor hotel-content API."""

    model_config = SettingsConfigDict(env_prefix="HOTEL_API_", **_ENV_CONFIG)

    base_url: str = "http://localhost:8080"
    auth_token: str = ""
    accept_language: str = "tr"
    currency: str = "TRY"
    timeout_seconds: float = Field(30.0, gt=0, validation_alias="HOTEL_API_TIMEOUT")

    # Language segment of /content-service/hotel-detail/{language}/{code}
    detail_language: str = Field("es", validation_alias="HOTEL_DETAIL_LANGUAGE")

    # Body of the autocomplete POST
    autocomplete_language: str = Field("tr", validation_alias="HOTEL_AUTOCOMPLETE_LANGUAGE")
    autocomplete_size: int = Field(30, ge=1, validation_alias="HOTEL_AUTOCOMPLETE_SIZE")

    search_path: str = Field(DEFAULT_SEARCH_PATH, validation_alias="HOTEL_SEARCH_PATH")

    @field_validator("timeout_seconds", "autocomplete_size", mode="wrap")
    @classmethod
    def _numbers_fall_back(cls, value, handler, info: ValidationInfo):
        return _default_on_malformed(cls, value, handler, info)


class SearchDefaults(BaseSettings):
    """Values the caller never supplies; they are injected into every search."""

    model_config = SettingsConfigDict(env_prefix="HOTEL_SEARCH_", **_ENV_CONFIG)

    feed_id: str = DEFAULT_FEED_ID
    limit: int = Field(5, ge=1)
    offset: int = Field(300, ge=0)

    @field_validator("limit", "offset", mode="wrap")
    @classmethod
    def _numbers_fall_back(cls, value, handler, info: ValidationInfo):
        return _default_on_malformed(cls, value, handler, info)


class ServerSettings(BaseSettings):
    """How the MCP server is exposed."""

    model_config = SettingsConfigDict(env_prefix="MCP_", **_ENV_CONFIG)

    transport: Literal["stdio", "sse", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)
    log_level: str = Field(DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")

    @field_validator("transport", mode="before")
    @classmethod
    def _lowercase_transport(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("port", mode="wrap")
    @classmethod
    def _port_falls_back(cls, value, handler, info: ValidationInfo):
        return _default_on_malformed(cls, value, handler, info)

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_log_level(cls, value):
        return normalize_log_level(value)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HOTEL_", **_ENV_CONFIG)

    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    search: SearchDefaults = Field(default_factory=SearchDefaults)
    server: ServerSettings = Field(default_factory=ServerSettings)
    reservation_template: str = DEFAULT_RESERVATION_TEMPLATE


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """Build Settings from environment variables and an optional .env file.

    Environment variables win over the file; unset values keep their
    defaults.

    Args:
        env_file: Path of the dotenv file, or None to read the environment only.

    Raises:
        pydantic.ValidationError: MCP_TRANSPORT names an unsupported transport.
    """
    settings = Settings(
        upstream=UpstreamSettings(_env_file=env_file),
        search=SearchDefaults(_env_file=env_file),
        server=ServerSettings(_env_file=env_file),
        _env_file=env_file,
    )
    if not settings.upstream.auth_token:
        logger.warning("HOTEL_API_AUTH_TOKEN is not set; upstream calls will be unauthenticated")
    return settings
