"""Application configuration."""

import logging
from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_image_creator.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash-image"


@dataclass(frozen=True)
class JsonRpcErrorCodes:
    """Error codes used in JSON-RPC error responses."""

    parse_error: int = -32700
    invalid_request: int = -32600
    method_not_found: int = -32601
    internal_error: int = -32603


class Settings(BaseSettings):
    """Server settings loaded from environment variables and an optional .env file.

    Built once at startup and handed to every component. Instances are frozen.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )

    # Required
    gemini_api_key: str = ""

    # Gemini
    gemini_api_base_url: str = DEFAULT_API_BASE_URL
    gemini_default_model: str = DEFAULT_MODEL
    gemini_allowed_models: str = ""  # comma-separated, empty means unrestricted
    gemini_request_timeout: float = 60.0  # seconds
    max_prompt_length: int = 10000

    # JSON-RPC
    jsonrpc_version: str = "2.0"
    jsonrpc_parse_error: int = -32700
    jsonrpc_invalid_request: int = -32600
    jsonrpc_method_not_found: int = -32601
    jsonrpc_internal_error: int = -32603

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None

    @property
    def allowed_models(self) -> tuple[str, ...]:
        """Allow-list parsed from GEMINI_ALLOWED_MODELS."""
        return tuple(m.strip() for m in self.gemini_allowed_models.split(",") if m.strip())

    @property
    def error_codes(self) -> JsonRpcErrorCodes:
        return JsonRpcErrorCodes(
            parse_error=self.jsonrpc_parse_error,
            invalid_request=self.jsonrpc_invalid_request,
            method_not_found=self.jsonrpc_method_not_found,
            internal_error=self.jsonrpc_internal_error,
        )


def load_settings(**overrides: object) -> Settings:
    """Build settings from the environment.

    Raises:
        ConfigurationError: GEMINI_API_KEY is missing or blank.
    """
    settings = Settings(**overrides)  # type: ignore[arg-type]
    if not settings.gemini_api_key.strip():
        raise ConfigurationError("GEMINI_API_KEY environment variable is required")
    if settings.allowed_models:
        logger.info(f"Model allow-list: {', '.join(settings.allowed_models)}")
    return settings
