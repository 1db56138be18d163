"""Shared fixtures for the image creator tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from gemini_image_creator.config import Settings
from gemini_image_creator.dispatcher import Dispatcher
from gemini_image_creator.tool_server import ToolServer
from gemini_image_creator.types import GeneratedImage, GenerationRequest
from gemini_image_creator.use_case import GenerateImageUseCase


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the process environment and .env files."""
    return Settings(_env_file=None, gemini_api_key="test-key")  # type: ignore[call-arg]


@pytest.fixture
def image_bytes() -> bytes:
    return b"\x89PNG\r\n\x1a\nfake-image-data"


@pytest.fixture
def generator(image_bytes: bytes) -> MagicMock:
    """ImageGenerator stand-in; requests are recorded on generator.generate."""

    def _generate(request: GenerationRequest) -> GeneratedImage:
        return GeneratedImage(data=image_bytes, model=request.model)

    generator = MagicMock()
    generator.generate = AsyncMock(side_effect=_generate)
    return generator


@pytest.fixture
def tool_server(generator: MagicMock) -> ToolServer:
    return ToolServer(GenerateImageUseCase(generator), default_model="gemini-2.5-flash-image")


@pytest.fixture
def dispatcher(tool_server: ToolServer) -> Dispatcher:
    return Dispatcher(tool_server)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of Settings."""
    for name in (
        "GEMINI_API_KEY",
        "GEMINI_API_BASE_URL",
        "GEMINI_DEFAULT_MODEL",
        "GEMINI_ALLOWED_MODELS",
        "GEMINI_REQUEST_TIMEOUT",
        "MAX_PROMPT_LENGTH",
        "JSONRPC_VERSION",
        "JSONRPC_PARSE_ERROR",
        "JSONRPC_INVALID_REQUEST",
        "JSONRPC_METHOD_NOT_FOUND",
        "JSONRPC_INTERNAL_ERROR",
        "LOG_LEVEL",
        "LOG_JSON",
        "LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
