"""Type definitions for the image creator server.

- domain: generation requests, model identifiers and generated images
- protocol: JSON-RPC envelopes and MCP tool messages
"""

from gemini_image_creator.types.domain import (
    DEFAULT_MAX_PROMPT_LENGTH,
    GeneratedImage,
    GenerationRequest,
    ModelIdentifier,
)
from gemini_image_creator.types.protocol import (
    CallToolResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    TextContent,
    Tool,
)

__all__ = [
    "DEFAULT_MAX_PROMPT_LENGTH",
    "CallToolResult",
    "GeneratedImage",
    "GenerationRequest",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "ModelIdentifier",
    "TextContent",
    "Tool",
]
