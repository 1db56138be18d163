"""MCP tool server exposing the generate_image tool."""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from gemini_image_creator.errors import (
    GenerationError,
    ImageGenerationFailedError,
    MissingParameterError,
    UnknownToolError,
    ValidationError,
)
from gemini_image_creator.types import (
    CallToolResult,
    GeneratedImage,
    GenerationRequest,
    ModelIdentifier,
    TextContent,
    Tool,
)
from gemini_image_creator.use_case import GenerateImageUseCase

if TYPE_CHECKING:
    from gemini_image_creator.config import Settings
    from gemini_image_creator.generation import ImageGenerator

logger = logging.getLogger(__name__)

GENERATE_IMAGE_TOOL = "generate_image"

GENERATE_IMAGE_DESCRIPTION = (
    "Generate images from text prompts using Google Gemini's Banana "
    "(image generation feature)."
)


def build_generate_image_tool(default_model: str, allowed_models: Sequence[str] = ()) -> Tool:
    """Describe generate_image.

    With an allow-list the model parameter becomes an enum; otherwise it is a
    free-form string with the default shown as a hint.
    """
    model_schema: dict[str, Any]
    if allowed_models:
        model_schema = {
            "type": "string",
            "description": "Gemini model name to use",
            "enum": list(allowed_models),
            "default": default_model,
        }
    else:
        model_schema = {
            "type": "string",
            "description": (
                "Gemini model name to use "
                "(can be restricted via GEMINI_ALLOWED_MODELS environment variable)"
            ),
            "default": default_model,
        }

    return Tool(
        name=GENERATE_IMAGE_TOOL,
        description=GENERATE_IMAGE_DESCRIPTION,
        input_schema={
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "Text prompt for image generation",
                },
                "model": model_schema,
            },
            "required": ["prompt"],
        },
    )


class ToolServer:
    """Holds the single generate_image tool and routes calls to the use case.

    The default model and allow-list are fixed when the server is built.
    """

    def __init__(
        self,
        use_case: GenerateImageUseCase,
        default_model: str,
        allowed_models: Sequence[str] = (),
    ) -> None:
        self._use_case = use_case
        self._default_model = default_model
        self._allowed_models = tuple(allowed_models)
        self._tools = [build_generate_image_tool(default_model, self._allowed_models)]

    @classmethod
    def from_settings(cls, settings: Settings, generator: ImageGenerator) -> ToolServer:
        use_case = GenerateImageUseCase(generator, max_prompt_length=settings.max_prompt_length)
        return cls(
            use_case,
            default_model=settings.gemini_default_model,
            allowed_models=settings.allowed_models,
        )

    def list_tools(self) -> list[Tool]:
        return list(self._tools)

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Invoke a tool by name.

        Raises:
            UnknownToolError: name is not generate_image
            MissingParameterError: prompt is absent or not a string
            InvalidModelError: model is not in the allow-list
            ImageGenerationFailedError: prompt failed validation or the remote
                call failed; the original error is on ``error``
        """
        if name != GENERATE_IMAGE_TOOL:
            raise UnknownToolError(name)
        return await self._handle_generate_image(arguments)

    def parse_request(self, arguments: dict[str, Any]) -> GenerationRequest:
        """Decode tool arguments into a generation request."""
        prompt = arguments.get("prompt")
        if not isinstance(prompt, str):
            raise MissingParameterError("prompt")

        model_arg = arguments.get("model")
        if isinstance(model_arg, str):
            model = ModelIdentifier.parse(model_arg, self._allowed_models)
        else:
            model = ModelIdentifier(self._default_model)

        return GenerationRequest(prompt=prompt, model=model)

    async def _handle_generate_image(self, arguments: dict[str, Any]) -> CallToolResult:
        logger.info("Handling generate_image request")
        request = self.parse_request(arguments)

        try:
            image = await self._use_case.execute(request)
        except (ValidationError, GenerationError) as e:
            raise ImageGenerationFailedError(e) from e

        return CallToolResult(content=[TextContent(text=encode_image_result(image))])


def encode_image_result(image: GeneratedImage) -> str:
    """Render a generated image as the JSON text returned to the client."""
    return json.dumps(
        {
            "image_data": base64.standard_b64encode(image.data).decode("utf-8"),
            "model": str(image.model),
            "generated_at": image.generated_at.isoformat(),
            "size_bytes": image.size_bytes,
        }
    )
