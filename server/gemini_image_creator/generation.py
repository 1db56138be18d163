"""Image generation port."""

from typing import Protocol

from gemini_image_creator.types import GeneratedImage, GenerationRequest


class ImageGenerator(Protocol):
    """Something that can turn a generation request into an image.

    Implementations raise a GenerationError subclass on failure.
    """

    async def generate(self, request: GenerationRequest) -> GeneratedImage: ...
