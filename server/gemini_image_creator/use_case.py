"""Generate-image use case: validate, then call the generator once."""

from gemini_image_creator.generation import ImageGenerator
from gemini_image_creator.types import DEFAULT_MAX_PROMPT_LENGTH, GeneratedImage, GenerationRequest


class GenerateImageUseCase:
    def __init__(
        self, generator: ImageGenerator, max_prompt_length: int = DEFAULT_MAX_PROMPT_LENGTH
    ) -> None:
        self._generator = generator
        self._max_prompt_length = max_prompt_length

    async def execute(self, request: GenerationRequest) -> GeneratedImage:
        """Generate an image for a validated request.

        Raises:
            ValidationError: request failed validation; the generator is not called
            GenerationError: the generator failed
        """
        request.validate(self._max_prompt_length)
        return await self._generator.generate(request)
