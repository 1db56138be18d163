"""Image generation domain types."""

from collections.abc import Collection
from dataclasses import dataclass, field
from datetime import UTC, datetime

from gemini_image_creator.errors import EmptyPromptError, InvalidModelError, PromptTooLongError

DEFAULT_MAX_PROMPT_LENGTH = 10000


@dataclass(frozen=True)
class ModelIdentifier:
    """Name of a Gemini model, checked against the configured allow-list."""

    name: str

    @classmethod
    def parse(cls, text: str, allowed_models: Collection[str] = ()) -> "ModelIdentifier":
        """Build an identifier from free text.

        An empty allow-list accepts every name.

        Raises:
            InvalidModelError: allow-list is non-empty and does not contain text
        """
        if allowed_models and text not in allowed_models:
            raise InvalidModelError(text)
        return cls(text)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class GenerationRequest:
    """A single text-to-image request."""

    prompt: str
    model: ModelIdentifier

    def validate(self, max_prompt_length: int = DEFAULT_MAX_PROMPT_LENGTH) -> None:
        """Check the prompt.

        Length is measured in UTF-8 bytes, not user-perceived characters. Lone
        surrogates (legal in JSON strings) count as their three encoded bytes.

        Raises:
            EmptyPromptError: prompt is empty or whitespace only
            PromptTooLongError: prompt is longer than max_prompt_length
        """
        if not self.prompt.strip():
            raise EmptyPromptError()
        length = len(self.prompt.encode("utf-8", errors="surrogatepass"))
        if length > max_prompt_length:
            raise PromptTooLongError(length, max_prompt_length)


@dataclass(frozen=True)
class GeneratedImage:
    """Decoded image bytes returned by the remote model."""

    data: bytes
    model: ModelIdentifier
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    mime_type: str = "image/png"

    @property
    def size_bytes(self) -> int:
        return len(self.data)
