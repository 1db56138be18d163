"""Exception hierarchy for the image creator server."""


class ImageCreatorError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(ImageCreatorError):
    """Required startup configuration is missing or invalid."""


# Validation


class ValidationError(ImageCreatorError):
    """A generation request failed local validation."""


class EmptyPromptError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Prompt cannot be empty")


class PromptTooLongError(ValidationError):
    def __init__(self, length: int, max_length: int) -> None:
        self.length = length
        self.max_length = max_length
        super().__init__(f"Prompt too long: {length} bytes (max: {max_length})")


class InvalidModelError(ImageCreatorError):
    def __init__(self, model: str) -> None:
        self.model = model
        super().__init__(f"Invalid model: Model '{model}' is not in the allowed list")


# Remote generation


class GenerationError(ImageCreatorError):
    """The remote image generation call failed."""


class AuthenticationError(GenerationError):
    def __init__(self, message: str = "Invalid API key") -> None:
        super().__init__(f"API authentication error: {message}")


class RateLimitError(GenerationError):
    def __init__(self, message: str = "Rate limit exceeded") -> None:
        super().__init__(f"Rate limit exceeded: {message}")


class InvalidPromptError(GenerationError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid prompt: {message}")


class NetworkError(GenerationError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Network error: {message}")


class ApiError(GenerationError):
    def __init__(self, message: str, status: int | None = None, body: str | None = None) -> None:
        self.status = status
        self.body = body
        super().__init__(f"API error: {message}")


class UnknownGenerationError(GenerationError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Unknown error: {message}")


# Tool calls


class ToolError(ImageCreatorError):
    """A tool call could not be decoded or routed."""


class UnknownToolError(ToolError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class MissingParameterError(ToolError):
    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f"Missing required parameter: {parameter}")


class ImageGenerationFailedError(ToolError):
    """The generate_image use case failed; the underlying error is kept as ``error``."""

    def __init__(self, error: ImageCreatorError) -> None:
        self.error = error
        super().__init__(f"Image generation failed: {error}")
