"""Gemini generateContent client."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

import httpx

from gemini_image_creator.config import DEFAULT_API_BASE_URL
from gemini_image_creator.errors import (
    ApiError,
    AuthenticationError,
    InvalidPromptError,
    NetworkError,
    RateLimitError,
)
from gemini_image_creator.types import GeneratedImage, GenerationRequest, ModelIdentifier

logger = logging.getLogger(__name__)

# Image generation timeout (seconds)
DEFAULT_TIMEOUT = 60.0


class GeminiClient:
    """ImageGenerator backed by the Gemini REST API.

    Issues a single POST per request; no retries. The API key is sent as the
    ``key`` query parameter.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    def build_url(self, model: ModelIdentifier) -> str:
        return f"{self._base_url}/models/{model}:generateContent"

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> GeminiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def generate(self, request: GenerationRequest) -> GeneratedImage:
        url = self.build_url(request.model)
        body = {"contents": [{"parts": [{"text": request.prompt}]}]}

        logger.info(f"Generating image with {request.model}: {request.prompt[:100]}...")

        try:
            response = await self._http.post(url, params={"key": self._api_key}, json=body)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timeout: {e}") from e
        except httpx.ConnectError as e:
            raise NetworkError(f"Connection error: {e}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"HTTP error: {e}") from e

        if not response.is_success:
            _raise_for_status(response)

        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError(f"Malformed response body: {e}") from e

        data, mime_type = extract_image_data(payload)
        logger.info(f"Received {len(data)} bytes of {mime_type} from {request.model}")
        return GeneratedImage(data=data, model=request.model, mime_type=mime_type)


def _raise_for_status(response: httpx.Response) -> None:
    status = response.status_code
    text = response.text
    logger.warning(f"Gemini API returned status {status}")
    if status == 401:
        raise AuthenticationError()
    if status == 429:
        raise RateLimitError()
    if status == 400:
        raise InvalidPromptError(text)
    raise ApiError(f"API returned status {status}: {text}", status=status, body=text)


def extract_image_data(payload: Any) -> tuple[bytes, str]:
    """Pull the first inline image out of a generateContent response.

    Returns:
        Decoded image bytes and their MIME type

    Raises:
        ApiError: no candidate, no image part, or undecodable inline data
    """
    candidates = payload.get("candidates") if isinstance(payload, dict) else None
    if not candidates or not isinstance(candidates, list):
        raise ApiError("No candidates in response")

    candidate = candidates[0] if isinstance(candidates[0], dict) else {}
    content = candidate.get("content")
    parts = (content.get("parts") or []) if isinstance(content, dict) else []

    text_response = None
    for part in parts:
        if not isinstance(part, dict):
            continue
        inline_data = part.get("inlineData")
        if inline_data is not None:
            break
        if part.get("text") and text_response is None:
            text_response = part["text"]
    else:
        error_msg = "No image data in response"
        if text_response:
            error_msg += f". Model response: {text_response}"
        raise ApiError(error_msg)

    encoded = inline_data.get("data") if isinstance(inline_data, dict) else None
    if not isinstance(encoded, str):
        raise ApiError("No inline data")

    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ApiError(f"Failed to decode base64: {e}") from e

    return data, inline_data.get("mimeType") or "image/png"
