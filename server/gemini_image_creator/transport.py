"""Newline-delimited JSON-RPC over stdin/stdout."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

import pydantic

from gemini_image_creator.dispatcher import Dispatcher
from gemini_image_creator.gemini import GeminiClient
from gemini_image_creator.tool_server import ToolServer
from gemini_image_creator.types import JsonRpcRequest, JsonRpcResponse

if TYPE_CHECKING:
    from typing import BinaryIO, TextIO

    from gemini_image_creator.config import Settings

logger = logging.getLogger(__name__)


async def handle_line(dispatcher: Dispatcher, line: str) -> dict[str, Any]:
    """Resolve one input line into exactly one response payload."""
    codes = dispatcher.error_codes
    version = dispatcher.jsonrpc_version

    try:
        raw = json.loads(line)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized integer literals, nesting too deep
        logger.error(f"Failed to parse request: {e} - Input: {line[:200]}")
        return JsonRpcResponse.failure(
            version, None, codes.parse_error, f"Parse error: {e}"
        ).to_wire()

    try:
        request = JsonRpcRequest.model_validate(raw)
    except pydantic.ValidationError as e:
        request_id = raw.get("id") if isinstance(raw, dict) else None
        logger.error(f"Invalid request: {e.error_count()} validation error(s)")
        return JsonRpcResponse.failure(
            version, request_id, codes.invalid_request, "Invalid Request"
        ).to_wire()

    try:
        response = await dispatcher.dispatch(request)
    except Exception as e:
        logger.exception("Error handling request", extra={"request_id": request.id})
        response = JsonRpcResponse.failure(
            version, request.id, codes.internal_error, f"Internal error: {e}"
        )
    return response.to_wire()


async def serve(dispatcher: Dispatcher, reader: TextIO | BinaryIO, writer: TextIO) -> None:
    """Answer requests line by line until the reader reaches EOF.

    Lines are handled strictly one at a time; the next line is not read until
    the current response has been written. Text readers are read through their
    underlying byte buffer when they have one, and undecodable bytes are
    replaced so that a bad line is answered with a parse error.
    """
    stream = getattr(reader, "buffer", reader)
    while True:
        raw = await asyncio.to_thread(stream.readline)
        if not raw:
            break
        line = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
        line = line.strip()
        if not line:
            continue

        payload = await handle_line(dispatcher, line)
        writer.write(json.dumps(payload) + "\n")
        writer.flush()

    logger.info("Input closed, stopping")


async def run_stdio_server(
    settings: Settings,
    reader: TextIO | None = None,
    writer: TextIO | None = None,
) -> None:
    """Wire up the Gemini client, tool server and dispatcher, then serve stdio."""
    async with GeminiClient(
        settings.gemini_api_key,
        base_url=settings.gemini_api_base_url,
        timeout=settings.gemini_request_timeout,
    ) as client:
        dispatcher = Dispatcher(
            ToolServer.from_settings(settings, client),
            jsonrpc_version=settings.jsonrpc_version,
            error_codes=settings.error_codes,
        )
        logger.info("MCP Server initialized")
        await serve(dispatcher, reader or sys.stdin, writer or sys.stdout)
