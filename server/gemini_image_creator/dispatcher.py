"""JSON-RPC method dispatch onto the tool server."""

import logging
from typing import Any

from gemini_image_creator import __version__
from gemini_image_creator.config import JsonRpcErrorCodes
from gemini_image_creator.errors import ImageCreatorError
from gemini_image_creator.tool_server import ToolServer
from gemini_image_creator.types import JsonRpcRequest, JsonRpcResponse

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "google-gemini-image-creator"


class Dispatcher:
    """Maps initialize, tools/list and tools/call onto a ToolServer.

    Holds no per-session state; every request is answered on its own.
    """

    def __init__(
        self,
        tool_server: ToolServer,
        jsonrpc_version: str = "2.0",
        error_codes: JsonRpcErrorCodes | None = None,
    ) -> None:
        self.tool_server = tool_server
        self.jsonrpc_version = jsonrpc_version
        self.error_codes = error_codes or JsonRpcErrorCodes()

    def _ok(self, id: Any, result: dict[str, Any]) -> JsonRpcResponse:
        return JsonRpcResponse.success(self.jsonrpc_version, id, result)

    def _error(self, id: Any, code: int, message: str) -> JsonRpcResponse:
        return JsonRpcResponse.failure(self.jsonrpc_version, id, code, message)

    async def dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse:
        log_extra = {"request_id": request.id, "method": request.method}

        if request.method == "initialize":
            logger.info("Handling initialize request", extra=log_extra)
            return self._ok(
                request.id,
                {
                    "protocolVersion": PROTOCOL_VERSION,
                    "capabilities": {"tools": {}},
                    "serverInfo": {"name": SERVER_NAME, "version": __version__},
                },
            )

        if request.method == "tools/list":
            logger.info("Handling tools/list request", extra=log_extra)
            tools = [t.model_dump(by_alias=True) for t in self.tool_server.list_tools()]
            return self._ok(request.id, {"tools": tools})

        if request.method == "tools/call":
            return await self._handle_tools_call(request, log_extra)

        logger.warning(f"Method not found: {request.method}", extra=log_extra)
        return self._error(
            request.id, self.error_codes.method_not_found, f"Method not found: {request.method}"
        )

    async def _handle_tools_call(
        self, request: JsonRpcRequest, log_extra: dict[str, Any]
    ) -> JsonRpcResponse:
        params = request.params
        if params is None:
            return self._error(
                request.id, self.error_codes.invalid_request, "Missing params for tools/call"
            )

        name = params.get("name")
        if not isinstance(name, str):
            return self._error(
                request.id, self.error_codes.invalid_request, "Missing 'name' in params"
            )

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, dict):
            return self._error(
                request.id, self.error_codes.invalid_request, "'arguments' must be an object"
            )

        logger.info(f"Handling tools/call request: {name}", extra=log_extra)

        try:
            result = await self.tool_server.call_tool(name, arguments)
        except ImageCreatorError as e:
            logger.error(f"Tool call failed: {e}", extra=log_extra)
            return self._error(request.id, self.error_codes.internal_error, f"Internal error: {e}")
        except Exception as e:
            logger.exception(f"Unexpected failure in tool {name}", extra=log_extra)
            return self._error(request.id, self.error_codes.internal_error, f"Internal error: {e}")

        return self._ok(request.id, result.model_dump(by_alias=True))
