"""JSON-RPC envelope and MCP tool message types."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# JSON-RPC


class JsonRpcRequest(BaseModel):
    """Incoming JSON-RPC request. The id is opaque and echoed back as-is."""

    jsonrpc: str = "2.0"
    id: Any = None
    method: str
    params: dict[str, Any] | None = None


class JsonRpcError(BaseModel):
    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """Outgoing JSON-RPC response carrying exactly one of result or error."""

    jsonrpc: str
    id: Any = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, version: str, id: Any, result: dict[str, Any]) -> "JsonRpcResponse":
        return cls(jsonrpc=version, id=id, result=result)

    @classmethod
    def failure(cls, version: str, id: Any, code: int, message: str) -> "JsonRpcResponse":
        return cls(jsonrpc=version, id=id, error=JsonRpcError(code=code, message=message))

    def to_wire(self) -> dict[str, Any]:
        """Serialize for the transport: id is always present, null when absent."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result if self.result is not None else {}
        return payload


# MCP


class Tool(BaseModel):
    """Tool descriptor returned by tools/list."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str | None = None
    input_schema: dict[str, Any] = Field(alias="inputSchema")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class CallToolResult(BaseModel):
    """Result of a tools/call invocation."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    is_error: bool = Field(default=False, alias="isError")
