"""JSON-RPC envelope helpers over the MCP SDK's message types."""

from __future__ import annotations

from typing import Any

from mcp.types import (
    INVALID_REQUEST,
    PARSE_ERROR,
    ErrorData,
    JSONRPCError,
    JSONRPCResponse,
    RequestId,
)
from pydantic import BaseModel, ValidationError

METHOD_INITIALIZE = "initialize"
METHOD_PING = "ping"
METHOD_LIST_RESOURCES = "resources/list"
METHOD_READ_RESOURCE = "resources/read"
METHOD_LIST_TOOLS = "tools/list"
METHOD_CALL_TOOL = "tools/call"
METHOD_LIST_PROMPTS = "prompts/list"
METHOD_GET_PROMPT = "prompts/get"

Reply = JSONRPCResponse | JSONRPCError


def success(request_id: RequestId, result: BaseModel) -> JSONRPCResponse:
    payload: dict[str, Any] = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return JSONRPCResponse(jsonrpc="2.0", id=request_id, result=payload)


def failure(request_id: RequestId | None, error: ErrorData) -> JSONRPCError:
    return JSONRPCError(jsonrpc="2.0", id=request_id, error=error)


def malformed(exc: Exception) -> JSONRPCError:
    """Error reply for a line the transport could not decode into a message.

    Invalid JSON is a parse error; well-formed JSON that is not a JSON-RPC
    message is an invalid request. Neither carries a usable id.
    """
    if isinstance(exc, ValidationError) and any(
        err["type"] == "json_invalid" for err in exc.errors()
    ):
        return failure(None, ErrorData(code=PARSE_ERROR, message="Parse error"))
    return failure(None, ErrorData(code=INVALID_REQUEST, message=f"Invalid request: {exc}"))
