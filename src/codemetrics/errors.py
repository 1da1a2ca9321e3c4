"""Typed request errors and their JSON-RPC error codes."""

from __future__ import annotations

from typing import Any

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData

# Server-defined codes live in the JSON-RPC reserved range -32000..-32099.
FILE_UNREADABLE = -32001
SCAN_FAILED = -32002


class CodemetricsError(Exception):
    """Base for every error that reaches the client as a structured error."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, data: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = data

    def to_error_data(self) -> ErrorData:
        if self.data is None:
            return ErrorData(code=self.code, message=self.message)
        return ErrorData(code=self.code, message=self.message, data=self.data)


class InvalidPathError(CodemetricsError):
    """The supplied path string cannot be resolved to a filesystem path."""

    code = INVALID_PARAMS

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid path: {path!r}", {"path": path})
        self.path = path


class InvalidArgumentsError(CodemetricsError):
    """Request params or tool arguments do not match the input contract."""

    code = INVALID_PARAMS


class FileUnreadableError(CodemetricsError):
    """The path is well formed but the target is missing, forbidden or not a regular file."""

    code = FILE_UNREADABLE

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"File not found or unreadable: {path} ({reason})", {"path": path})
        self.path = path


class ScanError(CodemetricsError):
    """The root of a directory scan cannot be read."""

    code = SCAN_FAILED

    def __init__(self, root: str, reason: str) -> None:
        super().__init__(f"Cannot scan {root}: {reason}", {"path": root})
        self.root = root


class _UnknownIdentifierError(CodemetricsError):
    code = METHOD_NOT_FOUND
    kind = "identifier"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Unknown {self.kind}: {identifier}", {"identifier": identifier})
        self.identifier = identifier


class UnknownResourceError(_UnknownIdentifierError):
    kind = "resource"


class UnknownToolError(_UnknownIdentifierError):
    kind = "tool"


class UnknownPromptError(_UnknownIdentifierError):
    kind = "prompt"


class UnknownMethodError(_UnknownIdentifierError):
    kind = "method"


class HandlerFailure(CodemetricsError):
    """Any other exception raised while servicing a request."""

    code = INTERNAL_ERROR
