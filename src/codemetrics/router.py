"""Request router: one typed request in, one typed response out.

Dispatch is a flat table keyed by method name. Resources, tools and prompts
each have their own exact-match table; unknown identifiers raise the matching
``Unknown*Error``. Every handler runs inside a single wrapper that turns
typed errors into their structured error and any other exception into a
``HandlerFailure``, so the router itself never raises.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable
from typing import Any

from mcp.types import (
    CallToolRequest,
    CallToolResult,
    EmptyResult,
    GetPromptRequest,
    GetPromptResult,
    Implementation,
    InitializeRequest,
    InitializeResult,
    JSONRPCRequest,
    ListPromptsRequest,
    ListPromptsResult,
    ListResourcesRequest,
    ListResourcesResult,
    ListToolsRequest,
    ListToolsResult,
    PingRequest,
    PromptMessage,
    PromptsCapability,
    ReadResourceRequest,
    ReadResourceResult,
    ResourcesCapability,
    ServerCapabilities,
    TextContent,
    TextResourceContents,
    ToolsCapability,
)
from mcp.types.version import HANDSHAKE_PROTOCOL_VERSIONS, LATEST_HANDSHAKE_VERSION
from pydantic import BaseModel, ValidationError

from codemetrics import registry
from codemetrics.config import CodemetricsConfig
from codemetrics.errors import (
    CodemetricsError,
    HandlerFailure,
    InvalidArgumentsError,
    UnknownMethodError,
    UnknownPromptError,
    UnknownResourceError,
    UnknownToolError,
)
from codemetrics.protocol import (
    METHOD_CALL_TOOL,
    METHOD_GET_PROMPT,
    METHOD_INITIALIZE,
    METHOD_LIST_PROMPTS,
    METHOD_LIST_RESOURCES,
    METHOD_LIST_TOOLS,
    METHOD_PING,
    METHOD_READ_RESOURCE,
    Reply,
    failure,
    success,
)
from codemetrics.registry import (
    AnalyzePathArgs,
    GenerateDocumentationArgs,
    PromptName,
    ResourceUri,
    ToolName,
)
from codemetrics.report import (
    render_directory_report,
    render_markdown,
    render_review_prompt,
)
from codemetrics.scanner.scanner import scan_tree
from codemetrics.scanner.types import DirectoryReport
from codemetrics.tools.analyze_path import analyze_path
from codemetrics.tools.generate_documentation import generate_documentation

logger = logging.getLogger(__name__)

INSTRUCTIONS = "\n".join([
    "Code metrics for the configured project root.",
    "",
    "Tools:",
    "- analyze_path(path): Line counts and complexity for a file, or a full report for a directory.",
    "- generate_documentation(projectName, format?): Markdown or JSON overview of the project.",
    "",
    "Resources: codebase://project/structure (JSON), docs://generated/readme (Markdown).",
    "Prompt: code_review summarises files, lines and languages for a review.",
])

MethodHandler = Callable[[Any], Awaitable[BaseModel]]


def _validate(model: type[BaseModel], data: dict[str, Any]) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'params'}: {err['msg']}"
            for err in exc.errors()
        )
        raise InvalidArgumentsError(f"Invalid arguments: {details}") from exc


class Router:
    """Dispatches requests against the static capability registry.

    The only state is the immutable config handed in at construction.
    """

    def __init__(self, config: CodemetricsConfig) -> None:
        self.config = config
        # method -> (SDK request model validating the params, handler)
        self._methods: dict[str, tuple[type[BaseModel], MethodHandler]] = {
            METHOD_INITIALIZE: (InitializeRequest, self._initialize),
            METHOD_PING: (PingRequest, self._ping),
            METHOD_LIST_RESOURCES: (ListResourcesRequest, self._list_resources),
            METHOD_READ_RESOURCE: (ReadResourceRequest, self._read_resource),
            METHOD_LIST_TOOLS: (ListToolsRequest, self._list_tools),
            METHOD_CALL_TOOL: (CallToolRequest, self._call_tool),
            METHOD_LIST_PROMPTS: (ListPromptsRequest, self._list_prompts),
            METHOD_GET_PROMPT: (GetPromptRequest, self._get_prompt),
        }
        self._resources: dict[ResourceUri, Callable[[], Awaitable[str]]] = {
            registry.PROJECT_STRUCTURE_URI: self._project_structure,
            registry.GENERATED_README_URI: self._generated_readme,
        }
        self._tools: dict[ToolName, Callable[[dict[str, Any]], Awaitable[str]]] = {
            registry.ANALYZE_PATH: self._analyze_path,
            registry.GENERATE_DOCUMENTATION: self._generate_documentation,
        }
        self._prompts: dict[PromptName, Callable[[], Awaitable[GetPromptResult]]] = {
            registry.CODE_REVIEW: self._code_review,
        }

    @property
    def root(self) -> str:
        return str(self.config.root)

    async def dispatch(self, request: JSONRPCRequest) -> Reply:
        """Resolve one request completely. Never raises."""
        try:
            entry = self._methods.get(request.method)
            if entry is None:
                raise UnknownMethodError(request.method)
            model, handler = entry
            typed = _validate(model, {"method": request.method, "params": request.params})
            result = await handler(typed)
        except CodemetricsError as exc:
            logger.warning("Request %s (%s) failed: %s", request.id, request.method, exc.message)
            return failure(request.id, exc.to_error_data())
        except Exception as exc:
            logger.exception("Request %s (%s) raised", request.id, request.method)
            handler_failure = HandlerFailure(str(exc) or type(exc).__name__)
            return failure(request.id, handler_failure.to_error_data())

        return success(request.id, result)

    # --- protocol lifecycle ---

    async def _initialize(self, request: InitializeRequest) -> InitializeResult:
        requested = request.params.protocol_version
        version = requested if requested in HANDSHAKE_PROTOCOL_VERSIONS else LATEST_HANDSHAKE_VERSION
        return InitializeResult(
            protocolVersion=version,
            capabilities=ServerCapabilities(
                resources=ResourcesCapability(subscribe=False, listChanged=False),
                tools=ToolsCapability(listChanged=False),
                prompts=PromptsCapability(listChanged=False),
            ),
            serverInfo=Implementation(
                name=self.config.server_name, version=self.config.server_version
            ),
            instructions=INSTRUCTIONS,
        )

    async def _ping(self, request: PingRequest) -> EmptyResult:
        return EmptyResult()

    # --- resources ---

    async def _list_resources(self, request: ListResourcesRequest) -> ListResourcesResult:
        return ListResourcesResult(resources=[d.to_resource() for d in registry.RESOURCES])

    async def _read_resource(self, request: ReadResourceRequest) -> ReadResourceResult:
        uri = request.params.uri
        reader = self._resources.get(uri)  # type: ignore[call-overload]
        if reader is None:
            raise UnknownResourceError(uri)
        descriptor = registry.find(registry.RESOURCES, uri)
        mime_type = descriptor.mime_type if descriptor else None
        text = await reader()
        return ReadResourceResult(
            contents=[TextResourceContents(uri=uri, mimeType=mime_type, text=text)]
        )

    async def _project_structure(self) -> str:
        report = await _scan(self.config)
        return render_directory_report(report)

    async def _generated_readme(self) -> str:
        report = await _scan(self.config)
        project_name = os.path.basename(self.root) or self.root
        return render_markdown(project_name, report, self.config.tree_listing_limit)

    # --- tools ---

    async def _list_tools(self, request: ListToolsRequest) -> ListToolsResult:
        return ListToolsResult(tools=[d.to_tool() for d in registry.TOOLS])

    async def _call_tool(self, request: CallToolRequest) -> CallToolResult:
        name = request.params.name
        tool = self._tools.get(name)  # type: ignore[call-overload]
        if tool is None:
            raise UnknownToolError(name)
        text = await tool(request.params.arguments or {})
        return CallToolResult(content=[TextContent(type="text", text=text)])

    async def _analyze_path(self, arguments: dict[str, Any]) -> str:
        args = _validate(AnalyzePathArgs, arguments)
        return await analyze_path(args.path, self.config.root)

    async def _generate_documentation(self, arguments: dict[str, Any]) -> str:
        args = _validate(GenerateDocumentationArgs, arguments)
        return await generate_documentation(args.project_name, self.config, args.format)

    # --- prompts ---

    async def _list_prompts(self, request: ListPromptsRequest) -> ListPromptsResult:
        return ListPromptsResult(prompts=[d.to_prompt() for d in registry.PROMPTS])

    async def _get_prompt(self, request: GetPromptRequest) -> GetPromptResult:
        name = request.params.name
        render = self._prompts.get(name)  # type: ignore[call-overload]
        if render is None:
            raise UnknownPromptError(name)
        return await render()

    async def _code_review(self) -> GetPromptResult:
        report = await _scan(self.config)
        return GetPromptResult(
            description="Code review template",
            messages=[
                PromptMessage(
                    role="user",
                    content=TextContent(type="text", text=render_review_prompt(report)),
                )
            ],
        )


async def _scan(config: CodemetricsConfig) -> DirectoryReport:
    return await asyncio.to_thread(scan_tree, config.root)
