"""Static capability registry: the resources, tools and prompts this server exposes.

The sets are closed. Identifiers are typed as Literals so the router's
dispatch tables can be checked for exhaustiveness.
"""

from __future__ import annotations

from typing import Literal

from mcp.types import Prompt, Resource, Tool
from pydantic import BaseModel, ConfigDict, Field

ResourceUri = Literal["codebase://project/structure", "docs://generated/readme"]
ToolName = Literal["analyze_path", "generate_documentation"]
PromptName = Literal["code_review"]

PROJECT_STRUCTURE_URI: ResourceUri = "codebase://project/structure"
GENERATED_README_URI: ResourceUri = "docs://generated/readme"
ANALYZE_PATH: ToolName = "analyze_path"
GENERATE_DOCUMENTATION: ToolName = "generate_documentation"
CODE_REVIEW: PromptName = "code_review"


class AnalyzePathArgs(BaseModel):
    """Arguments for analyze_path."""

    model_config = ConfigDict(extra="ignore")

    path: str = Field(description="Absolute or relative path to analyze")


class GenerateDocumentationArgs(BaseModel):
    """Arguments for generate_documentation."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    project_name: str = Field(alias="projectName", description="Project name")
    format: Literal["markdown", "json"] = Field(
        default="markdown", description="Output format"
    )


class CapabilityDescriptor(BaseModel):
    """Static metadata for one resource, tool or prompt."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    display_name: str
    description: str
    mime_type: str | None = None
    input_model: type[BaseModel] | None = None

    def input_schema(self) -> dict:
        if self.input_model is None:
            return {"type": "object", "properties": {}}
        return self.input_model.model_json_schema(by_alias=True)

    def to_resource(self) -> Resource:
        return Resource(
            uri=self.identifier,
            name=self.display_name,
            description=self.description,
            mimeType=self.mime_type,
        )

    def to_tool(self) -> Tool:
        return Tool(
            name=self.identifier,
            description=self.description,
            inputSchema=self.input_schema(),
        )

    def to_prompt(self) -> Prompt:
        return Prompt(name=self.identifier, description=self.description, arguments=[])


RESOURCES: tuple[CapabilityDescriptor, ...] = (
    CapabilityDescriptor(
        identifier=PROJECT_STRUCTURE_URI,
        display_name="Project Structure",
        description="Complete project file tree and statistics",
        mime_type="application/json",
    ),
    CapabilityDescriptor(
        identifier=GENERATED_README_URI,
        display_name="Generated README",
        description="Auto-generated project documentation",
        mime_type="text/markdown",
    ),
)

TOOLS: tuple[CapabilityDescriptor, ...] = (
    CapabilityDescriptor(
        identifier=ANALYZE_PATH,
        display_name="Analyze Path",
        description="Analyze a file or directory (recursively) for metrics",
        input_model=AnalyzePathArgs,
    ),
    CapabilityDescriptor(
        identifier=GENERATE_DOCUMENTATION,
        display_name="Generate Documentation",
        description="Generate documentation from code",
        input_model=GenerateDocumentationArgs,
    ),
)

PROMPTS: tuple[CapabilityDescriptor, ...] = (
    CapabilityDescriptor(
        identifier=CODE_REVIEW,
        display_name="Code Review",
        description="Generate code review template",
    ),
)


def find(descriptors: tuple[CapabilityDescriptor, ...], identifier: str) -> CapabilityDescriptor | None:
    """Exact-match lookup by identifier."""
    return next((d for d in descriptors if d.identifier == identifier), None)
