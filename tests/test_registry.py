"""Tests for the static capability registry."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from codemetrics import registry
from codemetrics.registry import AnalyzePathArgs, GenerateDocumentationArgs


def test_resource_descriptors() -> None:
    resources = [d.to_resource().model_dump(by_alias=True) for d in registry.RESOURCES]
    assert [r["uri"] for r in resources] == [
        "codebase://project/structure",
        "docs://generated/readme",
    ]
    assert [r["mimeType"] for r in resources] == ["application/json", "text/markdown"]
    assert resources[0]["name"] == "Project Structure"


def test_tool_descriptors() -> None:
    tools = {d.identifier: d.to_tool().model_dump(by_alias=True) for d in registry.TOOLS}
    assert set(tools) == {"analyze_path", "generate_documentation"}

    analyze = tools["analyze_path"]["inputSchema"]
    assert analyze["type"] == "object"
    assert analyze["required"] == ["path"]
    assert analyze["properties"]["path"]["type"] == "string"

    docs = tools["generate_documentation"]["inputSchema"]
    assert docs["required"] == ["projectName"]
    assert docs["properties"]["format"]["enum"] == ["markdown", "json"]
    assert docs["properties"]["format"]["default"] == "markdown"


def test_prompt_descriptors() -> None:
    prompts = [d.to_prompt() for d in registry.PROMPTS]
    assert [p.name for p in prompts] == ["code_review"]
    assert prompts[0].arguments == []


def test_find_is_exact_match() -> None:
    assert registry.find(registry.TOOLS, "analyze_path") is registry.TOOLS[0]
    assert registry.find(registry.TOOLS, "Analyze_Path") is None
    assert registry.find(registry.RESOURCES, "codebase://project/structure/") is None


def test_descriptors_are_immutable() -> None:
    with pytest.raises(ValidationError):
        registry.TOOLS[0].identifier = "other"


class TestToolArgs:
    def test_generate_documentation_defaults_to_markdown(self) -> None:
        args = GenerateDocumentationArgs.model_validate({"projectName": "Demo"})
        assert args.project_name == "Demo"
        assert args.format == "markdown"

    def test_generate_documentation_rejects_unknown_format(self) -> None:
        with pytest.raises(ValidationError):
            GenerateDocumentationArgs.model_validate({"projectName": "Demo", "format": "html"})

    def test_analyze_path_requires_path(self) -> None:
        with pytest.raises(ValidationError):
            AnalyzePathArgs.model_validate({})
