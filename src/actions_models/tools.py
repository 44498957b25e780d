"""MCP tool implementations for GitHub Actions document validation.

This module contains all MCP tool function implementations that expose
workflow, action and Dependabot decoding via the MCP protocol.

Following official Anthropic MCP Python SDK patterns:
- Tool functions decorated with @mcp.tool()
- Flat parameter signatures with Annotated types for validation
- Type hints for automatic schema generation
- Async functions for all tools
- Clear docstrings (become tool descriptions)
"""

from typing import Annotated, Any, Literal

from mcp.types import ToolAnnotations
from pydantic import Field

from .context import AppContextType
from .formatting import (
    describe_uses,
    format_action_summary_markdown,
    format_dependabot_summary_markdown,
    format_errors_markdown,
    format_workflow_summary_markdown,
    summarize_action,
    summarize_dependabot,
    summarize_workflow,
)
from .schema import (
    DecodeError,
    LoadResult,
    discover_workflows,
    load_action_from_yaml,
    load_dependabot_from_yaml,
    load_workflow_from_yaml,
    parse_reusable_uses,
)
from .schema import parse_uses as parse_uses_reference
from .server import mcp

YamlContent = Annotated[
    str,
    Field(description="Complete YAML document to validate", min_length=1),
]
OutputFormat = Annotated[
    Literal["json", "markdown"],
    Field(description="Output format"),
]


def _failure(kind: str, errors: list[str], format: str) -> dict[str, Any] | str:  # noqa: A002
    if format == "markdown":
        return format_errors_markdown(kind, errors)
    return {"valid": False, "errors": errors}


def _load_errors(result: LoadResult[Any]) -> list[str]:
    details = result.metadata.get("errors")
    if details:
        return [f"{detail['location']}: {detail['message']}" for detail in details]
    return [result.error or "unknown error"]


# =============================================================================
# MCP Tools (following official SDK decorator pattern)
# =============================================================================


@mcp.tool(
    annotations=ToolAnnotations(
        title="Validate Workflow",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def validate_workflow(
    yaml_content: YamlContent,
    format: OutputFormat = "json",  # noqa: A002
    *,
    ctx: AppContextType,
) -> dict[str, Any] | str:
    """Validate a GitHub Actions workflow YAML. Required: yaml_content. Optional: format."""
    app_ctx = ctx.request_context.lifespan_context

    size_error = app_ctx.check_document_size(yaml_content)
    if size_error:
        return _failure("Workflow", [size_error], format)

    load_result = load_workflow_from_yaml(yaml_content, source="<workflow>")
    if not load_result.is_success:
        return _failure("Workflow", _load_errors(load_result), format)

    summary = summarize_workflow(load_result.unwrap())
    if format == "markdown":
        return format_workflow_summary_markdown(summary)
    return {"valid": True, **summary}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Validate Action",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def validate_action(
    yaml_content: YamlContent,
    format: OutputFormat = "json",  # noqa: A002
    *,
    ctx: AppContextType,
) -> dict[str, Any] | str:
    """Validate an action.yml definition. Required: yaml_content. Optional: format."""
    app_ctx = ctx.request_context.lifespan_context

    size_error = app_ctx.check_document_size(yaml_content)
    if size_error:
        return _failure("Action", [size_error], format)

    load_result = load_action_from_yaml(yaml_content, source="<action>")
    if not load_result.is_success:
        return _failure("Action", _load_errors(load_result), format)

    summary = summarize_action(load_result.unwrap())
    if format == "markdown":
        return format_action_summary_markdown(summary)
    return {"valid": True, **summary}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Validate Dependabot Config",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def validate_dependabot(
    yaml_content: YamlContent,
    format: OutputFormat = "json",  # noqa: A002
    *,
    ctx: AppContextType,
) -> dict[str, Any] | str:
    """Validate a dependabot.yml (version 2). Required: yaml_content. Optional: format."""
    app_ctx = ctx.request_context.lifespan_context

    size_error = app_ctx.check_document_size(yaml_content)
    if size_error:
        return _failure("Dependabot config", [size_error], format)

    load_result = load_dependabot_from_yaml(yaml_content, source="<dependabot>")
    if not load_result.is_success:
        return _failure("Dependabot config", _load_errors(load_result), format)

    summary = summarize_dependabot(load_result.unwrap())
    if format == "markdown":
        return format_dependabot_summary_markdown(summary)
    return {"valid": True, **summary}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Parse Uses Reference",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def parse_uses(
    uses: Annotated[
        str,
        Field(
            description="A `uses:` value, e.g. actions/checkout@v4 or docker://alpine:3.8",
            min_length=1,
            max_length=1000,
        ),
    ],
    reusable: Annotated[
        bool,
        Field(description="Apply reusable workflow rules (jobs.<id>.uses)"),
    ] = False,
) -> dict[str, Any]:
    """Parse a `uses:` reference into its parts. Required: uses. Optional: reusable."""
    try:
        parsed = parse_reusable_uses(uses) if reusable else parse_uses_reference(uses)
    except DecodeError as e:
        return {"valid": False, "error": str(e)}

    return {"valid": True, **describe_uses(parsed)}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Validate Workflow Directory",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def validate_workflow_directory(
    directory: Annotated[
        str,
        Field(description="Directory of workflow files, e.g. .github/workflows", min_length=1),
    ],
) -> dict[str, Any]:
    """Validate every *.yml/*.yaml workflow in a directory. Required: directory."""
    result = discover_workflows(directory)
    if not result.is_success:
        return {"valid": False, "errors": [result.error]}

    workflows = result.unwrap()
    errors: list[str] = result.metadata.get("errors", [])
    return {
        "valid": not errors,
        "workflows": {name: summarize_workflow(workflow) for name, workflow in workflows.items()},
        "errors": errors,
    }


__all__ = [
    "validate_workflow",
    "validate_action",
    "validate_dependabot",
    "parse_uses",
    "validate_workflow_directory",
]
