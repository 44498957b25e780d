"""Shared formatting utilities for MCP tool responses.

Summaries are plain JSON-compatible dicts built from decoded documents.
The markdown formatters render those same dicts for human readers.
"""

from dataclasses import asdict
from typing import Any

from .schema import (
    Action,
    Dependabot,
    DockerUses,
    ExplicitExpr,
    LocalUses,
    NormalJob,
    RepositoryUses,
    RunnerGroup,
    Uses,
    Workflow,
)

# =============================================================================
# Summaries
# =============================================================================


def describe_uses(uses: Uses) -> dict[str, Any]:
    """Summarize a parsed ``uses:`` reference."""
    if isinstance(uses, LocalUses):
        kind = "local"
    elif isinstance(uses, DockerUses):
        kind = "docker"
    else:
        kind = "repository"

    summary: dict[str, Any] = {"kind": kind, "text": str(uses), **asdict(uses)}
    if isinstance(uses, RepositoryUses):
        summary["pinned"] = uses.is_pinned
    return summary


def _describe_runs_on(runs_on: Any) -> Any:
    if isinstance(runs_on, ExplicitExpr):
        return runs_on.as_curly()
    if isinstance(runs_on, RunnerGroup):
        return {"group": runs_on.group, "labels": runs_on.labels}
    return runs_on


def summarize_workflow(workflow: Workflow) -> dict[str, Any]:
    """Summarize a decoded workflow: triggers, jobs, and referenced actions."""
    jobs = []
    actions_used: list[str] = []

    for job_id, job in workflow.jobs.items():
        entry: dict[str, Any] = {"id": job_id, "name": job.name, "needs": job.needs}
        if isinstance(job, NormalJob):
            entry["kind"] = "normal"
            entry["runs_on"] = _describe_runs_on(job.runs_on)
            entry["steps"] = len(job.steps)
            for step in job.steps:
                if step.uses is not None and str(step.uses) not in actions_used:
                    actions_used.append(str(step.uses))
        else:
            entry["kind"] = "reusable"
            entry["uses"] = str(job.uses)
        jobs.append(entry)

    return {
        "name": workflow.name,
        "events": workflow.events,
        "trigger_count": workflow.trigger_count,
        "jobs": jobs,
        "actions_used": actions_used,
    }


def summarize_action(action: Action) -> dict[str, Any]:
    """Summarize a decoded action definition."""
    return {
        "name": action.name,
        "description": action.description,
        "author": action.author,
        "kind": action.kind,
        "inputs": {
            name: {"description": spec.description, "required": bool(spec.required)}
            for name, spec in action.inputs.items()
        },
        "outputs": list(action.outputs),
    }


def summarize_dependabot(config: Dependabot) -> dict[str, Any]:
    """Summarize a decoded Dependabot configuration."""
    return {
        "version": config.version,
        "registries": {name: registry.type for name, registry in config.registries.items()},
        "updates": [
            {
                "package_ecosystem": update.package_ecosystem.value,
                "directories": update.all_directories,
                "interval": update.schedule.interval.value,
                "open_pull_requests_limit": update.open_pull_requests_limit,
                "groups": sorted(update.groups),
            }
            for update in config.updates
        ],
    }


# =============================================================================
# Markdown Formatting Utilities
# =============================================================================


def format_errors_markdown(kind: str, errors: list[str]) -> str:
    """Format a failed validation as markdown.

    Args:
        kind: Document kind shown in the header (e.g. "Workflow")
        errors: Error messages

    Returns:
        Markdown with one bullet per error
    """
    lines = [f"## {kind}: invalid", ""]
    lines.extend(f"- {error}" for error in errors)
    return "\n".join(lines)


def format_workflow_summary_markdown(summary: dict[str, Any]) -> str:
    """Format a workflow summary as markdown."""
    lines = [
        f"# Workflow: {summary['name'] or '(unnamed)'}",
        "",
        f"- **Triggers** ({summary['trigger_count']}): {', '.join(summary['events']) or 'none'}",
        f"- **Jobs**: {len(summary['jobs'])}",
        "",
        "## Jobs",
    ]
    for job in summary["jobs"]:
        if job["kind"] == "reusable":
            job_line = f"- **{job['id']}** (reusable): `{job['uses']}`"
        else:
            job_line = f"- **{job['id']}** on `{job['runs_on']}`: {job['steps']} step(s)"
        if job.get("needs"):
            job_line += f" - needs: {', '.join(job['needs'])}"
        lines.append(job_line)

    if summary["actions_used"]:
        lines.append("")
        lines.append("## Actions Used")
        lines.extend(f"- `{uses}`" for uses in summary["actions_used"])

    return "\n".join(lines)


def format_action_summary_markdown(summary: dict[str, Any]) -> str:
    """Format an action summary as markdown."""
    lines = [f"# Action: {summary['name']}", ""]
    if summary.get("description"):
        lines.extend([summary["description"], ""])
    lines.append(f"- **Kind**: {summary['kind']}")
    if summary.get("author"):
        lines.append(f"- **Author**: {summary['author']}")

    if summary["inputs"]:
        lines.append("")
        lines.append("## Inputs")
        for name, spec in summary["inputs"].items():
            required = " (required)" if spec["required"] else ""
            lines.append(f"- **{name}**{required}: {spec['description'] or 'No description'}")

    if summary["outputs"]:
        lines.append("")
        lines.append("## Outputs")
        lines.extend(f"- {name}" for name in summary["outputs"])

    return "\n".join(lines)


def format_dependabot_summary_markdown(summary: dict[str, Any]) -> str:
    """Format a Dependabot summary as markdown."""
    lines = [f"# Dependabot v{summary['version']}", "", "## Updates"]
    for update in summary["updates"]:
        lines.append(
            f"- **{update['package_ecosystem']}** in {', '.join(update['directories'])}: "
            f"{update['interval']}, up to {update['open_pull_requests_limit']} open PRs"
        )
    if summary["registries"]:
        lines.append("")
        lines.append("## Registries")
        lines.extend(f"- **{name}** ({kind})" for name, kind in summary["registries"].items())
    return "\n".join(lines)


__all__ = [
    "describe_uses",
    "summarize_workflow",
    "summarize_action",
    "summarize_dependabot",
    "format_errors_markdown",
    "format_workflow_summary_markdown",
    "format_action_summary_markdown",
    "format_dependabot_summary_markdown",
]
