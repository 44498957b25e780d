"""actions-models: typed decoding of GitHub Actions workflows, actions and Dependabot files.

The models live in ``actions_models.schema``; ``python -m actions_models``
serves them as read-only MCP tools.
"""

from .schema import (
    Action,
    Dependabot,
    DecodeError,
    ExplicitExpr,
    LoadResult,
    Workflow,
    load_action_from_file,
    load_action_from_yaml,
    load_dependabot_from_file,
    load_dependabot_from_yaml,
    load_workflow_from_file,
    load_workflow_from_yaml,
    parse_uses,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "Dependabot",
    "DecodeError",
    "ExplicitExpr",
    "LoadResult",
    "Workflow",
    "load_action_from_file",
    "load_action_from_yaml",
    "load_dependabot_from_file",
    "load_dependabot_from_yaml",
    "load_workflow_from_file",
    "load_workflow_from_yaml",
    "parse_uses",
    "__version__",
]
