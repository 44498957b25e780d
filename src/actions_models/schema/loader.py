"""
YAML loader for workflows, actions and Dependabot configuration.

Features:
- Load documents from YAML files or strings
- YAML 1.2 scalar resolution, so ``on:`` stays a key and ``yes`` stays a string
- Readable validation errors with dotted field paths
- Workflow discovery over a ``.github/workflows`` style directory
"""

import logging
import re
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .action import Action
from .dependabot import Dependabot
from .load_result import LoadResult
from .workflow import Workflow

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_REPLACED_TAGS = frozenset(
    {
        "tag:yaml.org,2002:bool",
        "tag:yaml.org,2002:int",
        "tag:yaml.org,2002:float",
        "tag:yaml.org,2002:timestamp",
    }
)


class ActionsYAMLLoader(yaml.SafeLoader):
    """
    SafeLoader with YAML 1.2 core-schema booleans and numbers.

    PyYAML implements YAML 1.1, where ``on``, ``off``, ``yes`` and ``no`` are
    booleans, ``1:30`` is a sexagesimal integer and ``2024-01-01`` is a date.
    GitHub reads these documents as YAML 1.2, where all of them are strings.
    """


ActionsYAMLLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _REPLACED_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ActionsYAMLLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
ActionsYAMLLoader.add_implicit_resolver(
    "tag:yaml.org,2002:int",
    re.compile(r"^(?:[-+]?(?:0|[1-9][0-9]*)|0o[0-7]+|0x[0-9a-fA-F]+)$"),
    list("-+0123456789"),
)
ActionsYAMLLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(
        r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
        r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN))$"
    ),
    list("-+.0123456789"),
)


def parse_yaml(yaml_content: str) -> Any:
    """
    Parse YAML text with YAML 1.2 scalar rules.

    Raises:
        yaml.YAMLError: If the text is not valid YAML
    """
    return yaml.load(yaml_content, Loader=ActionsYAMLLoader)  # noqa: S506


def format_validation_error(error: ValidationError) -> str:
    """
    Render a Pydantic ValidationError as one ``path: message`` line per error.

    Example:
        jobs.test.runs-on: runs-on must provide either `group` or one or more `labels`
    """
    lines = []
    for detail in validation_error_details(error):
        lines.append(f"  - {detail['location']}: {detail['message']}")
    return "\n".join(lines)


def validation_error_details(error: ValidationError) -> list[dict[str, str]]:
    """Flatten a ValidationError into ``{"location", "message"}`` records."""
    details = []
    for item in error.errors(include_url=False):
        location = ".".join(str(part) for part in item["loc"]) or "<document>"
        details.append({"location": location, "message": item["msg"]})
    return details


def _load_document(model: type[M], kind: str, yaml_content: str, source: str) -> LoadResult[M]:
    try:
        data = parse_yaml(yaml_content)
    except yaml.YAMLError as e:
        return LoadResult.failure(f"Invalid YAML syntax in {source}: {e}")

    if not isinstance(data, dict):
        return LoadResult.failure(
            f"{kind} {source} must be a YAML mapping, got {type(data).__name__}"
        )

    try:
        document = model.model_validate(data)
    except ValidationError as e:
        return LoadResult.failure(
            f"{kind} validation failed in {source}:\n{format_validation_error(e)}",
            metadata={"errors": validation_error_details(e)},
        )

    logger.debug(f"Loaded {kind.lower()} from {source}")
    return LoadResult.success(document, metadata={"source": source})


def _read_file(file_path: str | Path, kind: str) -> LoadResult[str]:
    path = Path(file_path)

    if not path.exists():
        return LoadResult.failure(f"{kind} file not found: {file_path}")

    if not path.is_file():
        return LoadResult.failure(f"Path is not a file: {file_path}")

    try:
        with open(path, encoding="utf-8") as f:
            return LoadResult.success(f.read())
    except (OSError, UnicodeDecodeError) as e:
        return LoadResult.failure(f"Failed to read file '{file_path}': {e}")


def load_workflow_from_yaml(yaml_content: str, source: str = "<string>") -> LoadResult[Workflow]:
    """
    Load and validate a workflow from a YAML string.

    Args:
        yaml_content: YAML content as string
        source: Source identifier for error messages (default: "<string>")

    Returns:
        LoadResult.success(Workflow) if valid
        LoadResult.failure(error_message) with validation errors

    Example:
        result = load_workflow_from_yaml('''
        on: push
        jobs:
          test:
            runs-on: ubuntu-latest
            steps:
              - uses: actions/checkout@v4
        ''')
    """
    return _load_document(Workflow, "Workflow", yaml_content, source)


def load_workflow_from_file(file_path: str | Path) -> LoadResult[Workflow]:
    """
    Load and validate a workflow from a YAML file.

    Returns:
        LoadResult.success(Workflow) if valid
        LoadResult.failure(error_message) if missing, unreadable or invalid
    """
    content = _read_file(file_path, "Workflow")
    if not content.is_success:
        return LoadResult.failure(content.error or "unreadable file")
    return load_workflow_from_yaml(content.unwrap(), source=str(file_path))


def load_action_from_yaml(yaml_content: str, source: str = "<string>") -> LoadResult[Action]:
    """Load and validate an action definition (``action.yml``) from a YAML string."""
    return _load_document(Action, "Action", yaml_content, source)


def load_action_from_file(file_path: str | Path) -> LoadResult[Action]:
    """Load and validate an action definition from a YAML file."""
    content = _read_file(file_path, "Action")
    if not content.is_success:
        return LoadResult.failure(content.error or "unreadable file")
    return load_action_from_yaml(content.unwrap(), source=str(file_path))


def load_dependabot_from_yaml(
    yaml_content: str, source: str = "<string>"
) -> LoadResult[Dependabot]:
    """Load and validate a ``dependabot.yml`` from a YAML string."""
    return _load_document(Dependabot, "Dependabot config", yaml_content, source)


def load_dependabot_from_file(file_path: str | Path) -> LoadResult[Dependabot]:
    """Load and validate a ``dependabot.yml`` from a YAML file."""
    content = _read_file(file_path, "Dependabot config")
    if not content.is_success:
        return LoadResult.failure(content.error or "unreadable file")
    return load_dependabot_from_yaml(content.unwrap(), source=str(file_path))


def discover_workflows(directory: str | Path) -> LoadResult[dict[str, Workflow]]:
    """
    Discover and load all YAML workflows in a directory.

    Searches for *.yaml and *.yml files and attempts to load them as workflows.
    Invalid workflows are skipped with warnings, but don't fail the entire operation.

    Args:
        directory: Directory path to search, e.g. ``.github/workflows``

    Returns:
        LoadResult.success({file name: Workflow}) with valid workflows;
            ``metadata["errors"]`` lists the skipped files
        LoadResult.failure(error_message) if directory doesn't exist
    """
    dir_path = Path(directory)

    if not dir_path.exists():
        return LoadResult.failure(f"Directory not found: {directory}")

    if not dir_path.is_dir():
        return LoadResult.failure(f"Path is not a directory: {directory}")

    workflows: dict[str, Workflow] = {}
    errors: list[str] = []

    yaml_files = sorted(list(dir_path.glob("*.yaml")) + list(dir_path.glob("*.yml")))

    for yaml_file in yaml_files:
        result = load_workflow_from_file(yaml_file)
        if result.is_success and result.value is not None:
            workflows[yaml_file.name] = result.value
        else:
            errors.append(f"{yaml_file.name}: {result.error}")

    if errors:
        logger.warning(f"{len(errors)} workflow(s) failed to load:")
        for error in errors:
            logger.warning(f"  - {error}")

    return LoadResult.success(workflows, metadata={"errors": errors})


__all__ = [
    "ActionsYAMLLoader",
    "parse_yaml",
    "format_validation_error",
    "validation_error_details",
    "load_workflow_from_yaml",
    "load_workflow_from_file",
    "load_action_from_yaml",
    "load_action_from_file",
    "load_dependabot_from_yaml",
    "load_dependabot_from_file",
    "discover_workflows",
]
