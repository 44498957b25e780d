"""
Loosely-typed value shapes shared by workflows, actions and Dependabot files.

Decoding strategies (field annotations, not stored types):
- SoV[T]: a single T or a sequence of T, normalized to list[T]
- BoS: a YAML boolean or a string, normalized to str

Value types:
- EnvValue / Env: environment and ``with:`` mappings
- Permissions: ``permissions:`` blocks (base keyword or explicit mapping)
"""

from enum import Enum
from typing import Annotated, Any, TypeVar, Union

from pydantic import BeforeValidator, StrictBool, StrictFloat, StrictInt, StrictStr

from .base import ActionsModel

T = TypeVar("T")


def scalar_or_vector(value: Any) -> Any:
    """Wrap a scalar in a one-element list; pass sequences through in order."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def bool_is_string(value: Any) -> Any:
    """Stringify YAML booleans (``true`` → ``"true"``); leave other values for str validation."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


# Scalar-or-vector: `needs: build` and `needs: [build, lint]` both decode to a list.
SoV = Annotated[list[T], BeforeValidator(scalar_or_vector)]

# Bool-or-string: `run: true` is the command "true", not a boolean.
BoS = Annotated[StrictStr, BeforeValidator(bool_is_string)]


# Environment values are stringified by the runner, but may be written as
# any YAML scalar. The strict members are disjoint (StrictInt rejects bool).
EnvValue = Union[StrictStr, StrictBool, StrictInt, StrictFloat]

Env = dict[str, EnvValue]


def env_value_to_str(value: str | bool | int | float) -> str:
    """
    Render an EnvValue the way the Actions runner sees it.

    Examples:
        >>> env_value_to_str(True)
        'true'
        >>> env_value_to_str(15)
        '15'
        >>> env_value_to_str(15.0)
        '15'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class BasePermission(str, Enum):
    """Blanket permission keyword applied to every scope."""

    DEFAULT = "default"  # Whatever the repository's GITHUB_TOKEN default is
    READ_ALL = "read-all"
    WRITE_ALL = "write-all"


class Permission(str, Enum):
    """A single permission scope setting."""

    READ = "read"
    WRITE = "write"
    NONE = "none"


class ExplicitPermissions(ActionsModel):
    """
    Explicit per-scope permissions.

    Scopes that are not listed default to ``none``, so ``permissions: {}``
    revokes everything.
    """

    actions: Permission = Permission.NONE
    attestations: Permission = Permission.NONE
    checks: Permission = Permission.NONE
    contents: Permission = Permission.NONE
    deployments: Permission = Permission.NONE
    discussions: Permission = Permission.NONE
    id_token: Permission = Permission.NONE
    issues: Permission = Permission.NONE
    models: Permission = Permission.NONE
    packages: Permission = Permission.NONE
    pages: Permission = Permission.NONE
    pull_requests: Permission = Permission.NONE
    repository_projects: Permission = Permission.NONE
    security_events: Permission = Permission.NONE
    statuses: Permission = Permission.NONE


Permissions = Union[BasePermission, ExplicitPermissions]


__all__ = [
    "SoV",
    "BoS",
    "EnvValue",
    "Env",
    "env_value_to_str",
    "scalar_or_vector",
    "bool_is_string",
    "BasePermission",
    "Permission",
    "ExplicitPermissions",
    "Permissions",
]
