"""Typed models for GitHub Actions workflows, actions and Dependabot configuration.

Key Components:

- ExplicitExpr: A ``${{ }}`` expression, recognized but never evaluated
- LoE / BoE: Literal-or-expression field types (expression tried first)
- SoV / BoS: Scalar-or-vector and bool-or-string decoding strategies
- OptionalBody: Missing / default / body tri-state for ``on:`` events
- parse_uses: ``uses:`` reference parser (local, repository, docker)
- Workflow, Action, Dependabot: Top-level document models
- load_*_from_yaml / load_*_from_file: Safe loaders returning LoadResult

Decoding through the models raises ``pydantic.ValidationError``; errors from
this package's own rules subclass DecodeError (a ValueError).
"""

from .action import (
    Action,
    ActionInput,
    ActionOutput,
    ActionStep,
    Branding,
    Composite,
    Docker,
    JavaScript,
)
from .base import ActionsModel
from .dependabot import (
    AllowDeny,
    Dependabot,
    Interval,
    PackageEcosystem,
    RebaseStrategy,
    Registry,
    Update,
)
from .events import (
    BareEvent,
    Cron,
    Events,
    GenericEvent,
    PullRequest,
    Push,
    WorkflowCall,
    WorkflowDispatch,
    WorkflowRun,
)
from .exceptions import (
    DecodeError,
    InvalidExpressionError,
    InvariantViolationError,
    ReusableUsesError,
    RunnerGroupError,
    UsesError,
)
from .expressions import BoE, ExplicitExpr, FirstMatch, If, LoE, is_expr
from .jobs import (
    Concurrency,
    ConcurrencySpec,
    Container,
    ContainerSpec,
    Defaults,
    Job,
    Matrix,
    NormalJob,
    ReusableWorkflowCallJob,
    RunnerGroup,
    RunsOn,
    Step,
    Strategy,
)
from .load_result import LoadResult, LoadStatus
from .loader import (
    discover_workflows,
    load_action_from_file,
    load_action_from_yaml,
    load_dependabot_from_file,
    load_dependabot_from_yaml,
    load_workflow_from_file,
    load_workflow_from_yaml,
    parse_yaml,
)
from .optional_body import BodyState, OptionalBody, count_present
from .uses import DockerUses, LocalUses, RepositoryUses, Uses, parse_uses
from .validation import ReusableUses, StepUses, parse_reusable_uses, validate_reusable_uses
from .values import (
    BasePermission,
    BoS,
    Env,
    EnvValue,
    ExplicitPermissions,
    Permission,
    Permissions,
    SoV,
    env_value_to_str,
)
from .workflow import Trigger, Workflow

__all__ = [
    # Expressions and decoding strategies
    "ExplicitExpr",
    "FirstMatch",
    "LoE",
    "BoE",
    "If",
    "is_expr",
    "SoV",
    "BoS",
    "OptionalBody",
    "BodyState",
    "count_present",
    # Shared values
    "ActionsModel",
    "Env",
    "EnvValue",
    "env_value_to_str",
    "Permissions",
    "BasePermission",
    "Permission",
    "ExplicitPermissions",
    # References
    "Uses",
    "LocalUses",
    "RepositoryUses",
    "DockerUses",
    "parse_uses",
    "parse_reusable_uses",
    "validate_reusable_uses",
    "StepUses",
    "ReusableUses",
    # Workflows
    "Workflow",
    "Trigger",
    "BareEvent",
    "Events",
    "GenericEvent",
    "PullRequest",
    "Push",
    "Cron",
    "WorkflowCall",
    "WorkflowDispatch",
    "WorkflowRun",
    "Job",
    "NormalJob",
    "ReusableWorkflowCallJob",
    "Step",
    "RunsOn",
    "RunnerGroup",
    "Strategy",
    "Matrix",
    "Container",
    "ContainerSpec",
    "Concurrency",
    "ConcurrencySpec",
    "Defaults",
    # Actions
    "Action",
    "ActionInput",
    "ActionOutput",
    "ActionStep",
    "Branding",
    "JavaScript",
    "Composite",
    "Docker",
    # Dependabot
    "Dependabot",
    "Update",
    "Registry",
    "PackageEcosystem",
    "Interval",
    "RebaseStrategy",
    "AllowDeny",
    # Errors
    "DecodeError",
    "InvalidExpressionError",
    "UsesError",
    "InvariantViolationError",
    "ReusableUsesError",
    "RunnerGroupError",
    # Loading
    "LoadResult",
    "LoadStatus",
    "parse_yaml",
    "load_workflow_from_yaml",
    "load_workflow_from_file",
    "load_action_from_yaml",
    "load_action_from_file",
    "load_dependabot_from_yaml",
    "load_dependabot_from_file",
    "discover_workflows",
]
