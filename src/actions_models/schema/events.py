"""
Workflow trigger events (the ``on:`` key).

A workflow is triggered in one of three ways:

    on: push                      → a single BareEvent
    on: [push, fork]              → a list of BareEvents
    on:                           → Events, one OptionalBody per event
      push:
        branches: [main]
      pull_request:

Event names stay snake_case, exactly as GitHub spells the webhooks.
Event bodies use kebab-case keys like the rest of the workflow.
"""

from enum import Enum
from typing import Any, ClassVar

from pydantic import (
    Field,
    SerializerFunctionWrapHandler,
    StrictBool,
    model_serializer,
    model_validator,
)

from .base import ActionsModel, SnakeCaseModel, to_kebab
from .optional_body import OptionalBody
from .validation import check_exclusive_filters
from .values import BoS, EnvValue, SoV


class BareEvent(str, Enum):
    """Webhook events that can trigger a workflow without a body."""

    BRANCH_PROTECTION_RULE = "branch_protection_rule"
    CHECK_RUN = "check_run"
    CHECK_SUITE = "check_suite"
    CREATE = "create"
    DELETE = "delete"
    DEPLOYMENT = "deployment"
    DEPLOYMENT_STATUS = "deployment_status"
    DISCUSSION = "discussion"
    DISCUSSION_COMMENT = "discussion_comment"
    FORK = "fork"
    GOLLUM = "gollum"
    ISSUE_COMMENT = "issue_comment"
    ISSUES = "issues"
    LABEL = "label"
    MERGE_GROUP = "merge_group"
    MILESTONE = "milestone"
    PAGE_BUILD = "page_build"
    PROJECT = "project"
    PROJECT_CARD = "project_card"
    PROJECT_COLUMN = "project_column"
    PUBLIC = "public"
    PULL_REQUEST = "pull_request"
    PULL_REQUEST_COMMENT = "pull_request_comment"
    PULL_REQUEST_REVIEW = "pull_request_review"
    PULL_REQUEST_REVIEW_COMMENT = "pull_request_review_comment"
    PULL_REQUEST_TARGET = "pull_request_target"
    PUSH = "push"
    REGISTRY_PACKAGE = "registry_package"
    RELEASE = "release"
    REPOSITORY_DISPATCH = "repository_dispatch"
    # `schedule` always has a body, so it is never bare.
    STATUS = "status"
    WATCH = "watch"
    WORKFLOW_CALL = "workflow_call"
    WORKFLOW_DISPATCH = "workflow_dispatch"
    WORKFLOW_RUN = "workflow_run"


class _FilteredEvent(ActionsModel):
    """Event body whose ``<filter>`` and ``<filter>-ignore`` keys are exclusive."""

    exclusive_filters: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def validate_exclusive_filters(self) -> "_FilteredEvent":
        """Validate that no filter is combined with its -ignore counterpart."""
        values = {to_kebab(name): getattr(self, name) for name in type(self).model_fields}
        check_exclusive_filters(values, self.exclusive_filters)
        return self


class GenericEvent(ActionsModel):
    """Body shared by events that only filter on activity ``types``."""

    types: SoV[str] = Field(default_factory=list)


class PullRequest(_FilteredEvent):
    """Body of ``pull_request`` and ``pull_request_target``."""

    exclusive_filters: ClassVar[tuple[str, ...]] = ("branches", "paths")

    types: SoV[str] = Field(default_factory=list)
    branches: list[str] | None = None
    branches_ignore: list[str] | None = None
    paths: list[str] | None = None
    paths_ignore: list[str] | None = None


class Push(_FilteredEvent):
    """Body of ``push``."""

    exclusive_filters: ClassVar[tuple[str, ...]] = ("branches", "paths", "tags")

    branches: list[str] | None = None
    branches_ignore: list[str] | None = None
    paths: list[str] | None = None
    paths_ignore: list[str] | None = None
    tags: list[str] | None = None
    tags_ignore: list[str] | None = None


class Cron(ActionsModel):
    """One ``schedule:`` entry."""

    cron: str


class WorkflowCallInput(ActionsModel):
    description: str | None = None
    required: StrictBool = False
    type: str
    default: EnvValue | None = None


class WorkflowCallOutput(ActionsModel):
    description: str | None = None
    value: str


class WorkflowCallSecret(ActionsModel):
    description: str | None = None
    required: StrictBool = False


class WorkflowCall(ActionsModel):
    """Body of ``workflow_call``: the interface of a reusable workflow."""

    inputs: dict[str, WorkflowCallInput] = Field(default_factory=dict)
    outputs: dict[str, WorkflowCallOutput] = Field(default_factory=dict)
    # `secrets: {token: }` declares a secret with no properties.
    secrets: dict[str, WorkflowCallSecret | None] = Field(default_factory=dict)


class WorkflowDispatchInput(ActionsModel):
    description: str | None = None
    required: StrictBool = False
    # boolean, choice, number, environment or string; GitHub defaults to string.
    type: str | None = None
    # Only meaningful for `type: choice`. Unquoted `- false` is a valid option.
    options: list[BoS] = Field(default_factory=list)
    default: EnvValue | None = None


class WorkflowDispatch(ActionsModel):
    """Body of ``workflow_dispatch``."""

    inputs: dict[str, WorkflowDispatchInput] = Field(default_factory=dict)


class WorkflowRun(_FilteredEvent):
    """Body of ``workflow_run``."""

    exclusive_filters: ClassVar[tuple[str, ...]] = ("branches",)

    workflows: list[str]
    types: SoV[str] = Field(default_factory=list)
    branches: list[str] | None = None
    branches_ignore: list[str] | None = None


def _missing():
    return Field(default_factory=OptionalBody.missing)


class Events(SnakeCaseModel):
    """
    Workflow triggers with per-event bodies.

    Every field is an OptionalBody: MISSING when the event is not listed,
    DEFAULT when listed with a null body (``pull_request:``), BODY otherwise.

    Example:
        >>> events = Events.model_validate({"issues": None, "push": {"branches": ["main"]}})
        >>> events.issues.is_default, events.push.is_body, events.fork.is_missing
        (True, True, True)
        >>> events.count()
        2
    """

    branch_protection_rule: OptionalBody[GenericEvent] = _missing()
    check_run: OptionalBody[GenericEvent] = _missing()
    check_suite: OptionalBody[GenericEvent] = _missing()
    create: OptionalBody[GenericEvent] = _missing()
    delete: OptionalBody[GenericEvent] = _missing()
    deployment: OptionalBody[GenericEvent] = _missing()
    deployment_status: OptionalBody[GenericEvent] = _missing()
    discussion: OptionalBody[GenericEvent] = _missing()
    discussion_comment: OptionalBody[GenericEvent] = _missing()
    fork: OptionalBody[GenericEvent] = _missing()
    gollum: OptionalBody[GenericEvent] = _missing()
    issue_comment: OptionalBody[GenericEvent] = _missing()
    issues: OptionalBody[GenericEvent] = _missing()
    label: OptionalBody[GenericEvent] = _missing()
    merge_group: OptionalBody[GenericEvent] = _missing()
    milestone: OptionalBody[GenericEvent] = _missing()
    page_build: OptionalBody[GenericEvent] = _missing()
    project: OptionalBody[GenericEvent] = _missing()
    project_card: OptionalBody[GenericEvent] = _missing()
    project_column: OptionalBody[GenericEvent] = _missing()
    public: OptionalBody[GenericEvent] = _missing()
    pull_request: OptionalBody[PullRequest] = _missing()
    pull_request_comment: OptionalBody[GenericEvent] = _missing()
    pull_request_review: OptionalBody[GenericEvent] = _missing()
    pull_request_review_comment: OptionalBody[GenericEvent] = _missing()
    # Same trigger filters as pull_request.
    pull_request_target: OptionalBody[PullRequest] = _missing()
    push: OptionalBody[Push] = _missing()
    registry_package: OptionalBody[GenericEvent] = _missing()
    release: OptionalBody[GenericEvent] = _missing()
    repository_dispatch: OptionalBody[GenericEvent] = _missing()
    schedule: OptionalBody[list[Cron]] = _missing()
    status: OptionalBody[GenericEvent] = _missing()
    watch: OptionalBody[GenericEvent] = _missing()
    workflow_call: OptionalBody[WorkflowCall] = _missing()
    workflow_dispatch: OptionalBody[WorkflowDispatch] = _missing()
    workflow_run: OptionalBody[WorkflowRun] = _missing()

    @model_serializer(mode="wrap")
    def drop_missing(self, handler: SerializerFunctionWrapHandler) -> Any:
        # MISSING and DEFAULT both dump as None; only listed events are kept.
        data = handler(self)
        return {key: value for key, value in data.items() if not getattr(self, key).is_missing}

    def count(self) -> int:
        """Number of events that are present (DEFAULT or BODY)."""
        return sum(1 for name in type(self).model_fields if getattr(self, name).is_present)

    def present(self) -> list[str]:
        """Names of the present events, in declaration order."""
        return [name for name in type(self).model_fields if getattr(self, name).is_present]


__all__ = [
    "BareEvent",
    "Events",
    "GenericEvent",
    "PullRequest",
    "Push",
    "Cron",
    "WorkflowCall",
    "WorkflowCallInput",
    "WorkflowCallOutput",
    "WorkflowCallSecret",
    "WorkflowDispatch",
    "WorkflowDispatchInput",
    "WorkflowRun",
]
