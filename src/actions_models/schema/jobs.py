"""
Workflow jobs and steps.

A job under ``jobs:`` is either a normal job (steps on a runner) or a call
to a reusable workflow. The two are told apart by the presence of a
``uses`` key, which only reusable workflow calls have.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import (
    Discriminator,
    Field,
    SerializerFunctionWrapHandler,
    StrictInt,
    StrictStr,
    Tag,
    model_serializer,
    model_validator,
)

from .base import ActionsModel
from .expressions import BoE, If, LoE
from .validation import ReusableUses, StepUses, check_runner_group, check_step_body
from .values import BasePermission, BoS, Env, Permissions, SoV


class ConcurrencySpec(ActionsModel):
    """Mapping form of ``concurrency:``."""

    group: str
    cancel_in_progress: BoE = False


# `concurrency: ci-${{ github.ref }}` or `concurrency: {group: ..., cancel-in-progress: ...}`
Concurrency = Union[str, ConcurrencySpec]


class RunDefaults(ActionsModel):
    shell: str | None = None
    working_directory: str | None = None


class Defaults(ActionsModel):
    """``defaults:`` for a workflow or job."""

    run: RunDefaults | None = None


class RunnerGroup(ActionsModel):
    """
    Mapping form of ``runs-on:``, selecting runners by group and/or labels.

    An empty mapping (no group and no labels) is rejected. An empty-string
    group still counts as a group and is accepted.
    """

    group: str | None = None
    labels: SoV[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_group_or_labels(self) -> "RunnerGroup":
        """Validate that a group name or at least one label is given."""
        check_runner_group(self.group, self.labels)
        return self


# `runs-on: ubuntu-latest`, `runs-on: [self-hosted, linux]` or a RunnerGroup.
RunsOn = Union[SoV[str], RunnerGroup]


class DeploymentEnvironmentSpec(ActionsModel):
    name: str
    url: str | None = None


DeploymentEnvironment = Union[str, DeploymentEnvironmentSpec]


class Step(ActionsModel):
    """
    A single job step: either ``uses:`` an action or ``run:`` a command.

    Attributes:
        uses: Parsed action reference (``uses`` steps)
        with_: Action inputs, YAML key ``with`` (``uses`` steps)
        run: Command text; ``run: true`` is the command ``"true"`` (``run`` steps)
        shell, working_directory: Only valid on ``run`` steps
    """

    id: str | None = None
    if_: If | None = None
    name: str | None = None
    timeout_minutes: LoE[StrictInt] | None = None
    continue_on_error: BoE = False
    uses: StepUses | None = None
    with_: Env = Field(default_factory=dict)
    run: BoS | None = None
    working_directory: str | None = None
    shell: str | None = None
    env: LoE[Env] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_body(self) -> "Step":
        """Validate that exactly one of uses/run is set, with matching keys."""
        check_step_body(
            uses=self.uses,
            run=self.run,
            uses_only={"with": bool(self.with_)},
            run_only={
                "shell": self.shell is not None,
                "working-directory": self.working_directory is not None,
            },
        )
        return self

    @property
    def is_run(self) -> bool:
        return self.run is not None


MatrixRows = list[dict[str, Any]]

_MATRIX_KEYWORDS = frozenset({"include", "exclude"})


class Matrix(ActionsModel):
    """
    ``strategy.matrix``.

    Every key other than ``include`` and ``exclude`` is a dimension. Any
    level may be an expression (``matrix: ${{ fromJSON(...) }}`` is handled
    by the enclosing LoE, ``os: ${{ fromJSON(...) }}`` by the dimension's).
    """

    include: LoE[MatrixRows] = Field(default_factory=list)
    exclude: LoE[MatrixRows] = Field(default_factory=list)
    dimensions: dict[str, LoE[list[Any]]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_dimensions(cls, data: Any) -> Any:
        """
        Move every non-keyword key into ``dimensions``.

        ``Matrix(dimensions={...})`` is accepted too. A ``dimensions`` key
        that is not a mapping is an ordinary dimension with that name.
        """
        if not isinstance(data, dict):
            return data
        regrouped: dict[str, Any] = {key: data[key] for key in _MATRIX_KEYWORDS if key in data}
        dimensions = {key: value for key, value in data.items() if key not in _MATRIX_KEYWORDS}
        by_name = dimensions.get("dimensions")
        if isinstance(by_name, dict):
            del dimensions["dimensions"]
            dimensions = {**by_name, **dimensions}
        if dimensions:
            regrouped["dimensions"] = dimensions
        return regrouped

    @model_serializer(mode="wrap")
    def flatten_dimensions(self, handler: SerializerFunctionWrapHandler) -> Any:
        data = handler(self)
        data.update(data.pop("dimensions", {}))
        return data


class Strategy(ActionsModel):
    matrix: LoE[Matrix] | None = None
    fail_fast: BoE | None = None
    max_parallel: LoE[StrictInt] | None = None


class DockerCredentials(ActionsModel):
    username: str | None = None
    password: str | None = None


class ContainerSpec(ActionsModel):
    """Mapping form of ``container:`` and ``services.<id>``."""

    image: str
    credentials: DockerCredentials | None = None
    env: LoE[Env] = Field(default_factory=dict)
    ports: list[Union[StrictInt, StrictStr]] = Field(default_factory=list)
    volumes: list[str] = Field(default_factory=list)
    options: str | None = None


# `container: node:18` or a ContainerSpec.
Container = Union[str, ContainerSpec]


class _JobCommon(ActionsModel):
    name: str | None = None
    permissions: Permissions = BasePermission.DEFAULT
    needs: SoV[str] = Field(default_factory=list)
    if_: If | None = None
    strategy: Strategy | None = None
    concurrency: Concurrency | None = None


class NormalJob(_JobCommon):
    """A job whose steps run on a runner."""

    runs_on: LoE[RunsOn]
    environment: DeploymentEnvironment | None = None
    outputs: dict[str, str] = Field(default_factory=dict)
    env: LoE[Env] = Field(default_factory=dict)
    defaults: Defaults | None = None
    steps: list[Step]
    timeout_minutes: LoE[StrictInt] | None = None
    continue_on_error: BoE = False
    container: Container | None = None
    services: dict[str, Container] = Field(default_factory=dict)

    @property
    def is_reusable(self) -> bool:
        return False


class ReusableWorkflowCallJob(_JobCommon):
    """
    A job that calls a reusable workflow.

    ``uses`` must be a pinned ``owner/repo/path@ref`` or an unpinned ``./path``.
    ``secrets: inherit`` passes every caller secret through.
    """

    uses: ReusableUses
    with_: Env = Field(default_factory=dict)
    secrets: Literal["inherit"] | Env | None = None

    @property
    def is_reusable(self) -> bool:
        return True


def job_kind(value: Any) -> str:
    """Discriminate jobs on the presence of a ``uses`` key."""
    if isinstance(value, dict):
        return "reusable" if "uses" in value else "normal"
    return "reusable" if isinstance(value, ReusableWorkflowCallJob) else "normal"


Job = Annotated[
    Union[
        Annotated[NormalJob, Tag("normal")],
        Annotated[ReusableWorkflowCallJob, Tag("reusable")],
    ],
    Discriminator(job_kind),
]


__all__ = [
    "Concurrency",
    "ConcurrencySpec",
    "Defaults",
    "RunDefaults",
    "RunnerGroup",
    "RunsOn",
    "DeploymentEnvironment",
    "DeploymentEnvironmentSpec",
    "Step",
    "Matrix",
    "Strategy",
    "DockerCredentials",
    "Container",
    "ContainerSpec",
    "NormalJob",
    "ReusableWorkflowCallJob",
    "Job",
    "job_kind",
]
