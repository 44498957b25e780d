"""
GitHub Actions action metadata (``action.yml``).

Resources:
- Metadata syntax: https://docs.github.com/en/actions/creating-actions/metadata-syntax-for-github-actions
- JSON Schema: https://json.schemastore.org/github-action.json

``runs.using`` selects the action kind:
- ``composite``: a list of steps, like a small inline workflow job
- ``docker``: a container image or Dockerfile
- anything else (``node20``, ``node16``, ...): a JavaScript action
"""

from typing import Annotated, Any, Literal, Union

from pydantic import Discriminator, Field, StrictBool, Tag, model_validator

from .base import ActionsModel
from .exceptions import InvariantViolationError
from .expressions import BoE, If, LoE
from .validation import StepUses, check_step_body
from .values import BoS, Env, EnvValue


class ActionInput(ActionsModel):
    description: str | None = None
    required: StrictBool | None = None
    # `default: false` and `default: ${{ github.token }}` are both common.
    default: EnvValue | None = None
    deprecation_message: str | None = Field(default=None, alias="deprecationMessage")


class ActionOutput(ActionsModel):
    description: str | None = None
    # Required by composite actions only.
    value: str | None = None


class Branding(ActionsModel):
    """Marketplace icon and color."""

    icon: str | None = None
    color: str | None = None


class ActionStep(ActionsModel):
    """
    A composite action step.

    Similar to a workflow job step, but ``run`` steps must name a ``shell``
    and there is no ``timeout-minutes``.
    """

    id: str | None = None
    if_: If | None = None
    name: str | None = None
    continue_on_error: BoE = False
    uses: StepUses | None = None
    with_: Env = Field(default_factory=dict)
    run: BoS | None = None
    shell: str | None = None
    working_directory: str | None = None
    env: LoE[Env] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_body(self) -> "ActionStep":
        """Validate the uses/run body and require a shell on run steps."""
        check_step_body(
            uses=self.uses,
            run=self.run,
            uses_only={"with": bool(self.with_)},
            run_only={
                "shell": self.shell is not None,
                "working-directory": self.working_directory is not None,
            },
        )
        if self.run is not None and self.shell is None:
            raise InvariantViolationError("composite action `run` steps must specify a `shell`")
        return self


class JavaScript(ActionsModel):
    """``runs`` for a JavaScript action."""

    # node12, node16, node20, ...
    using: str
    main: str
    pre: str | None = None
    # Defaults to always() when absent.
    pre_if: If | None = None
    post: str | None = None
    post_if: If | None = None


class Composite(ActionsModel):
    """``runs`` for a composite action."""

    using: Literal["composite"]
    steps: list[ActionStep]


class Docker(ActionsModel):
    """``runs`` for a Docker container action."""

    using: Literal["docker"]
    # `Dockerfile` or `docker://image:tag`.
    image: str
    env: Env = Field(default_factory=dict)
    args: list[str] = Field(default_factory=list)
    entrypoint: str | None = None
    pre_entrypoint: str | None = None
    pre_if: If | None = None
    post_entrypoint: str | None = None
    post_if: If | None = None


def runs_kind(value: Any) -> str:
    """Discriminate ``runs`` on ``using``: composite, docker, otherwise javascript."""
    using = value.get("using") if isinstance(value, dict) else getattr(value, "using", None)
    if using in ("composite", "docker"):
        return using
    return "javascript"


Runs = Annotated[
    Union[
        Annotated[JavaScript, Tag("javascript")],
        Annotated[Composite, Tag("composite")],
        Annotated[Docker, Tag("docker")],
    ],
    Discriminator(runs_kind),
]


class Action(ActionsModel):
    """
    An action definition.

    Example:
        >>> action = Action.model_validate(
        ...     {"name": "hello", "runs": {"using": "node20", "main": "index.js"}}
        ... )
        >>> type(action.runs).__name__
        'JavaScript'
    """

    name: str
    author: str | None = None
    description: str | None = None
    inputs: dict[str, ActionInput] = Field(default_factory=dict)
    outputs: dict[str, ActionOutput] = Field(default_factory=dict)
    runs: Runs
    branding: Branding | None = None

    @property
    def kind(self) -> str:
        return runs_kind(self.runs)


__all__ = [
    "Action",
    "ActionInput",
    "ActionOutput",
    "ActionStep",
    "Branding",
    "Runs",
    "JavaScript",
    "Composite",
    "Docker",
    "runs_kind",
]
