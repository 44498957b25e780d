"""
Dependabot v2 configuration (``.github/dependabot.yml``).

Resources:
- Configuration options: https://docs.github.com/en/code-security/dependabot/dependabot-version-updates/configuration-options-for-the-dependabot.yml-file
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field, StrictBool, StrictInt, model_validator

from .base import ActionsModel
from .exceptions import InvariantViolationError
from .values import SoV


class _Credentials(ActionsModel):
    url: str
    username: str | None = None
    password: str | None = None


class ComposerRepository(_Credentials):
    type: Literal["composer-repository"]


class DockerRegistry(_Credentials):
    type: Literal["docker-registry"]
    replaces_base: StrictBool = False


class GitRegistry(_Credentials):
    type: Literal["git"]


class HexOrganization(ActionsModel):
    type: Literal["hex-organization"]
    organization: str
    key: str | None = None


class HexRepository(ActionsModel):
    type: Literal["hex-repository"]
    repo: str | None = None
    url: str
    auth_key: str | None = None
    public_key_fingerprint: str | None = None


class MavenRepository(_Credentials):
    type: Literal["maven-repository"]


class NpmRegistry(_Credentials):
    type: Literal["npm-registry"]
    token: str | None = None
    replaces_base: StrictBool = False


class NugetFeed(_Credentials):
    type: Literal["nuget-feed"]
    token: str | None = None


class PythonIndex(_Credentials):
    type: Literal["python-index"]
    token: str | None = None
    replaces_base: StrictBool = False


class RubygemsServer(_Credentials):
    type: Literal["rubygems-server"]
    token: str | None = None
    replaces_base: StrictBool = False


class TerraformRegistry(ActionsModel):
    type: Literal["terraform-registry"]
    url: str
    token: str | None = None


# Private registries, tagged by their `type:` key.
Registry = Annotated[
    Union[
        ComposerRepository,
        DockerRegistry,
        GitRegistry,
        HexOrganization,
        HexRepository,
        MavenRepository,
        NpmRegistry,
        NugetFeed,
        PythonIndex,
        RubygemsServer,
        TerraformRegistry,
    ],
    Field(discriminator="type"),
]


class PackageEcosystem(str, Enum):
    BUNDLER = "bundler"
    CARGO = "cargo"
    COMPOSER = "composer"
    DEVCONTAINERS = "devcontainers"
    DOCKER = "docker"
    DOCKER_COMPOSE = "docker-compose"
    DOTNET_SDK = "dotnet-sdk"
    ELM = "elm"
    GITSUBMODULE = "gitsubmodule"
    GITHUB_ACTIONS = "github-actions"
    GOMOD = "gomod"
    GRADLE = "gradle"
    HELM = "helm"
    MAVEN = "maven"
    MIX = "mix"
    NPM = "npm"
    NUGET = "nuget"
    PIP = "pip"
    PUB = "pub"
    SWIFT = "swift"
    TERRAFORM = "terraform"
    UV = "uv"


class DependencyType(str, Enum):
    DIRECT = "direct"
    INDIRECT = "indirect"
    ALL = "all"
    PRODUCTION = "production"
    DEVELOPMENT = "development"


class UpdateType(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class Interval(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUALLY = "semiannually"
    YEARLY = "yearly"
    CRON = "cron"


class Day(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class AllowDeny(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


class RebaseStrategy(str, Enum):
    AUTO = "auto"
    DISABLED = "disabled"


class VersioningStrategy(str, Enum):
    AUTO = "auto"
    INCREASE = "increase"
    INCREASE_IF_NECESSARY = "increase-if-necessary"
    LOCKFILE_ONLY = "lockfile-only"
    WIDEN = "widen"


class Schedule(ActionsModel):
    interval: Interval
    day: Day | None = None
    # hh:mm, interpreted in `timezone` (UTC by default).
    time: str | None = None
    timezone: str | None = None
    cronjob: str | None = None


class Allow(ActionsModel):
    dependency_name: str | None = None
    dependency_type: DependencyType | None = None


class CommitMessage(ActionsModel):
    prefix: str | None = None
    prefix_development: str | None = None
    # Only "scope" is meaningful.
    include: str | None = None


class Group(ActionsModel):
    # Only production or development.
    dependency_type: DependencyType | None = None
    patterns: set[str] = Field(default_factory=set)
    exclude_patterns: set[str] = Field(default_factory=set)
    update_types: set[UpdateType] = Field(default_factory=set)


class Ignore(ActionsModel):
    dependency_name: str | None = None
    # Strings like "version-update:semver-major", not UpdateType values.
    update_types: set[str] = Field(default_factory=set)
    versions: set[str] = Field(default_factory=set)


class PullRequestBranchName(ActionsModel):
    separator: str


def _default_labels() -> set[str]:
    return {"dependencies"}


class Update(ActionsModel):
    """
    One ``updates:`` entry.

    Defaults follow GitHub: ``labels`` is ``{"dependencies"}``, at most 5
    open pull requests, automatic rebasing, and no external code execution.
    """

    allow: list[Allow] = Field(default_factory=list)
    assignees: set[str] = Field(default_factory=set)
    commit_message: CommitMessage | None = None
    directory: str | None = None
    directories: list[str] | None = None
    groups: dict[str, Group] = Field(default_factory=dict)
    ignore: list[Ignore] = Field(default_factory=list)
    insecure_external_code_execution: AllowDeny = AllowDeny.DENY
    labels: set[str] = Field(default_factory=_default_labels)
    milestone: StrictInt | None = None
    open_pull_requests_limit: StrictInt = 5
    package_ecosystem: PackageEcosystem
    pull_request_branch_name: PullRequestBranchName | None = None
    rebase_strategy: RebaseStrategy = RebaseStrategy.AUTO
    registries: SoV[str] | None = None
    reviewers: set[str] = Field(default_factory=set)
    schedule: Schedule
    target_branch: str | None = None
    vendor: StrictBool = False
    versioning_strategy: VersioningStrategy | None = None

    @model_validator(mode="after")
    def validate_directory(self) -> "Update":
        """Validate that exactly one of directory/directories is given."""
        if self.directory is not None and self.directories is not None:
            raise InvariantViolationError("update cannot specify both `directory` and `directories`")
        if self.directory is None and self.directories is None:
            raise InvariantViolationError("update must specify `directory` or `directories`")
        return self

    @property
    def all_directories(self) -> list[str]:
        if self.directory is not None:
            return [self.directory]
        return list(self.directories or [])


class Dependabot(ActionsModel):
    """A ``dependabot.yml`` file."""

    version: Literal[2]
    enable_beta_ecosystems: StrictBool = False
    registries: dict[str, Registry] = Field(default_factory=dict)
    updates: list[Update]


__all__ = [
    "Dependabot",
    "Update",
    "Registry",
    "PackageEcosystem",
    "DependencyType",
    "UpdateType",
    "Interval",
    "Day",
    "AllowDeny",
    "RebaseStrategy",
    "VersioningStrategy",
    "Schedule",
    "Allow",
    "CommitMessage",
    "Group",
    "Ignore",
    "PullRequestBranchName",
]
