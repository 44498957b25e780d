"""
GitHub Actions workflow documents (``.github/workflows/*.yml``).

Resources:
- Workflow syntax: https://docs.github.com/en/actions/using-workflows/workflow-syntax-for-github-actions
- JSON Schema: https://json.schemastore.org/github-workflow.json
"""

from typing import Annotated, Union

from pydantic import Field

from .base import ActionsModel
from .events import BareEvent, Events
from .expressions import FirstMatch, LoE
from .jobs import Concurrency, Defaults, Job, NormalJob, ReusableWorkflowCallJob
from .values import BasePermission, Env, Permissions

# `on: push`, `on: [push, fork]` or an Events mapping, tried in that order.
Trigger = Annotated[Union[BareEvent, list[BareEvent], Events], FirstMatch()]


class Workflow(ActionsModel):
    """
    A single workflow file.

    ``jobs`` keeps the document order of job IDs.

    Example:
        >>> workflow = Workflow.model_validate(
        ...     {"on": "push", "jobs": {"test": {"runs-on": "ubuntu-latest", "steps": [{"run": "make"}]}}}
        ... )
        >>> workflow.on
        <BareEvent.PUSH: 'push'>
    """

    name: str | None = None
    run_name: str | None = None
    on: Trigger
    permissions: Permissions = BasePermission.DEFAULT
    env: LoE[Env] = Field(default_factory=dict)
    defaults: Defaults | None = None
    concurrency: Concurrency | None = None
    jobs: dict[str, Job]

    @property
    def events(self) -> list[str]:
        """Names of every event that triggers this workflow."""
        if isinstance(self.on, BareEvent):
            return [self.on.value]
        if isinstance(self.on, list):
            return [event.value for event in self.on]
        return self.on.present()

    @property
    def trigger_count(self) -> int:
        if isinstance(self.on, Events):
            return self.on.count()
        return len(self.events)

    def normal_jobs(self) -> dict[str, NormalJob]:
        return {job_id: job for job_id, job in self.jobs.items() if isinstance(job, NormalJob)}

    def reusable_jobs(self) -> dict[str, ReusableWorkflowCallJob]:
        return {
            job_id: job
            for job_id, job in self.jobs.items()
            if isinstance(job, ReusableWorkflowCallJob)
        }


__all__ = ["Workflow", "Trigger"]
