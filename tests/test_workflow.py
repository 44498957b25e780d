"""Tests for workflow decoding against real-world sample workflows."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from actions_models.schema import (
    BareEvent,
    BasePermission,
    ConcurrencySpec,
    ContainerSpec,
    Cron,
    Events,
    ExplicitExpr,
    ExplicitPermissions,
    LocalUses,
    Matrix,
    NormalJob,
    Permission,
    ReusableWorkflowCallJob,
    Step,
    Workflow,
    is_expr,
    parse_uses,
)

WORKFLOWS_DIR = Path(__file__).parent / "samples" / "workflows"

ALL_SAMPLES = sorted(path.name for path in WORKFLOWS_DIR.glob("*.yml"))


@pytest.mark.parametrize("name", ALL_SAMPLES)
def test_sample_workflows_load(load_workflow, name: str) -> None:
    """Test every sample workflow decodes."""
    workflow = load_workflow(name)
    assert workflow.jobs


@pytest.mark.parametrize("name", ALL_SAMPLES)
def test_sample_workflows_redecode_from_dump(load_workflow, name: str) -> None:
    """Test a dumped workflow decodes back to the same triggers and document."""
    workflow = load_workflow(name)
    dumped = workflow.model_dump(by_alias=True)

    redecoded = Workflow.model_validate(dumped)

    assert redecoded.events == workflow.events
    assert redecoded.trigger_count == workflow.trigger_count
    assert redecoded.model_dump(by_alias=True) == dumped


class TestPipAuditCI:
    """pip-audit's CI workflow, checked field by field."""

    @pytest.fixture
    def workflow(self, load_workflow) -> Workflow:
        return load_workflow("pip-audit-ci.yml")

    def test_triggers(self, workflow: Workflow) -> None:
        """Test push has a body, pull_request is defaulted, schedule has crons."""
        assert workflow.name == "CI"
        assert isinstance(workflow.on, Events)

        assert workflow.on.push.unwrap().branches == ["main"]
        assert workflow.on.pull_request.is_default
        assert workflow.on.schedule.unwrap() == [Cron(cron="0 12 * * *")]
        assert workflow.on.issues.is_missing
        assert workflow.trigger_count == 3
        assert workflow.events == ["pull_request", "push", "schedule"]

    def test_job(self, workflow: Workflow) -> None:
        """Test the single test job."""
        job = workflow.jobs["test"]

        assert isinstance(job, NormalJob)
        assert job.name is None
        assert job.runs_on == ["ubuntu-latest"]
        assert job.permissions == BasePermission.DEFAULT
        assert job.needs == []

    def test_matrix(self, workflow: Workflow) -> None:
        """Test non-keyword matrix keys become dimensions."""
        matrix = workflow.jobs["test"].strategy.matrix

        assert isinstance(matrix, Matrix)
        assert matrix.dimensions == {"python": ["3.8", "3.9", "3.10", "3.11", "3.12"]}
        assert matrix.include == []

    def test_steps(self, workflow: Workflow) -> None:
        """Test the three steps in order."""
        checkout, setup, test = workflow.jobs["test"].steps

        assert checkout.uses == parse_uses("actions/checkout@v4.1.1")
        assert checkout.with_ == {}

        assert setup.uses == parse_uses("actions/setup-python@v5")
        assert setup.with_ == {
            "python-version": "${{ matrix.python }}",
            "cache": "pip",
            "cache-dependency-path": "pyproject.toml",
        }

        assert test.name == "test"
        assert test.run == "make test PIP_AUDIT_EXTRA=test"
        assert test.uses is None
        assert test.working_directory is None
        assert test.shell is None
        assert test.env == {}


class TestRunsOnExpression:
    """A job whose runner comes from the matrix."""

    def test_runs_on_is_expression(self, load_workflow) -> None:
        """Test runs-on decodes to an expression."""
        workflow = load_workflow("runs-on-expr.yml")
        job = workflow.jobs["check-bats-version"]

        assert job.runs_on == ExplicitExpr.from_curly("${{ matrix.runner }}")
        assert job.strategy.matrix.dimensions == {"runner": ["ubuntu-latest", "macos-latest"]}
        assert job.steps[1].with_ == {"node-version": 20}
        assert workflow.on == [BareEvent.PUSH]


class TestHomebrewAutomerge:
    """Folded if: and run: true."""

    @pytest.fixture
    def workflow(self, load_workflow) -> Workflow:
        return load_workflow("homebrew-core-automerge-triggers.yml")

    def test_triggers(self, workflow: Workflow) -> None:
        """Test generic event bodies."""
        assert workflow.on.pull_request_review.unwrap().types == ["submitted"]
        assert workflow.on.pull_request_target.unwrap().types == ["unlabeled", "ready_for_review"]
        assert workflow.trigger_count == 2

    def test_folded_condition(self, workflow: Workflow) -> None:
        """Test a multi-line bare condition is an expression."""
        condition = workflow.jobs["check"].if_

        assert is_expr(condition)
        assert not condition.is_curly
        assert condition.as_bare().startswith("github.repository_owner == 'Homebrew' &&")

    def test_run_true(self, workflow: Workflow) -> None:
        """Test run: true is the command "true"."""
        assert workflow.jobs["check"].steps[0].run == "true"


class TestIntelSyclRunTests:
    """A large reusable workflow with dispatch inputs."""

    @pytest.fixture
    def workflow(self, load_workflow) -> Workflow:
        return load_workflow("intel-llvm-sycl-linux-run-tests.yml")

    def test_workflow_call_inputs(self, workflow: Workflow) -> None:
        """Test call inputs keep their types and defaults."""
        inputs = workflow.on.workflow_call.unwrap().inputs

        assert inputs["name"].required is True
        assert inputs["image"].required is False
        assert inputs["tests_selector"].default == "e2e"
        assert inputs["retention-days"].default == 1
        assert inputs["extra_lit_opts"].default == ""

    def test_workflow_dispatch_options(self, workflow: Workflow) -> None:
        """Test boolean choice options decode as strings."""
        inputs = workflow.on.workflow_dispatch.unwrap().inputs

        assert inputs["install_igc_driver"].options == ["false", "true"]
        assert inputs["runner"].type == "choice"
        assert inputs["env"].type is None
        assert inputs["env"].default == "{}"

    def test_permissions(self, workflow: Workflow) -> None:
        """Test explicit workflow permissions."""
        assert isinstance(workflow.permissions, ExplicitPermissions)
        assert workflow.permissions.contents == Permission.READ
        assert workflow.permissions.packages == Permission.READ
        assert workflow.permissions.actions == Permission.NONE

    def test_job_expressions(self, workflow: Workflow) -> None:
        """Test runs-on and env given as expressions."""
        job = workflow.jobs["run"]

        assert job.runs_on == ExplicitExpr.from_curly("${{ fromJSON(inputs.runner) }}")
        assert is_expr(job.env)
        assert job.name == "${{ inputs.name }}"
        assert isinstance(job.container, ContainerSpec)
        assert job.container.options == "${{ inputs.image_options }}"

    def test_local_actions(self, workflow: Workflow) -> None:
        """Test local uses references."""
        steps = {step.name: step for step in workflow.jobs["run"].steps if step.name}

        assert steps["Run E2E Tests"].uses == LocalUses("./devops/actions/run-tests/e2e")
        assert steps["Register cleanup after job is finished"].uses == LocalUses(
            "./devops/actions/cleanup"
        )
        assert steps["Source OneAPI TBB vars.sh"].shell == "bash"


class TestMhilsPythonDeploy:
    """Reusable workflow with declared secrets."""

    @pytest.fixture
    def workflow(self, load_workflow) -> Workflow:
        return load_workflow("mhils-workflows-python-deploy.yml")

    def test_secrets(self, workflow: Workflow) -> None:
        """Test a bare secret key declares a secret with no properties."""
        secrets = workflow.on.workflow_call.unwrap().secrets

        assert secrets["username"] is None
        assert secrets["password"].required is True

    def test_boolean_input(self, workflow: Workflow) -> None:
        """Test input types are kept as written."""
        inputs = workflow.on.workflow_call.unwrap().inputs
        assert inputs["artifact-merge-multiple"].type == "boolean"

    def test_deploy_job(self, workflow: Workflow) -> None:
        """Test environment, env and a SHA-pinned action."""
        job = workflow.jobs["deploy"]

        assert job.environment == "${{ inputs.environment || 'deploy' }}"
        assert job.env["TWINE_PASSWORD"] == "${{ secrets.password }}"
        assert job.steps[0].uses.ref == "6aec23fc537538d8e480e593660afa49a377c224"


class TestPipApiTest:
    """Bare-list triggers, concurrency, needs and an expression matrix."""

    @pytest.fixture
    def workflow(self, load_workflow) -> Workflow:
        return load_workflow("pip-api-test.yml")

    def test_triggers(self, workflow: Workflow) -> None:
        """Test a list of bare events."""
        assert workflow.on == [BareEvent.PUSH, BareEvent.PULL_REQUEST]
        assert workflow.events == ["push", "pull_request"]
        assert workflow.trigger_count == 2

    def test_concurrency(self, workflow: Workflow) -> None:
        """Test the mapping form of concurrency."""
        assert isinstance(workflow.concurrency, ConcurrencySpec)
        assert workflow.concurrency.cancel_in_progress is True
        assert workflow.concurrency.group.startswith("${{")

    def test_job_order_and_needs(self, workflow: Workflow) -> None:
        """Test jobs keep document order and needs normalize to lists."""
        assert list(workflow.jobs) == ["lint", "build-sdist", "build-matrix", "test", "check"]
        assert workflow.jobs["build-matrix"].needs == ["lint"]
        assert workflow.jobs["test"].needs == ["build-matrix", "build-sdist"]

    def test_matrix_expression(self, workflow: Workflow) -> None:
        """Test a whole matrix given as an expression."""
        matrix = workflow.jobs["test"].strategy.matrix

        assert is_expr(matrix)
        assert matrix.as_bare() == "fromJson(needs.build-matrix.outputs.matrix)"

    def test_ref_with_slash(self, workflow: Workflow) -> None:
        """Test refs may contain slashes."""
        step = workflow.jobs["test"].steps[0]
        assert step.uses == parse_uses("re-actors/checkout-python-sdist@release/v1")
        assert step.uses.ref == "release/v1"

    def test_check_job(self, workflow: Workflow) -> None:
        """Test the always() gate."""
        assert workflow.jobs["check"].if_ == ExplicitExpr.from_bare("always()")
        assert workflow.jobs["build-matrix"].outputs == {
            "matrix": "${{ steps.set-matrix.outputs.matrix }}"
        }


class TestPypiAttestationsRelease:
    """Release trigger and write permissions."""

    def test_release(self, load_workflow) -> None:
        """Test release types and id-token permissions."""
        workflow = load_workflow("pypi-attestations-release.yml")

        assert workflow.on.release.unwrap().types == ["published"]
        assert workflow.permissions.id_token == Permission.WRITE
        assert workflow.permissions.attestations == Permission.WRITE
        assert workflow.permissions.contents == Permission.NONE


class TestInlineWorkflows:
    """Small documents exercising individual decoding rules."""

    STEPS = [{"run": "make"}]

    def test_bare_event(self) -> None:
        """Test on: push."""
        workflow = Workflow.model_validate({"on": "push", "jobs": {"a": {"runs-on": "x", "steps": self.STEPS}}})
        assert workflow.on == BareEvent.PUSH
        assert workflow.trigger_count == 1

    @pytest.mark.parametrize("on", ["pushh", "schedule", ["push", "nope"], 3])
    def test_invalid_trigger(self, on: object) -> None:
        """Test unknown events and schedule-without-body are rejected."""
        with pytest.raises(ValidationError):
            Workflow.model_validate({"on": on, "jobs": {"a": {"runs-on": "x", "steps": self.STEPS}}})

    def test_job_kinds(self) -> None:
        """Test jobs are told apart by the uses key."""
        workflow = Workflow.model_validate(
            {
                "on": ["push"],
                "jobs": {
                    "build": {"runs-on": "ubuntu-latest", "steps": self.STEPS},
                    "deploy": {
                        "needs": "build",
                        "uses": "octo/deploy/.github/workflows/deploy.yml@v1",
                        "secrets": "inherit",
                    },
                },
            }
        )

        assert isinstance(workflow.jobs["build"], NormalJob)
        assert isinstance(workflow.jobs["deploy"], ReusableWorkflowCallJob)
        assert list(workflow.normal_jobs()) == ["build"]
        assert list(workflow.reusable_jobs()) == ["deploy"]

    def test_concurrency_string(self) -> None:
        """Test the string form of concurrency."""
        workflow = Workflow.model_validate(
            {
                "on": "push",
                "concurrency": "ci-${{ github.ref }}",
                "jobs": {"a": {"runs-on": "x", "steps": self.STEPS}},
            }
        )
        assert workflow.concurrency == "ci-${{ github.ref }}"

    def test_matrix_dimension_expression(self) -> None:
        """Test a single dimension given as an expression."""
        workflow = Workflow.model_validate(
            {
                "on": "push",
                "jobs": {
                    "a": {
                        "runs-on": "x",
                        "steps": self.STEPS,
                        "strategy": {
                            "fail-fast": False,
                            "max-parallel": 2,
                            "matrix": {
                                "os": "${{ fromJSON(inputs.os) }}",
                                "include": [{"os": "windows-latest", "experimental": True}],
                            },
                        },
                    }
                },
            }
        )
        strategy = workflow.jobs["a"].strategy

        assert strategy.fail_fast is False
        assert strategy.max_parallel == 2
        assert is_expr(strategy.matrix.dimensions["os"])
        assert strategy.matrix.include == [{"os": "windows-latest", "experimental": True}]

    def test_matrix_dumps_flat(self) -> None:
        """Test dimensions are spread back into the matrix mapping on dump."""
        matrix = Matrix.model_validate({"python": ["3.11", "3.12"], "exclude": [{"python": "3.11"}]})

        assert matrix.model_dump(by_alias=True) == {
            "include": [],
            "exclude": [{"python": "3.11"}],
            "python": ["3.11", "3.12"],
        }

    def test_matrix_dimensions_by_name(self) -> None:
        """Test dimensions can be passed by field name and survive a dump."""
        matrix = Matrix(dimensions={"os": ["ubuntu-latest"]})

        assert matrix.dimensions == {"os": ["ubuntu-latest"]}
        assert Matrix.model_validate(matrix.model_dump()).dimensions == matrix.dimensions

    def test_matrix_dimension_named_dimensions(self) -> None:
        """Test a list under the key dimensions is an ordinary dimension."""
        matrix = Matrix.model_validate({"dimensions": ["a", "b"], "os": ["x"]})

        assert matrix.dimensions == {"dimensions": ["a", "b"], "os": ["x"]}
        assert Matrix.model_validate(matrix.model_dump()).dimensions == matrix.dimensions

    @pytest.mark.parametrize(
        "extra",
        [
            {"timeout-minutes": True},
            {"timeout-minutes": "30"},
            {"strategy": {"max-parallel": False}},
        ],
    )
    def test_job_integers_are_strict(self, extra: dict) -> None:
        """Test booleans and numeric strings are not accepted as job integers."""
        with pytest.raises(ValidationError):
            NormalJob.model_validate({"runs-on": "x", "steps": self.STEPS, **extra})

    def test_step_timeout_is_strict(self) -> None:
        """Test a boolean step timeout is rejected."""
        with pytest.raises(ValidationError):
            Step.model_validate({"run": "make", "timeout-minutes": True})

    def test_unknown_key_rejected(self) -> None:
        """Test misspelled keys are errors."""
        with pytest.raises(ValidationError):
            Workflow.model_validate(
                {"on": "push", "jobs": {"a": {"runs-on": "x", "step": self.STEPS}}}
            )
