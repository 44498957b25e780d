"""Contextual validation for decoded GitHub Actions values.

Per-field decoding cannot express rules that span several fields or that
depend on where a value appears. The checks in this module run as a
post-decode pass over already-assembled values, so a failure always names a
semantic rule rather than a syntax problem.

Checks:
- Reusable workflow references: remote ones must be pinned, local ones must
  not be, docker ones are never allowed
- Runner groups: a group-shaped ``runs-on`` needs a group or some labels
- Step bodies: exactly one of ``uses``/``run``, with matching companion keys
- Event filters: ``x`` and ``x-ignore`` are mutually exclusive
"""

from collections.abc import Iterable, Mapping
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator

from .exceptions import InvariantViolationError, ReusableUsesError, RunnerGroupError
from .uses import DockerUses, LocalUses, RepositoryUses, Uses, parse_uses


def validate_reusable_uses(uses: Uses) -> Uses:
    """
    Validate a reference used to call a reusable workflow (``jobs.<id>.uses``).

    Rules:
    - RepositoryUses must carry a ref (remote reusable workflows are pinned)
    - LocalUses must not contain ``@`` (local reusable workflows are never pinned).
      This is a raw substring scan: ``@`` is otherwise legal in a local path.
    - DockerUses is always rejected

    Args:
        uses: A reference produced by parse_uses

    Returns:
        The same reference, unchanged

    Raises:
        ReusableUsesError: If any rule is violated

    Examples:
        >>> validate_reusable_uses(parse_uses("owner/repo/.github/workflows/ci.yml@v1"))  # OK
        >>> validate_reusable_uses(parse_uses("owner/repo/ci.yml"))  # Raises (not pinned)
        >>> validate_reusable_uses(parse_uses("./ci.yml@v1"))  # Raises (pinned local)
    """
    if isinstance(uses, RepositoryUses):
        if uses.ref is None:
            raise ReusableUsesError(str(uses), "remote reusable workflows must be pinned with @ref")
    elif isinstance(uses, LocalUses):
        if "@" in uses.path:
            raise ReusableUsesError(uses.path, "local reusable workflows must not be pinned")
    elif isinstance(uses, DockerUses):
        raise ReusableUsesError(str(uses), "docker references cannot be used as reusable workflows")
    return uses


def parse_reusable_uses(text: str) -> Uses:
    """Parse a ``jobs.<id>.uses`` string and apply the reusable workflow rules."""
    return validate_reusable_uses(parse_uses(text))


def check_runner_group(group: str | None, labels: list[str]) -> None:
    """
    Require a group name or at least one label on a group-shaped ``runs-on``.

    Raises:
        RunnerGroupError: If both are empty
    """
    if group is None and not labels:
        raise RunnerGroupError()


def check_step_body(
    *,
    uses: Any,
    run: str | None,
    uses_only: Mapping[str, bool],
    run_only: Mapping[str, bool],
) -> None:
    """
    Validate the ``uses``/``run`` body of a step.

    Args:
        uses: Decoded ``uses`` value (None when absent)
        run: Decoded ``run`` value (None when absent)
        uses_only: Companion keys only valid on ``uses`` steps → whether set
        run_only: Companion keys only valid on ``run`` steps → whether set

    Raises:
        InvariantViolationError: If the body is ambiguous, empty, or mixes keys
    """
    if uses is not None and run is not None:
        raise InvariantViolationError("step must specify either `uses` or `run`, not both")
    if uses is None and run is None:
        raise InvariantViolationError("step must specify one of `uses` or `run`")

    if uses is not None:
        misplaced = sorted(key for key, is_set in run_only.items() if is_set)
        kind = "uses"
    else:
        misplaced = sorted(key for key, is_set in uses_only.items() if is_set)
        kind = "run"

    if misplaced:
        raise InvariantViolationError(
            f"`{kind}` step cannot specify: {', '.join(f'`{key}`' for key in misplaced)}"
        )


def check_exclusive_filters(values: Mapping[str, Any], names: Iterable[str]) -> None:
    """
    Reject event bodies that set both ``<name>`` and ``<name>-ignore``.

    Args:
        values: Decoded filter values keyed by YAML name (None when absent)
        names: Filter names to check (e.g. ``branches``, ``paths``)

    Raises:
        InvariantViolationError: On the first conflicting pair
    """
    for name in names:
        ignore = f"{name}-ignore"
        if values.get(name) is not None and values.get(ignore) is not None:
            raise InvariantViolationError(f"cannot use both `{name}` and `{ignore}` in the same event")


def _step_uses(value: Any) -> Uses:
    if isinstance(value, (LocalUses, RepositoryUses, DockerUses)):
        return value
    if not isinstance(value, str):
        raise ValueError(f"`uses` must be a string, got {type(value).__name__}")
    return parse_uses(value)


def _reusable_uses(value: Any) -> Uses:
    return validate_reusable_uses(_step_uses(value))


# Field types: a step's `uses:` and a reusable workflow call job's `uses:`.
StepUses = Annotated[Uses, PlainValidator(_step_uses), PlainSerializer(str)]
ReusableUses = Annotated[Uses, PlainValidator(_reusable_uses), PlainSerializer(str)]


__all__ = [
    "validate_reusable_uses",
    "parse_reusable_uses",
    "check_runner_group",
    "check_step_body",
    "check_exclusive_filters",
    "StepUses",
    "ReusableUses",
]
