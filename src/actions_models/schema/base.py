"""Shared Pydantic base model for GitHub Actions schema records."""

from pydantic import BaseModel


def to_kebab(name: str) -> str:
    """Map a Python field name to its YAML key (``cancel_in_progress`` → ``cancel-in-progress``)."""
    return name.rstrip("_").replace("_", "-")


class ActionsModel(BaseModel):
    """
    Base class for every decoded record.

    - Keys use kebab-case aliases, matching the YAML documents
    - Fields can also be populated by their Python names (tests, tools)
    - Unknown keys are rejected (structurally invalid input)
    - Records are immutable once decoded
    """

    model_config = {
        "alias_generator": to_kebab,
        "populate_by_name": True,
        "extra": "forbid",
        "frozen": True,
    }


class SnakeCaseModel(ActionsModel):
    """Record whose YAML keys are snake_case (webhook event names)."""

    model_config = {"alias_generator": None}


__all__ = ["ActionsModel", "SnakeCaseModel", "to_kebab"]
