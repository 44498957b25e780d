"""LoadResult for safe document loading.

The loader layer never raises for bad input. Direct decoding through the
Pydantic models raises ``pydantic.ValidationError``; the loaders catch it
and return a LoadResult carrying a readable message instead.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class LoadStatus(str, Enum):
    """Status of a loading operation.

    Used by the loader layer for:
    - YAML parsing
    - Model validation
    - Workflow discovery
    """

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class LoadResult(Generic[T]):  # noqa: UP046
    """
    Result of loading a workflow, action or Dependabot document.

    Usage:
        load_result = load_workflow_from_file(path)
        if load_result.is_success:
            workflow = load_result.value
        else:
            print(f"Load error: {load_result.error}")
    """

    status: LoadStatus
    value: T | None = None
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate state consistency after initialization.

        - SUCCESS results must have a value
        - FAILED results must have an error message
        """
        if self.status == LoadStatus.SUCCESS and self.value is None:
            raise ValueError("Success result must have a value")
        if self.status == LoadStatus.FAILED and not self.error:
            raise ValueError("Failed result must have an error message")

    @property
    def is_success(self) -> bool:
        return self.status == LoadStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status == LoadStatus.FAILED

    @classmethod
    def success(cls, value: T, metadata: dict[str, Any] | None = None) -> "LoadResult[T]":
        """Create a successful load result.

        Args:
            value: The decoded document
            metadata: Optional metadata dictionary (defaults to empty dict)
        """
        return cls(
            status=LoadStatus.SUCCESS,
            value=value,
            metadata=metadata or {},
        )

    @classmethod
    def failure(cls, error: str, metadata: dict[str, Any] | None = None) -> "LoadResult[T]":
        """Create a failed load result.

        Args:
            error: Message describing the failure (missing file, bad YAML, invalid document)
            metadata: Optional metadata dictionary, e.g. structured ``errors``
        """
        return cls(
            status=LoadStatus.FAILED,
            error=error,
            metadata=metadata or {},
        )

    def __bool__(self) -> bool:
        return self.is_success

    def unwrap(self) -> T:
        """Get value or raise exception if failed."""
        if not self.is_success:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        if self.value is None:
            raise ValueError("Cannot unwrap result: value is None")
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get value or return default if failed."""
        if self.is_success and self.value is not None:
            return self.value
        return default


__all__ = ["LoadResult", "LoadStatus"]
