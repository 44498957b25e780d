"""Three-state optional values for keys where absent and empty mean different things.

Workflow triggers are the motivating case:

    on:
      push:            # present with a body → BODY
        branches: [main]
      pull_request:    # present, null → DEFAULT (trigger with event defaults)
                       # issues not listed at all → MISSING (no trigger)

A plain ``T | None`` only has two states, so the tri-state is modeled as a
tagged value with an explicit BodyState.
"""

from enum import Enum
from typing import Any, Generic, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

T = TypeVar("T")


class BodyState(str, Enum):
    """Presence state of an optional key."""

    MISSING = "missing"  # Key not present in the mapping
    DEFAULT = "default"  # Key present with a null value
    BODY = "body"  # Key present with a concrete value


class OptionalBody(Generic[T]):  # noqa: UP046
    """
    A value that is missing, explicitly defaulted, or carries a body.

    Decoding maps null to DEFAULT and any other value to BODY. MISSING is
    never produced by decoding a value; it is the field default, so it only
    survives for keys that did not appear in the mapping at all.

    Usage:
        events = Events.model_validate({"pull_request": None})
        events.pull_request.is_default  # True
        events.push.is_missing  # True
    """

    __slots__ = ("_state", "_body")

    def __init__(self, state: BodyState, body: T | None = None) -> None:
        if state != BodyState.BODY and body is not None:
            raise ValueError(f"{state.value} optional body cannot carry a value")
        self._state = state
        self._body = body

    @property
    def state(self) -> BodyState:
        return self._state

    @property
    def body(self) -> T | None:
        return self._body

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptionalBody):
            return NotImplemented
        return self._state == other._state and self._body == other._body

    def __hash__(self) -> int:
        return hash((self._state, self._body))

    def __repr__(self) -> str:
        if self._state == BodyState.BODY:
            return f"OptionalBody.of({self._body!r})"
        return f"OptionalBody.{self._state.value}()"

    @classmethod
    def missing(cls) -> "OptionalBody[T]":
        return cls(state=BodyState.MISSING)

    @classmethod
    def default(cls) -> "OptionalBody[T]":
        return cls(state=BodyState.DEFAULT)

    @classmethod
    def of(cls, body: T) -> "OptionalBody[T]":
        return cls(state=BodyState.BODY, body=body)

    @classmethod
    def from_optional(cls, value: T | None) -> "OptionalBody[T]":
        """Map a decoded optional: None → DEFAULT, value → BODY."""
        if value is None:
            return cls.default()
        return cls.of(value)

    @property
    def is_missing(self) -> bool:
        return self.state == BodyState.MISSING

    @property
    def is_default(self) -> bool:
        return self.state == BodyState.DEFAULT

    @property
    def is_body(self) -> bool:
        return self.state == BodyState.BODY

    @property
    def is_present(self) -> bool:
        """Whether the key appeared at all (DEFAULT or BODY)."""
        return self.state != BodyState.MISSING

    def __bool__(self) -> bool:
        return self.is_present

    def unwrap(self) -> T:
        """Get the body or raise if there is none."""
        if self.state != BodyState.BODY:
            raise ValueError(f"Cannot unwrap {self.state.value} optional body")
        return self.body  # type: ignore[return-value]

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Decode as ``T | None`` and wrap the result in a DEFAULT/BODY state."""
        args = get_args(source_type)
        body_schema = handler.generate_schema(args[0]) if args else core_schema.any_schema()
        return core_schema.no_info_after_validator_function(
            cls.from_optional,
            core_schema.nullable_schema(body_schema),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.body
            ),
        )


def count_present(*values: OptionalBody[Any]) -> int:
    """Count how many of the given values are not MISSING."""
    return sum(1 for value in values if value.is_present)


__all__ = ["BodyState", "OptionalBody", "count_present"]
