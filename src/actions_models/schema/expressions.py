"""
GitHub Actions expression values and the literal-or-expression combinator.

An expression is a templated placeholder such as ``${{ matrix.python }}``
that the Actions runtime evaluates later. This module never evaluates
expressions; it only recognizes and normalizes their delimiters.

Two textual forms exist:
- curly: ``${{ github.ref }}``, the form used almost everywhere
- bare: ``github.ref``, the form used by ``if:`` conditions

Types:
    ExplicitExpr: A validated expression in either form
    LoE[T]: Field annotation decoding to an ExplicitExpr or a literal T
    BoE: LoE of a strict YAML boolean
    If: An ``if:`` condition (boolean literal or expression in either form)

Decoding order for LoE is fixed: the expression attempt runs before the
literal attempt, so ``"${{ x }}"`` in a ``LoE[str]`` field is always an
expression, while ``"${{ unterminated"`` falls through to the literal.
"""

from typing import Annotated, Any, TypeVar, Union, get_args

from pydantic import GetCoreSchemaHandler, PlainSerializer, PlainValidator, StrictBool
from pydantic_core import core_schema

from .exceptions import InvalidExpressionError

T = TypeVar("T")

_OPEN = "${{"
_CLOSE = "}}"


def _is_curly(text: str) -> bool:
    stripped = text.strip()
    return stripped.startswith(_OPEN) and stripped.endswith(_CLOSE)


class ExplicitExpr:
    """
    An Actions expression, fenced by ``${{ ... }}`` or given bare.

    Instances are only built through ``from_curly`` and ``from_bare``, which
    validate the text, so ``as_bare()`` can always strip the delimiters of
    ``as_curly()``.

    Attributes:
        raw: The exact text the expression was decoded from (untrimmed)

    Example:
        >>> expr = ExplicitExpr.from_curly("  ${{ foo  }} \\t")
        >>> expr.as_curly()
        '${{ foo  }}'
        >>> expr.as_bare()
        'foo'
        >>> ExplicitExpr.from_bare("github.ref == 'main'").as_curly()
        "${{ github.ref == 'main' }}"
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: str) -> None:
        """Internal: build through ``from_curly`` or ``from_bare``."""
        if not isinstance(raw, str):
            raise TypeError(f"expression must be a string, got {type(raw).__name__}")
        self._raw = raw

    @classmethod
    def from_curly(cls, text: str) -> "ExplicitExpr | None":
        """Build from curly text, or return None if the delimiters are missing."""
        if not _is_curly(text):
            return None
        return cls(text)

    @classmethod
    def from_bare(cls, text: str) -> "ExplicitExpr | None":
        """Build from bare text, or return None if the text is already curly."""
        if _is_curly(text):
            return None
        return cls(text)

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def is_curly(self) -> bool:
        """Whether the expression was written with ``${{ }}`` delimiters."""
        return _is_curly(self._raw)

    def as_curly(self) -> str:
        """Return the trimmed curly form, synthesizing delimiters for bare text."""
        stripped = self._raw.strip()
        if _is_curly(stripped):
            return stripped
        return f"{_OPEN} {stripped} {_CLOSE}"

    def as_bare(self) -> str:
        """Return the expression body without delimiters or outer whitespace."""
        curly = self.as_curly()
        if not (curly.startswith(_OPEN) and curly.endswith(_CLOSE)):
            # Unreachable through the validating constructors.
            raise AssertionError(f"expression is not delimited: {curly!r}")
        return curly[len(_OPEN) : -len(_CLOSE)].strip()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExplicitExpr):
            return NotImplemented
        return self.as_curly() == other.as_curly()

    def __hash__(self) -> int:
        return hash(self.as_curly())

    def __repr__(self) -> str:
        return f"ExplicitExpr({self._raw!r})"

    def __str__(self) -> str:
        return self.as_curly()

    @classmethod
    def _validate_curly(cls, value: str) -> "ExplicitExpr":
        expr = cls.from_curly(value)
        if expr is None:
            raise InvalidExpressionError(value)
        return expr

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Decode only curly-delimited strings; anything else is a validation error."""
        return core_schema.no_info_after_validator_function(
            cls._validate_curly,
            core_schema.str_schema(strict=True),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda expr: expr.raw
            ),
        )


class FirstMatch:
    """
    Annotated marker that decodes a union by trying its members in order.

    Used through the ``LoE`` alias: the expression member is listed first,
    so it wins whenever the input is a curly-delimited string. Pydantic
    reports the errors of every attempted member when none matches.
    """

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        attempts = get_args(source_type) or (source_type,)
        return core_schema.union_schema(
            [handler.generate_schema(attempt) for attempt in attempts],
            mode="left_to_right",
        )

    def __repr__(self) -> str:
        return "FirstMatch()"


# Literal-or-expression: ExplicitExpr first, then the literal type.
LoE = Annotated[Union[ExplicitExpr, T], FirstMatch()]

# Boolean-or-expression. Only YAML booleans count as literals.
BoE = LoE[StrictBool]


def _condition(value: Any) -> "bool | ExplicitExpr":
    """Decode an ``if:`` condition written as a boolean, bare or curly expression."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        # Any string is a valid curly or bare expression.
        return ExplicitExpr(value)
    raise ValueError(
        f"invalid condition {value!r}: expected a boolean or an expression string"
    )


def _dump_condition(value: "bool | ExplicitExpr") -> "bool | str":
    return value if isinstance(value, bool) else value.raw


If = Annotated[
    Union[bool, ExplicitExpr],
    PlainValidator(_condition),
    PlainSerializer(_dump_condition),
]


def is_expr(value: Any) -> bool:
    """Check whether a decoded LoE value took the expression variant."""
    return isinstance(value, ExplicitExpr)


__all__ = ["ExplicitExpr", "FirstMatch", "LoE", "BoE", "If", "is_expr"]
