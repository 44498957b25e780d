"""Decoding exceptions for GitHub Actions models.

Every exception here subclasses ValueError so that it can be raised from
inside a Pydantic validator: Pydantic turns it into a ``value_error`` entry
of a ``ValidationError`` whose ``loc`` points at the offending field.

Exception Hierarchy:
    DecodeError (base)
    ├── InvalidExpressionError (missing or malformed ${{ }} delimiters)
    ├── UsesError (reference string could not be parsed)
    └── InvariantViolationError (cross-field rule failed after decoding)
        ├── ReusableUsesError (reusable workflow reference pinning rules)
        └── RunnerGroupError (runs-on group without group or labels)

Example:
    >>> try:
    ...     parse_uses("checkout@v4")
    ... except UsesError as e:
    ...     print(e.uses, e.reason)
"""


class DecodeError(ValueError):
    """Base exception for all decoding errors raised by this package."""

    pass


class InvalidExpressionError(DecodeError):
    """Raised when a value declared as an expression lacks ``${{ }}`` delimiters.

    Attributes:
        value: The offending text, verbatim
    """

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"invalid expression {value!r}: expected '${{{{' and '}}}}' delimiters"
        )


class UsesError(DecodeError):
    """Raised when a ``uses:`` reference string is malformed.

    Attributes:
        uses: The reference string that failed to parse
        reason: Short description of what is wrong with it
    """

    def __init__(self, uses: str, reason: str) -> None:
        self.uses = uses
        self.reason = reason
        super().__init__(f"malformed `uses` reference {uses!r}: {reason}")


class InvariantViolationError(DecodeError):
    """Raised when a structurally valid value breaks a cross-field rule.

    These are only raised after the containing record has been decoded
    field by field, so the message names a semantic rule rather than a
    syntax problem.
    """

    pass


class ReusableUsesError(InvariantViolationError):
    """Raised when a reusable workflow reference breaks the pinning rules.

    Attributes:
        uses: The reference string, as written
        reason: Which rule was broken
    """

    def __init__(self, uses: str, reason: str) -> None:
        self.uses = uses
        self.reason = reason
        super().__init__(f"invalid reusable workflow reference {uses!r}: {reason}")


class RunnerGroupError(InvariantViolationError):
    """Raised when a group-shaped ``runs-on`` carries neither group nor labels."""

    def __init__(self) -> None:
        super().__init__("runs-on must provide either `group` or one or more `labels`")


__all__ = [
    "DecodeError",
    "InvalidExpressionError",
    "UsesError",
    "InvariantViolationError",
    "ReusableUsesError",
    "RunnerGroupError",
]
