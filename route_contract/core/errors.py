"""Error Taxonomy — the three failure kinds a contract endpoint distinguishes.

Invariants:
    - ContractError (business) carries a human message and a numeric code (default 400)
    - ShapeValidationError carries one ValidationIssue per failing field, in library order
    - Anything else is unexpected: classified INTERNAL, detail never reaches the caller
    - The business code is kept on the exception only; the envelope shows the message

Design Decisions:
    - Exceptions for expected failures, mirroring the handler-facing ctx.error() API;
      classify_error() keeps the three-way split in one place
    - pydantic.ValidationError is accepted as a shape error wherever it is raised,
      so handlers that parse with pydantic get validation envelopes too
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from pydantic import ValidationError


class ErrorCategory(str, Enum):
    """How a failure is mapped onto the envelope."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ValidationIssue:
    """One failing field: location path plus a human description."""
    path: tuple[str | int, ...]
    message: str


class ContractError(Exception):
    """Business failure raised deliberately by handler logic."""

    def __init__(self, message: str, code: int = 400):
        super().__init__(message)
        self.message = message
        self.code = code


class ShapeValidationError(Exception):
    """Input did not match its declared shape."""

    def __init__(self, issues: Iterable[ValidationIssue]):
        self.issues = list(issues)
        if not self.issues:
            raise ValueError("ShapeValidationError requires at least one issue")
        super().__init__(
            "; ".join(issue.message for issue in self.issues),
        )

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "ShapeValidationError":
        return cls(issues_from_error_dicts(exc.errors()))


def issues_from_error_dicts(errors: Iterable[dict[str, Any]]) -> list[ValidationIssue]:
    """Convert pydantic-style error dicts ({"loc": ..., "msg": ...}) to issues."""
    return [
        ValidationIssue(path=tuple(e.get("loc", ())), message=e["msg"])
        for e in errors
    ]


def classify_error(exc: BaseException) -> ErrorCategory:
    if isinstance(exc, (ShapeValidationError, ValidationError)):
        return ErrorCategory.VALIDATION
    if isinstance(exc, ContractError):
        return ErrorCategory.BUSINESS_RULE
    return ErrorCategory.INTERNAL
