"""Shape Validators — normalize validator declarations into one call signature.

Invariants:
    - Every normalized validator is validate(raw) -> parsed, possibly awaitable
    - pydantic.ValidationError is re-raised as ShapeValidationError
    - Headers without a declared validator are still checked as dict[str, str]

Design Decisions:
    - Accepted forms: BaseModel subclass, TypeAdapter, object with .validate(raw),
      or anything TypeAdapter accepts (dict[str, int], TypedDict, Annotated...)
    - BaseModel is checked before .validate(): pydantic keeps a deprecated
      BaseModel.validate classmethod
"""

import inspect
from typing import Any, Callable, Protocol, runtime_checkable

from pydantic import BaseModel, TypeAdapter, ValidationError

from route_contract.core.errors import ShapeValidationError

ValidateFn = Callable[[Any], Any]


@runtime_checkable
class ShapeValidator(Protocol):
    """Custom validator: return the parsed value or raise ShapeValidationError."""
    def validate(self, raw: Any) -> Any: ...


def as_validator(schema: Any) -> ValidateFn | None:
    """Normalize a validator declaration; None stays None (pass-through)."""
    if schema is None:
        return None
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return schema.model_validate
    if isinstance(schema, TypeAdapter):
        return schema.validate_python
    if isinstance(schema, ShapeValidator) and not isinstance(schema, type):
        return schema.validate
    return TypeAdapter(schema).validate_python


DEFAULT_HEADERS_VALIDATOR: ValidateFn = TypeAdapter(dict[str, str]).validate_python


async def run_validator(validate: ValidateFn, raw: Any) -> Any:
    """Invoke a normalized validator, awaiting it if needed."""
    try:
        parsed = validate(raw)
        if inspect.isawaitable(parsed):
            parsed = await parsed
    except ValidationError as exc:
        raise ShapeValidationError.from_pydantic(exc) from exc
    return parsed
