"""Response Envelope — the only body shape a contract endpoint ever emits.

Invariants:
    - ok=True  => errors == [] and data is the handler's result, uncoerced
    - ok=False => data is None and errors holds at least one message
    - Serialized field order is ok, data, errors
    - to_json() renders non-finite floats as null
"""

from typing import Any

from pydantic import BaseModel, model_validator


class Envelope(BaseModel):
    """Uniform {ok, data, errors} wrapper."""

    ok: bool
    data: Any = None
    errors: list[str] = []

    @model_validator(mode="after")
    def check_exclusive(self) -> "Envelope":
        if self.ok and self.errors:
            raise ValueError("successful envelope cannot carry errors")
        if not self.ok:
            if self.data is not None:
                raise ValueError("failed envelope cannot carry data")
            if not self.errors:
                raise ValueError("failed envelope needs at least one error")
        return self

    @classmethod
    def success(cls, data: Any) -> "Envelope":
        return cls(ok=True, data=data, errors=[])

    @classmethod
    def failure(cls, errors: list[str]) -> "Envelope":
        return cls(ok=False, data=None, errors=list(errors))

    def to_response(self) -> dict:
        """JSON-ready dict for the response body."""
        return self.model_dump(mode="json")

    def to_json(self) -> bytes:
        """Rendered response body; raises PydanticSerializationError for opaque data."""
        return self.model_dump_json().encode()
