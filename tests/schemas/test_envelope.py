"""Envelope — invariants of the {ok, data, errors} wrapper."""

import json

import pytest
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from route_contract.schemas.envelope import Envelope


class _Item(BaseModel):
    id: int
    name: str


def test_success_keeps_data_identity():
    result = {"test": "A"}
    envelope = Envelope.success(result)
    assert envelope.ok is True
    assert envelope.data is result
    assert envelope.errors == []


def test_failure_has_null_data():
    envelope = Envelope.failure(["bad input"])
    assert envelope.to_response() == {"ok": False, "data": None, "errors": ["bad input"]}


def test_success_with_none_data_is_allowed():
    assert Envelope.success(None).to_response() == {"ok": True, "data": None, "errors": []}


def test_to_response_serializes_models():
    envelope = Envelope.success([_Item(id=1, name="a")])
    assert envelope.to_response()["data"] == [{"id": 1, "name": "a"}]


def test_to_response_field_order():
    assert list(Envelope.success(1).to_response()) == ["ok", "data", "errors"]


def test_failed_envelope_requires_errors():
    with pytest.raises(ValidationError):
        Envelope.failure([])


def test_failed_envelope_rejects_data():
    with pytest.raises(ValidationError):
        Envelope(ok=False, data={"x": 1}, errors=["e"])


def test_successful_envelope_rejects_errors():
    with pytest.raises(ValidationError):
        Envelope(ok=True, data=1, errors=["e"])


def test_to_json_matches_response_dict():
    envelope = Envelope.success(_Item(id=1, name="a"))
    assert json.loads(envelope.to_json()) == {
        "ok": True, "data": {"id": 1, "name": "a"}, "errors": [],
    }


def test_to_json_rejects_opaque_data():
    class Opaque:
        pass

    with pytest.raises(PydanticSerializationError):
        Envelope.success({"thing": Opaque()}).to_json()
