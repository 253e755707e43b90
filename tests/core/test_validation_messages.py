"""Validation Messages — rendering and splitting of shape errors.

Tests cover:
    - path rendering (dots, indexes, quoted keys)
    - one message per issue, prefix on the first
    - root-level issues carry no location
    - separator inside an issue message splits it (known edge case, kept)
"""

import pytest

from route_contract.core.errors import ShapeValidationError, ValidationIssue
from route_contract.core.validation_messages import (
    format_validation_error,
    render_issue,
    render_path,
    validation_error_messages,
)


# ─── render_path ─────────────────────────────────────────────────

def test_render_path_single_segment_is_plain():
    assert render_path(("name",)) == "name"
    assert render_path((0,)) == "0"


def test_render_path_nested_fields_use_dots():
    assert render_path(("user", "address", "city")) == "user.address.city"


def test_render_path_indexes_use_brackets():
    assert render_path(("items", 0, "name")) == "items[0].name"


def test_render_path_quotes_non_identifier_keys():
    assert render_path(("headers", "x-request-id")) == 'headers["x-request-id"]'


def test_render_path_escapes_embedded_quotes():
    assert render_path(("a", 'say "hi"')) == 'a["say \\"hi\\""]'


# ─── messages ────────────────────────────────────────────────────

def test_render_issue_without_path_is_bare_message():
    assert render_issue(ValidationIssue((), "Input should be a valid dictionary")) == (
        "Input should be a valid dictionary"
    )


def test_messages_one_per_issue_in_order():
    error = ShapeValidationError([
        ValidationIssue(("name",), "Field required"),
        ValidationIssue(("age",), "Input should be a valid integer"),
    ])
    assert validation_error_messages(error) == [
        'Validation error: Field required at "name"',
        'Input should be a valid integer at "age"',
    ]


def test_format_uses_given_prefix_and_separator():
    error = ShapeValidationError([
        ValidationIssue(("a",), "bad"),
        ValidationIssue(("b",), "worse"),
    ])
    assert format_validation_error(error, "Invalid", " | ") == (
        'Invalid: bad at "a" | worse at "b"'
    )


def test_separator_inside_issue_message_splits_it():
    error = ShapeValidationError([
        ValidationIssue(("code",), "must look like A;;;B"),
    ])
    assert validation_error_messages(error) == [
        "Validation error: must look like A",
        'B at "code"',
    ]


def test_shape_validation_error_requires_issues():
    with pytest.raises(ValueError):
        ShapeValidationError([])


def test_render_path_treats_dollar_keys_as_identifiers():
    assert render_path(("schema", "$ref")) == "schema.$ref"
    assert render_path(("$defs", "item")) == "$defs.item"
