"""Validation Messages — turn a structured validation error into envelope strings.

Invariants:
    - One string per issue, in the order the validator reported them
    - Issue text is "<message> at \"<path>\"", or just "<message>" for a root-level issue
    - The first string carries the "<prefix>: " lead-in
    - Issues are joined on the separator and split again on it: an issue whose own
      text contains the separator yields extra strings (known, kept)

Design Decisions:
    - Path rendering follows JS accessor style: a.b[0]["odd key"]
"""

from typing import Sequence

from route_contract.core.errors import ShapeValidationError, ValidationIssue


def _is_identifier(key: str) -> bool:
    # JS identifiers also allow "$"
    return key.replace("$", "_").isidentifier()


def render_path(path: Sequence[str | int]) -> str:
    """Render a location path, e.g. ("items", 0, "name") -> items[0].name."""
    if len(path) == 1:
        return str(path[0])
    rendered = ""
    for item in path:
        if isinstance(item, int):
            rendered += f"[{item}]"
        elif '"' in item:
            escaped = item.replace('"', '\\"')
            rendered += f'["{escaped}"]'
        elif not _is_identifier(item):
            rendered += f'["{item}"]'
        else:
            rendered += ("." if rendered else "") + item
    return rendered


def render_issue(issue: ValidationIssue) -> str:
    if not issue.path:
        return issue.message
    return f'{issue.message} at "{render_path(issue.path)}"'


def format_validation_error(
    error: ShapeValidationError, prefix: str, separator: str,
) -> str:
    """Single-line message: "<prefix>: <issue><separator><issue>..."."""
    reason = separator.join(render_issue(issue) for issue in error.issues)
    return f"{prefix}: {reason}"


def validation_error_messages(
    error: ShapeValidationError,
    prefix: str = "Validation error",
    separator: str = ";;;",
) -> list[str]:
    return format_validation_error(error, prefix, separator).split(separator)
