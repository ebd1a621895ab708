"""
Argument normalization.

Turns the untyped argument bag of a tools/call into the tool's params model.
Only `query` is checked strictly by default; every other field keeps the
caller's value when it has the declared type and falls back to the declared
default otherwise. strict=True rejects those mismatches instead.
"""
import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..errors import ValidationError
from .schemas import FieldSpec, ToolDefinition

logger = logging.getLogger(__name__)

_MISSING = object()


def _decode(spec: FieldSpec, value: Any) -> Any:
    """Return the decoded value, or _MISSING when it does not fit the field."""
    if spec.type == "string":
        decoded = value if isinstance(value, str) else _MISSING
    elif spec.type == "boolean":
        decoded = value if isinstance(value, bool) else _MISSING
    elif spec.type == "number":
        # bool is an int subclass, but never a number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            decoded = _MISSING
        elif spec.integer:
            if isinstance(value, int):
                decoded = value
            elif value.is_integer():
                decoded = int(value)
            else:
                decoded = _MISSING
        else:
            decoded = value
    elif spec.type == "string[]":
        if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            decoded = list(value)
        else:
            decoded = _MISSING
    else:
        decoded = _MISSING

    if decoded is not _MISSING and spec.enum is not None and decoded not in spec.enum:
        decoded = _MISSING
    return decoded


def _default_for(spec: FieldSpec, defaults: Mapping[str, Any]) -> Any:
    value = defaults.get(spec.name, spec.default)
    # never hand out the shared default list
    return list(value) if isinstance(value, list) else value


def normalize(
    tool: ToolDefinition,
    raw_args: Mapping[str, Any],
    *,
    strict: bool = False,
    defaults: Optional[Mapping[str, Any]] = None,
) -> BaseModel:
    """
    Build the params model for `tool` from raw arguments.

    Args:
        tool: Registered tool the arguments are for
        raw_args: Arguments exactly as the agent sent them
        strict: Reject mistyped optional fields instead of defaulting them
        defaults: Deployment overrides for declared defaults

    Returns:
        An instance of tool.params_model

    Raises:
        ValidationError: If query is missing, not a string or empty, or
            (strict only) any other field has the wrong type
    """
    defaults = defaults or {}

    query = raw_args.get("query")
    if not isinstance(query, str) or not query:
        raise ValidationError("Query parameter is required and must be a string")

    values: dict[str, Any] = {}
    for spec in tool.fields:
        if spec.name == "query":
            values["query"] = query
            continue

        raw = raw_args.get(spec.name, _MISSING)
        if raw is _MISSING or raw is None:
            values[spec.name] = _default_for(spec, defaults)
            continue

        decoded = _decode(spec, raw)
        if decoded is _MISSING:
            if strict:
                expected = spec.type if spec.enum is None else f"one of {list(spec.enum)}"
                raise ValidationError(
                    f"Invalid value for '{spec.name}': expected {expected}, got {raw!r}"
                )
            logger.debug("Ignoring invalid %s=%r for %s, using default", spec.name, raw, tool.name)
            decoded = _default_for(spec, defaults)
        values[spec.name] = decoded

    ignored = set(raw_args) - set(values)
    if ignored:
        logger.debug("Ignoring unknown arguments for %s: %s", tool.name, sorted(ignored))

    try:
        return tool.params_model(**values)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid arguments for {tool.name}: {e}") from e
