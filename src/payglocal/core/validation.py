"""
Payload validation performed before any token is built or request is sent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Tuple, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import (
    InvalidOperationTypeError,
    InvalidTypeError,
    MissingFieldError,
    UnrecognizedFieldError,
    ValidationError,
)
from .schema import PayCollectPayload

__all__ = [
    "ConditionalRule",
    "MISSING",
    "OperationTypeCheck",
    "ValidationRuleSet",
    "require_fields",
    "resolve_path",
    "validate_payload",
    "validate_schema",
]

CustomCheck = Callable[[Mapping[str, Any]], None]


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class OperationTypeCheck:
    field: str
    allowed_values: Tuple[Any, ...]


@dataclass(frozen=True)
class ConditionalRule:
    trigger_field: str
    trigger_value: Any
    then_required_fields: Tuple[str, ...]


@dataclass(frozen=True)
class ValidationRuleSet:
    """
    Declarative validation rules for one operation.

    ``custom_checks`` run last and receive the payload; they raise
    :class:`ValidationError` for business rules the other fields cannot
    express.
    """

    required_fields: Tuple[str, ...] = ()
    operation_type_check: Optional[OperationTypeCheck] = None
    conditional_rule: Optional[ConditionalRule] = None
    schema_check: bool = False
    custom_checks: Tuple[CustomCheck, ...] = ()


def resolve_path(payload: Any, path: str) -> Any:
    """
    Resolve a dotted ``path`` through nested mappings.

    Returns :data:`MISSING` when a segment is absent. Numeric segments index
    into lists. A ``None`` value is returned as-is.
    """
    current = payload
    for segment in path.split("."):
        if isinstance(current, Mapping):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def _is_present(value: Any) -> bool:
    return value is not MISSING and value is not None


def require_fields(payload: Mapping[str, Any], fields: Iterable[str]) -> None:
    for field in fields:
        if not _is_present(resolve_path(payload, field)):
            raise MissingFieldError(field)


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


_EXPECTED_TYPES = {
    "string_type": "string",
    "bool_type": "boolean",
    "list_type": "array",
    "model_type": "object",
    "model_attributes_type": "object",
    "dict_type": "object",
}


def _error_path(loc: Sequence[Any]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "root"


def _to_validation_error(error: Mapping[str, Any]) -> ValidationError:
    path = _error_path(error["loc"])
    kind = error["type"]
    if kind == "extra_forbidden":
        return UnrecognizedFieldError(path)
    if kind == "missing":
        return MissingFieldError(path)
    if kind in _EXPECTED_TYPES:
        return InvalidTypeError(path, _EXPECTED_TYPES[kind], _json_type(error.get("input")))
    return ValidationError(f"Invalid value for {path}: {error['msg']}", field=path)


def validate_schema(
    payload: Mapping[str, Any],
    model: Type[BaseModel] = PayCollectPayload,
) -> None:
    """
    Validate ``payload`` against the pydantic ``model``.

    The first reported problem is raised as :class:`UnrecognizedFieldError`
    for undeclared keys, :class:`InvalidTypeError` for type mismatches or
    :class:`MissingFieldError` for absent required keys.
    """
    try:
        model.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise _to_validation_error(exc.errors()[0]) from exc


def validate_payload(
    payload: Optional[Mapping[str, Any]],
    rules: ValidationRuleSet,
    *,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Apply ``rules`` to ``payload``, stopping at the first failure.

    Order: required fields, operation type, conditional fields, schema,
    custom checks. The payload is never modified.
    """
    log = logger or logging.getLogger("payglocal")
    if payload is None:
        raise ValidationError("Payload cannot be null")
    if not isinstance(payload, Mapping):
        raise ValidationError(
            f"Payload must be a JSON object, got {_json_type(payload)}"
        )

    require_fields(payload, rules.required_fields)

    type_check = rules.operation_type_check
    if type_check is not None:
        value = resolve_path(payload, type_check.field)
        if value not in type_check.allowed_values:
            raise InvalidOperationTypeError(
                type_check.field,
                None if value is MISSING else value,
                type_check.allowed_values,
            )

    rule = rules.conditional_rule
    if rule is not None:
        if resolve_path(payload, rule.trigger_field) == rule.trigger_value:
            require_fields(payload, rule.then_required_fields)

    if rules.schema_check:
        validate_schema(payload)

    for check in rules.custom_checks:
        check(payload)

    log.debug("Validation passed")
