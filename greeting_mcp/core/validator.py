from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..exceptions import InvalidEnumValueError, MissingFieldError, TypeMismatchError
from ..schema import FieldSpec, InputShape, ValidatedArguments
from ..shard.enums import FieldKind


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a number argument
    return isinstance(value, int | float) and not isinstance(value, bool)


def _check_field(name: str, spec: FieldSpec, value: Any) -> Any:
    if spec.kind == FieldKind.STRING:
        if not isinstance(value, str):
            raise TypeMismatchError(name, "string", value)
        return value

    if spec.kind == FieldKind.NUMBER:
        if not _is_number(value):
            raise TypeMismatchError(name, "number", value)
        return value

    # Enum literals are compared type-strictly so that 1 never matches "1".
    if not isinstance(value, str) or value not in spec.choices:
        raise InvalidEnumValueError(name, value, spec.choices)
    return value


def validate(shape: InputShape | None, arguments: Mapping[str, Any] | None) -> ValidatedArguments:
    """Check raw invocation arguments against a declared input shape.

    Fields are checked in declaration order and the first failure is raised.
    A JSON ``null`` counts as absent. Extra keys are ignored so older servers
    keep working with newer clients.

    Raises:
        MissingFieldError: a required field is absent.
        TypeMismatchError: a field has the wrong primitive kind.
        InvalidEnumValueError: an enum field holds an undeclared literal.
    """
    raw = arguments or {}
    if not isinstance(raw, Mapping):
        raise TypeMismatchError("arguments", "object", raw)
    if shape is None:
        return ValidatedArguments({})

    values: dict[str, Any] = {}
    for name, spec in shape.properties.items():
        value = raw.get(name)
        if value is None:
            if spec.required:
                raise MissingFieldError(name)
            continue
        values[name] = _check_field(name, spec, value)
    return ValidatedArguments(values)


__all__ = ["validate"]
