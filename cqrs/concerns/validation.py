"""Argument validation.

A validator may be any of, tried in order:

* the name of a predicate function (``"callable"``, ``"str.isdigit"`` or a
  dotted import path) called with the value;
* any other callable that is not a class, called with ``(value, name)``;
* a rule mapping validated by pydantic, e.g. ``{"type": int, "gt": 0}``;
* an object with a ``validate()`` method that raises on failure;
* a class, or the name of one, the value must be exactly an instance of.
"""
from __future__ import annotations

import builtins
from abc import ABCMeta
from collections.abc import Mapping
from typing import Annotated, Any, Callable, Dict, Optional

from pydantic import Field, TypeAdapter, ValidationError

from cqrs.shared_kernel.exceptions import (
    InvalidArgument,
    RuleValidationFailed,
    UnsupportedValidator,
)
from cqrs.shared_kernel.naming import locate


class RulesValidator:
    """Validates one named value against a rule mapping."""

    def __init__(self, name: str, value: Any, rules: Mapping) -> None:
        self.name = name
        self.value = value
        constraints: Dict[str, Any] = dict(rules)
        self.annotation = constraints.pop("type", Any)
        self.constraints = constraints

    def validate(self) -> Any:
        adapter = TypeAdapter(Annotated[self.annotation, Field(**self.constraints)])
        try:
            return adapter.validate_python(self.value)
        except ValidationError as exc:
            raise RuleValidationFailed(self.name, exc.errors(include_url=False)) from exc


class Validation:

    @staticmethod
    def make_validator(name: str, value: Any, rules: Mapping) -> RulesValidator:
        return RulesValidator(name, value, rules)

    def validate_value(self, name: str, value: Any, validator: Any) -> Any:
        function = _resolve_function(validator)
        if function is not None:
            return self._validate_with_function(name, value, function, validator)

        if callable(validator) and not isinstance(validator, type):
            return self._validate_with_callable(name, value, validator)

        if isinstance(validator, Mapping):
            self.make_validator(name, value, validator).validate()
            return value

        if callable(getattr(validator, "validate", None)) and not isinstance(validator, (type, str)):
            validator.validate()
            return value

        cls = _resolve_class(validator)
        if cls is None:
            raise UnsupportedValidator(name)

        if not _is_instance(value, cls):
            raise InvalidArgument(
                f'The value for the "{name}" argument must be an instance of {cls.__module__}.{cls.__qualname__}.',
                {"argument": name},
            )

        return value

    def _validate_with_function(self, name: str, value: Any, function: Callable[[Any], Any], label: str) -> Any:
        if not function(value):
            raise InvalidArgument(
                f'The value for the "{name}" argument could not be validated using {label}().',
                {"argument": name},
            )
        return value

    def _validate_with_callable(self, name: str, value: Any, validator: Callable[[Any, str], Any]) -> Any:
        if not validator(value, name):
            raise InvalidArgument(
                f'The value for the "{name}" argument could not be validated using the callable.',
                {"argument": name},
            )
        return value


def _lookup(path: str) -> Optional[Any]:
    head, _, rest = path.partition(".")
    if hasattr(builtins, head):
        target = getattr(builtins, head)
        for attribute in filter(None, rest.split(".")):
            target = getattr(target, attribute, None)
        return target
    if "." in path:
        return locate(path)
    return None


def _resolve_function(validator: Any) -> Optional[Callable[[Any], Any]]:
    if not isinstance(validator, str):
        return None
    target = _lookup(validator)
    if callable(target) and not isinstance(target, type):
        return target
    return None


def _resolve_class(validator: Any) -> Optional[type]:
    if isinstance(validator, type):
        return validator
    if isinstance(validator, str):
        target = _lookup(validator)
        if isinstance(target, type):
            return target
    return None


def _is_instance(value: Any, cls: type) -> bool:
    if type(value) is cls:
        return True
    # Interfaces (abstract base classes) accept any implementation
    return isinstance(cls, ABCMeta) and isinstance(value, cls)
