"""Named argument storage shared by runnables and the builder."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional

from cqrs.shared_kernel.exceptions import MissingArgument
from cqrs.shared_kernel.naming import class_name
from .validation import Validation

_MISSING = object()


class Arguments(Validation):
    """Get or set the arguments and options of a runnable.

    Example::

        command.arguments({"user": 1})
        command.argument("user", int)          # 1
        command.option("role", "member")       # "member"
    """

    def arguments(self, arguments: Any = None) -> Any:
        if arguments is None:
            return self.__dict__.setdefault("_arguments", {})

        self.__dict__["_arguments"] = _to_dict(arguments)
        return self

    def argument(self, name: str, validator: Any = None) -> Any:
        """Get a required argument, optionally validating its value."""
        value = self.option(name)

        if value is None:
            raise MissingArgument(name, class_name(self))

        if validator is not None:
            return self.validate_value(name, value, validator)

        return value

    def option(self, name: str, default: Any = None, validator: Any = None) -> Any:
        """Get an optional argument or the default (called when it is callable)."""
        value = self._lookup_argument(name)

        if value is None or (isinstance(value, str) and value == ""):
            value = self._resolve_default(default)

        if value is not None and validator is not None:
            return self.validate_value(name, value, validator)

        return value

    def has_option(self, name: str) -> bool:
        return self._lookup_argument(name) is not None

    def _lookup_argument(self, name: str) -> Optional[Any]:
        arguments = self.arguments()
        if name in arguments:
            return arguments[name]

        value: Any = arguments
        for segment in name.split("."):
            if not isinstance(value, Mapping):
                return None
            value = value.get(segment, _MISSING)
            if value is _MISSING:
                return None
        return value

    @staticmethod
    def _resolve_default(default: Any) -> Any:
        if callable(default):
            return default()
        return default


def _to_dict(arguments: Any) -> Dict[str, Any]:
    if isinstance(arguments, Mapping):
        return dict(arguments)
    if hasattr(arguments, "model_dump"):
        return arguments.model_dump()
    if hasattr(arguments, "to_dict"):
        return dict(arguments.to_dict())
    return dict(arguments)
