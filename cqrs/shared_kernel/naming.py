"""Name helpers for classes, methods and dotted import paths."""
from __future__ import annotations

import importlib
import re
from typing import Any, Optional

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_WORD_SEPARATORS = re.compile(r"[\s_\-]+")


def snake(value: str) -> str:
    """Convert ``fooBar``, ``FooBar`` or ``foo bar`` to ``foo_bar``."""
    value = _CAMEL_BOUNDARY.sub("_", value.strip())
    return _WORD_SEPARATORS.sub("_", value).lower()


def studly(value: str) -> str:
    """Convert ``foo_bar`` or ``fooBar`` to ``FooBar``."""
    return "".join(word[:1].upper() + word[1:] for word in _WORD_SEPARATORS.split(snake(value)) if word)


def class_name(target: Any) -> str:
    """Fully-qualified name of a class, an instance's class, or a name passed through."""
    if isinstance(target, str):
        return target
    cls = target if isinstance(target, type) else type(target)
    return f"{cls.__module__}.{cls.__qualname__}"


def class_basename(target: Any) -> str:
    return class_name(target).rsplit(".", 1)[-1]


def locate(path: str) -> Optional[Any]:
    """Import the object at a dotted path, or return None when nothing lives there."""
    parts = [part for part in path.split(".") if part]
    for index in range(len(parts), 0, -1):
        module_name = ".".join(parts[:index])
        try:
            target: Any = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            if exc.name and (module_name == exc.name or module_name.startswith(exc.name + ".")):
                continue
            raise
        for attribute in parts[index:]:
            target = getattr(target, attribute, None)
            if target is None:
                return None
        return target
    return None


def locate_class(path: str) -> Optional[type]:
    target = locate(path)
    return target if isinstance(target, type) else None
