"""Mixins shared by commands, queries and the builder.

``Dispatches`` and ``Handle`` depend on the dispatcher and are imported from
their own modules.
"""

from .arguments import Arguments
from .silencer import Silencer
from .validation import RulesValidator, Validation

__all__ = [
    "Arguments",
    "Silencer",
    "RulesValidator",
    "Validation",
]
