"""Shared kernel exception hierarchy."""
from typing import Optional, Dict, Any, List


class CQRSException(Exception):
    """Base exception for all dispatch errors."""

    def __init__(self, message: str, code: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class MissingArgument(CQRSException, ValueError):
    """Raised when a required argument is absent."""

    def __init__(self, name: str, owner: str) -> None:
        super().__init__(
            f'Argument "{name}" is required by {owner}.',
            "missing_argument",
            {"argument": name, "owner": owner},
        )


class ValidationFailed(CQRSException, ValueError):
    """Raised when an argument validator rejects a value."""

    def __init__(self, message: str, code: str = "validation_failed", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code, details)


class InvalidArgument(ValidationFailed):
    """Raised when a predicate, callable or class validator rejects a value."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "invalid_argument", details)


class RuleValidationFailed(ValidationFailed):
    """Raised when a rule-set validator rejects a value."""

    def __init__(self, name: str, errors: List[Dict[str, Any]]) -> None:
        messages = "; ".join(str(error.get("msg", "")) for error in errors)
        super().__init__(
            f'The value for the "{name}" argument failed the rules: {messages}',
            "rule_validation_failed",
            {"argument": name, "errors": errors},
        )
        self.errors = errors


class UnsupportedValidator(ValidationFailed):
    """Raised when the validator itself is not a supported form."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f'The "{name}" argument validator must be a class or class name, '
            "a callable, a rule mapping, or an object with a validate() method.",
            "unsupported_validator",
            {"argument": name},
        )


class NotRunnable(CQRSException, TypeError):
    """Raised when a dispatched object lacks the required runnable contract."""

    def __init__(self, owner: str, contract: str, code: str = "not_runnable") -> None:
        super().__init__(f"{owner} must be an instance of {contract}.", code, {"owner": owner, "contract": contract})


class NotACommand(NotRunnable):
    """Raised when command() receives something other than a command."""

    def __init__(self, owner: str, contract: str) -> None:
        super().__init__(owner, contract, "not_a_command")


class NotAQuery(NotRunnable):
    """Raised when query() receives something other than a query."""

    def __init__(self, owner: str, contract: str) -> None:
        super().__init__(owner, contract, "not_a_query")


class NotSupported(CQRSException):
    """Raised when a builder method is called against a base lacking the capability."""

    def __init__(self, method: str, contract: str) -> None:
        super().__init__(
            f"Only call {method}() on {contract} instances.",
            "not_supported",
            {"method": method, "contract": contract},
        )


class MissingTags(CQRSException, RuntimeError):
    """Raised when a taggable runnable provides no tags."""

    def __init__(self, owner: str) -> None:
        super().__init__(
            f"The {owner} class must provide an @tags annotation or a tags attribute.",
            "missing_tags",
            {"owner": owner},
        )
