"""Command base class."""

from .command import Command

__all__ = ["Command"]
