"""Decorators composed around runnables by the dispatcher."""

from .proxy import Proxy
from .cached import Cached
from .evented import Evented
from .transaction import Transaction
from .tense import past_tense, progressive_tense

__all__ = [
    "Proxy",
    "Cached",
    "Evented",
    "Transaction",
    "past_tense",
    "progressive_tense",
]
