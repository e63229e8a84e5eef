"""Guess progressive and past tense event names from a runnable's class name.

    progressive_tense("Create")  # "creating"
    past_tense("Create")         # "created"
    past_tense("Foo")            # "executed"
"""
from __future__ import annotations

import re
from typing import List, Pattern, Tuple

from cqrs.shared_kernel.naming import snake

Rules = List[Tuple[Pattern[str], str]]


def _compile(table: List[Tuple[str, str]]) -> Rules:
    return [(re.compile(f"{suffix}$", re.IGNORECASE), replacement) for suffix, replacement in table]


# Evaluated in order, first matching suffix wins
PROGRESSIVE_RULES: Rules = _compile([
    ("ate", "ating"),
    ("ish", "ishing"),
    ("it", "itting"),
    ("ive", "iving"),
    ("mpt", "mpting"),
    ("n", "nning"),
    ("ost", "osting"),
    ("([aeiou])d", r"\1ding"),
    ("([aeiou][^aeiou])e", r"\1ing"),
    ("(n|dr)d", r"\1ding"),
    ("e(ct|pt|r|d|l)", r"e\1ing"),
])

PAST_RULES: Rules = _compile([
    ("ind", "ound"),
    ("ish", "ished"),
    ("it", "itted"),
    ("mpt", "mpted"),
    ("n", "nned"),
    ("ost", "osted"),
    ("([^aeiou])e", r"\1ed"),
    ("([aeiou])d", r"\1ded"),
    ("(n|d|r)d", r"\1ded"),
    ("e(ct|pt|r|d|l)", r"e\1ed"),
])

DEFAULT_PROGRESSIVE = "executing"
DEFAULT_PAST = "executed"


def conjugate(name: str, rules: Rules, default: str) -> str:
    for pattern, replacement in rules:
        if pattern.search(name):
            return snake(pattern.sub(replacement, name, count=1))
    return default


def progressive_tense(name: str) -> str:
    return conjugate(name, PROGRESSIVE_RULES, DEFAULT_PROGRESSIVE)


def past_tense(name: str) -> str:
    return conjugate(name, PAST_RULES, DEFAULT_PAST)
