from __future__ import annotations

from typing import Any


class Silencer:
    """Silenced runnables run without firing their lifecycle events."""

    def silence(self) -> Any:
        self.__dict__["_silenced"] = True
        return self

    def silenced(self) -> bool:
        return self.__dict__.get("_silenced", False)

    def silently(self) -> Any:
        return self.silence()()
