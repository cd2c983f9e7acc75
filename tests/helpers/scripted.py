"""Scripted stand-in for ``registrar.term_ui.Terminal``.

Each prompt pops the next answer from a queue and records the call so tests
can assert on what was asked. Answers are the already-validated values the
real terminal would return (``int`` for choices, ``bool`` for confirmations).
"""

from __future__ import annotations

from collections import deque
from typing import Any


class ScriptedTerminal:
    def __init__(self, *answers: Any) -> None:
        self.answers: deque[Any] = deque(answers)
        self.calls: list[tuple[str, str]] = []
        self.pauses = 0

    def _next(self, method: str, name: str) -> Any:
        self.calls.append((method, name))
        if not self.answers:
            raise AssertionError(f"no scripted answer left for {method}({name!r})")
        return self.answers.popleft()

    def prompt_choice(self, name: str, min_value: int, max_value: int) -> int:
        value = self._next("choice", name)
        assert min_value <= value <= max_value, (name, value, min_value, max_value)
        return value

    def prompt_pattern(self, name, pattern, reason=None) -> str:
        return self._next("pattern", name)

    def prompt_name(self, min_len: int = 2, max_len: int = 25, *, name: str = "name") -> str:
        return self._next("name", name)

    def prompt_positive_int(self, name: str) -> int:
        return self._next("positive_int", name)

    def prompt_future_date(self, event: str) -> str:
        return self._next("future_date", event)

    def prompt_confirm(self, action: str) -> bool:
        return self._next("confirm", action)

    def pause(self) -> None:
        self.pauses += 1


class Printed:
    """Collects everything a desk prints via its ``print_fn``."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def __call__(self, *args: Any, **_: Any) -> None:
        self.lines.append(" ".join(str(a) for a in args))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)
