"""Shared plumbing for the interactive desks.

A desk owns no global state: stores, reference data, the terminal and the
print function are all handed in by the caller (the CLI, or a test).
"""

from __future__ import annotations

import builtins
import re
from collections.abc import Callable, Iterable, Sequence
from typing import Protocol

from ..errors import PersistenceError
from ..persistence import ListDump, save_together
from ..views import format_error, format_response


class Prompter(Protocol):
    """Input boundary consumed by the desks (see ``term_ui.Terminal``)."""

    def prompt_choice(self, name: str, min_value: int, max_value: int) -> int: ...

    def prompt_pattern(
        self, name: str, pattern: re.Pattern[str] | str, reason: str | None = None
    ) -> str: ...

    def prompt_name(self, min_len: int = 2, max_len: int = 25, *, name: str = "name") -> str: ...

    def prompt_positive_int(self, name: str) -> int: ...

    def prompt_future_date(self, event: str) -> str: ...

    def prompt_confirm(self, action: str) -> bool: ...

    def pause(self) -> None: ...


type MenuEntry = tuple[str, Callable[[], object]]


class Desk:
    """Menu loop plus response/error printing helpers."""

    title = "Main Menu"

    def __init__(self, terminal: Prompter, *, print_fn: Callable[..., None] = builtins.print) -> None:
        self.terminal = terminal
        self.print = print_fn
        self._running = False

    # ---- output ------------------------------------------------------------

    def respond(self, action: str) -> None:
        self.print(format_response(action))

    def fail(self, action: str, reason: str) -> None:
        self.print(format_error(action, reason))

    def print_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.print(line)

    def choose(self, title: str, options: Sequence[str], action: str) -> int:
        """Print a numbered list and return the 1-based choice."""
        self.print(f"\n>> {title}")
        for i, text in enumerate(options, start=1):
            self.print(f"{i}. {text}")
        return self.terminal.prompt_choice(action, 1, len(options))

    # ---- persistence -------------------------------------------------------

    def save_dumps(self, targets: Sequence[tuple[str, ListDump, Sequence[object]]]) -> bool:
        """Save all targets together (see :func:`~registrar.persistence.save_together`)."""

        try:
            save_together([(dump, records) for _, dump, records in targets])
        except PersistenceError as e:
            label = next((lbl for lbl, dump, _ in targets if str(dump.path) == e.path), "data")
            self.fail(f"save {label}", f"{e.reason}")
            return False
        self.respond("Save data to file successfully!")
        return True

    # ---- loop --------------------------------------------------------------

    def menu(self) -> Sequence[MenuEntry]:
        raise NotImplementedError

    def stop(self) -> None:
        self._running = False

    def run(self) -> None:
        """Show the menu until an entry calls :meth:`stop`."""

        entries = self.menu()
        self._running = True
        while self._running:
            choice = self.choose(self.title, [label for label, _ in entries], "menu choice")
            _, handler = entries[choice - 1]
            handler()
            if self._running:
                self.terminal.pause()


__all__ = ["Prompter", "Desk", "MenuEntry"]
