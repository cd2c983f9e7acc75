"""Terminal prompts (prompt_toolkit-based).

These helpers are the only place that loops on user input. Each prompt wraps
a pure validator from :mod:`registrar.validation` in a prompt_toolkit
``Validator``: invalid input keeps the prompt open with the reason shown in
the toolbar until the user enters something acceptable (or interrupts).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.validation import ValidationError, Validator

from .validation import (
    FieldValidation,
    validate_choice,
    validate_confirm,
    validate_future_date,
    validate_name,
    validate_pattern,
    validate_positive_int,
)

INPUT_MSG = "~~Please enter the input for {}: "
CONFIRM_MSG = "~~Please confirm that you want to {}? [y/n]: "
REMINDER_MSG = "## Reminder: Press [enter] to go back to menu: "

_ACCEPT_ANY = Validator.from_callable(lambda _text: True)


class _ResultValidator(Validator):
    def __init__(self, check: Callable[[str], FieldValidation], field_name: str) -> None:
        self._check = check
        self._field_name = field_name

    def validate(self, document) -> None:
        v = self._check(document.text)
        if not v.ok:
            raise ValidationError(
                message=f"Invalid input for {self._field_name}! Reason: {v.reason}"
            )


class Terminal:
    """prompt_toolkit implementation of the prompts the desks need.

    Parameters
    ----------
    session:
        Optional ``PromptSession`` to reuse (tests pass one wired to a pipe
        input and ``DummyOutput``).
    today:
        Optional fixed "today" for future-date checks; defaults to the real
        date at validation time.
    """

    def __init__(self, session: PromptSession | None = None, *, today: date | None = None) -> None:
        self._session: PromptSession = session if session is not None else PromptSession()
        self._today = today

    def _ask_text(
        self, message: str, check: Callable[[str], FieldValidation], field_name: str
    ) -> str:
        return self._session.prompt(
            message,
            validator=_ResultValidator(check, field_name),
            validate_while_typing=False,
        )

    def _ask(self, message: str, check: Callable[[str], FieldValidation], field_name: str) -> Any:
        return check(self._ask_text(message, check, field_name)).value

    def prompt_choice(self, name: str, min_value: int, max_value: int) -> int:
        return self._ask(
            INPUT_MSG.format(name),
            lambda s: validate_choice(s, min_value, max_value, field_name=name),
            name,
        )

    def prompt_pattern(self, name: str, pattern: re.Pattern[str] | str, reason: str | None = None) -> str:
        return self._ask(
            INPUT_MSG.format(name),
            lambda s: validate_pattern(s, pattern, field_name=name, reason=reason),
            name,
        )

    def prompt_name(self, min_len: int = 2, max_len: int = 25, *, name: str = "name") -> str:
        return self._ask(
            INPUT_MSG.format(name),
            lambda s: validate_name(s, min_len=min_len, max_len=max_len),
            name,
        )

    def prompt_positive_int(self, name: str) -> int:
        return self._ask(
            INPUT_MSG.format(name),
            lambda s: validate_positive_int(s, field_name=name),
            name,
        )

    def prompt_future_date(self, event: str) -> str:
        """Return the accepted ``dd/MM/yyyy`` text (not the parsed date)."""
        field_name = f"date of {event}"
        text = self._ask_text(
            INPUT_MSG.format(f"{field_name} [dd/MM/yyyy]"),
            lambda s: validate_future_date(s, today=self._today),
            field_name,
        )
        return text.strip()

    def prompt_confirm(self, action: str) -> bool:
        return self._ask(CONFIRM_MSG.format(action), validate_confirm, "confirmation")

    def pause(self) -> None:
        # The session keeps the last validator unless a new one is passed.
        self._session.prompt(REMINDER_MSG, validator=_ACCEPT_ANY)


__all__ = ["Terminal", "INPUT_MSG", "CONFIRM_MSG", "REMINDER_MSG"]
