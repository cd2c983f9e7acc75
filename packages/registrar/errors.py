"""Exception types raised by the record stores and persistence adapters.

Input validation has no exception type: validators return a
``FieldValidation`` result and the terminal layer re-prompts.
"""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike
from typing import Any


class RegistrarError(Exception):
    """Base class for all reportable failures."""


class DuplicateFieldError(RegistrarError):
    """A create/update collided with another record on a unique field."""

    def __init__(self, field: str | Sequence[str], value: Any) -> None:
        if not isinstance(field, str):
            field = "+".join(field)
        self.field = field
        self.value = value
        super().__init__(f"Duplicated data on unique field [{field}]: {value!r}")


class NotFoundError(RegistrarError):
    """Lookup by key found no record."""

    def __init__(self, key: Any, *, kind: str = "record") -> None:
        self.key = key
        self.kind = kind
        super().__init__(f"{kind.capitalize()} [{key}] does not exist!")


class PersistenceError(RegistrarError):
    """Writing a data file failed; the in-memory store is unaffected."""

    def __init__(self, path: str | PathLike[str], reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to write {self.path}: {reason}")


__all__ = [
    "RegistrarError",
    "DuplicateFieldError",
    "NotFoundError",
    "PersistenceError",
]
