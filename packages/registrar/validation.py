"""Field validation helpers shared by the terminal UI and the desks.

Every validator is a pure function returning a :class:`FieldValidation`
rather than raising: the caller decides whether to re-prompt. The terminal
layer (``term_ui``) wraps these in prompt_toolkit validators so the retry
loop lives entirely at the I/O boundary.

Patterns are matched against the whole trimmed input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

# ---------------------------
# Patterns
# ---------------------------

STUDENT_ID_RE = re.compile(r"[SHDQC]E\d{6}")
CAMPUS_RE = re.compile(r"[SHDQC]E")
NAME_RE = re.compile(r"[A-Z][a-z]*(\s[A-Z][a-z]*)*")
EMAIL_RE = re.compile(r"[\w.-]+@([\w-]+\.)+[\w-]{2,4}")
TREK_PHONE_RE = re.compile(r"(84|0[0-9])+[0-9]{8}")
CUSTOMER_PHONE_RE = re.compile(r"(84|0[35789])+[0-9]{8}")
CUSTOMER_CODE_RE = re.compile(r"[CGK]\d{4}")
MENU_CODE_RE = re.compile(r"PW\d{3}")
SEARCH_PHONE_RE = re.compile(r"\d{10}")
DATE_RE = re.compile(r"\d{2}/\d{2}/\d{4}")
YES_NO_RE = re.compile(r"[yYnN]")
INT_RE = re.compile(r"[+-]?[0-9]+")

DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True, slots=True)
class FieldValidation:
    """Outcome of validating one raw input.

    ``value`` carries the normalized accepted value (stripped string, ``int``,
    ``bool`` or ``date``) when ``ok`` is true.
    """

    ok: bool
    reason: str | None = None
    value: Any = None


def _fail(reason: str) -> FieldValidation:
    return FieldValidation(False, reason)


def _non_empty(raw: str) -> str | None:
    s = (raw or "").strip()
    return s or None


def validate_pattern(
    raw: str,
    pattern: re.Pattern[str] | str,
    *,
    field_name: str = "input",
    reason: str | None = None,
) -> FieldValidation:
    """Accept ``raw`` when the trimmed text fully matches ``pattern``."""

    s = _non_empty(raw)
    if s is None:
        return _fail("Input must be a non-empty string!")
    rx = re.compile(pattern) if isinstance(pattern, str) else pattern
    if not rx.fullmatch(s):
        return _fail(reason or f"Input must match the pattern for {field_name}!")
    return FieldValidation(True, None, s)


def validate_name(raw: str, *, min_len: int = 2, max_len: int = 25) -> FieldValidation:
    """Capitalized words separated by single whitespace, length-bounded.

    Rules
    -----
    - Trim whitespace; enforce ``min_len..max_len``.
    - Each word starts with an uppercase letter followed by lowercase letters.
    """

    s = _non_empty(raw)
    if s is None:
        return _fail("Input must be a non-empty string!")
    if not (min_len <= len(s) <= max_len):
        return _fail(f"The name must have a length between {min_len} and {max_len}!")
    if not NAME_RE.fullmatch(s):
        return _fail("Wrong format for name! Each word must be capitalized.")
    return FieldValidation(True, None, s)


def parse_date(raw: str) -> date | None:
    """Parse ``dd/MM/yyyy`` strictly; ``None`` for malformed or impossible dates."""

    s = (raw or "").strip()
    if not DATE_RE.fullmatch(s):
        return None
    try:
        return datetime.strptime(s, DATE_FORMAT).date()
    except ValueError:
        # e.g. 30/02/2025
        return None


def validate_date(raw: str) -> FieldValidation:
    d = parse_date(raw)
    if d is None:
        return _fail("Wrong format or value for date!")
    return FieldValidation(True, None, d)


def validate_future_date(raw: str, *, today: date | None = None) -> FieldValidation:
    """Accept a valid ``dd/MM/yyyy`` date strictly after ``today``."""

    result = validate_date(raw)
    if not result.ok:
        return result
    if result.value <= (today or date.today()):
        return _fail("The date must be in the future!")
    return result


def validate_int_range(
    raw: str,
    *,
    field_name: str = "input",
    min_value: int | None = None,
    max_value: int | None = None,
) -> FieldValidation:
    s = (raw or "").strip()
    if not INT_RE.fullmatch(s):
        return _fail("Input format must be an integer!")
    n = int(s)
    if (min_value is not None and n < min_value) or (max_value is not None and n > max_value):
        lo = "-inf" if min_value is None else min_value
        hi = "inf" if max_value is None else max_value
        return _fail(f"The {field_name} must be between {lo} and {hi}!")
    return FieldValidation(True, None, n)


def validate_choice(raw: str, min_value: int, max_value: int, *, field_name: str = "choice") -> FieldValidation:
    return validate_int_range(raw, field_name=field_name, min_value=min_value, max_value=max_value)


def validate_positive_int(raw: str, *, field_name: str = "input") -> FieldValidation:
    result = validate_int_range(raw, field_name=field_name)
    if result.ok and result.value <= 0:
        return _fail(f"The {field_name} must be a positive integer!")
    return result


def validate_confirm(raw: str) -> FieldValidation:
    s = (raw or "").strip()
    if not YES_NO_RE.fullmatch(s):
        return _fail("The input format must be in [y/n]!")
    return FieldValidation(True, None, s.lower() == "y")


__all__ = [
    "FieldValidation",
    "validate_pattern",
    "validate_name",
    "validate_date",
    "validate_future_date",
    "validate_int_range",
    "validate_choice",
    "validate_positive_int",
    "validate_confirm",
    "parse_date",
    "DATE_FORMAT",
    "STUDENT_ID_RE",
    "CAMPUS_RE",
    "NAME_RE",
    "EMAIL_RE",
    "TREK_PHONE_RE",
    "CUSTOMER_PHONE_RE",
    "CUSTOMER_CODE_RE",
    "MENU_CODE_RE",
    "SEARCH_PHONE_RE",
]
