"""Data models for ``registrar``.

Transactional records (registrations, customers, feast orders) are plain
mutable dataclasses: they are created from validated input, pickled into the
data files, and replaced wholesale by the store on update so derived fields
are recomputed.

Reference records (mountains, feast menus) are immutable pydantic models
validated once when the delimited files are loaded; a row that fails
validation is skipped by the loader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator

from .fees import order_cost, registration_fee
from .validation import parse_date

# ---------------------------------------------------------------------------
# Transactional records
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class Registration:
    """A student's registration for a mountain trek.

    ``fee`` is derived from ``phone`` and is not a constructor argument. The
    registration store rebuilds the record on every field update, so the fee
    stays consistent with the phone number.
    """

    student_id: str
    name: str
    email: str
    phone: str
    mountain_code: str
    fee: float = field(init=False)

    def __post_init__(self) -> None:
        self.fee = registration_fee(self.phone)

    @property
    def campus(self) -> str:
        return self.student_id[:2]


@dataclass(slots=True)
class Customer:
    code: str
    name: str
    email: str
    phone: str

    @property
    def first_name(self) -> str:
        # Given name is the last word (Vietnamese name order).
        return self.name.split()[-1] if self.name.split() else ""


@dataclass(slots=True)
class FeastOrder:
    """A feast order placed by a customer for a set menu.

    Attributes
    ----------
    order_id:
        Positive integer assigned by the feast service (max existing + 1).
    event_date:
        ``dd/MM/yyyy`` string as entered; see :attr:`event_day`.
    tables:
        Number of tables; the order cost is ``menu.price * tables``.
    """

    order_id: int
    customer_code: str
    menu_code: str
    event_date: str
    tables: int

    @property
    def event_day(self) -> date | None:
        return parse_date(self.event_date)

    def cost(self, unit_price: float) -> float:
        return order_cost(unit_price, self.tables)


# ---------------------------------------------------------------------------
# Reference records
# ---------------------------------------------------------------------------


class Mountain(BaseModel):
    """A mountain available for treks, keyed by a short numeric code."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    code: str
    name: str
    province: str
    description: str | None = None

    @field_validator("code")
    @classmethod
    def _numeric_code(cls, v: str) -> str:
        if not v.isdigit():
            raise ValueError("mountain code must be numeric")
        return v

    @field_validator("description")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v

    @property
    def number(self) -> int:
        return int(self.code)


class FeastMenu(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    code: str
    name: str
    price: float
    ingredients: tuple[str, ...] = ()

    @field_validator("price")
    @classmethod
    def _positive_price(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("price must be positive")
        return v


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class Statistic:
    """Per-key accumulator built by folding records over a reference set."""

    key: str
    count: int = 0
    total: float = 0.0

    def add(self, amount: float) -> None:
        self.count += 1
        self.total += amount


__all__ = [
    "Registration",
    "Customer",
    "FeastOrder",
    "Mountain",
    "FeastMenu",
    "Statistic",
]
