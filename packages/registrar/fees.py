"""Fee and cost rules.

Both helpers are pure; records call them at construction time so derived
amounts never drift from their source fields.
"""

from __future__ import annotations

import re

REGISTRATION_BASE_FEE = 6_000_000.0
CARRIER_DISCOUNT = 0.35

VIETTEL_PHONE_RE = re.compile(r"(03[2-9]|086|09[6-8])[0-9]{7}")
VNPT_PHONE_RE = re.compile(r"08[1-5][0-9]{7}")


def is_discounted_carrier(phone: str) -> bool:
    p = phone.strip()
    return bool(VIETTEL_PHONE_RE.fullmatch(p) or VNPT_PHONE_RE.fullmatch(p))


def registration_fee(phone: str) -> float:
    """Flat base fee, discounted for Viettel and VNPT subscribers."""

    if not is_discounted_carrier(phone):
        return REGISTRATION_BASE_FEE
    return REGISTRATION_BASE_FEE * (1 - CARRIER_DISCOUNT)


def order_cost(unit_price: float, tables: int) -> float:
    """Menu price times table count; no rounding beyond display."""

    if isinstance(tables, bool) or tables <= 0:
        raise ValueError("tables must be a positive integer")
    return unit_price * tables


__all__ = [
    "REGISTRATION_BASE_FEE",
    "CARRIER_DISCOUNT",
    "is_discounted_carrier",
    "registration_fee",
    "order_cost",
]
