"""Derived views: fixed-width tables, detail blocks and statistics.

Nothing here mutates a store. Renderers return lists of lines (or a single
string for detail blocks) so the caller decides where to print them.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .models import Customer, FeastMenu, FeastOrder, Mountain, Registration, Statistic

NA = "N/A"

# ----------------------------------------------------------------------------
# Generic helpers
# ----------------------------------------------------------------------------


def truncate(value: str, width: int, marker: str = "...") -> str:
    """Elide ``value`` when it is longer than ``width``.

    The elided text keeps ``width - len(marker) - 1`` characters followed by
    ``marker`` so it always fits the column with one spare cell.
    """

    if len(value) <= width:
        return value
    keep = max(0, width - len(marker) - 1)
    return value[:keep] + marker


def rule(length: int, char: str = "-") -> str:
    return char * length


def boxed(text: str) -> list[str]:
    line = rule(len(text))
    return [line, text, line]


def format_money(amount: float) -> str:
    return f"{amount:,.0f}"


def format_response(action: str) -> str:
    return f"\n>>{action}"


def format_error(action: str, reason: str) -> str:
    return f"\n>>Fail to {action}\nReason: {reason}"


_PHONE_GROUPS_RE = re.compile(r"(\d{3})(\d{3})(\d{4})")


def format_phone(phone: str) -> str:
    """Render a 10-digit number as ``ddd-ddd-dddd``; other shapes unchanged."""
    m = _PHONE_GROUPS_RE.fullmatch(phone)
    return "-".join(m.groups()) if m else phone


# ----------------------------------------------------------------------------
# Registrations / mountains
# ----------------------------------------------------------------------------

_REG_ROW = " {:<10} | {:<20} | {:<35} | {:<15} | {:<13} "
REGISTRATION_HEADER = _REG_ROW.format(
    "Student ID", "Student Name", "Student Email", "Phone Number", "Mountain Code"
)


def registration_row(r: Registration) -> str:
    return _REG_ROW.format(
        r.student_id,
        truncate(r.name, 20),
        truncate(r.email, 35),
        r.phone,
        r.mountain_code,
    )


def registration_table(records: Iterable[Registration]) -> list[str]:
    rows = [registration_row(r) for r in records]
    if not rows:
        rows = [_REG_ROW.format(NA, NA, NA, NA, NA)]
    return [*boxed(REGISTRATION_HEADER), *rows]


def registration_info(r: Registration) -> str:
    return (
        "Student Information\n"
        f"1. Student id   : {r.student_id}\n"
        f"2. Student Name : {r.name}\n"
        f"3. Email        : {r.email}\n"
        f"4. Phone        : {r.phone}\n"
        f"5. Mountain Code: {r.mountain_code}\n"
        f"   Fee          : {format_money(r.fee)} VND"
    )


def mountain_line(m: Mountain) -> str:
    return f"{m.number:02d}. {m.name:<20} | {m.province}"


def mountain_listing(mountains: Iterable[Mountain]) -> list[str]:
    return [mountain_line(m) for m in mountains]


# ----------------------------------------------------------------------------
# Statistics
# ----------------------------------------------------------------------------


def build_statistics[R](
    reference_keys: Iterable[str],
    records: Iterable[R],
    *,
    key: Callable[[R], str],
    amount: Callable[[R], float],
) -> dict[str, Statistic]:
    """Fold ``records`` into one accumulator per reference key.

    Every reference key gets an entry (zero rows included) and the reference
    order is preserved. Records whose key is not a reference key are ignored.
    """

    stats: dict[str, Statistic] = {k: Statistic(k) for k in reference_keys}
    for r in records:
        s = stats.get(key(r))
        if s is not None:
            s.add(amount(r))
    return stats


_STAT_ROW = " {:>13} | {:>12} | {:>15} "
STATISTICS_HEADER = " {:<13} | {:<12} | {:<15} ".format("Mountain Code", "Participants", "Total Price")


def _display_key(k: str) -> str:
    return f"{int(k):02d}" if k.isdigit() else k


def statistics_table(stats: Mapping[str, Statistic]) -> list[str]:
    rows = [
        _STAT_ROW.format(_display_key(s.key), s.count, format_money(s.total)) for s in stats.values()
    ]
    return [*boxed(STATISTICS_HEADER), *rows, rule(len(STATISTICS_HEADER))]


# ----------------------------------------------------------------------------
# Customers
# ----------------------------------------------------------------------------

_CUSTOMER_ROW = "| {:<5} | {:<25} | {:<25} | {:<12} |"
CUSTOMER_HEADER = _CUSTOMER_ROW.format("Code", "Customer Name", "Customer Email", "Phone Number")


def customer_display_name(c: Customer) -> str:
    """``"Given, Family Middle"`` for multi-word names."""
    parts = c.name.split()
    if len(parts) <= 1:
        return c.name
    return f"{parts[-1]}, {' '.join(parts[:-1])}"


def customer_row(c: Customer) -> str:
    return _CUSTOMER_ROW.format(
        c.code,
        truncate(customer_display_name(c), 25),
        truncate(c.email, 25, marker=".."),
        format_phone(c.phone),
    )


def customer_table(customers: Iterable[Customer]) -> list[str]:
    """Customers sorted by given name, then code."""
    ordered = sorted(customers, key=lambda c: (c.first_name, c.code))
    rows = [customer_row(c) for c in ordered] or [_CUSTOMER_ROW.format(NA, NA, NA, NA)]
    return [*boxed(CUSTOMER_HEADER), *rows]


def customer_info(c: Customer) -> str:
    line = rule(60)
    return (
        ">> Customer Information\n"
        f"{line}\n"
        f"Code          : {c.code}\n"
        f"Customer Name : {c.name}\n"
        f"Customer Email: {c.email}\n"
        f"Phone Number  : {format_phone(c.phone)}\n"
        f"{line}"
    )


# ----------------------------------------------------------------------------
# Feast menus and orders
# ----------------------------------------------------------------------------


def menu_block(m: FeastMenu) -> str:
    ingredients = "\n".join(f" - {i}" for i in m.ingredients) or " - N/A"
    return (
        f"Code       : {m.code}\n"
        f"Name       : {m.name}\n"
        f"Price      : {format_money(m.price)} VND\n"
        "Ingredients:\n"
        f"{ingredients}"
    )


def menu_listing(menus: Iterable[FeastMenu]) -> list[str]:
    """Menus sorted by code, separated by rules."""
    line = rule(60)
    out = ["List of Set Menu for ordering party", line]
    for m in sorted(menus, key=lambda m: m.code):
        out.extend([menu_block(m), line])
    return out


@dataclass(frozen=True, slots=True)
class OrderLine:
    """An order joined with its customer and menu for display."""

    order: FeastOrder
    customer: Customer | None
    menu: FeastMenu | None

    @property
    def price(self) -> float:
        return self.menu.price if self.menu else 0.0

    @property
    def cost(self) -> float:
        return self.order.cost(self.menu.price) if self.menu else 0.0


def join_orders(
    orders: Iterable[FeastOrder],
    *,
    customers: Callable[[str], Customer | None],
    menus: Mapping[str, FeastMenu],
) -> list[OrderLine]:
    """Join and sort orders by event date, then id."""

    lines = [OrderLine(o, customers(o.customer_code), menus.get(o.menu_code)) for o in orders]

    def _sort_key(ol: OrderLine) -> tuple[Any, int]:
        d = ol.order.event_day
        return (d.toordinal() if d else 0, ol.order.order_id)

    return sorted(lines, key=_sort_key)


_ORDER_ROW = "| {:>2} | {:>10} | {:<13} | {:<8} | {:>11} | {:>6} | {:>11} |"
ORDER_HEADER = _ORDER_ROW.format(
    "ID", "Event Date", "Customer Code", "Set Menu", "Price", "Tables", "Cost"
)


def order_row(ol: OrderLine) -> str:
    o = ol.order
    return _ORDER_ROW.format(
        o.order_id,
        o.event_date,
        o.customer_code,
        o.menu_code,
        format_money(ol.price),
        o.tables,
        format_money(ol.cost),
    )


def order_table(lines: Sequence[OrderLine]) -> list[str]:
    rows = [order_row(ol) for ol in lines] or [_ORDER_ROW.format("", NA, NA, NA, NA, NA, NA)]
    return [*boxed(ORDER_HEADER), *rows]


def order_info(ol: OrderLine) -> str:
    o, c, m = ol.order, ol.customer, ol.menu
    line = rule(60)
    ingredients = "\n".join(f" - {i}" for i in (m.ingredients if m else ())) or " - N/A"
    return (
        f">> Feast Order [#ID: {o.order_id:02d}] Information\n"
        f"{line}\n"
        f"Code            : {o.customer_code}\n"
        f"Customer Name   : {c.name if c else NA}\n"
        f"Customer Email  : {c.email if c else NA}\n"
        f"Phone Number    : {format_phone(c.phone) if c else NA}\n"
        f"{line}\n"
        f"Set Menu Code   : {o.menu_code}\n"
        f"Set Menu Name   : {m.name if m else NA}\n"
        f"Event Date      : {o.event_date}\n"
        f"Number of Tables: {o.tables}\n"
        f"Price           : {format_money(ol.price)} VND\n"
        "Ingredients     :\n"
        f"{ingredients}\n"
        f"{line}\n"
        f"Total Cost      : {format_money(ol.cost)} VND\n"
        f"{line}"
    )


__all__ = [
    "truncate",
    "rule",
    "boxed",
    "format_money",
    "format_response",
    "format_error",
    "format_phone",
    "registration_row",
    "registration_table",
    "registration_info",
    "mountain_listing",
    "build_statistics",
    "statistics_table",
    "customer_display_name",
    "customer_table",
    "customer_info",
    "menu_listing",
    "OrderLine",
    "join_orders",
    "order_table",
    "order_info",
]
