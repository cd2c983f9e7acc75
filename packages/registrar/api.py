"""Startup wiring: load reference data and stores from the data directory.

The returned books are plain containers constructed once and passed to the
desks; nothing here is cached at module level.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import Settings
from .logging_setup import get_logger
from .models import Customer, FeastMenu, FeastOrder, Mountain, Registration
from .persistence import ListDump, load_feast_menus, load_mountains
from .store import RecordStore, customer_store, order_store, registration_store

_logger = get_logger("registrar.api")


@dataclass(slots=True)
class TrekBook:
    registrations: RecordStore[Registration]
    mountains: list[Mountain]
    dump: ListDump
    skipped_mountains: int = 0


@dataclass(slots=True)
class FeastBook:
    customers: RecordStore[Customer]
    orders: RecordStore[FeastOrder]
    menus: dict[str, FeastMenu]
    customer_dump: ListDump
    order_dump: ListDump
    skipped_menus: int = 0


def _of_type[T](items: list[object], cls: type[T], label: str) -> list[T]:
    kept = [x for x in items if isinstance(x, cls)]
    if len(kept) != len(items):
        _logger.warning("Ignoring %d foreign object(s) in %s data", len(items) - len(kept), label)
    return kept


def open_trek_book(settings: Settings) -> TrekBook:
    mountains = load_mountains(settings.mountains_path)
    dump = ListDump(settings.registrations_path)
    records = _of_type(dump.load(), Registration, "registration")
    return TrekBook(
        registrations=registration_store(records),
        mountains=mountains.records,
        dump=dump,
        skipped_mountains=mountains.skipped,
    )


def open_feast_book(settings: Settings) -> FeastBook:
    """Load menus (first code wins on duplicates), customers and orders."""

    loaded = load_feast_menus(settings.menus_path)
    menus: dict[str, FeastMenu] = {}
    for m in loaded.records:
        menus.setdefault(m.code, m)
    customer_dump = ListDump(settings.customers_path)
    order_dump = ListDump(settings.orders_path)
    return FeastBook(
        customers=customer_store(_of_type(customer_dump.load(), Customer, "customer")),
        orders=order_store(_of_type(order_dump.load(), FeastOrder, "feast order")),
        menus=menus,
        customer_dump=customer_dump,
        order_dump=order_dump,
        skipped_menus=loaded.skipped,
    )


__all__ = ["TrekBook", "FeastBook", "open_trek_book", "open_feast_book"]
