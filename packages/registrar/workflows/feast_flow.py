"""Feast order desk: customers, set menus and feast orders.

Customers and orders are mutable stores persisted with :class:`ListDump`;
set menus are read-only reference data keyed by code.
"""

from __future__ import annotations

import builtins
from collections.abc import Callable, Mapping, Sequence
from datetime import date

from ..errors import DuplicateFieldError, NotFoundError
from ..logging_setup import get_logger
from ..models import Customer, FeastMenu, FeastOrder
from ..persistence import ListDump
from ..store import CUSTOMER_UPDATE_FIELDS, ORDER_UPDATE_FIELDS, RecordStore
from ..validation import (
    CUSTOMER_CODE_RE,
    CUSTOMER_PHONE_RE,
    EMAIL_RE,
    MENU_CODE_RE,
    SEARCH_PHONE_RE,
)
from ..views import (
    OrderLine,
    customer_info,
    customer_table,
    join_orders,
    menu_listing,
    order_info,
    order_table,
)
from .base import Desk, MenuEntry, Prompter

_logger = get_logger("registrar.workflows.feast")

NAME_MIN, NAME_MAX = 2, 25

CUSTOMER_UPDATE_OPTIONS: tuple[str, ...] = ("Name", "Phone Number", "Email")
ORDER_UPDATE_OPTIONS: tuple[str, ...] = ("Code of Set Menu", "Number of Tables", "Preferred Event Date")
DISPLAY_OPTIONS: tuple[str, ...] = ("Display Customer lists.", "Display Order lists.")


def next_order_id(orders: RecordStore[FeastOrder]) -> int:
    return max((o.order_id for o in orders), default=0) + 1


class FeastDesk(Desk):
    title = "Traditional Feast Order Management"

    def __init__(
        self,
        customers: RecordStore[Customer],
        orders: RecordStore[FeastOrder],
        menus: Mapping[str, FeastMenu],
        terminal: Prompter,
        *,
        customer_dump: ListDump | None = None,
        order_dump: ListDump | None = None,
        today: date | None = None,
        print_fn: Callable[..., None] = builtins.print,
    ) -> None:
        super().__init__(terminal, print_fn=print_fn)
        self.customers = customers
        self.orders = orders
        self.menus = dict(menus)
        self.customer_dump = customer_dump
        self.order_dump = order_dump
        self._today = today

    def menu(self) -> Sequence[MenuEntry]:
        return (
            ("Register customers.", self.register_customer),
            ("Update customer information.", self.update_customer),
            ("Search for customer information by name.", self.search_customer),
            ("Display feast menus.", self.display_menus),
            ("Place a feast order.", self.place_order),
            ("Update order information.", self.update_order),
            ("Save data to file.", self.save),
            ("Display Customer or Order lists.", self.display_lists),
            ("Delete a customer.", self.delete_customer),
            ("Cancel a feast order.", self.delete_order),
            ("Search for customers by phone number.", self.search_customer_by_phone),
            ("Quit.", self.exit),
        )

    @property
    def today(self) -> date:
        return self._today or date.today()

    # ---- helpers -----------------------------------------------------------

    def _customer_code(self) -> str:
        return self.terminal.prompt_pattern(
            "customer code", CUSTOMER_CODE_RE, "Wrong format for customer code!"
        )

    def _menu_code(self) -> str:
        return self.terminal.prompt_pattern(
            "code of set menu", MENU_CODE_RE, "Wrong format for code of set menu!"
        )

    def _order_line(self, order: FeastOrder) -> OrderLine:
        return OrderLine(order, self.customers.get(order.customer_code), self.menus.get(order.menu_code))

    # ---- customers ---------------------------------------------------------

    def register_customer(self) -> bool:
        t = self.terminal
        customer = Customer(
            code=self._customer_code(),
            name=t.prompt_name(NAME_MIN, NAME_MAX),
            email=t.prompt_pattern("customer email", EMAIL_RE, "Wrong format for customer email!"),
            phone=t.prompt_pattern("customer phone", CUSTOMER_PHONE_RE, "Wrong format for customer phone!"),
        )
        try:
            self.customers.create(customer)
        except DuplicateFieldError:
            self.fail("create customer", f"Customer code [{customer.code}] already exist!")
            return False
        self.respond(f"Create customer with code[{customer.code}] successfully!")
        return True

    def update_customer(self) -> bool:
        code = self._customer_code()
        try:
            current = self.customers.retrieve(code)
        except NotFoundError:
            self.fail("find user", f"The user code [{code}] does not exist!")
            return False
        self.print(customer_info(current))
        choice = self.choose("Update Customer Information Options", CUSTOMER_UPDATE_OPTIONS, "update field")
        field = CUSTOMER_UPDATE_FIELDS[choice - 1]
        label = CUSTOMER_UPDATE_OPTIONS[choice - 1].lower()
        t = self.terminal
        if field == "name":
            value = t.prompt_name(NAME_MIN, NAME_MAX)
        elif field == "phone":
            value = t.prompt_pattern(label, CUSTOMER_PHONE_RE, f"Wrong format for {label}!")
        else:
            value = t.prompt_pattern(label, EMAIL_RE, f"Wrong format for {label}!")
        try:
            self.customers.update(code, field, value)
        except DuplicateFieldError as e:
            self.fail("update user", str(e))
            return False
        self.respond(f"Update [{label}] of customer with code [{code}] successfully!")
        return True

    def search_customer(self) -> list[Customer]:
        """Match a full name by substring, or a single word against given names."""

        query = self.terminal.prompt_name(NAME_MIN, NAME_MAX)
        if " " in query.strip():
            found = self.customers.retrieve_where(lambda c: query in c.name)
        else:
            found = self.customers.retrieve_where(lambda c: query in c.first_name)
        self.print_lines(customer_table(found))
        return found

    def search_customer_by_phone(self) -> list[Customer]:
        phone = self.terminal.prompt_pattern("phone number", SEARCH_PHONE_RE)
        found = self.customers.retrieve_where(lambda c: c.phone == phone)
        self.print_lines(customer_table(found))
        return found

    def delete_customer(self) -> bool:
        code = self._customer_code()
        booked = self.orders.retrieve_where(lambda o: o.customer_code == code)
        if booked:
            self.fail("delete customer", f"Customer [{code}] still has {len(booked)} feast order(s)!")
            return False
        try:
            removed = self.customers.delete(code)
        except NotFoundError:
            self.fail("delete customer", "The customer code does not exist!")
            return False
        self.print(customer_info(removed))
        if self.terminal.prompt_confirm("delete this customer"):
            self.respond(f"Delete customer with id [{code}] successfully!")
            return True
        self.customers.restore(removed)
        self.respond(f"Undo deletion of customer with id [{code}] successfully!")
        return False

    # ---- menus and orders --------------------------------------------------

    def display_menus(self) -> None:
        self.print_lines(menu_listing(self.menus.values()))

    def place_order(self) -> bool:
        t = self.terminal
        customer_code = self._customer_code()
        menu_code = self._menu_code()
        event_date = t.prompt_future_date("event")
        tables = t.prompt_positive_int("number of the table")

        if customer_code not in self.customers:
            self.fail("create order", "The customer code does not exist in the data!")
            return False
        if menu_code not in self.menus:
            self.fail("create order", "The feast menu code does not exist in the data!")
            return False
        order = FeastOrder(next_order_id(self.orders), customer_code, menu_code, event_date, tables)
        try:
            self.orders.create(order)
        except DuplicateFieldError:
            self.fail("create order", "The feast order is duplicated!")
            return False
        self.print(order_info(self._order_line(order)))
        self.respond(f"Create order with the menu code [{menu_code}] successfully!")
        return True

    def update_order(self) -> bool:
        order_id = self.terminal.prompt_positive_int("feast order id")
        try:
            order = self.orders.retrieve(order_id)
        except NotFoundError:
            self.fail("find feast order id", f"The feast order id [{order_id}] does not exist!")
            return False
        day = order.event_day
        if day is None:
            self.fail("find feast order id", f"The provided date [{order.event_date}] is invalid!")
            return False
        if day < self.today:
            self.fail("find feast order id", "The event date is expired!")
            return False

        self.print(order_info(self._order_line(order)))
        choice = self.choose("Update Feast Order Information Options", ORDER_UPDATE_OPTIONS, "update field")
        field = ORDER_UPDATE_FIELDS[choice - 1]
        label = ORDER_UPDATE_OPTIONS[choice - 1].lower()
        t = self.terminal
        value: str | int
        if field == "menu_code":
            value = self._menu_code()
            if value not in self.menus:
                self.fail("update feast order", "The feast menu code does not exist in the data!")
                return False
        elif field == "tables":
            value = t.prompt_positive_int(label)
        else:
            value = t.prompt_future_date("event")
        try:
            self.orders.update(order_id, field, value)
        except DuplicateFieldError:
            self.fail("update feast order", "The feast order is duplicated!")
            return False
        self.respond(f"Update [{label}] of feast order with id [#{order_id}] successfully!")
        return True

    def delete_order(self) -> bool:
        order_id = self.terminal.prompt_positive_int("feast order id")
        try:
            removed = self.orders.delete(order_id)
        except NotFoundError:
            self.fail("delete order", "The order does not exist!")
            return False
        self.print(order_info(self._order_line(removed)))
        if self.terminal.prompt_confirm("delete this feast order"):
            self.respond(f"Delete order with the feast menu code [{removed.menu_code}] successfully!")
            return True
        self.orders.restore(removed)
        self.respond(
            f"Undo deletion of order with the feast menu code [{removed.menu_code}] successfully!"
        )
        return False

    def display_lists(self) -> None:
        choice = self.choose("Display list", DISPLAY_OPTIONS, "display list")
        if choice == 1:
            self.print_lines(customer_table(self.customers))
            return
        lines = join_orders(self.orders, customers=self.customers.get, menus=self.menus)
        self.print_lines(order_table(lines))

    # ---- persistence -------------------------------------------------------

    def save(self) -> bool:
        if self.customer_dump is None or self.order_dump is None:
            self.fail("save data", "No data file is configured!")
            return False
        return self.save_dumps(
            [
                ("customer list", self.customer_dump, self.customers.records()),
                ("feast order list", self.order_dump, self.orders.records()),
            ]
        )

    def exit(self) -> None:
        if self.terminal.prompt_confirm("save the changes"):
            self.save()
        self.print("Thank you for using the feast order management program!")
        _logger.info(
            "Feast desk closed with %d customer(s), %d order(s)", len(self.customers), len(self.orders)
        )
        self.stop()


__all__ = ["FeastDesk", "next_order_id"]
