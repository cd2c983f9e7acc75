"""Trek registration desk.

Operations mirror the registration menu: register, update a field, list,
delete (with undo), search by name or campus, per-mountain statistics, save
and exit-with-confirmation.
"""

from __future__ import annotations

import builtins
from collections.abc import Callable, Sequence

from ..errors import DuplicateFieldError, NotFoundError
from ..logging_setup import get_logger
from ..models import Mountain, Registration
from ..persistence import ListDump
from ..store import REGISTRATION_UPDATE_FIELDS, RecordStore
from ..validation import CAMPUS_RE, EMAIL_RE, STUDENT_ID_RE, TREK_PHONE_RE
from ..views import (
    build_statistics,
    mountain_listing,
    registration_info,
    registration_table,
    statistics_table,
)
from .base import Desk, MenuEntry, Prompter

_logger = get_logger("registrar.workflows.registration")

NAME_MIN, NAME_MAX = 2, 20

UPDATE_OPTIONS: tuple[str, ...] = (
    "Student name.",
    "Student phone number.",
    "Student email.",
    "Mountain code.",
)


class RegistrationDesk(Desk):
    title = "Mountain Hiking Registration"

    def __init__(
        self,
        registrations: RecordStore[Registration],
        mountains: Sequence[Mountain],
        terminal: Prompter,
        *,
        dump: ListDump | None = None,
        print_fn: Callable[..., None] = builtins.print,
    ) -> None:
        super().__init__(terminal, print_fn=print_fn)
        self.registrations = registrations
        self.mountains = list(mountains)
        self.dump = dump

    def menu(self) -> Sequence[MenuEntry]:
        return (
            ("New Registration.", self.add),
            ("Update Registration Information.", self.update),
            ("Display Registered List.", self.display_all),
            ("Delete Registration Information.", self.delete),
            ("Search Participants by Name.", self.search_by_name),
            ("Filter Data by Campus.", self.search_by_campus),
            ("Statistics of Registration Numbers by Location.", self.statistics),
            ("Save Data to File.", self.save),
            ("Exit the Program.", self.exit),
        )

    # ---- input helpers -----------------------------------------------------

    def _student_id(self) -> str:
        return self.terminal.prompt_pattern("student ID", STUDENT_ID_RE)

    def _mountain_code(self) -> str | None:
        if not self.mountains:
            self.fail("choose mountain", "No mountain data is loaded!")
            return None
        self.print("\n>>Mountain List")
        self.print_lines(mountain_listing(self.mountains))
        choice = self.terminal.prompt_choice("mountain code", 1, len(self.mountains))
        return self.mountains[choice - 1].code

    def _field_value(self, field: str) -> str | None:
        t = self.terminal
        if field == "name":
            return t.prompt_name(NAME_MIN, NAME_MAX, name="student name")
        if field == "phone":
            return t.prompt_pattern("student phone number", TREK_PHONE_RE)
        if field == "email":
            return t.prompt_pattern("student email", EMAIL_RE)
        return self._mountain_code()

    # ---- operations --------------------------------------------------------

    def add(self) -> bool:
        t = self.terminal
        student_id = self._student_id()
        name = t.prompt_name(NAME_MIN, NAME_MAX, name="student name")
        email = t.prompt_pattern("student email", EMAIL_RE)
        phone = t.prompt_pattern("student phone", TREK_PHONE_RE)
        mountain_code = self._mountain_code()
        if mountain_code is None:
            return False
        record = Registration(student_id, name, email, phone, mountain_code)
        try:
            self.registrations.create(record)
        except DuplicateFieldError as e:
            self.fail(f"create student with id[{student_id}]!", str(e))
            return False
        self.respond(f"Create student with id[{student_id}] successfully!")
        return True

    def update(self) -> bool:
        student_id = self._student_id()
        try:
            current = self.registrations.retrieve(student_id)
        except NotFoundError:
            self.fail("find user", f"Student ID [{student_id}] does not exist!")
            return False
        self.print(registration_info(current))
        choice = self.choose("Update options", UPDATE_OPTIONS, "update field")
        field = REGISTRATION_UPDATE_FIELDS[choice - 1]
        value = self._field_value(field)
        if value is None:
            return False
        try:
            self.registrations.update(student_id, field, value)
        except DuplicateFieldError as e:
            self.fail("update student", str(e))
            return False
        self.respond(f"Update student with id [{student_id}] successfully!")
        return True

    def display_all(self) -> None:
        self.print_lines(registration_table(self.registrations))

    def delete(self) -> bool:
        """Delete a registration; answering "n" to the confirmation undoes it."""

        student_id = self._student_id()
        try:
            removed = self.registrations.delete(student_id)
        except NotFoundError:
            self.fail("find user", f"Student ID [{student_id}] does not exist!")
            return False
        self.print(registration_info(removed))
        if self.terminal.prompt_confirm("delete student"):
            self.respond(f"Delete student with id[{student_id}] successfully!")
            return True
        self.registrations.restore(removed)
        self.respond(f"Undo student with id[{student_id}] successfully!")
        return False

    def search_by_name(self) -> list[Registration]:
        name = self.terminal.prompt_name(NAME_MIN, NAME_MAX, name="student name")
        found = self.registrations.retrieve_where(lambda r: r.name == name)
        self.print(f">>Display registration list filter by name [{name}].")
        self.print_lines(registration_table(found))
        return found

    def search_by_campus(self) -> list[Registration]:
        campus = self.terminal.prompt_pattern("campus", CAMPUS_RE)
        found = self.registrations.retrieve_where(lambda r: r.campus == campus)
        self.print(f">>Display registration list filter by campus [{campus}].")
        self.print_lines(registration_table(found))
        return found

    def statistics(self) -> None:
        stats = build_statistics(
            (m.code for m in self.mountains),
            self.registrations,
            key=lambda r: r.mountain_code,
            amount=lambda r: r.fee,
        )
        self.print_lines(statistics_table(stats))

    def save(self) -> bool:
        if self.dump is None:
            self.fail("save registrations", "No data file is configured!")
            return False
        return self.save_dumps([("registration list", self.dump, self.registrations.records())])

    def exit(self) -> None:
        if self.terminal.prompt_confirm("save the current changes"):
            self.save()
        self.print("Thank you for using the registration management program!")
        _logger.info("Registration desk closed with %d record(s)", len(self.registrations))
        self.stop()


__all__ = ["RegistrationDesk", "UPDATE_OPTIONS"]
