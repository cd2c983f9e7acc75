"""In-memory record store with uniqueness-constrained CRUD.

A :class:`RecordStore` holds dataclass records keyed by one attribute and
enforces a uniqueness scope: each scope entry is either a single field name
or a tuple of field names that must be unique in combination. Every
operation either completes or leaves the store untouched, and rejections are
raised (``DuplicateFieldError``/``NotFoundError``) rather than dropped.

Stores are plain objects constructed once at startup and handed to whoever
needs them; there is no module-level registry.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any

from .errors import DuplicateFieldError, NotFoundError
from .logging_setup import get_logger
from .models import Customer, FeastOrder, Registration

type UniqueScope = str | tuple[str, ...]

_logger = get_logger("registrar.store")


def _scope_fields(scope: UniqueScope) -> tuple[str, ...]:
    return (scope,) if isinstance(scope, str) else tuple(scope)


class RecordStore[R]:
    """Ordered collection of records with a declared uniqueness scope.

    Parameters
    ----------
    key:
        Attribute used by ``retrieve``/``update``/``delete``. Always unique.
    unique:
        Additional uniqueness scope entries (field names or tuples of names).
    updatable:
        Fields that ``update`` may change. The key is never updatable.
    sort_key:
        When given, the store re-sorts itself with this key after every
        mutation; otherwise insertion order is kept.
    kind:
        Human label used in error messages (e.g. ``"student"``).
    """

    def __init__(
        self,
        *,
        key: str,
        unique: Sequence[UniqueScope] = (),
        updatable: Iterable[str] = (),
        sort_key: Callable[[R], Any] | None = None,
        kind: str = "record",
        records: Iterable[R] = (),
    ) -> None:
        self._key = key
        scopes: list[tuple[str, ...]] = [(key,)]
        for s in unique:
            fields = _scope_fields(s)
            if fields not in scopes:
                scopes.append(fields)
        self._scopes = scopes
        self._updatable = frozenset(updatable) - {key}
        self._sort_key = sort_key
        self.kind = kind
        self._items: list[R] = []
        self.load(records)

    # ---- read side ---------------------------------------------------------

    @property
    def key_field(self) -> str:
        return self._key

    @property
    def unique_scopes(self) -> tuple[tuple[str, ...], ...]:
        return tuple(self._scopes)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._items))

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None

    def records(self) -> list[R]:
        """Snapshot of the stored records in store order."""
        return list(self._items)

    def get(self, key: Any) -> R | None:
        for r in self._items:
            if getattr(r, self._key) == key:
                return r
        return None

    def retrieve(self, key: Any) -> R:
        record = self.get(key)
        if record is None:
            raise NotFoundError(key, kind=self.kind)
        return record

    def retrieve_where(self, predicate: Callable[[R], bool]) -> list[R]:
        """Records matching ``predicate``, in store order."""
        return [r for r in self._items if predicate(r)]

    def is_unique(self, field: str, value: Any, *, exclude_key: Any = None) -> bool:
        """True when no other record holds ``value`` in ``field``."""
        for r in self._items:
            if exclude_key is not None and getattr(r, self._key) == exclude_key:
                continue
            if getattr(r, field) == value:
                return False
        return True

    # ---- write side --------------------------------------------------------

    def load(self, records: Iterable[R]) -> None:
        """Replace the contents wholesale (used when reading a data file).

        Later duplicates of an already loaded record are dropped so a
        tampered file cannot break the uniqueness invariant.
        """

        self._items = []
        for r in records:
            try:
                self._check_unique(r, exclude_key=None)
            except DuplicateFieldError as e:
                _logger.warning("Dropping duplicate %s on load: %s", self.kind, e)
                continue
            self._items.append(r)
        self._resort()

    def create(self, record: R) -> R:
        self._check_unique(record, exclude_key=None)
        self._items.append(record)
        self._resort()
        _logger.debug("Created %s [%s]", self.kind, getattr(record, self._key))
        return record

    def restore(self, record: R) -> R:
        """Undo a delete by re-inserting the removed record."""
        return self.create(record)

    def update(self, key: Any, field: str, value: Any) -> R:
        """Set ``field`` to ``value`` on the record keyed by ``key``.

        The record is rebuilt with :func:`dataclasses.replace` so derived
        fields are recomputed, and swapped in only after the uniqueness check
        (excluding the record itself) passes.
        """

        if field not in self._updatable:
            raise ValueError(f"Field [{field}] of {self.kind} cannot be updated")
        current = self.retrieve(key)
        candidate = dataclasses.replace(current, **{field: value})
        for fields in self._scopes:
            if field in fields:
                self._check_scope(candidate, fields, exclude_key=key)
        idx = self._items.index(current)
        self._items[idx] = candidate
        self._resort()
        _logger.debug("Updated %s [%s].%s", self.kind, key, field)
        return candidate

    def delete(self, key: Any) -> R:
        """Remove and return the record so the caller can offer an undo."""
        record = self.retrieve(key)
        self._items.remove(record)
        _logger.debug("Deleted %s [%s]", self.kind, key)
        return record

    # ---- helpers -----------------------------------------------------------

    def _check_unique(self, record: R, *, exclude_key: Any) -> None:
        for fields in self._scopes:
            self._check_scope(record, fields, exclude_key=exclude_key)

    def _check_scope(self, record: R, fields: tuple[str, ...], *, exclude_key: Any) -> None:
        wanted = tuple(getattr(record, f) for f in fields)
        for other in self._items:
            if exclude_key is not None and getattr(other, self._key) == exclude_key:
                continue
            if tuple(getattr(other, f) for f in fields) == wanted:
                value = wanted[0] if len(wanted) == 1 else wanted
                raise DuplicateFieldError(fields[0] if len(fields) == 1 else fields, value)

    def _resort(self) -> None:
        if self._sort_key is not None:
            self._items.sort(key=self._sort_key)


# ---------------------------------------------------------------------------
# Store factories
# ---------------------------------------------------------------------------

REGISTRATION_UPDATE_FIELDS: tuple[str, ...] = ("name", "phone", "email", "mountain_code")
CUSTOMER_UPDATE_FIELDS: tuple[str, ...] = ("name", "phone", "email")
ORDER_UPDATE_FIELDS: tuple[str, ...] = ("menu_code", "tables", "event_date")


def registration_store(records: Iterable[Registration] = ()) -> RecordStore[Registration]:
    return RecordStore(
        key="student_id",
        unique=("email", "phone"),
        updatable=REGISTRATION_UPDATE_FIELDS,
        sort_key=lambda r: r.student_id,
        kind="student",
        records=records,
    )


def customer_store(records: Iterable[Customer] = ()) -> RecordStore[Customer]:
    return RecordStore(
        key="code",
        updatable=CUSTOMER_UPDATE_FIELDS,
        kind="customer",
        records=records,
    )


def order_store(records: Iterable[FeastOrder] = ()) -> RecordStore[FeastOrder]:
    return RecordStore(
        key="order_id",
        unique=(("customer_code", "menu_code", "event_date"),),
        updatable=ORDER_UPDATE_FIELDS,
        kind="feast order",
        records=records,
    )


__all__ = [
    "RecordStore",
    "UniqueScope",
    "registration_store",
    "customer_store",
    "order_store",
    "REGISTRATION_UPDATE_FIELDS",
    "CUSTOMER_UPDATE_FIELDS",
    "ORDER_UPDATE_FIELDS",
]
