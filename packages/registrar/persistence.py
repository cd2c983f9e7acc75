"""Flat-file persistence for reference and transactional data.

Two adapters live here:

- ``read_delimited``: loads read-only reference rows (mountains, feast menus)
  from a delimited text file with one header line. Malformed rows are skipped
  and counted rather than failing the load.
- ``ListDump``: pickles the whole ordered list of transactional records into a
  single process-private blob and reads it back. Loading never fails the
  caller (absent or unreadable files give an empty list); saving reports
  failures as :class:`~registrar.errors.PersistenceError`.

Atomicity: saves write ``<file>.tmp`` first and then ``os.replace`` into place.
``save_together`` stages every file before replacing any of them.
"""

from __future__ import annotations

import contextlib
import csv
import os
import pickle
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any

from .errors import PersistenceError
from .logging_setup import get_logger
from .models import FeastMenu, Mountain

_logger = get_logger("registrar.persistence")

_BOM = "\ufeff"

MOUNTAIN_HEADER = "Code, Mountain, Province, Description"
MOUNTAIN_DELIMITER = ", "
MENU_HEADER = "Code,Name,Price,Ingredients"


# ----------------------------------------------------------------------------
# Delimited reference files
# ----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReferenceLoad[T]:
    """Result of a lossy reference-file parse."""

    records: list[T]
    skipped: int = 0


def _normalize_header(line: str) -> str:
    return line.lstrip(_BOM).strip()


def read_delimited[T](
    path: str | PathLike[str],
    *,
    header: str,
    parse: Callable[[list[str]], T],
    split: Callable[[str], list[str]],
) -> ReferenceLoad[T]:
    """Read one record per line from ``path``.

    Behavior
    --------
    - Only the first line is considered as a header, and it is skipped only
      when it equals ``header`` (ignoring a UTF-8 BOM and surrounding
      whitespace). Otherwise it is parsed like any data line.
    - Blank lines are ignored.
    - A line that is not valid UTF-8, or whose ``parse`` raises
      ``ValueError`` (wrong field count, failed model validation), is skipped
      and counted in ``skipped``.
    - A missing or unreadable file yields an empty load.
    """

    p = Path(path)
    records: list[T] = []
    skipped = 0
    try:
        with p.open("rb") as f:
            for lineno, raw in enumerate(f, start=1):
                try:
                    line = raw.decode("utf-8").rstrip("\r\n")
                except UnicodeDecodeError as e:
                    skipped += 1
                    _logger.warning("Skipping %s line %d: not UTF-8 (%s)", p.name, lineno, e.reason)
                    continue
                if lineno == 1:
                    if _normalize_header(line) == _normalize_header(header):
                        _logger.debug("Skipped header line of %s", p.name)
                        continue
                    line = line.lstrip(_BOM)
                if not line.strip():
                    continue
                try:
                    records.append(parse(split(line)))
                except ValueError as e:
                    skipped += 1
                    _logger.warning("Skipping %s line %d: %s", p.name, lineno, e)
    except OSError as e:
        _logger.warning("Reference file %s unavailable (%s); continuing without it", p, e)
        return ReferenceLoad([], 0)

    if skipped:
        _logger.info("Loaded %d row(s) from %s; skipped %d", len(records), p.name, skipped)
    return ReferenceLoad(records, skipped)


def _parse_mountain(fields: list[str]) -> Mountain:
    if len(fields) == 3:
        code, name, province = fields
        return Mountain(code=code, name=name, province=province)
    if len(fields) == 4:
        code, name, province, description = fields
        return Mountain(code=code, name=name, province=province, description=description)
    raise ValueError(f"expected 3 or 4 fields, got {len(fields)}")


def _split_csv(line: str) -> list[str]:
    return next(csv.reader([line]))


def _parse_menu(fields: list[str]) -> FeastMenu:
    if len(fields) != 4:
        raise ValueError(f"expected 4 fields, got {len(fields)}")
    code, name, price, ingredients = fields
    items = tuple(
        part.strip().removeprefix("+").strip()
        for part in ingredients.replace('"', "").split("#")
        if part.strip()
    )
    return FeastMenu(code=code, name=name, price=float(price), ingredients=items)


def load_mountains(path: str | PathLike[str]) -> ReferenceLoad[Mountain]:
    """Load ``Code, Mountain, Province[, Description]`` rows."""
    return read_delimited(
        path,
        header=MOUNTAIN_HEADER,
        parse=_parse_mountain,
        split=lambda line: line.split(MOUNTAIN_DELIMITER),
    )


def load_feast_menus(path: str | PathLike[str]) -> ReferenceLoad[FeastMenu]:
    """Load ``Code,Name,Price,Ingredients`` rows (ingredients ``#``-separated)."""
    return read_delimited(path, header=MENU_HEADER, parse=_parse_menu, split=_split_csv)


# ----------------------------------------------------------------------------
# Opaque list dump
# ----------------------------------------------------------------------------


class ListDump:
    """Pickle-backed storage for one ordered list of records.

    The format is process-private and unversioned; it is not meant to be read
    by other programs.
    """

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = Path(path)

    @property
    def staging_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".tmp")

    def load(self) -> list[Any]:
        """Return the stored list, or ``[]`` when absent or unreadable."""

        if not self.path.exists():
            _logger.info("No data file at %s; starting empty", self.path)
            return []
        try:
            with self.path.open("rb") as f:
                data = pickle.load(f)
        except Exception as e:  # corrupt pickles raise arbitrary types
            _logger.warning("Could not read %s (%s: %s); starting empty", self.path, type(e).__name__, e)
            return []
        if not isinstance(data, list):
            _logger.warning("Unexpected payload in %s (%s); starting empty", self.path, type(data).__name__)
            return []
        _logger.info("Loaded %d record(s) from %s", len(data), self.path)
        return data

    def stage(self, records: Sequence[Any]) -> Path:
        """Write ``records`` to :attr:`staging_path` without touching the data file."""

        tmp = self.staging_path
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("wb") as f:
                pickle.dump(list(records), f, protocol=pickle.HIGHEST_PROTOCOL)
        except (OSError, pickle.PicklingError, TypeError, AttributeError) as e:
            self.discard()
            _logger.error("Saving %s failed: %s", self.path, e)
            raise PersistenceError(self.path, str(e)) from e
        return tmp

    def commit(self) -> None:
        """Move a staged file into place."""

        try:
            os.replace(self.staging_path, self.path)
        except OSError as e:
            self.discard()
            _logger.error("Saving %s failed: %s", self.path, e)
            raise PersistenceError(self.path, str(e)) from e

    def discard(self) -> None:
        with contextlib.suppress(OSError):
            self.staging_path.unlink()

    def save(self, records: Sequence[Any]) -> None:
        """Overwrite the file with ``records``.

        Raises
        ------
        PersistenceError
            When the directory or file cannot be written or a record cannot be
            pickled. The previous file content is kept in that case.
        """

        self.stage(records)
        self.commit()
        _logger.info("Saved %d record(s) to %s", len(records), self.path)


def save_together(targets: Sequence[tuple[ListDump, Sequence[Any]]]) -> None:
    """Save several dumps so a failed write leaves every data file unchanged.

    Every list is staged first; data files are replaced only once all staging
    writes succeeded. A failed stage discards the other staged files and
    re-raises its :class:`~registrar.errors.PersistenceError`. Only a failing
    ``os.replace`` after staging can leave the files out of step.
    """

    staged: list[ListDump] = []
    try:
        for dump, records in targets:
            dump.stage(records)
            staged.append(dump)
    except PersistenceError:
        for dump in staged:
            dump.discard()
        raise
    for dump, records in targets:
        dump.commit()
        _logger.info("Saved %d record(s) to %s", len(records), dump.path)


__all__ = [
    "ReferenceLoad",
    "read_delimited",
    "load_mountains",
    "load_feast_menus",
    "ListDump",
    "save_together",
    "MOUNTAIN_HEADER",
    "MENU_HEADER",
]
