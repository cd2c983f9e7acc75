from __future__ import annotations

from pathlib import Path

from registrar.api import open_feast_book, open_trek_book
from registrar.config import load_settings
from registrar.models import Customer, FeastOrder, Registration
from registrar.persistence import ListDump


def test_settings_resolution_order(tmp_path: Path, _isolate_data_dir: Path, monkeypatch):
    assert load_settings().data_dir == _isolate_data_dir.resolve()
    assert load_settings(tmp_path).data_dir == tmp_path.resolve()
    monkeypatch.delenv("REGISTRAR_DATA_DIR")
    monkeypatch.chdir(tmp_path)
    assert load_settings().data_dir == tmp_path.resolve()


def test_open_trek_book_loads_reference_and_dump(_isolate_data_dir: Path):
    (_isolate_data_dir / "MountainList.csv").write_text(
        "Code, Mountain, Province, Description\n1, Fansipan, Lao Cai, Roof\nbad line\n",
        encoding="utf-8",
    )
    settings = load_settings()
    ListDump(settings.registrations_path).save(
        [
            Registration("SE000001", "Nguyen An", "an@fpt.edu.vn", "0321234567", "1"),
            Customer("C0001", "Stray Record", "s@x.vn", "0912345678"),
        ]
    )
    book = open_trek_book(settings)
    assert [m.name for m in book.mountains] == ["Fansipan"]
    assert book.skipped_mountains == 1
    assert [r.student_id for r in book.registrations] == ["SE000001"]


def test_open_feast_book_starts_empty_without_files():
    book = open_feast_book(load_settings())
    assert book.menus == {}
    assert len(book.customers) == 0 and len(book.orders) == 0


def test_open_feast_book_first_menu_code_wins(_isolate_data_dir: Path):
    (_isolate_data_dir / "FeastMenu.csv").write_text(
        "Code,Name,Price,Ingredients\nPW001,First,100,a\nPW001,Second,200,b\n", encoding="utf-8"
    )
    settings = load_settings()
    ListDump(settings.orders_path).save([FeastOrder(1, "C0001", "PW001", "20/11/2026", 2)])
    book = open_feast_book(settings)
    assert book.menus["PW001"].name == "First"
    assert book.orders.retrieve(1).tables == 2
