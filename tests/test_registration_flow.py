from __future__ import annotations

from pathlib import Path

import pytest

from registrar.models import Mountain, Registration
from registrar.persistence import ListDump
from registrar.store import registration_store
from registrar.workflows import RegistrationDesk
from tests.helpers.scripted import Printed, ScriptedTerminal

MOUNTAINS = [
    Mountain(code="1", name="Fansipan", province="Lao Cai"),
    Mountain(code="2", name="Ta Xua", province="Son La"),
]


@pytest.fixture()
def store():
    return registration_store(
        [
            Registration("SE000001", "Nguyen An", "an@fpt.edu.vn", "0321234567", "1"),
            Registration("HE000002", "Nguyen An Binh", "binh@fpt.edu.vn", "0201234567", "2"),
        ]
    )


def _desk(store, *answers, dump=None):
    out = Printed()
    term = ScriptedTerminal(*answers)
    return RegistrationDesk(store, MOUNTAINS, term, dump=dump, print_fn=out), term, out


def test_add_registration(store):
    desk, term, out = _desk(store, "CE123456", "Tran Minh", "minh@fpt.edu.vn", "0861234567", 2)
    assert desk.add() is True
    r = store.retrieve("CE123456")
    assert r.mountain_code == "2"
    assert r.fee == pytest.approx(3_900_000)
    assert "Create student with id[CE123456] successfully!" in out.text
    assert "02. Ta Xua" in out.text
    assert not term.answers


def test_add_duplicate_email_is_reported(store):
    desk, _, out = _desk(store, "CE123456", "Tran Minh", "an@fpt.edu.vn", "0861234567", 1)
    assert desk.add() is False
    assert ">>Fail to create student with id[CE123456]!" in out.text
    assert "[email]" in out.text
    assert "CE123456" not in store


def test_add_without_mountains_fails():
    store = registration_store()
    out = Printed()
    desk = RegistrationDesk(
        store, [], ScriptedTerminal("CE123456", "Tran Minh", "minh@fpt.edu.vn", "0861234567"), print_fn=out
    )
    assert desk.add() is False
    assert "No mountain data is loaded!" in out.text
    assert len(store) == 0


def test_update_phone_recomputes_fee(store):
    desk, _, out = _desk(store, "SE000001", 2, "0201111111")
    assert desk.update() is True
    assert store.retrieve("SE000001").fee == 6_000_000
    assert "Update student with id [SE000001] successfully!" in out.text


def test_update_missing_student(store):
    desk, term, out = _desk(store, "QE999999")
    assert desk.update() is False
    assert "Student ID [QE999999] does not exist!" in out.text
    assert not term.answers


def test_update_collision_keeps_record(store):
    desk, _, out = _desk(store, "SE000001", 3, "binh@fpt.edu.vn")
    assert desk.update() is False
    assert store.retrieve("SE000001").email == "an@fpt.edu.vn"
    assert ">>Fail to update student" in out.text


def test_delete_declined_restores_record(store):
    before = store.records()
    desk, _, out = _desk(store, "SE000001", False)
    assert desk.delete() is False
    assert store.records() == before
    assert "Undo student with id[SE000001] successfully!" in out.text


def test_delete_confirmed(store):
    desk, _, _ = _desk(store, "SE000001", True)
    assert desk.delete() is True
    assert "SE000001" not in store


def test_search_by_name_is_exact(store):
    desk, _, _ = _desk(store, "Nguyen An")
    assert [r.student_id for r in desk.search_by_name()] == ["SE000001"]


def test_search_by_campus(store):
    desk, _, out = _desk(store, "HE")
    assert [r.student_id for r in desk.search_by_campus()] == ["HE000002"]
    assert "filter by campus [HE]" in out.text


def test_statistics_lists_every_mountain(store):
    desk, _, out = _desk(store)
    desk.statistics()
    assert "3,900,000" in out.text
    assert "6,000,000" in out.text


def test_run_loop_displays_then_exits_without_saving(store, tmp_path: Path):
    dump = ListDump(tmp_path / "registrations.dat")
    desk, term, out = _desk(store, 3, 9, False, dump=dump)
    desk.run()
    assert term.pauses == 1
    assert not dump.path.exists()
    assert "Thank you" in out.text


def test_exit_with_save_writes_dump(store, tmp_path: Path):
    dump = ListDump(tmp_path / "registrations.dat")
    desk, _, out = _desk(store, True, dump=dump)
    desk.exit()
    assert [r.student_id for r in dump.load()] == ["HE000002", "SE000001"]
    assert "Save data to file successfully!" in out.text


def test_save_failure_is_reported(store, tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    desk, _, out = _desk(store, dump=ListDump(blocker / "registrations.dat"))
    assert desk.save() is False
    assert ">>Fail to save registration list" in out.text
