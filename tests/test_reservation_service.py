import asyncio
import random
import threading

import pytest

from raffle_board_api.app.core.db import Database, init_db
from raffle_board_api.app.schemas.reservation import ReservationRead, ReservationSave
from raffle_board_api.app.services.reservation_service import ReservationService


def _list(db):
    return asyncio.run(ReservationService.list_reservations(db))


def _save(db, number, name, is_paid=None):
    data = ReservationSave(number=number, name=name, is_paid=is_paid)
    return asyncio.run(ReservationService.save_reservation(db, data))


def _release(db, number):
    return asyncio.run(ReservationService.release_reservation(db, number))


def test_empty_board_lists_nothing(db):
    assert _list(db) == {}


def test_save_free_number_creates_one_reservation(db):
    result = _save(db, 7, "Ana", False)
    assert result.success is True
    assert result.message == "Number 7 saved for Ana"
    assert _list(db) == {"7": ReservationRead(name="Ana", is_paid=False)}


def test_is_paid_defaults_to_false_when_omitted(db):
    _save(db, 3, "Luis")
    assert _list(db)["3"].is_paid is False


def test_save_reserved_number_overwrites_without_duplicate(db):
    _save(db, 7, "Ana", False)
    _save(db, 8, "Juan", False)
    _save(db, 7, "Marta", True)
    listed = _list(db)
    assert len(listed) == 2
    assert listed["7"] == ReservationRead(name="Marta", is_paid=True)


def test_paid_flag_is_a_real_boolean(db):
    _save(db, 1, "Ana", True)
    with db.connection() as conn:
        assert conn.execute("SELECT is_paid FROM rifa WHERE number = 1").fetchone()[0] == 1
    assert _list(db)["1"].is_paid is True


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_name_is_rejected_and_board_unchanged(db, name):
    _save(db, 4, "Ana")
    with pytest.raises(ValueError, match="Name cannot be empty"):
        _save(db, 4, name, True)
    with pytest.raises(ValueError):
        _save(db, 5, name)
    assert _list(db) == {"4": ReservationRead(name="Ana", is_paid=False)}


def test_release_reserved_number_removes_it(db):
    _save(db, 7, "Ana")
    _save(db, 8, "Juan")
    result = _release(db, 7)
    assert result.success is True
    assert result.message == "Number 7 released"
    assert set(_list(db)) == {"8"}


def test_release_free_number_is_a_noop(db):
    _save(db, 8, "Juan")
    assert _release(db, 99).success is True
    _release(db, 8)
    assert _release(db, 8).success is True
    assert _list(db) == {}


def test_legacy_schema_uses_flat_shape(db_path):
    db = Database(db_path)
    init_db(db, target_version=1)
    _save(db, 5, "Ana", True)
    _save(db, 5, "Eva")
    assert _list(db) == {"5": "Eva"}
    db.close()


def test_board_reflects_latest_operation_per_number(db):
    rng = random.Random(20240501)
    expected = {}
    for step in range(200):
        number = rng.randint(1, 12)
        if rng.random() < 0.6:
            name = f"holder-{step}"
            paid = rng.choice([True, False, None])
            _save(db, number, name, paid)
            expected[str(number)] = ReservationRead(name=name, is_paid=bool(paid))
        else:
            _release(db, number)
            expected.pop(str(number), None)
        assert _list(db) == expected


def test_statements_run_off_the_event_loop_thread(db, monkeypatch):
    seen = []
    original = ReservationService._delete

    def recording_delete(database, number):
        seen.append(threading.get_ident())
        return original(database, number)

    monkeypatch.setattr(ReservationService, "_delete", staticmethod(recording_delete))
    _save(db, 1, "Ana")
    assert _release(db, 1).success is True
    assert seen and seen[0] != threading.get_ident()
    assert _list(db) == {}
