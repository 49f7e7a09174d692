import gc
import os
import sqlite3
import tempfile
import time
from decimal import Decimal

import pytest

from hotelier.adapters.base import BlockStore, HotelAdapter, ReservationStore, RoomCatalogStore
from hotelier.adapters.sqlite_adapter import SQLiteHotelAdapter
from hotelier.exceptions import DatabaseError
from hotelier.models import Block, Reservation, RoomStatus


def make_db_url(tmpdir: str) -> str:
    db_path = os.path.join(tmpdir, "hotel_test.db")
    return f"sqlite:///{db_path}"


def test_sqlite_adapter_store_flow():
    with tempfile.TemporaryDirectory() as td:
        db = SQLiteHotelAdapter(make_db_url(td))

        try:
            assert isinstance(db, HotelAdapter)
            assert isinstance(db.room_store, RoomCatalogStore)
            assert isinstance(db.reservation_store, ReservationStore)
            assert isinstance(db.block_store, BlockStore)

            # init schema and catalog
            db.init()
            assert db.seed_rooms(20, Decimal("200.00")) == 20
            # seeding twice does not duplicate the catalog
            assert db.seed_rooms(20, Decimal("200.00")) == 0

            rooms = db.room_store.load_all()
            assert [room.room_id for room in rooms] == list(range(1, 21))
            assert all(room.cost == Decimal("200.00") for room in rooms)

            # rates
            rooms[4].change_rate("250.75")
            db.room_store.save_rates(rooms)
            assert db.room_store.load_all()[4].cost == Decimal("250.75")

            # reservations are overwritten, not appended
            first = Reservation(1, 1, "2024-03-01", "2024-03-03", nightly_rate="200.00")
            second = Reservation(2, 2, "2024-03-01", "2024-03-05", nightly_rate="200.00", discount_rate="0.1", block_id=1)
            db.reservation_store.save_all([first])
            db.reservation_store.save_all([first, second])
            assert db.reservation_store.load_all() == [first, second]

            # blocks keep their per-room status
            block = Block(1, [2, 3], "2024-03-01", "2024-03-05", "0.1")
            block.reserve_room(2)
            db.block_store.save_all([block])
            loaded = db.block_store.load_all()
            assert len(loaded) == 1
            assert loaded[0].room_ids == (2, 3)
            assert loaded[0].rooms_info == {2: RoomStatus.UNAVAILABLE, 3: RoomStatus.AVAILABLE}
            assert loaded[0].discount_rate == Decimal("0.1")
        finally:
            del db
            gc.collect()
            time.sleep(0.1)


def test_sqlite_adapter_without_tables_raises_database_error():
    with tempfile.TemporaryDirectory() as td:
        db = SQLiteHotelAdapter(make_db_url(td))
        try:
            with pytest.raises(DatabaseError):
                db.room_store.load_all()
            with pytest.raises(DatabaseError):
                db.reservation_store.save_all([])
        finally:
            del db
            gc.collect()
            time.sleep(0.1)


def test_rooms_info_is_stored_as_json():
    with tempfile.TemporaryDirectory() as td:
        db = SQLiteHotelAdapter(make_db_url(td))
        try:
            db.init()
            db.block_store.save_all([Block(3, [4], "2024-05-01", "2024-05-02", 0)])

            conn = sqlite3.connect(db.db_path)
            try:
                row = conn.execute("SELECT rooms_info, discount_rate FROM blocks WHERE id = 3").fetchone()
            finally:
                conn.close()
            assert row == ('{"4": "AVAILABLE"}', "0")
        finally:
            del db
            gc.collect()
            time.sleep(0.1)


def test_reservation_and_room_rows_follow_model_dicts():
    with tempfile.TemporaryDirectory() as td:
        db = SQLiteHotelAdapter(make_db_url(td))
        try:
            db.init()
            db.seed_rooms(2, Decimal("120.00"))
            reservation = Reservation(5, 2, "2024-05-01", "2024-05-04", nightly_rate="120.00", discount_rate="0.2", block_id=3)
            db.reservation_store.save_all([reservation])

            conn = sqlite3.connect(db.db_path)
            try:
                row = conn.execute(
                    "SELECT id, room_id, check_in, check_out, nightly_rate, discount_rate, block_id FROM reservations"
                ).fetchone()
                rates = conn.execute("SELECT id, rate FROM rooms ORDER BY id").fetchall()
            finally:
                conn.close()

            assert row == (5, 2, "2024-05-01", "2024-05-04", "120.00", "0.2", 3)
            assert rates == [(1, "120.00"), (2, "120.00")]

            loaded = db.reservation_store.load_all()
            assert loaded == [reservation]
            assert loaded[0].total_cost == Decimal("288.00")
            assert [room.to_dict() for room in db.room_store.load_all()] == [
                {"room_id": 1, "rate": "120.00"},
                {"room_id": 2, "rate": "120.00"},
            ]
        finally:
            del db
            gc.collect()
            time.sleep(0.1)
