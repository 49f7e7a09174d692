from __future__ import annotations

import sqlite3
import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import List, Sequence

from hotelier.exceptions import DatabaseError
from hotelier.models import Block, Reservation, Room

logger = logging.getLogger(__name__)


class SQLiteHotelAdapter:
    """SQLite storage for the room catalog, reservations and blocks."""

    def __init__(self, db_url: str):
        # Format: sqlite:///path
        if db_url.startswith("sqlite:///"):
            self.db_path = db_url.replace("sqlite:///", "")
        else:
            self.db_path = db_url

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._room_store = SQLiteRoomStore(self)
        self._reservation_store = SQLiteReservationStore(self)
        self._block_store = SQLiteBlockStore(self)
        logger.info(f"SQLiteHotelAdapter initialised. Database path: {self.db_path}")

    def _conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            return conn
        except sqlite3.Error as e:
            logger.error(f"Database connection error: {e}")
            raise DatabaseError(f"Could not connect to database: {e}") from e

    # ------------------------------------
    # Lifecycle
    # ------------------------------------
    def init(self) -> None:
        """Creates the tables if they do not exist yet."""
        logger.info("Checking/creating database tables...")
        try:
            with self._conn() as conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS rooms (
                        id INTEGER PRIMARY KEY,
                        rate TEXT NOT NULL
                    )
                    """
                )
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS reservations (
                        id INTEGER PRIMARY KEY,
                        room_id INTEGER NOT NULL,
                        check_in TEXT NOT NULL,
                        check_out TEXT NOT NULL,
                        nightly_rate TEXT NOT NULL,
                        discount_rate TEXT NOT NULL DEFAULT '0',
                        block_id INTEGER,
                        FOREIGN KEY(room_id) REFERENCES rooms(id)
                    )
                    """
                )
                # rooms_info is a JSON object: {"<room_id>": "AVAILABLE" | "UNAVAILABLE"}
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS blocks (
                        id INTEGER PRIMARY KEY,
                        rooms_info TEXT NOT NULL,
                        check_in TEXT NOT NULL,
                        check_out TEXT NOT NULL,
                        discount_rate TEXT NOT NULL
                    )
                    """
                )
                conn.commit()
                logger.info("Table initialisation completed.")
        except sqlite3.Error as e:
            logger.error(f"SQLite error during table initialisation: {e}")
            raise DatabaseError(f"Table initialisation failed: {e}") from e

    def seed_rooms(self, count: int, rate: Decimal) -> int:
        """Fills an empty catalog with rooms 1..count. Returns how many were added."""
        try:
            with self._conn() as conn:
                cur = conn.cursor()
                cur.execute("SELECT COUNT(*) FROM rooms")
                if cur.fetchone()[0] > 0:
                    return 0
                cur.executemany(
                    "INSERT INTO rooms (id, rate) VALUES (?, ?)",
                    [(room_id, str(rate)) for room_id in range(1, count + 1)],
                )
                conn.commit()
                logger.info(f"Seeded {count} rooms at {rate} per night.")
                return count
        except sqlite3.Error as e:
            logger.error(f"Room seeding error: {e}")
            raise DatabaseError(f"Could not seed rooms: {e}") from e

    # ------------------------------------
    # Stores
    # ------------------------------------
    @property
    def room_store(self) -> SQLiteRoomStore:
        return self._room_store

    @property
    def reservation_store(self) -> SQLiteReservationStore:
        return self._reservation_store

    @property
    def block_store(self) -> SQLiteBlockStore:
        return self._block_store


class _SQLiteStore:
    table_name = ""

    def __init__(self, adapter: SQLiteHotelAdapter):
        self.adapter = adapter

    def _select_all(self) -> List[sqlite3.Row]:
        try:
            with self.adapter._conn() as conn:
                cur = conn.cursor()
                cur.execute(f"SELECT * FROM {self.table_name} ORDER BY id ASC")
                return cur.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error while listing {self.table_name}: {e}")
            raise DatabaseError(f"Could not load {self.table_name}: {e}") from e

    def _replace_all(self, columns: Sequence[str], rows: Sequence[tuple]) -> None:
        fields = ", ".join(columns)
        placeholders = ", ".join("?" * len(columns))
        try:
            with self.adapter._conn() as conn:
                cur = conn.cursor()
                cur.execute(f"DELETE FROM {self.table_name}")
                cur.executemany(f"INSERT INTO {self.table_name} ({fields}) VALUES ({placeholders})", rows)
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error while saving {self.table_name}: {e}")
            raise DatabaseError(f"Could not save {self.table_name}: {e}") from e


class SQLiteRoomStore(_SQLiteStore):
    table_name = "rooms"

    def load_all(self) -> List[Room]:
        rooms = []
        for row in self._select_all():
            data = dict(row)
            data["room_id"] = data.pop("id")
            rooms.append(Room.from_dict(data))
        return rooms

    def save_rates(self, rooms: Sequence[Room]) -> None:
        rows = []
        for room in rooms:
            data = room.to_dict()
            rows.append((data["room_id"], data["rate"]))
        self._replace_all(("id", "rate"), rows)
        logger.info(f"Saved rates for {len(rooms)} rooms.")


class SQLiteReservationStore(_SQLiteStore):
    table_name = "reservations"
    columns = ("id", "room_id", "check_in", "check_out", "nightly_rate", "discount_rate", "block_id")

    def load_all(self) -> List[Reservation]:
        reservations = []
        for row in self._select_all():
            data = dict(row)
            data["reservation_id"] = data.pop("id")
            reservations.append(Reservation.from_dict(data))
        return reservations

    def save_all(self, reservations: Sequence[Reservation]) -> None:
        rows = []
        for reservation in reservations:
            data = reservation.to_dict()
            data["id"] = data.pop("reservation_id")
            rows.append(tuple(data[column] for column in self.columns))
        self._replace_all(self.columns, rows)
        logger.info(f"Saved {len(rows)} reservations.")


class SQLiteBlockStore(_SQLiteStore):
    table_name = "blocks"

    def load_all(self) -> List[Block]:
        blocks = []
        for row in self._select_all():
            data = dict(row)
            data["block_id"] = data.pop("id")
            data["rooms_info"] = json.loads(data["rooms_info"])
            blocks.append(Block.from_dict(data))
        return blocks

    def save_all(self, blocks: Sequence[Block]) -> None:
        columns = ("id", "rooms_info", "check_in", "check_out", "discount_rate")
        rows = []
        for block in blocks:
            data = block.to_dict()
            rows.append(
                (
                    data["block_id"],
                    json.dumps(data["rooms_info"]),
                    data["check_in"],
                    data["check_out"],
                    data["discount_rate"],
                )
            )
        self._replace_all(columns, rows)
        logger.info(f"Saved {len(rows)} blocks.")
