from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from hotelier.adapters.base import BlockStore, ReservationStore, RoomCatalogStore
from hotelier.exceptions import (
    InvalidIdError,
    InvalidRateError,
    InvalidRoomError,
    NotFoundError,
    RoomUnavailableError,
    TooManyRoomsError,
)
from hotelier.models import Block, DateRange, Reservation, Room, RoomStatus
from hotelier.models.date_range import DateLike
from hotelier.models.room import Numeric, to_decimal

logger = logging.getLogger(__name__)


class ReservationManager:
    """
    Keeps the room catalog, reservations and blocks of one hotel and
    computes availability across them.

    Every mutation is written through to the stores before it returns. If a
    store raises, the in-memory change is undone and the error propagates.
    """

    def __init__(
        self,
        room_store: RoomCatalogStore,
        reservation_store: ReservationStore,
        block_store: BlockStore,
    ):
        self.room_store = room_store
        self.reservation_store = reservation_store
        self.block_store = block_store

        self._rooms: List[Room] = list(room_store.load_all())
        self._reservations: List[Reservation] = list(reservation_store.load_all())
        self._blocks: List[Block] = list(block_store.load_all())

        self._next_reservation_id = max((r.reservation_id for r in self._reservations), default=0) + 1
        self._next_block_id = max((b.block_id for b in self._blocks), default=0) + 1

        logger.info(
            f"ReservationManager loaded {len(self._rooms)} rooms, "
            f"{len(self._reservations)} reservations, {len(self._blocks)} blocks."
        )

    # ------------------------------------
    # Read accessors
    # ------------------------------------
    @property
    def rooms(self) -> List[Room]:
        return list(self._rooms)

    @property
    def reservations(self) -> List[Reservation]:
        return list(self._reservations)

    @property
    def blocks(self) -> List[Block]:
        return list(self._blocks)

    def get_room(self, room_id: int) -> Optional[Room]:
        return next((room for room in self._rooms if room.room_id == room_id), None)

    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        return next((r for r in self._reservations if r.reservation_id == reservation_id), None)

    def get_block(self, block_id: int) -> Optional[Block]:
        return next((b for b in self._blocks if b.block_id == block_id), None)

    # ------------------------------------
    # Validation
    # ------------------------------------
    @staticmethod
    def validate_id(id_value: Any) -> int:
        """Raises InvalidIdError unless `id_value` is a positive int."""
        if id_value is None or isinstance(id_value, bool) or not isinstance(id_value, int) or id_value <= 0:
            raise InvalidIdError(f"ID must be a positive integer, got {id_value!r}")
        return id_value

    # ------------------------------------
    # Availability
    # ------------------------------------
    def find_available_rooms(self, check_in: DateLike, check_out: DateLike) -> List[Room]:
        """
        Rooms free for direct booking in [check_in, check_out), in catalog order.

        A room that belongs to an overlapping block is excluded whatever its
        status inside the block; only reserve_from_block may claim it.
        """
        date_range = DateRange.build(check_in, check_out)

        overlap_reservations = date_range.overlap_blocks_reservations(self._reservations)
        taken_room_ids = {reservation.room_id for reservation in overlap_reservations}

        for block in date_range.overlap_blocks_reservations(self._blocks):
            taken_room_ids.update(block.room_ids)

        return [room for room in self._rooms if room.room_id not in taken_room_ids]

    # ------------------------------------
    # Reservations
    # ------------------------------------
    def reserve(self, room_id: int, check_in: DateLike, check_out: DateLike) -> Reservation:
        self.validate_id(room_id)
        room = self.get_room(room_id)
        if room is None:
            logger.warning(f"Reservation rejected: room {room_id} does not exist.")
            raise InvalidRoomError(f"Room {room_id} does not exist")

        available_room_ids = {r.room_id for r in self.find_available_rooms(check_in, check_out)}
        if room_id not in available_room_ids:
            logger.warning(f"Reservation rejected: room {room_id} is taken for {check_in} -> {check_out}.")
            raise RoomUnavailableError(room_id)

        reservation = Reservation(
            reservation_id=self._next_reservation_id,
            room_id=room_id,
            check_in=check_in,
            check_out=check_out,
            nightly_rate=room.cost,
        )
        self._add_reservation(reservation)
        logger.info(
            f"Reservation {reservation.reservation_id} created: room {room_id}, "
            f"{reservation.check_in} -> {reservation.check_out}."
        )
        return reservation

    def list_reservations(self, date: DateLike) -> List[Reservation]:
        """Reservations occupying the night of `date` (check-out day excluded)."""
        day = DateRange.validate_date(date)
        return [r for r in self._reservations if DateRange(r.check_in, r.check_out).contains(day)]

    def total_cost(self, reservation_id: int) -> Decimal:
        self.validate_id(reservation_id)
        reservation = self.get_reservation(reservation_id)
        if reservation is None:
            raise NotFoundError(f"Reservation {reservation_id} not found")
        return reservation.total_cost

    # ------------------------------------
    # Blocks
    # ------------------------------------
    def create_block(
        self,
        room_ids: Iterable[int],
        check_in: DateLike,
        check_out: DateLike,
        discount_rate: Numeric,
    ) -> Block:
        room_ids = list(room_ids)
        for room_id in room_ids:
            self.validate_id(room_id)
        if len(room_ids) > Block.MAX_ROOMS:
            raise TooManyRoomsError(f"Maximum number of rooms in a block is {Block.MAX_ROOMS}, got {len(room_ids)}")

        available_room_ids = {r.room_id for r in self.find_available_rooms(check_in, check_out)}
        for room_id in room_ids:
            if room_id not in available_room_ids:
                logger.warning(f"Block rejected: room {room_id} is not available for {check_in} -> {check_out}.")
                raise RoomUnavailableError(room_id, f"Room {room_id} is not available")

        block = Block(
            block_id=self._next_block_id,
            room_ids=room_ids,
            check_in=check_in,
            check_out=check_out,
            discount_rate=discount_rate,
        )
        self._blocks.append(block)
        try:
            self.block_store.save_all(self._blocks)
        except Exception:
            self._blocks.pop()
            raise
        self._next_block_id += 1
        logger.info(f"Block {block.block_id} created with rooms {list(block.room_ids)}.")
        return block

    def check_available_rooms_in_blocks(self, block_id: int) -> Dict[int, RoomStatus]:
        return self._find_block(block_id).check_available_rooms()

    def reserve_from_block(self, room_id: int, block_id: int) -> Reservation:
        self.validate_id(room_id)
        block = self._find_block(block_id)
        if not block.has_room(room_id):
            logger.warning(f"Block reservation rejected: room {room_id} is not in block {block_id}.")
            raise InvalidRoomError(f"Room {room_id} is not part of block {block_id}")
        if not block.is_room_available(room_id):
            raise RoomUnavailableError(room_id, f"Room {room_id} in block {block_id} is already reserved")

        room = self.get_room(room_id)
        if room is None:
            raise NotFoundError(f"Room {room_id} not found")

        reservation = Reservation(
            reservation_id=self._next_reservation_id,
            room_id=room_id,
            check_in=block.check_in,
            check_out=block.check_out,
            nightly_rate=room.cost,
            discount_rate=block.discount_rate,
            block_id=block.block_id,
        )

        previous_status = dict(block.rooms_info)
        block.reserve_room(room_id)
        try:
            self._add_reservation(reservation)
        except Exception:
            block.rooms_info = previous_status
            raise
        try:
            self.block_store.save_all(self._blocks)
        except Exception:
            block.rooms_info = previous_status
            self._rollback_reservation()
            self._resave_reservations()
            raise
        logger.info(f"Reservation {reservation.reservation_id} created from block {block_id} for room {room_id}.")
        return reservation

    # ------------------------------------
    # Rates
    # ------------------------------------
    def set_room_rate(self, room_id: int, room_rate: Numeric) -> Room:
        self.validate_id(room_id)
        room = self.get_room(room_id)
        if room is None:
            raise NotFoundError(f"Room {room_id} not found")
        new_rate = to_decimal(room_rate)
        if new_rate <= 0:
            raise InvalidRateError(f"Room rate must be positive, got {new_rate}")

        old_rate = room.rate
        room.change_rate(new_rate)
        try:
            self.room_store.save_rates(self._rooms)
        except Exception:
            room.change_rate(old_rate)
            raise
        logger.info(f"Room {room_id} rate changed from {old_rate} to {new_rate}.")
        return room

    # ------------------------------------
    # Internals
    # ------------------------------------
    def _find_block(self, block_id: int) -> Block:
        self.validate_id(block_id)
        block = self.get_block(block_id)
        if block is None:
            raise NotFoundError(f"Block {block_id} not found")
        return block

    def _add_reservation(self, reservation: Reservation) -> None:
        self._reservations.append(reservation)
        self._next_reservation_id += 1
        try:
            self.reservation_store.save_all(self._reservations)
        except Exception:
            self._rollback_reservation()
            raise

    def _rollback_reservation(self) -> None:
        self._reservations.pop()
        self._next_reservation_id -= 1

    def _resave_reservations(self) -> None:
        try:
            self.reservation_store.save_all(self._reservations)
        except Exception as e:
            # the block save error is the one the caller sees
            logger.error(f"Could not restore saved reservations after a failed block save: {e}")
