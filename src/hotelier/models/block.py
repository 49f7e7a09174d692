from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, Optional, Tuple

from hotelier.exceptions import InvalidRateError, InvalidRoomError, TooManyRoomsError
from hotelier.models.date_range import DateLike, DateRange
from hotelier.models.room import Numeric, to_decimal


class RoomStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"


@dataclass(init=False)
class Block:
    """
    Group hold of up to five rooms for a shared date range at a discount.

    Each room starts AVAILABLE and moves to UNAVAILABLE once it is booked
    through the block. There is no way back.
    """

    MAX_ROOMS: ClassVar[int] = 5

    block_id: int
    room_ids: Tuple[int, ...]
    check_in: date
    check_out: date
    discount_rate: Decimal
    rooms_info: Dict[int, RoomStatus] = field(default_factory=dict)

    def __init__(
        self,
        block_id: int,
        room_ids: Iterable[int],
        check_in: DateLike,
        check_out: DateLike,
        discount_rate: Numeric,
        rooms_info: Optional[Dict[int, Any]] = None,
    ):
        room_ids = tuple(room_ids)
        if len(room_ids) > self.MAX_ROOMS:
            raise TooManyRoomsError(f"Maximum number of rooms in a block is {self.MAX_ROOMS}, got {len(room_ids)}")
        if not room_ids:
            raise InvalidRoomError("A block needs at least one room")
        if len(set(room_ids)) != len(room_ids):
            raise InvalidRoomError(f"Duplicate room ids in block: {list(room_ids)}")

        discount = to_decimal(discount_rate)
        if not Decimal("0") <= discount < Decimal("1"):
            raise InvalidRateError(f"Discount rate must be in [0, 1), got {discount}")

        date_range = DateRange.build(check_in, check_out)

        self.block_id = block_id
        self.room_ids = room_ids
        self.check_in = date_range.start
        self.check_out = date_range.end
        self.discount_rate = discount
        self.rooms_info = {room_id: RoomStatus.AVAILABLE for room_id in room_ids}
        if rooms_info:
            for room_id, status in rooms_info.items():
                if room_id in self.rooms_info:
                    self.rooms_info[room_id] = RoomStatus(status)

    # ------------------------------------
    # Room status
    # ------------------------------------

    def has_room(self, room_id: int) -> bool:
        return room_id in self.rooms_info

    def is_room_available(self, room_id: int) -> bool:
        return self.rooms_info.get(room_id) == RoomStatus.AVAILABLE

    def check_available_rooms(self) -> Dict[int, RoomStatus]:
        """Rooms of this block that can still be booked, in block order."""
        return {
            room_id: status
            for room_id, status in self.rooms_info.items()
            if status == RoomStatus.AVAILABLE
        }

    def reserve_room(self, room_id: int) -> None:
        # Unknown ids are ignored; membership is checked by the caller
        if room_id in self.rooms_info:
            self.rooms_info[room_id] = RoomStatus.UNAVAILABLE

    # ------------------------------------
    # Serialisation
    # ------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "block_id": self.block_id,
            "rooms_info": {room_id: status.value for room_id, status in self.rooms_info.items()},
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "discount_rate": str(self.discount_rate),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Block:
        rooms_info = {int(k): v for k, v in data["rooms_info"].items()}
        return cls(
            block_id=int(data["block_id"]),
            room_ids=list(rooms_info.keys()),
            check_in=data["check_in"],
            check_out=data["check_out"],
            discount_rate=data["discount_rate"],
            rooms_info=rooms_info,
        )
