from .room import Room
from .date_range import DateRange, DateRanged
from .reservation import Reservation
from .block import Block, RoomStatus

__all__ = [
    "Room",
    "DateRange",
    "DateRanged",
    "Reservation",
    "Block",
    "RoomStatus",
]
