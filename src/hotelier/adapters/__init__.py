from .base import BlockStore, HotelAdapter, ReservationStore, RoomCatalogStore
from .sqlite_adapter import SQLiteHotelAdapter

__all__ = [
    "RoomCatalogStore",
    "ReservationStore",
    "BlockStore",
    "HotelAdapter",
    "SQLiteHotelAdapter",
]
