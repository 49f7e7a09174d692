"""Hotelier - room reservation and block availability engine"""

__version__ = "0.1.0"

# Core abstractions
from .base_config import HotelConfig

# Exceptions
from .exceptions import (
    HotelError,
    ConfigurationError,
    DatabaseError,
    ReservationError,
    InvalidIdError,
    InvalidDateError,
    InvalidRangeError,
    InvalidRoomError,
    RoomUnavailableError,
    TooManyRoomsError,
    NotFoundError,
    InvalidRateError,
)

# Models
from .models import Block, DateRange, DateRanged, Reservation, Room, RoomStatus

# Config management
from .config import get_config, set_config

# Adapters
from .adapters.base import BlockStore, HotelAdapter, ReservationStore, RoomCatalogStore
from .adapters.sqlite_adapter import SQLiteHotelAdapter

# Services
from .services import ReservationManager, get_adapter, set_adapter, get_manager, set_manager

__all__ = [
    # Version
    "__version__",

    # Core
    "HotelConfig",

    # Exceptions
    "HotelError",
    "ConfigurationError",
    "DatabaseError",
    "ReservationError",
    "InvalidIdError",
    "InvalidDateError",
    "InvalidRangeError",
    "InvalidRoomError",
    "RoomUnavailableError",
    "TooManyRoomsError",
    "NotFoundError",
    "InvalidRateError",

    # Models
    "Room",
    "DateRange",
    "DateRanged",
    "Reservation",
    "Block",
    "RoomStatus",

    # Config
    "get_config",
    "set_config",

    # Adapters
    "RoomCatalogStore",
    "ReservationStore",
    "BlockStore",
    "HotelAdapter",
    "SQLiteHotelAdapter",

    # Services
    "ReservationManager",
    "get_adapter",
    "set_adapter",
    "get_manager",
    "set_manager",
]
