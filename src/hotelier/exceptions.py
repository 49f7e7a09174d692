"""Custom exceptions for Hotelier."""
from __future__ import annotations


class HotelError(Exception):
    """Base exception for all Hotelier errors."""
    pass


class ConfigurationError(HotelError):
    """Raised when configuration is invalid or missing."""
    pass


class DatabaseError(HotelError):
    """Raised when store operations fail."""
    pass


class ReservationError(HotelError):
    """Raised when reservation or block domain rules are violated."""
    pass


class InvalidIdError(ReservationError):
    """Raised when an id is missing, non-integer or not positive."""
    pass


class InvalidDateError(ReservationError):
    """Raised when a date value cannot be parsed."""
    pass


class InvalidRangeError(ReservationError):
    """Raised when check-in is not strictly before check-out."""
    pass


class InvalidRoomError(ReservationError):
    """Raised when a room does not exist or does not belong to a block."""
    pass


class RoomUnavailableError(InvalidRoomError):
    """Raised when a room is reserved or held by a block for the requested dates."""

    def __init__(self, room_id: int, message: str = ""):
        self.room_id = room_id
        super().__init__(message or f"Room {room_id} is not available for this date range")


class TooManyRoomsError(ReservationError):
    """Raised when a block is requested with more rooms than allowed."""
    pass


class NotFoundError(ReservationError):
    """Raised when a referenced room, reservation or block does not exist."""
    pass


class InvalidRateError(ReservationError):
    """Raised when a room rate or discount rate is out of range."""
    pass
