"""
Base configuration abstractions for Hotelier.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING

from hotelier.adapters.base import HotelAdapter

if TYPE_CHECKING:
    from hotelier.services.reservation_manager import ReservationManager


class HotelConfig(ABC):
    """Abstract configuration contract for a hotel deployment."""

    @abstractmethod
    def get_database_url(self) -> str: pass

    @abstractmethod
    def get_room_count(self) -> int: pass

    @abstractmethod
    def get_default_rate(self) -> Decimal: pass

    @abstractmethod
    def create_adapter(self) -> HotelAdapter: pass

    def get_hotel_display_name(self) -> str: return "Hotelier"

    def create_manager(self, adapter: HotelAdapter) -> ReservationManager:
        from hotelier.services.reservation_manager import ReservationManager

        return ReservationManager(
            room_store=adapter.room_store,
            reservation_store=adapter.reservation_store,
            block_store=adapter.block_store,
        )
