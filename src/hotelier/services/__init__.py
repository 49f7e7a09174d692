from __future__ import annotations
from typing import Optional

from hotelier.adapters.base import HotelAdapter
from hotelier.config import get_config

from .reservation_manager import ReservationManager

# Global instances
_adapter: Optional[HotelAdapter] = None
_manager: Optional[ReservationManager] = None


def get_adapter() -> HotelAdapter:
    """
    Returns the process-wide adapter, creating it from the active config
    on first use.
    """
    global _adapter
    if _adapter is None:
        _adapter = get_config().create_adapter()
    return _adapter


def set_adapter(adapter: Optional[HotelAdapter]) -> None:
    """Replaces the process-wide adapter and drops the cached manager (handy in tests)."""
    global _adapter, _manager
    _adapter = adapter
    _manager = None


def get_manager() -> ReservationManager:
    global _manager
    if _manager is None:
        _manager = get_config().create_manager(get_adapter())
    return _manager


def set_manager(manager: Optional[ReservationManager]) -> None:
    global _manager
    _manager = manager


__all__ = [
    "ReservationManager",
    "get_adapter",
    "set_adapter",
    "get_manager",
    "set_manager",
]
