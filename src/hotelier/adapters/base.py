from __future__ import annotations

from decimal import Decimal
from typing import List, Protocol, Sequence, runtime_checkable

from hotelier.models import Block, Reservation, Room


@runtime_checkable
class RoomCatalogStore(Protocol):
    def load_all(self) -> List[Room]: ...
    def save_rates(self, rooms: Sequence[Room]) -> None: ...


@runtime_checkable
class ReservationStore(Protocol):
    # save_all overwrites whatever was stored before
    def load_all(self) -> List[Reservation]: ...
    def save_all(self, reservations: Sequence[Reservation]) -> None: ...


@runtime_checkable
class BlockStore(Protocol):
    def load_all(self) -> List[Block]: ...
    def save_all(self, blocks: Sequence[Block]) -> None: ...


@runtime_checkable
class HotelAdapter(Protocol):
    # lifecycle
    def init(self) -> None: ...
    def seed_rooms(self, count: int, rate: Decimal) -> int: ...

    # stores
    @property
    def room_store(self) -> RoomCatalogStore: ...
    @property
    def reservation_store(self) -> ReservationStore: ...
    @property
    def block_store(self) -> BlockStore: ...
