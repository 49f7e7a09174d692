from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from hotelier.models.date_range import DateRange
from hotelier.models.room import to_decimal

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Reservation:
    """Booking of a single room for [check_in, check_out)."""

    reservation_id: int
    room_id: int
    check_in: date
    check_out: date

    # Rate captured when the reservation was made
    nightly_rate: Decimal
    discount_rate: Decimal = field(default=Decimal("0"))
    block_id: Optional[int] = field(default=None)

    def __post_init__(self) -> None:
        date_range = DateRange.build(self.check_in, self.check_out)
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "check_in", date_range.start)
        object.__setattr__(self, "check_out", date_range.end)
        object.__setattr__(self, "nightly_rate", to_decimal(self.nightly_rate))
        object.__setattr__(self, "discount_rate", to_decimal(self.discount_rate))

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    @property
    def effective_rate(self) -> Decimal:
        return self.nightly_rate * (Decimal("1") - self.discount_rate)

    @property
    def total_cost(self) -> Decimal:
        return (self.effective_rate * self.nights).quantize(CENT, rounding=ROUND_HALF_UP)

    def is_from_block(self) -> bool:
        return self.block_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reservation_id": self.reservation_id,
            "room_id": self.room_id,
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "nightly_rate": str(self.nightly_rate),
            "discount_rate": str(self.discount_rate),
            "block_id": self.block_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Reservation:
        field_names = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in field_names and v is not None}
        return cls(**filtered_data)
