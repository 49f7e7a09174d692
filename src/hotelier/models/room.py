from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Union

from hotelier.exceptions import InvalidRateError

Numeric = Union[Decimal, int, float, str]


def to_decimal(value: Numeric) -> Decimal:
    """Converts a rate to Decimal. Floats go through str() so 0.1 stays 0.1."""
    if isinstance(value, bool):
        raise InvalidRateError(f"Invalid rate: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise InvalidRateError(f"Invalid rate: {value!r}") from e
    if not result.is_finite():
        raise InvalidRateError(f"Invalid rate: {value!r}")
    return result


@dataclass
class Room:
    """Rentable hotel room."""

    room_id: int
    rate: Decimal = field(default=Decimal("200.00"))

    def __post_init__(self) -> None:
        self.rate = to_decimal(self.rate)

    @property
    def cost(self) -> Decimal:
        """Current nightly rate."""
        return self.rate

    def change_rate(self, new_rate: Numeric) -> None:
        self.rate = to_decimal(new_rate)

    def to_dict(self) -> Dict[str, Any]:
        return {"room_id": self.room_id, "rate": str(self.rate)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Room:
        return cls(room_id=int(data["room_id"]), rate=data["rate"])
