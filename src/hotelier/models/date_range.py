"""
Half-open date intervals and the overlap checks built on them.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Protocol, Sequence, TypeVar, Union, runtime_checkable

from hotelier.exceptions import InvalidDateError, InvalidRangeError

DATE_FORMAT = "%Y-%m-%d"

DateLike = Union[date, datetime, str]


@runtime_checkable
class DateRanged(Protocol):
    """Anything that occupies [check_in, check_out)."""

    check_in: date
    check_out: date


T = TypeVar("T", bound=DateRanged)


@dataclass(frozen=True)
class DateRange:
    """Half-open interval [start, end) of calendar days."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise InvalidRangeError(
                f"Check-in {self.start.isoformat()} must be before check-out {self.end.isoformat()}"
            )

    @classmethod
    def build(cls, check_in: DateLike, check_out: DateLike) -> DateRange:
        return cls(start=cls.validate_date(check_in), end=cls.validate_date(check_out))

    @staticmethod
    def validate_date(value: DateLike) -> date:
        """Turns a date, datetime or YYYY-MM-DD string into a date."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return datetime.strptime(value.strip(), DATE_FORMAT).date()
            except ValueError as e:
                raise InvalidDateError(f"Invalid date '{value}'. Expected YYYY-MM-DD.") from e
        raise InvalidDateError(f"Invalid date {value!r}. Expected a date or YYYY-MM-DD string.")

    @property
    def nights(self) -> int:
        return (self.end - self.start).days

    def contains(self, day: DateLike) -> bool:
        day = self.validate_date(day)
        return self.start <= day < self.end

    def overlaps(self, other_check_in: date, other_check_out: date) -> bool:
        # [a, b) and [c, d) overlap iff a < d and c < b
        return self.start < other_check_out and other_check_in < self.end

    def overlap_blocks_reservations(
        self,
        collection: Sequence[T],
        check_in: Optional[DateLike] = None,
        check_out: Optional[DateLike] = None,
    ) -> List[T]:
        """
        Returns the items of `collection` whose dates overlap this range.

        Works for reservations and blocks alike. When `check_in` and
        `check_out` are given they replace this range for the query.
        """
        target = self
        if check_in is not None and check_out is not None:
            target = DateRange.build(check_in, check_out)
        return [item for item in collection if target.overlaps(item.check_in, item.check_out)]
