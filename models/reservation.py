"""
models/reservation.py
---------------------
Domain model for table reservations.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from dateutil import parser as date_parser


@dataclass
class Reservation:
    """
    Represents a reservation made by a customer.

    Attributes:
        id: Database primary key (None for new records).
        customer_id: Owning customer. Cannot be changed once set.
        start_at: When the party arrives.
        num_guests: Party size, at least 1.
        notes: Free-text notes about the reservation.
    """
    customer_id: int
    start_at: datetime
    num_guests: int
    notes: str = ""
    id: Optional[int] = None

    def __setattr__(self, name, value) -> None:
        if name == "customer_id":
            current = self.__dict__.get("customer_id")
            if current is not None and value != current:
                raise ValueError("Cannot change customer ID")
            if value is None:
                raise ValueError("Reservation customer_id is required")
        elif name == "num_guests":
            value = self._coerce_guests(value)
        elif name == "start_at":
            value = self._coerce_start(value)
        elif name == "notes" and value is None:
            value = ""
        super().__setattr__(name, value)

    @staticmethod
    def _coerce_guests(value) -> int:
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"Invalid number of guests: {value!r}")
        try:
            guests = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid number of guests: {value!r}") from None
        if guests < 1:
            raise ValueError(f"Cannot make a reservation for {guests} guests")
        return guests

    @staticmethod
    def _coerce_start(value) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, str) and value.strip():
            try:
                return date_parser.parse(value)
            except (ValueError, OverflowError):
                pass
        raise ValueError(f"Not a valid start time: {value!r}")

    @property
    def formatted_start_at(self) -> str:
        """Human-readable start time, e.g. 'January 5th 2024, 7:30 pm'."""
        day = self.start_at.day
        if 11 <= day % 100 <= 13:
            suffix = "th"
        else:
            suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
        hour = self.start_at.hour % 12 or 12
        meridiem = "am" if self.start_at.hour < 12 else "pm"
        return (
            f"{self.start_at:%B} {day}{suffix} {self.start_at.year}, "
            f"{hour}:{self.start_at:%M} {meridiem}"
        )

    def __str__(self) -> str:
        return f"#{self.id} {self.formatted_start_at} | {self.num_guests} guests"
