"""
models/customer.py
------------------
Domain model for restaurant customers.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Customer:
    """
    Represents a customer of the restaurant.

    Attributes:
        id: Database primary key (None for new records).
        first_name: Given name (required).
        last_name: Family name (required).
        phone: Optional contact number.
        notes: Free-text notes about the customer.
        reservation_count: Number of reservations, only filled in by the
            best-customers report.
    """
    first_name: str
    last_name: str
    phone: Optional[str] = None
    notes: str = ""
    id: Optional[int] = None
    reservation_count: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check required fields and normalize optional ones.

        Raises:
            ValueError: If the first or last name is missing or blank.
        """
        for attr in ("first_name", "last_name"):
            value = getattr(self, attr)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Customer {attr} is required")
        if self.notes is None:
            self.notes = ""
        if self.phone == "":
            self.phone = None

    @property
    def full_name(self) -> str:
        """First and last name joined by a space."""
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        return self.full_name
