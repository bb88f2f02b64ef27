"""
services/customer_service.py
-----------------------------
Business logic behind the customer and reservation pages.
Orchestrates between the CustomerRepository and the ReservationRepository.
"""

from datetime import datetime
from typing import Optional, Union

from db.connection import Database
from models.customer import Customer
from models.reservation import Reservation
from repositories.customer_repo import CustomerRepository
from repositories.reservation_repo import ReservationRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_EDITABLE_FIELDS = ("first_name", "last_name", "phone", "notes")


class CustomerService:
    """
    Handles the use cases of the restaurant's web pages.

    Responsibilities:
        - List, search and rank customers.
        - Create and edit customers.
        - Show a customer together with their reservations.
        - Book new reservations for an existing customer.
    """

    def __init__(self, db: Database):
        self.reservation_repo = ReservationRepository(db)
        self.customer_repo = CustomerRepository(db, self.reservation_repo)

    def list_customers(self) -> list[Customer]:
        return self.customer_repo.all()

    def get_customer(self, customer_id: int) -> Customer:
        return self.customer_repo.get(customer_id)

    def search(self, query: Optional[str]) -> list[Customer]:
        """
        Search customers from a free-text query such as "ann smith".

        The first word is matched against first or last name; when a second
        word is present the pair is matched as first name and last name.
        Extra words are ignored.
        """
        terms = (query or "").split()
        term1 = terms[0] if terms else None
        term2 = terms[1] if len(terms) > 1 else None
        return self.customer_repo.filter_by_name(term1, term2)

    def best_customers(self) -> list[Customer]:
        return self.customer_repo.filter_best()

    def customer_detail(self, customer_id: int) -> tuple[Customer, list[Reservation]]:
        """
        Load a customer and their reservations.

        Raises:
            NotFoundError: If the customer does not exist.
        """
        customer = self.customer_repo.get(customer_id)
        reservations = self.customer_repo.get_reservations(customer)
        return customer, reservations

    def create_customer(
        self,
        first_name: str,
        last_name: str,
        phone: Optional[str] = None,
        notes: str = "",
    ) -> Customer:
        """Validate and persist a new customer."""
        customer = Customer(first_name=first_name, last_name=last_name, phone=phone, notes=notes)
        return self.customer_repo.save(customer)

    def update_customer(self, customer_id: int, **fields) -> Customer:
        """
        Apply field changes to an existing customer and save it.

        Raises:
            NotFoundError: If the customer does not exist.
            ValueError: On an unknown field name or an invalid value.
        """
        unknown = set(fields) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown customer fields: {', '.join(sorted(unknown))}")

        customer = self.customer_repo.get(customer_id)
        for name, value in fields.items():
            setattr(customer, name, value)
        saved = self.customer_repo.save(customer)
        logger.info(f"Updated customer #{customer_id}: {', '.join(sorted(fields))}")
        return saved

    def add_reservation(
        self,
        customer_id: int,
        start_at: Union[datetime, str],
        num_guests: int,
        notes: str = "",
    ) -> Reservation:
        """
        Book a reservation for an existing customer.

        Raises:
            NotFoundError: If the customer does not exist.
            ValueError: If the start time or party size is invalid.
        """
        customer = self.customer_repo.get(customer_id)
        reservation = Reservation(
            customer_id=customer.id,
            start_at=start_at,
            num_guests=num_guests,
            notes=notes,
        )
        return self.reservation_repo.save(reservation)
