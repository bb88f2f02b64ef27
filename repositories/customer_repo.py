"""
repositories/customer_repo.py
------------------------------
Data access layer for restaurant customers.
All SQL queries related to the `customers` table live here.
"""

from typing import Optional

from config import BEST_CUSTOMERS_LIMIT
from db.connection import Database
from models.customer import Customer
from models.reservation import Reservation
from repositories.reservation_repo import ReservationRepository
from utils.errors import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, first_name, last_name, phone, notes"


class CustomerRepository:
    """Repository for CRUD-style operations on the customers table."""

    def __init__(self, db: Database, reservations: Optional[ReservationRepository] = None):
        self.db = db
        self.reservations = reservations or ReservationRepository(db)

    # ── READ ──────────────────────────────────────────────

    def all(self) -> list[Customer]:
        """
        Fetch every customer.

        Returns:
            List of Customer objects ordered by last name, then first name.
        """
        sql = f"SELECT {_COLUMNS} FROM customers ORDER BY last_name, first_name;"
        return self._fetch_customers(sql)

    def get(self, customer_id: int) -> Customer:
        """
        Fetch a single customer by ID.

        Args:
            customer_id: Primary key.

        Returns:
            The matching Customer.

        Raises:
            NotFoundError: If no customer has this ID.
        """
        sql = f"SELECT {_COLUMNS} FROM customers WHERE id = %s;"
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (customer_id,))
                row = cur.fetchone()
        finally:
            self.db.release_connection(conn)

        if row is None:
            logger.warning(f"Customer #{customer_id} not found")
            raise NotFoundError(f"No such customer: {customer_id}")
        return self._row_to_customer(row)

    def filter_by_name(self, term1: Optional[str], term2: Optional[str] = None) -> list[Customer]:
        """
        Case-insensitive substring search on customer names.

        With both terms, the first name must contain `term1` AND the last
        name must contain `term2`. With a single term, either name may
        contain it. With no terms, every customer is returned.

        Returns:
            List of matching customers ordered by last name, then first name.
            An empty list when nothing matches.
        """
        term1 = (term1 or "").strip()
        term2 = (term2 or "").strip()
        if not term1:
            term1, term2 = term2, None
        if not term1:
            return self.all()

        if term2:
            sql = f"""
                SELECT {_COLUMNS} FROM customers
                WHERE lower(first_name) LIKE %s AND lower(last_name) LIKE %s
                ORDER BY last_name, first_name;
            """
            params = (self._pattern(term1), self._pattern(term2))
        else:
            sql = f"""
                SELECT {_COLUMNS} FROM customers
                WHERE lower(first_name) LIKE %s OR lower(last_name) LIKE %s
                ORDER BY last_name, first_name;
            """
            pattern = self._pattern(term1)
            params = (pattern, pattern)
        return self._fetch_customers(sql, params)

    def filter_best(self, limit: int = BEST_CUSTOMERS_LIMIT) -> list[Customer]:
        """
        Top customers ranked by how many reservations they have made.

        Customers without reservations are not included. Ties are ordered
        by last name, first name, then id.

        Args:
            limit: Maximum number of customers to return.

        Returns:
            List of Customer objects with `reservation_count` populated.
        """
        sql = """
            SELECT c.id, c.first_name, c.last_name, c.phone, c.notes,
                   COUNT(r.id) AS reservation_count
            FROM customers AS c
            JOIN reservations AS r ON c.id = r.customer_id
            GROUP BY c.id
            ORDER BY reservation_count DESC, c.last_name, c.first_name, c.id
            LIMIT %s;
        """
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (limit,))
                customers = []
                for row in cur.fetchall():
                    customer = self._row_to_customer(row)
                    customer.reservation_count = row[5]
                    customers.append(customer)
        finally:
            self.db.release_connection(conn)
        logger.debug(f"Best customers report returned {len(customers)} rows")
        return customers

    # ── CREATE / UPDATE ───────────────────────────────────

    def save(self, customer: Customer) -> Customer:
        """
        Insert a new customer or update an existing one.
        There is no concurrency check; the last write wins.

        Args:
            customer: Customer to persist. A new record gets its `id` set.

        Returns:
            The same Customer.
        """
        customer.validate()
        if customer.id is None:
            sql = """
                INSERT INTO customers (first_name, last_name, phone, notes)
                VALUES (%s, %s, %s, %s)
                RETURNING id;
            """
            params = (customer.first_name, customer.last_name, customer.phone, customer.notes)
        else:
            sql = """
                UPDATE customers
                SET first_name = %s, last_name = %s, phone = %s, notes = %s
                WHERE id = %s;
            """
            params = (
                customer.first_name, customer.last_name,
                customer.phone, customer.notes, customer.id,
            )

        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                if customer.id is None:
                    customer.id = cur.fetchone()[0]
                    logger.info(f"Added customer #{customer.id} ({customer.full_name})")
                elif cur.rowcount == 0:
                    logger.warning(f"Update matched no row: customer #{customer.id} does not exist")
            conn.commit()
            return customer
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to save customer {customer.full_name}: {e}")
            raise
        finally:
            self.db.release_connection(conn)

    # ── RELATIONS ─────────────────────────────────────────

    def get_reservations(self, customer: Customer) -> list[Reservation]:
        """All reservations made by this customer."""
        return self.reservations.get_for_customer(customer.id)

    def num_reservations(self, customer: Customer) -> int:
        return len(self.get_reservations(customer))

    # ── HELPERS ───────────────────────────────────────────

    def _fetch_customers(self, sql: str, params: tuple = ()) -> list[Customer]:
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return [self._row_to_customer(r) for r in cur.fetchall()]
        finally:
            self.db.release_connection(conn)

    @staticmethod
    def _pattern(term: str) -> str:
        return f"%{term.lower()}%"

    @staticmethod
    def _row_to_customer(row: tuple) -> Customer:
        """Convert a database row tuple to a Customer domain object."""
        return Customer(
            id=row[0],
            first_name=row[1],
            last_name=row[2],
            phone=row[3],
            notes=row[4],
        )
