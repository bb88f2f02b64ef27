"""
repositories/reservation_repo.py
---------------------------------
Data access layer for reservations.
All SQL queries related to the `reservations` table live here.
"""

from db.connection import Database
from models.reservation import Reservation
from utils.errors import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, customer_id, start_at, num_guests, notes"


class ReservationRepository:
    """Repository for read and save operations on the reservations table."""

    def __init__(self, db: Database):
        self.db = db

    # ── READ ──────────────────────────────────────────────

    def get_for_customer(self, customer_id: int) -> list[Reservation]:
        """
        Fetch all reservations belonging to a customer.

        Args:
            customer_id: Primary key of the customer.

        Returns:
            List of Reservation objects ordered by start time.
        """
        sql = f"SELECT {_COLUMNS} FROM reservations WHERE customer_id = %s ORDER BY start_at, id;"
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (customer_id,))
                return [self._row_to_reservation(r) for r in cur.fetchall()]
        finally:
            self.db.release_connection(conn)

    def get(self, reservation_id: int) -> Reservation:
        """
        Fetch a single reservation by ID.

        Raises:
            NotFoundError: If no reservation has this ID.
        """
        sql = f"SELECT {_COLUMNS} FROM reservations WHERE id = %s;"
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (reservation_id,))
                row = cur.fetchone()
        finally:
            self.db.release_connection(conn)

        if row is None:
            logger.warning(f"Reservation #{reservation_id} not found")
            raise NotFoundError(f"No such reservation: {reservation_id}")
        return self._row_to_reservation(row)

    # ── CREATE / UPDATE ───────────────────────────────────

    def save(self, reservation: Reservation) -> Reservation:
        """
        Insert a new reservation or update an existing one.

        Args:
            reservation: Reservation to persist. A new record gets its `id` set.

        Returns:
            The same Reservation.
        """
        if reservation.id is None:
            sql = """
                INSERT INTO reservations (customer_id, start_at, num_guests, notes)
                VALUES (%s, %s, %s, %s)
                RETURNING id;
            """
            params = (
                reservation.customer_id, reservation.start_at,
                reservation.num_guests, reservation.notes,
            )
        else:
            sql = """
                UPDATE reservations
                SET customer_id = %s, start_at = %s, num_guests = %s, notes = %s
                WHERE id = %s;
            """
            params = (
                reservation.customer_id, reservation.start_at,
                reservation.num_guests, reservation.notes, reservation.id,
            )

        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                if reservation.id is None:
                    reservation.id = cur.fetchone()[0]
                    logger.info(
                        f"Added reservation #{reservation.id} for customer {reservation.customer_id}"
                    )
                elif cur.rowcount == 0:
                    logger.warning(f"Update matched no row: reservation #{reservation.id} does not exist")
            conn.commit()
            return reservation
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to save reservation for customer {reservation.customer_id}: {e}")
            raise
        finally:
            self.db.release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_reservation(row: tuple) -> Reservation:
        """Convert a database row tuple to a Reservation domain object."""
        return Reservation(
            id=row[0],
            customer_id=row[1],
            start_at=row[2],
            num_guests=row[3],
            notes=row[4],
        )
