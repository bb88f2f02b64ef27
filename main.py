"""
main.py
-------
Entry point for the Lunchly data layer.

Responsibilities:
    - Open the database connection pool and create the schema.
    - Build the services that the web layer calls into.
    - Close the pool on shutdown.
"""

from db.connection import Database
from db.init_db import create_tables
from services.customer_service import CustomerService
from config import LOG_LEVEL
from utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def startup() -> tuple[Database, CustomerService]:
    """
    Open the pool, make sure the schema exists and wire up the services.

    Returns:
        The opened Database handle and a CustomerService bound to it.
    """
    configure_logging(LOG_LEVEL)
    logger.info("Initializing database...")
    db = Database()
    db.open()
    create_tables(db)
    return db, CustomerService(db)


def shutdown(db: Database) -> None:
    """Release every pooled connection."""
    db.close()
    logger.info("Lunchly stopped.")


def main() -> None:
    """Start up, log a short summary of the data and shut down."""
    db, service = startup()
    try:
        customers = service.list_customers()
        logger.info(f"{len(customers)} customers on file.")
        for customer in service.best_customers():
            logger.info(f"  {customer.full_name}: {customer.reservation_count} reservations")
    finally:
        shutdown(db)


if __name__ == "__main__":
    main()
