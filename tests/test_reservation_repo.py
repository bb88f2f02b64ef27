import logging
from datetime import datetime

import psycopg2
import pytest

from models.reservation import Reservation
from repositories.reservation_repo import ReservationRepository
from utils.errors import NotFoundError


@pytest.fixture
def repo(fake_db):
    return ReservationRepository(fake_db)


def test_get_for_customer_orders_by_start(repo, fake_db):
    fake_db.script([(3, 1, datetime(2024, 1, 5, 19, 30), 2, "")])
    reservations = repo.get_for_customer(1)
    assert "ORDER BY start_at" in fake_db.last_sql
    assert reservations[0].num_guests == 2
    assert reservations[0].customer_id == 1


def test_get_for_customer_without_reservations(repo, fake_db):
    fake_db.script([])
    assert repo.get_for_customer(1) == []


def test_get_missing_reservation(repo, fake_db):
    fake_db.script([])
    with pytest.raises(NotFoundError) as exc:
        repo.get(5)
    assert exc.value.status == 404
    assert "No such reservation: 5" in str(exc.value)


def test_save_inserts_then_updates(repo, fake_db):
    fake_db.script([(8,)], [])
    reservation = Reservation(customer_id=1, start_at=datetime(2024, 1, 5, 19, 30), num_guests=2)
    repo.save(reservation)
    assert reservation.id == 8
    assert fake_db.last_sql.startswith("INSERT INTO reservations")

    reservation.num_guests = 6
    repo.save(reservation)
    assert fake_db.last_sql.startswith("UPDATE reservations")
    assert fake_db.last_params == (1, datetime(2024, 1, 5, 19, 30), 6, "", 8)


def test_save_rolls_back_on_error(repo, fake_db):
    fake_db.error = psycopg2.OperationalError("gone")
    reservation = Reservation(customer_id=1, start_at=datetime(2024, 1, 5), num_guests=2)
    with pytest.raises(psycopg2.OperationalError):
        repo.save(reservation)
    assert fake_db.conn.rollbacks == 1
    assert reservation.id is None


def test_update_of_missing_reservation_logs_warning(repo, fake_db, caplog):
    fake_db.rowcount = 0
    reservation = Reservation(customer_id=1, start_at=datetime(2024, 1, 5), num_guests=2, id=77)
    with caplog.at_level(logging.WARNING, logger="repositories.reservation_repo"):
        repo.save(reservation)
    assert "reservation #77 does not exist" in caplog.text
