import pytest

from db import connection
from db.connection import Database
from db.init_db import SCHEMA_SQL, create_tables


class StubPool:
    def __init__(self, minconn, maxconn, dsn):
        self.args = (minconn, maxconn, dsn)
        self.given = []
        self.returned = []
        self.closed = False

    def getconn(self):
        conn = object()
        self.given.append(conn)
        return conn

    def putconn(self, conn):
        self.returned.append(conn)

    def closeall(self):
        self.closed = True


@pytest.fixture
def stub_pool(monkeypatch):
    monkeypatch.setattr(connection.pool, "SimpleConnectionPool", StubPool)


def test_connection_before_open_raises():
    with pytest.raises(RuntimeError):
        Database("postgresql://example/lunchly").get_connection()


def test_open_get_release_close(stub_pool):
    db = Database("postgresql://example/lunchly", min_conn=1, max_conn=3)
    db.open()
    assert db.is_open
    pool = db._pool
    assert pool.args == (1, 3, "postgresql://example/lunchly")

    db.open()
    assert db._pool is pool

    conn = db.get_connection()
    db.release_connection(conn)
    assert pool.returned == [conn]

    db.close()
    assert pool.closed
    assert not db.is_open


def test_context_manager_closes_pool(stub_pool):
    with Database("postgresql://example/lunchly") as db:
        pool = db._pool
    assert pool.closed
    assert not db.is_open


def test_create_tables_commits(fake_db):
    create_tables(fake_db)
    assert fake_db.executed[0][0].startswith("-- Customers table")
    assert "CREATE TABLE IF NOT EXISTS reservations" in fake_db.executed[0][0]
    assert fake_db.conn.commits == 1
    assert "customers" in SCHEMA_SQL
