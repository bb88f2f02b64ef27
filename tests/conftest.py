# tests/conftest.py
import os
import sys

import pytest

# project root first on sys.path so `config`, `db`, `models`... import as top-level modules
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


class FakeCursor:
    """Cursor that replays scripted result sets, one per execute()."""

    def __init__(self, db):
        self.db = db
        self._rows = []
        self.rowcount = -1

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params=None):
        self.db.executed.append((" ".join(sql.split()), params))
        if self.db.error is not None:
            raise self.db.error
        self._rows = list(self.db.results.pop(0)) if self.db.results else []
        self.rowcount = self.db.rowcount if self.db.rowcount is not None else len(self._rows)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    def __init__(self, db):
        self.db = db
        self.commits = 0
        self.rollbacks = 0

    def cursor(self):
        return FakeCursor(self.db)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


class FakeDatabase:
    """
    Stand-in for db.connection.Database.

    `results` is a list of row lists, consumed in order by each executed
    statement. Executed SQL (whitespace-collapsed) and params are recorded
    in `executed`.
    """

    def __init__(self, results=None):
        self.results = list(results or [])
        self.executed = []
        self.error = None
        # forces cursor.rowcount; None means "number of scripted rows"
        self.rowcount = None
        self.conn = FakeConnection(self)
        self.checked_out = 0

    def script(self, *result_sets):
        self.results.extend(result_sets)

    def get_connection(self):
        self.checked_out += 1
        return self.conn

    def release_connection(self, conn):
        assert conn is self.conn
        self.checked_out -= 1

    @property
    def last_sql(self):
        return self.executed[-1][0]

    @property
    def last_params(self):
        return self.executed[-1][1]


@pytest.fixture
def fake_db():
    db = FakeDatabase()
    yield db
    assert db.checked_out == 0, "connection was not released"
