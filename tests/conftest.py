"""Shared test fixtures for sqlwrapper."""

import os
import tempfile
from typing import Any, List, Optional, Sequence

# Keep rotating log files out of the working tree
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='sqlwrapper-logs-'))

import mariadb
import pytest

from sqlwrapper.access import Access

# ---------------------------------------------------------------------------
# Driver fakes
# ---------------------------------------------------------------------------


class FakeCursor:
    """Records executed statements and serves canned rows."""

    def __init__(self, connection: 'FakeConnection', prepared: bool = False) -> None:
        self.connection = connection
        self.prepared = prepared
        self.description: Optional[List[tuple]] = None
        self._rows: List[tuple] = []
        self.closed = False

    def execute(self, sql: str, params: Sequence[Any] = ()) -> None:
        self.connection.executed.append((sql, tuple(params)))
        if self.connection.errors:
            raise self.connection.errors.pop(0)
        if sql.lstrip().upper().startswith('SELECT'):
            columns, rows = self.connection.rows_for(sql)
            self.description = [(name, 253) for name in columns]
            self._rows = list(rows)
        else:
            self.description = None
            self._rows = []

    def fetchall(self) -> List[tuple]:
        rows, self._rows = self._rows, []
        return rows

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    """In-memory stand-in for ``mariadb.Connection``."""

    def __init__(self, **conn_params: Any) -> None:
        self.conn_params = conn_params
        self.executed: List[tuple] = []
        self.errors: List[Exception] = []
        self.result_columns: List[str] = []
        self.result_rows: List[tuple] = []
        self.cursors: List[FakeCursor] = []
        self.commits = 0
        self.rollbacks = 0
        self.close_calls = 0
        self.fail_autocommit = False
        self.fail_commit = False
        self.fail_close = False
        self._autocommit = True

    def rows_for(self, sql: str):
        if sql.strip() == 'SELECT 1':
            return ['1'], [(1,)]
        return self.result_columns, self.result_rows

    def cursor(self, prepared: bool = False, **kwargs: Any) -> FakeCursor:
        cursor = FakeCursor(self, prepared)
        self.cursors.append(cursor)
        return cursor

    @property
    def autocommit(self) -> bool:
        return self._autocommit

    @autocommit.setter
    def autocommit(self, on: bool) -> None:
        if self.fail_autocommit:
            raise mariadb.OperationalError("autocommit refused")
        self._autocommit = on

    def commit(self) -> None:
        if self.fail_commit:
            raise mariadb.OperationalError("commit refused")
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def close(self) -> None:
        self.close_calls += 1
        if self.fail_close:
            raise mariadb.OperationalError("close refused")


@pytest.fixture
def fake_connect(monkeypatch):
    """Patch ``mariadb.connect``; returns the list of created connections."""
    created: List[FakeConnection] = []

    def connect(**conn_params):
        connection = FakeConnection(**conn_params)
        created.append(connection)
        return connection

    monkeypatch.setattr(mariadb, 'connect', connect)
    return created


@pytest.fixture
def db(fake_connect):
    """An open ``Access`` on a fake connection."""
    access = Access('localhost', 'user', 'secret', 'shop')
    yield access
    access.close()


@pytest.fixture
def conn(db) -> FakeConnection:
    return db.connection
