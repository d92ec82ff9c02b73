"""Pytest configuration and shared fixtures for the documenter tests.

This module provides fixtures for:
- A fake ODBC driver (connection, cursor and driver errors)
- Catalog row sets for a small `shop` database
"""

from typing import Any, Dict, List, Sequence, Tuple

import pytest

import dbdoc.catalog


class FakeDriverError(Exception):
    """Stands in for pyodbc.Error: args are (sqlstate, message)"""


class FakeCursor:
    """Answers each statement with the rows registered for a fragment of its text"""

    def __init__(self, responses: List[Tuple[str, Sequence[str], List[tuple]]]):
        self.responses = responses
        self.errors: Dict[str, Exception] = {}
        self.executed: List[Tuple[str, Any]] = []
        self.description = None
        self.closed = False
        self._rows: List[tuple] = []

    def execute(self, query, params=None):
        self.executed.append((query, params))
        for fragment, error in self.errors.items():
            if fragment in query:
                raise error
        for fragment, columns, rows in self.responses:
            if fragment in query:
                self.description = [(column, None, None, None, None, None, None) for column in columns]
                self._rows = rows
                return self
        raise AssertionError(f"Unexpected query: {query}")

    def fetchall(self):
        return list(self._rows)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.closed = False

    def cursor(self):
        return self._cursor

    def close(self):
        self.closed = True


class FakeDriver:
    """Replacement for pyodbc.connect; every connection shares one cursor"""

    def __init__(self, responses):
        self.cursor = FakeCursor(responses)
        self.connection_strings: List[str] = []
        self.connections: List[FakeConnection] = []

    def __call__(self, connection_string: str) -> FakeConnection:
        self.connection_strings.append(connection_string)
        connection = FakeConnection(self.cursor)
        self.connections.append(connection)
        return connection

    def queries(self) -> List[str]:
        return [query for query, _ in self.cursor.executed]


TABLE_COLUMNS = ('TABLE_NAME', 'ENGINE', 'CREATE_TIME', 'TABLE_COLLATION', 'TABLE_COMMENT')
COLUMN_COLUMNS = ('TABLE_NAME', 'COLUMN_NAME', 'ORDINAL_POSITION', 'COLUMN_DEFAULT', 'IS_NULLABLE',
                  'DATA_TYPE', 'CHARACTER_MAXIMUM_LENGTH', 'NUMERIC_PRECISION', 'COLLATION_NAME',
                  'COLUMN_TYPE', 'COLUMN_KEY', 'EXTRA', 'COLUMN_COMMENT')
INDEX_COLUMNS = ('TABLE_NAME', 'INDEX_NAME', 'COLUMNS')
ROUTINE_COLUMNS = ('ROUTINE_NAME', 'CREATED', 'ROUTINE_COMMENT', 'COLLATION_CONNECTION')
# mysql.proc reports lower case labels
PARAM_COLUMNS = ('name', 'param_list')


def as_rows(columns: Sequence[str], values: List[tuple]) -> List[Dict[str, Any]]:
    return [dict(zip([column.upper() for column in columns], row)) for row in values]


@pytest.fixture(autouse=True)
def fake_driver_errors(monkeypatch):
    """Make the catalog layer treat FakeDriverError as a driver error"""
    monkeypatch.setattr(dbdoc.catalog, "DRIVER_ERRORS", (FakeDriverError,))


@pytest.fixture
def table_rows() -> List[tuple]:
    return [
        ('users', 'InnoDB', '2024-01-05 10:00:00', 'utf8mb4_general_ci', 'Registered users'),
        ('orders', 'InnoDB', '2024-01-05 10:01:00', 'utf8mb4_general_ci', ''),
    ]


@pytest.fixture
def column_rows() -> List[tuple]:
    return [
        ('users', 'id', 1, None, 'NO', 'int', None, 10, None, 'int(11)', 'PRI', 'auto_increment', ''),
        ('users', 'email', 2, None, 'NO', 'varchar', 255, None, 'utf8mb4_general_ci', 'varchar(255)', 'UNI', '',
         'Login address'),
        ('orders', 'id', 1, None, 'NO', 'int', None, 10, None, 'int(11)', 'PRI', 'auto_increment', ''),
        ('orders', 'user_id', 2, None, 'NO', 'int', None, 10, None, 'int(11)', 'MUL', '', ''),
        ('orders', 'status', 3, 'new', 'YES', 'varchar', 16, None, 'utf8mb4_general_ci', 'varchar(16)', '', '',
         ''),
    ]


@pytest.fixture
def index_rows() -> List[tuple]:
    return [
        ('users', 'PRIMARY', 'id'),
        ('users', 'email', 'email'),
        ('orders', 'PRIMARY', 'id'),
        ('orders', 'idx_user_status', 'user_id,status'),
    ]


@pytest.fixture
def routine_rows() -> List[tuple]:
    return [
        ('get_user', '2024-01-06 09:00:00', 'Fetch one user', 'utf8mb4_general_ci'),
        ('purge_orders', '2024-01-06 09:05:00', '', 'utf8mb4_general_ci'),
    ]


@pytest.fixture
def param_rows() -> List[tuple]:
    return [
        ('get_user', b'IN uid INT'),
        ('purge_orders', b''),
    ]


@pytest.fixture
def catalog_responses(table_rows, column_rows, index_rows, routine_rows, param_rows):
    return [
        ('information_schema.TABLES', TABLE_COLUMNS, table_rows),
        ('information_schema.COLUMNS', COLUMN_COLUMNS, column_rows),
        ('information_schema.STATISTICS', INDEX_COLUMNS, index_rows),
        ('information_schema.ROUTINES', ROUTINE_COLUMNS, routine_rows),
        ('mysql.proc', PARAM_COLUMNS, param_rows),
    ]


@pytest.fixture
def fake_driver(catalog_responses) -> FakeDriver:
    return FakeDriver(catalog_responses)
