"""Shared fixtures and connector fakes for unit tests."""

import time
from typing import Any, Optional

import pytest

from snowdash.config import ConnectionSettings


class FakeCursor:
    """Cursor double that replays the next scripted outcome on execute()."""

    def __init__(self, connection: "FakeConnection") -> None:
        self._connection = connection
        self.description: Optional[list[tuple]] = None
        self.sfqid: Optional[str] = None
        self._rows: list[tuple] = []
        self.closed = False

    def execute(self, sql: str) -> "FakeCursor":
        self._connection.executed.append(sql)
        connector = self._connection.connector
        delay = connector.statement_delays.get(sql)
        if delay:
            time.sleep(delay)
        outcome = connector.next_outcome(sql)
        if isinstance(outcome, BaseException):
            raise outcome
        columns, rows = outcome
        self.description = [(name, None, None, None, None, None, None) for name in columns]
        self._rows = list(rows)
        self.sfqid = f"query-{len(self._connection.executed)}"
        return self

    def fetchall(self) -> list[tuple]:
        return self._rows

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    """Connection double; session_id tells constructions apart."""

    def __init__(self, connector: "FakeConnect", session_id: int) -> None:
        self.connector = connector
        self.session_id = session_id
        self.executed: list[str] = []
        self.cursors: list[FakeCursor] = []
        self.closed = False
        self.close_error: Optional[BaseException] = None

    def cursor(self) -> FakeCursor:
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor

    def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeConnect:
    """Stand-in for snowflake.connector.connect recording every call."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.connections: list[FakeConnection] = []
        self.connect_errors: list[Optional[BaseException]] = []
        self.outcomes: list[Any] = []
        self.statement_outcomes: dict[str, list[Any]] = {}
        self.statement_delays: dict[str, float] = {}
        self.delay = 0.0

    def __call__(self, **kwargs: Any) -> FakeConnection:
        self.calls.append(kwargs)
        if self.delay:
            time.sleep(self.delay)
        if self.connect_errors:
            error = self.connect_errors.pop(0)
            if error is not None:
                raise error
        connection = FakeConnection(self, session_id=len(self.calls))
        self.connections.append(connection)
        return connection

    def next_outcome(self, sql: str) -> Any:
        scripted = self.statement_outcomes.get(sql)
        if scripted:
            return scripted.pop(0)
        if self.outcomes:
            return self.outcomes.pop(0)
        return (["1"], [(1,)])


@pytest.fixture
def fake_connect() -> FakeConnect:
    """Fresh connector fake."""
    return FakeConnect()


@pytest.fixture
def token_path(tmp_path):
    """Token file location; the file itself is absent until a test writes it."""
    return tmp_path / "session" / "token"


@pytest.fixture
def settings(token_path) -> ConnectionSettings:
    """Fully configured settings pointing at the temporary token path."""
    return ConnectionSettings(
        account="test-account",
        user="test-user@example.com",
        warehouse="TEST_WH",
        database="SNOWFLAKE_SAMPLE_DATA",
        schema="TPCH_SF1",
        host="abc12345.us-east-1.snowflakecomputing.com",
        token_path=token_path,
    )


@pytest.fixture
def write_token(token_path):
    """Write (or rotate) the delegated token file."""
    def _write(value: str) -> None:
        token_path.parent.mkdir(parents=True, exist_ok=True)
        token_path.write_text(value)
    return _write
