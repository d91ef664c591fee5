"""Execute SQL through a ConnectionManager with retry on session expiry"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional, Type

import pandas as pd
from pydantic import BaseModel
from snowflake.connector.errors import Error as ConnectorError

from snowdash.connection import ConnectionHandle, ConnectionManager
from snowdash.errors import QueryFailure, SnowdashError

from .result import QueryResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryRequest:
    """
    One statement to run, plus the optional shape of its rows.

    The SQL is sent as-is: no client-side binding happens here, so callers
    must only pass fixed, trusted statements.
    """
    sql: str
    row_model: Optional[Type[BaseModel]] = None


def execute_on(connection: Any, sql: str) -> QueryResult:
    """Run one statement on a connector connection, always closing the cursor"""
    cursor = connection.cursor()
    try:
        cursor.execute(sql)
        return QueryResult.from_cursor(cursor)
    except ConnectorError as e:
        failure = QueryFailure.from_exception(e, "Snowflake query failed")
        failure.sfqid = getattr(e, "sfqid", None)
        raise failure from e
    finally:
        cursor.close()


class QueryFacade:
    """Execute statements against whatever handle the manager provides"""

    def __init__(self, manager: ConnectionManager) -> None:
        self.manager = manager

    async def run(self, request: QueryRequest, retry_budget: int = 1) -> QueryResult:
        """
        Execute a request and return the full QueryResult.

        A failure classified as recoverable (expired token, terminated
        connection, session timeout) invalidates the cached handle and the
        whole operation is retried from acquisition while budget remains.
        Everything else propagates on first failure.

        Args:
            request: Statement and optional row model
            retry_budget: Additional attempts allowed after recoverable failures

        Raises:
            ConnectionFailure: If a handle could not be established
            QueryFailure: If the statement failed
        """
        budget = retry_budget
        while True:
            handle: Optional[ConnectionHandle] = None
            try:
                handle = await self.manager.acquire()
                return await asyncio.to_thread(execute_on, handle.connection, request.sql)
            except SnowdashError as e:
                if not e.recoverable or budget <= 0:
                    raise
                budget -= 1
                logger.warning(
                    f"Recoverable Snowflake failure, reconnecting ({budget} retries left): {e.message}"
                )
                # Scoped to this attempt's handle
                if handle is not None:
                    await self.manager.invalidate(handle)

    async def query(
        self,
        sql: str,
        retry_budget: int = 1,
        row_model: Optional[Type[BaseModel]] = None,
    ) -> list[Any]:
        """Execute SQL and return its rows as records (or `row_model` instances)"""
        result = await self.run(QueryRequest(sql, row_model), retry_budget=retry_budget)
        if row_model is not None:
            return result.as_models(row_model)
        return result.records

    async def query_df(self, sql: str, retry_budget: int = 1) -> pd.DataFrame:
        """Execute SQL and return results as a DataFrame"""
        result = await self.run(QueryRequest(sql), retry_budget=retry_budget)
        return result.to_df()


async def query(
    sql: str,
    manager: ConnectionManager,
    retry_budget: int = 1,
    row_model: Optional[Type[BaseModel]] = None,
) -> list[Any]:
    """Execute SQL and return its rows as records"""
    return await QueryFacade(manager).query(sql, retry_budget=retry_budget, row_model=row_model)


async def run(sql: str, manager: ConnectionManager, retry_budget: int = 1) -> QueryResult:
    """Execute SQL and return a QueryResult"""
    return await QueryFacade(manager).run(QueryRequest(sql), retry_budget=retry_budget)
