"""Primitive operations to run SQL through a ConnectionManager"""

from snowdash.primitives.result import QueryResult, Record
from snowdash.primitives.execute import (
    QueryRequest,
    QueryFacade,
    execute_on,
    query,
    run,
)

__all__ = [
    "QueryResult",
    "Record",
    "QueryRequest",
    "QueryFacade",
    "execute_on",
    "query",
    "run",
]
