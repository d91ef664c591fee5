"""
snowdash - Snowflake data access for dashboards

Code is organized in layers
- config/ resolves settings from SNOWFLAKE_* variables or a TOML profile
- connection/ picks the credential variant and owns the live handle
- primitives/ runs statements through the manager with retry on expiry
- api and queries serve the TPC-H dashboard charts over HTTP
"""

# Layer 1: Configuration & connectivity
from snowdash.config import ConnectionSettings, list_profiles
from snowdash.connection import (
    AuthMode,
    ConnectionHandle,
    ConnectionManager,
    DelegatedTokenCredential,
    HandleState,
    InteractiveCredential,
)
from snowdash.errors import ConnectionFailure, QueryFailure, SnowdashError

# Layer 2: Primitives
from snowdash.primitives import (
    QueryFacade,
    QueryRequest,
    QueryResult,
    query,
    run,
)

__version__ = "0.1.0"
__all__ = [
    # Layer 1: Configuration & Connection
    "ConnectionSettings",
    "list_profiles",
    "AuthMode",
    "ConnectionHandle",
    "ConnectionManager",
    "DelegatedTokenCredential",
    "HandleState",
    "InteractiveCredential",
    # Errors
    "SnowdashError",
    "ConnectionFailure",
    "QueryFailure",
    # Layer 2: Execution
    "QueryFacade",
    "QueryRequest",
    "QueryResult",
    "query",
    "run",
]
