"""Optional SQLAlchemy integration: a bounded pool of handles"""

from typing import Any, Optional
from urllib.parse import quote

from sqlalchemy import create_engine, Engine

from snowdash.config import ConnectionSettings
from snowdash.connection import select_credential


def create_engine_from_settings(
    settings: Optional[ConnectionSettings] = None,
    pool_size: int = 5,
    max_overflow: int = 10,
    **engine_kwargs: Any
) -> Engine:
    """
    Create a pooled SQLAlchemy engine using the current credential variant.

    The variant is chosen once, when the engine is created. In delegated
    token mode the token read at that moment is baked into every pooled
    connection, so build a new engine after the platform rotates it.
    """
    settings = settings if settings is not None else ConnectionSettings.from_env()
    connect_args = select_credential(settings).connect_args()

    account = connect_args.pop("account")
    user = connect_args.pop("user", "")
    database = connect_args.pop("database", "")
    schema = connect_args.pop("schema", "")

    url_parts = [f"snowflake://{quote(user, safe='')}@{account}" if user else f"snowflake://{account}"]
    if database:
        url_parts.append(f"/{database}")
        if schema:
            url_parts.append(f"/{schema}")

    url = "".join(url_parts)

    return create_engine(
        url,
        connect_args=connect_args,
        pool_size=pool_size,
        max_overflow=max_overflow,
        **engine_kwargs
    )
