"""Lazy, single-flight Snowflake connection management"""

import asyncio
import logging
from typing import Any, Callable, Optional

import snowflake.connector

from snowdash.config import ConnectionSettings
from snowdash.errors import ConnectionFailure

from .credentials import Credential, select_credential
from .handle import ConnectionHandle, HandleState

logger = logging.getLogger(__name__)


def _consume_failure(task: "asyncio.Future[ConnectionHandle]") -> None:
    # Retrieve the error even when every waiter was cancelled
    if not task.cancelled():
        task.exception()


class ConnectionManager:
    """
    Owns the process-wide connection handle and hands out READY handles.

    The credential variant is re-evaluated on every acquire() by reading the
    token file: present means delegated-token (OAuth) mode, absent means
    interactive browser SSO. A cached handle is reused while it still matches
    that signal; otherwise it is marked stale, released and rebuilt.

    Concurrent callers arriving while a connection is being built all await
    the same pending construction, so at most one connect() is in flight.

    Args:
        settings: Connection settings (defaults to ConnectionSettings.from_env())
        connect: Callable that opens a connector connection from keyword
            arguments (defaults to snowflake.connector.connect)

    Example:
        >>> manager = ConnectionManager()
        >>> handle = await manager.acquire()
        >>> handle.connection.cursor().execute("SELECT 1")
    """

    def __init__(
        self,
        settings: Optional[ConnectionSettings] = None,
        connect: Optional[Callable[..., Any]] = None,
    ) -> None:
        self.settings = settings if settings is not None else ConnectionSettings.from_env()
        self._connect = connect if connect is not None else snowflake.connector.connect
        self._handle: Optional[ConnectionHandle] = None
        self._pending: Optional["asyncio.Future[ConnectionHandle]"] = None
        self.construction_count = 0

    @property
    def state(self) -> HandleState:
        """State of the managed connection as seen by callers"""
        if self._pending is not None:
            return HandleState.CONNECTING
        if self._handle is None:
            return HandleState.UNINITIALIZED
        return self._handle.state

    @property
    def handle(self) -> Optional[ConnectionHandle]:
        """The cached handle, if any"""
        return self._handle

    async def acquire(self) -> ConnectionHandle:
        """Return a READY handle, building one if needed"""
        try:
            credential = await asyncio.to_thread(select_credential, self.settings)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read Snowflake token at {self.settings.token_path}: {e}")
            raise ConnectionFailure.from_exception(e, "Failed to read Snowflake token") from e

        while self._handle is not None:
            handle = self._handle
            if handle.matches(credential):
                logger.debug(f"Reusing Snowflake connection ({handle.mode.value})")
                return handle
            logger.info(
                f"Credential changed ({handle.mode.value} -> {credential.mode.value}); "
                "replacing Snowflake connection"
            )
            self._detach(handle)
            await self._release(handle)

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._construct(credential))
            self._pending.add_done_callback(_consume_failure)
        # Shield so a cancelled waiter does not cancel the shared construction
        return await asyncio.shield(self._pending)

    async def invalidate(self, handle: Optional[ConnectionHandle] = None) -> None:
        """
        Mark the cached handle stale and drop it.

        When `handle` is given, only that handle is invalidated: if the cache
        already holds a different (newer) handle, it is left alone. A no-op
        when nothing matching is cached.
        """
        if handle is None:
            handle = self._handle
        if handle is None or handle is not self._handle:
            return
        self._detach(handle)
        logger.info(f"Invalidated Snowflake connection ({handle.mode.value})")
        await self._release(handle)

    async def close(self) -> None:
        """Close the cached handle, if any"""
        handle, self._handle = self._handle, None
        if handle is not None:
            await asyncio.to_thread(handle.close)

    async def _construct(self, credential: Credential) -> ConnectionHandle:
        self.construction_count += 1
        handle = ConnectionHandle(credential)
        handle.state = HandleState.CONNECTING
        logger.info(
            f"Opening Snowflake connection (mode={credential.mode.value}, "
            f"account={credential.account})"
        )
        try:
            connection = await asyncio.to_thread(self._connect, **credential.connect_args())
        except Exception as e:
            handle.state = HandleState.UNINITIALIZED
            logger.error(f"Snowflake connection failed ({credential.mode.value}): {e}")
            raise ConnectionFailure.from_exception(e, "Failed to connect to Snowflake") from e
        else:
            handle.connection = connection
            handle.state = HandleState.READY
            self._handle = handle
            logger.info(f"Snowflake connection ready ({credential.mode.value})")
            return handle
        finally:
            self._pending = None

    def _detach(self, handle: ConnectionHandle) -> None:
        if self._handle is handle:
            self._handle = None
        handle.mark_stale()

    async def _release(self, handle: ConnectionHandle) -> None:
        """Close a discarded handle; failures are logged, never raised"""
        try:
            await asyncio.to_thread(handle.close)
        except Exception as e:
            logger.warning(f"Ignoring error while closing stale Snowflake connection: {e}")

    async def __aenter__(self) -> "ConnectionManager":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"ConnectionManager(account='{self.settings.account}', state='{self.state.value}')"
