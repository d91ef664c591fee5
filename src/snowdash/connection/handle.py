"""Connection handle with an explicit lifecycle state"""

import enum
from typing import Any, Optional

from .credentials import AuthMode, Credential


class HandleState(str, enum.Enum):
    """Lifecycle of a connection handle"""

    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    STALE = "stale"
    CLOSED = "closed"


class ConnectionHandle:
    """A live connector connection bound to exactly one credential"""

    def __init__(self, credential: Credential) -> None:
        self.credential = credential
        self.connection: Optional[Any] = None
        self.state = HandleState.UNINITIALIZED

    @property
    def mode(self) -> AuthMode:
        return self.credential.mode

    @property
    def session_id(self) -> Optional[Any]:
        """Server-side session identifier, when the connector exposes one"""
        return getattr(self.connection, "session_id", None)

    @property
    def usable(self) -> bool:
        return self.state == HandleState.READY and self.connection is not None

    def matches(self, credential: Credential) -> bool:
        """
        Check whether this handle may serve a caller holding `credential`.

        Interactive handles match any interactive credential. Delegated
        handles match only when the token on disk is unchanged.
        """
        if not self.usable or credential.mode != self.mode:
            return False
        if credential.mode is AuthMode.DELEGATED_TOKEN:
            return credential == self.credential
        return True

    def mark_stale(self) -> None:
        """STALE is terminal; a stale handle is never reused"""
        if self.state != HandleState.CLOSED:
            self.state = HandleState.STALE

    def close(self) -> None:
        """Close the underlying connection, raising whatever the connector raises"""
        connection, self.connection = self.connection, None
        if self.state != HandleState.STALE:
            self.state = HandleState.CLOSED
        if connection is not None:
            connection.close()

    def __repr__(self) -> str:
        return f"ConnectionHandle(mode='{self.mode.value}', state='{self.state.value}')"
