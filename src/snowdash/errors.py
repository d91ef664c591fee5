"""Failure taxonomy for connection and query errors"""

from typing import Optional

# Substrings of connector messages that mean the session or token is gone
RECOVERABLE_MESSAGES = ("access token expired", "terminated connection")

# Session no longer exists on the server side
SESSION_TIMEOUT_ERRNO = 407002


def is_recoverable(message: Optional[str], errno: Optional[int] = None) -> bool:
    """Return True when a failure is caused by credential or session expiry"""
    if errno is not None and errno == SESSION_TIMEOUT_ERRNO:
        return True
    if not message:
        return False
    lowered = message.lower()
    return any(signal in lowered for signal in RECOVERABLE_MESSAGES)


class SnowdashError(Exception):
    """Base class for failures surfaced by snowdash"""

    def __init__(self, message: str, errno: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errno = errno

    @property
    def recoverable(self) -> bool:
        """Whether a reconnect-and-retry may succeed"""
        return is_recoverable(self.message, self.errno)

    @classmethod
    def from_exception(cls, exc: BaseException, context: str) -> "SnowdashError":
        """Wrap a connector error, keeping its message and error number"""
        message = getattr(exc, "msg", None) or str(exc)
        errno = getattr(exc, "errno", None)
        if not isinstance(errno, int) or errno < 0:
            errno = None
        return cls(f"{context}: {message}", errno=errno)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, errno={self.errno})"


class ConnectionFailure(SnowdashError):
    """Establishing a connection handle failed"""


class QueryFailure(SnowdashError):
    """Executing a statement failed"""

    def __init__(
        self,
        message: str,
        errno: Optional[int] = None,
        sfqid: Optional[str] = None,
    ) -> None:
        super().__init__(message, errno=errno)
        self.sfqid = sfqid
