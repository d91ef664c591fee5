"""Connection module exports."""

from .credentials import (
    AuthMode,
    Credential,
    InteractiveCredential,
    DelegatedTokenCredential,
    build_credential,
    read_token,
    select_credential,
)
from .handle import ConnectionHandle, HandleState
from .manager import ConnectionManager

__all__ = [
    "AuthMode",
    "Credential",
    "InteractiveCredential",
    "DelegatedTokenCredential",
    "build_credential",
    "read_token",
    "select_credential",
    "ConnectionHandle",
    "HandleState",
    "ConnectionManager",
]
