"""Credential variants and authentication mode selection"""

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import SecretStr

from snowdash.config import ConnectionSettings


class AuthMode(str, enum.Enum):
    """How the process authenticates to Snowflake"""

    INTERACTIVE = "interactive"
    DELEGATED_TOKEN = "delegated_token"


@dataclass(frozen=True)
class InteractiveCredential:
    """Browser-based SSO; no secret material is held by the process"""

    account: str
    user: str
    warehouse: str
    database: str
    schema: str
    role: Optional[str] = None

    mode = AuthMode.INTERACTIVE

    def connect_args(self) -> Dict[str, Any]:
        """Keyword arguments for snowflake.connector.connect"""
        args: Dict[str, Any] = {
            "account": self.account,
            "user": self.user,
            "authenticator": "externalbrowser",
            "warehouse": self.warehouse,
            "database": self.database,
            "schema": self.schema,
        }
        if self.role:
            args["role"] = self.role
        return args


@dataclass(frozen=True)
class DelegatedTokenCredential:
    """OAuth token supplied by the hosting platform at a fixed path"""

    host: str
    token: SecretStr
    warehouse: str
    database: str
    schema: str
    role: Optional[str] = None

    mode = AuthMode.DELEGATED_TOKEN

    @property
    def account(self) -> str:
        """Account locator derived from the first label of the host"""
        return self.host.split(".")[0] or "snowflake"

    def connect_args(self) -> Dict[str, Any]:
        """Keyword arguments for snowflake.connector.connect"""
        args: Dict[str, Any] = {
            "account": self.account,
            "authenticator": "oauth",
            "token": self.token.get_secret_value(),
            "warehouse": self.warehouse,
            "database": self.database,
            "schema": self.schema,
        }
        if self.host:
            args["host"] = self.host
        if self.role:
            args["role"] = self.role
        return args


Credential = Union[InteractiveCredential, DelegatedTokenCredential]


def read_token(token_path: Union[str, Path]) -> Optional[str]:
    """Return the stripped token file content, or None when the file is absent"""
    path = Path(token_path)
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None


def build_credential(settings: ConnectionSettings, token: Optional[str]) -> Credential:
    """Pick the credential variant for the current token signal"""
    if token is not None:
        return DelegatedTokenCredential(
            host=settings.host,
            token=SecretStr(token),
            warehouse=settings.warehouse,
            database=settings.database,
            schema=settings.schema,
            role=settings.role,
        )
    return InteractiveCredential(
        account=settings.account,
        user=settings.user,
        warehouse=settings.warehouse,
        database=settings.database,
        schema=settings.schema,
        role=settings.role,
    )


def select_credential(settings: ConnectionSettings) -> Credential:
    """Read the token file and build the matching credential variant"""
    return build_credential(settings, read_token(settings.token_path))
