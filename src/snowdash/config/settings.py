"""Connection settings resolved from the environment or a TOML profile"""

import os
import tomllib
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .paths import DEFAULT_TOKEN_PATH, resolve_config_path, resolve_token_path

# Environment variable -> (settings field, placeholder used when unset)
ENV_FIELDS: dict[str, tuple[str, str]] = {
    "SNOWFLAKE_ACCOUNT": ("account", "myorg-myaccount"),
    "SNOWFLAKE_USER": ("user", "dashboard_user"),
    "SNOWFLAKE_WAREHOUSE": ("warehouse", "COMPUTE_WH"),
    "SNOWFLAKE_DATABASE": ("database", "SNOWFLAKE_SAMPLE_DATA"),
    "SNOWFLAKE_SCHEMA": ("schema", "TPCH_SF1"),
}

PLACEHOLDERS: dict[str, str] = {name: default for name, default in ENV_FIELDS.values()}

# Keys a profile table may carry; anything else is a typo
PROFILE_KEYS = frozenset(PLACEHOLDERS) | {"host", "role", "token_path"}


def _profile_tables(config_file: Path) -> dict[str, dict[str, Any]]:
    """Top-level TOML tables of connections.toml, keyed by profile name"""
    with config_file.open("rb") as f:
        document = tomllib.load(f)
    return {name: table for name, table in document.items() if isinstance(table, dict)}


def list_profiles(path: Optional[Union[str, Path]] = None) -> list[str]:
    """Profile names defined in connections.toml, or [] when there is no file"""
    config_file = resolve_config_path(path)
    if not config_file.is_file():
        return []
    return list(_profile_tables(config_file))


def _placeholder(name: str, source: str) -> str:
    """Return the placeholder for a missing setting and flag it to the operator"""
    value = PLACEHOLDERS[name]
    msg = (
        f"Snowflake setting '{name}' is not configured ({source}); "
        f"using placeholder '{value}'."
    )
    warnings.warn(msg, UserWarning, stacklevel=3)
    return value


@dataclass(frozen=True)
class ConnectionSettings:
    """Everything needed to build either credential variant"""

    account: str = PLACEHOLDERS["account"]
    user: str = PLACEHOLDERS["user"]
    warehouse: str = PLACEHOLDERS["warehouse"]
    database: str = PLACEHOLDERS["database"]
    schema: str = PLACEHOLDERS["schema"]
    host: str = ""
    role: Optional[str] = None
    token_path: Path = field(default=DEFAULT_TOKEN_PATH)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConnectionSettings":
        """
        Build settings from SNOWFLAKE_* environment variables.

        Missing account, user, warehouse, database and schema values are
        replaced by placeholders and reported with a UserWarning. The host
        (SNOWFLAKE_HOST) is injected by the container platform and only
        matters in delegated-token mode, so it silently defaults to empty.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            ConnectionSettings
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for var, (name, _default) in ENV_FIELDS.items():
            value = env.get(var)
            values[name] = value if value else _placeholder(name, f"{var} unset")

        values["host"] = env.get("SNOWFLAKE_HOST", "")
        values["role"] = env.get("SNOWFLAKE_ROLE") or None
        values["token_path"] = resolve_token_path(env.get("SNOWDASH_TOKEN_PATH"))
        return cls(**values)

    @classmethod
    def from_profile(
        cls,
        profile: str,
        path: Optional[Union[str, Path]] = None,
    ) -> "ConnectionSettings":
        """
        Build settings from one table of connections.toml.

        Missing connection fields fall back to placeholders with a UserWarning,
        exactly as from_env() does for unset variables.

        Raises:
            FileNotFoundError: If there is no connections.toml at the resolved path
            KeyError: If the file has no table named `profile`
            ValueError: If the table holds keys outside PROFILE_KEYS
        """
        config_file = resolve_config_path(path)
        if not config_file.is_file():
            raise FileNotFoundError(
                f"No connections.toml at {config_file}; "
                "set SNOWFLAKE_* variables or pass an explicit path."
            )

        tables = _profile_tables(config_file)
        cfg = tables.get(profile)
        if cfg is None:
            known = ", ".join(tables) or "none"
            raise KeyError(f"Unknown profile '{profile}' in {config_file} (defined: {known})")

        unexpected = sorted(set(cfg) - PROFILE_KEYS)
        if unexpected:
            raise ValueError(
                f"Profile '{profile}' has unsupported keys: {', '.join(unexpected)}"
            )

        values: dict[str, Any] = {}
        for name in PLACEHOLDERS:
            value = cfg.get(name)
            values[name] = str(value) if value else _placeholder(name, f"profile '{profile}'")

        values["host"] = str(cfg.get("host", ""))
        values["role"] = cfg.get("role") or None
        values["token_path"] = resolve_token_path(cfg.get("token_path"))
        return cls(**values)

    def __repr__(self) -> str:
        return (
            f"ConnectionSettings(account='{self.account}', user='{self.user}', "
            f"database='{self.database}', schema='{self.schema}', "
            f"token_path='{self.token_path}')"
        )
