"""Where snowdash looks for its token and optional profile file."""

import os
from pathlib import Path
from typing import Optional, Union

# Mounted by Snowpark Container Services; refreshed by the platform
DEFAULT_TOKEN_PATH = Path("/snowflake/session/token")

PROFILE_FILENAME = "connections.toml"


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Locate connections.toml.

    An explicit path wins, then $SNOWDASH_CONFIG_DIR/connections.toml, then
    ~/.snowdash/connections.toml. The file is only read when a profile is
    requested, so nothing is created here.
    """
    if path:
        return Path(path).expanduser()
    config_dir = os.getenv("SNOWDASH_CONFIG_DIR")
    base = Path(config_dir) if config_dir else Path.home() / ".snowdash"
    return base / PROFILE_FILENAME


def resolve_token_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the delegated token file path, honouring SNOWDASH_TOKEN_PATH"""
    if path:
        return Path(path)
    env_path = os.getenv("SNOWDASH_TOKEN_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_TOKEN_PATH
