"""Configuration module exports."""

from .paths import DEFAULT_TOKEN_PATH, resolve_config_path, resolve_token_path
from .settings import ConnectionSettings, PLACEHOLDERS, PROFILE_KEYS, list_profiles

__all__ = [
    "ConnectionSettings",
    "PLACEHOLDERS",
    "PROFILE_KEYS",
    "list_profiles",
    "DEFAULT_TOKEN_PATH",
    "resolve_config_path",
    "resolve_token_path",
]
