"""Application configuration helpers."""

from __future__ import annotations

from .env import env_bool, env_float, env_int, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config
from .updater import DownloadConfig, UpdaterConfig, get_download_config, get_updater_config

__all__ = [
    "ConfigurationError",
    "DownloadConfig",
    "MissingConfigurationError",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "UpdaterConfig",
    "configure_logging",
    "env_bool",
    "env_float",
    "env_int",
    "get_download_config",
    "get_storage_config",
    "get_updater_config",
    "require_env_vars",
]
