# RepoSync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from reposync.config.defaults import DEFAULT_CONFIG, generate_default_config
from reposync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from reposync.config.schema import (
    OutputConfig,
    QuotaConfig,
    RepositoryConfig,
    ReposyncConfig,
    StoreConfig,
    SyncSettings,
)

__all__ = [
    # Schema
    "ReposyncConfig",
    "RepositoryConfig",
    "StoreConfig",
    "QuotaConfig",
    "SyncSettings",
    "OutputConfig",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
