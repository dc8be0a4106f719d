"""
Core Utilities Package

Shared primitives used by the ledger engine, the storage backends and the CLI.

This package provides:
- Money handling with integer arithmetic for precision
- Epoch-millisecond timestamps and local calendar-day helpers
- Configuration management for environment and storage settings
- JSON helpers shared by the storage backends
"""

from .config import (
    Config,
    Environment,
    LocalStorageConfig,
    S3StorageConfig,
    StorageKind,
    StorageSettings,
    get_config,
    get_config_dir,
    is_test,
    reload_config,
)
from .currency import cents_to_dollars_str, dollars_to_cents, format_cents
from .dates import LedgerDate, from_millis, now_millis, to_millis
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "LedgerDate",
    "LocalStorageConfig",
    "Money",
    "S3StorageConfig",
    "StorageKind",
    "StorageSettings",
    # Currency utilities
    "cents_to_dollars_str",
    "dollars_to_cents",
    "format_cents",
    "from_millis",
    "get_config",
    "get_config_dir",
    "is_test",
    "now_millis",
    "reload_config",
    "to_millis",
]
