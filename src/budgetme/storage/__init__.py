"""
Ledger Storage Backends

Swappable persistence for the single ledger document:
- local: JSON file in a directory
- s3: object in an S3-compatible bucket
"""

from .factory import build_provider
from .local import LocalStorageProvider
from .provider import LEDGER_FILENAME, StorageProvider

__all__ = [
    "LEDGER_FILENAME",
    "LocalStorageProvider",
    "StorageProvider",
    "build_provider",
]
