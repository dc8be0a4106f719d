#!/usr/bin/env python3
"""Build the configured StorageProvider from persisted storage settings."""

from ..core.config import StorageKind, StorageSettings
from .local import LocalStorageProvider
from .provider import StorageProvider


def build_provider(settings: StorageSettings) -> StorageProvider:
    """
    Create the provider selected by ``settings.kind``.

    Args:
        settings: Persisted storage settings

    Returns:
        LocalStorageProvider or S3StorageProvider
    """
    if settings.kind == StorageKind.S3:
        # boto3 is only imported when the S3 backend is in use
        from .s3 import S3StorageProvider

        return S3StorageProvider.from_config(settings.s3)

    return LocalStorageProvider(settings.local.path)
