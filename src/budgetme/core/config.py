#!/usr/bin/env python3
"""
Configuration Management for budgetme

Two layers of configuration live here:

- Process configuration (environment, config directory, logging) loaded from
  environment variables, with a ``.env`` file honored via python-dotenv.
- Storage settings (which backend holds the ledger and how to reach it),
  persisted as ``config.yaml`` inside the config directory.
"""

import logging
import os
import re
import secrets
import string
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import click
import yaml
from dotenv import load_dotenv

from .json_utils import read_json

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

APP_NAME = "budgetme"
SETTINGS_FILENAME = "config.yaml"
LEGACY_SETTINGS_FILENAME = "config.json"
DEFAULT_REGION = "us-east-1"


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class StorageKind(Enum):
    """Which backend holds the ledger document."""

    LOCAL = "local"
    S3 = "s3"

    @classmethod
    def parse(cls, value: str) -> "StorageKind":
        """
        Parse a provider name as typed by a user.

        ``aws`` is accepted as an alias for ``s3``.

        Raises:
            ValueError: For anything other than local, s3 or aws
        """
        normalized = value.strip().lower()
        if normalized == "aws":
            normalized = "s3"
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f'Invalid provider "{value}", valid are local, s3 or aws') from None


def generate_bucket_name() -> str:
    """Random default bucket name, e.g. ``bucket-k3x9q0ab``."""
    alphabet = string.ascii_lowercase + string.digits
    suffix = "".join(secrets.choice(alphabet) for _ in range(8))
    return f"bucket-{suffix}"


@dataclass
class LocalStorageConfig:
    """Local file storage: the ledger lives at ``<path>/data.json``."""

    path: Path


@dataclass
class S3StorageConfig:
    """S3-compatible object storage settings."""

    bucket_name: str = field(default_factory=generate_bucket_name)
    region: str = DEFAULT_REGION
    access_key: str = ""
    secret_key: str = ""


@dataclass
class StorageSettings:
    """
    Persisted storage selection.

    ``kind`` is the explicit discriminant; both backend sections are kept so
    that switching providers back and forth does not lose settings.
    """

    kind: StorageKind
    local: LocalStorageConfig
    s3: S3StorageConfig

    @classmethod
    def default(cls, config_dir: Path) -> "StorageSettings":
        return cls(
            kind=StorageKind.LOCAL,
            local=LocalStorageConfig(path=config_dir),
            s3=S3StorageConfig(),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any], config_dir: Path) -> "StorageSettings":
        """
        Create StorageSettings from the parsed ``config.yaml``.

        Missing sections fall back to defaults.
        """
        settings = cls.default(config_dir)
        settings.kind = StorageKind.parse(data.get("kind", StorageKind.LOCAL.value))

        local = data.get("local") or {}
        if local.get("path"):
            settings.local = LocalStorageConfig(path=Path(local["path"]))

        s3 = data.get("s3") or {}
        if s3:
            settings.s3 = S3StorageConfig(
                bucket_name=s3.get("bucket_name") or settings.s3.bucket_name,
                region=s3.get("region") or DEFAULT_REGION,
                access_key=s3.get("access_key") or "",
                secret_key=s3.get("secret_key") or "",
            )

        return settings

    @classmethod
    def from_legacy_dict(cls, data: dict[str, Any], config_dir: Path) -> "StorageSettings":
        """
        Import the JSON configuration written by earlier versions.

        Earlier versions stored either a tagged ``data_source`` value or the
        independent ``local_data_source`` / ``aws_data_source`` / ``use_local``
        fields.
        """
        settings = cls.default(config_dir)
        local = data.get("local_data_source")
        aws = data.get("aws_data_source")
        tagged_kind = None

        data_source = data.get("data_source")
        if isinstance(data_source, dict):
            if "Local" in data_source:
                local = data_source["Local"]
                tagged_kind = StorageKind.LOCAL
            elif "Aws" in data_source:
                aws = data_source["Aws"]
                tagged_kind = StorageKind.S3

        if local and local.get("file_path"):
            settings.local = LocalStorageConfig(path=Path(local["file_path"]))

        if aws:
            settings.s3 = S3StorageConfig(
                bucket_name=aws.get("bucket_name") or settings.s3.bucket_name,
                region=_legacy_region(aws.get("region")),
                access_key=aws.get("access_key") or "",
                secret_key=aws.get("secret_access_key") or "",
            )

        use_local = data.get("use_local")
        if use_local is not None:
            settings.kind = StorageKind.LOCAL if use_local else StorageKind.S3
        elif tagged_kind is not None:
            settings.kind = tagged_kind

        return settings

    def validate(self) -> list[str]:
        """Validate settings and return list of errors."""
        errors = []
        if self.kind == StorageKind.S3:
            if not self.s3.bucket_name:
                errors.append("S3 bucket name is required when provider is s3")
            if not self.s3.region:
                errors.append("S3 region is required when provider is s3")
        return errors

    def to_dict(self, include_sensitive: bool = True) -> dict[str, Any]:
        """Convert to the ``config.yaml`` layout, optionally redacting secrets."""
        secret = self.s3.secret_key
        if not include_sensitive and secret:
            secret = "***REDACTED***"

        return {
            "kind": self.kind.value,
            "local": {"path": str(self.local.path)},
            "s3": {
                "bucket_name": self.s3.bucket_name,
                "region": self.s3.region,
                "access_key": self.s3.access_key,
                "secret_key": secret,
            },
        }


def _legacy_region(value: Any) -> str:
    """
    Normalize a region as serialized by earlier versions.

    Accepts ``"us-east-1"``, enum-style ``"UsEast1"`` or a ``[name, endpoint]``
    pair.
    """
    if isinstance(value, (list, tuple)) and value:
        value = value[0]
    if not value or not isinstance(value, str):
        return DEFAULT_REGION
    if "-" in value:
        return value.lower()
    return "-".join(re.findall(r"[A-Z][a-z]*|\d+", value)).lower() or DEFAULT_REGION


@dataclass
class Config:
    """
    Main configuration class for budgetme.

    Loads configuration from environment variables with secure defaults and
    validation for each environment type.
    """

    environment: Environment
    config_dir: Path

    debug: bool = False
    log_level: str = "INFO"

    @property
    def settings_file(self) -> Path:
        return self.config_dir / SETTINGS_FILENAME

    @property
    def legacy_settings_file(self) -> Path:
        return self.config_dir / LEGACY_SETTINGS_FILENAME

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("BUDGETME_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_budgetme"
            config_dir = Path(os.getenv("BUDGETME_CONFIG_DIR", str(default_test_dir)))
        else:
            default_dir = click.get_app_dir(APP_NAME)
            config_dir = Path(os.getenv("BUDGETME_CONFIG_DIR", default_dir)).expanduser().resolve()

        config_dir.mkdir(parents=True, exist_ok=True)

        return cls(
            environment=env,
            config_dir=config_dir,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.config_dir.exists():
            errors.append(f"config_dir does not exist: {self.config_dir}")

        if self.log_level not in logging.getLevelNamesMapping():
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)
        if self.debug:
            level = logging.DEBUG

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # boto3 is chatty at INFO
        if self.environment == Environment.PRODUCTION or not self.debug:
            logging.getLogger("botocore").setLevel(logging.WARNING)
            logging.getLogger("boto3").setLevel(logging.WARNING)
            logging.getLogger("urllib3").setLevel(logging.WARNING)

    def load_storage_settings(self) -> StorageSettings:
        """
        Load storage settings from ``config.yaml``.

        Falls back to importing the legacy ``config.json`` and then to
        defaults. Either fallback is written out as ``config.yaml`` so the
        generated bucket name stays stable.
        """
        if self.settings_file.exists():
            with open(self.settings_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return StorageSettings.from_dict(data, self.config_dir)

        if self.legacy_settings_file.exists():
            logger.info(f"Importing legacy settings from {self.legacy_settings_file}")
            settings = StorageSettings.from_legacy_dict(read_json(self.legacy_settings_file), self.config_dir)
        else:
            settings = StorageSettings.default(self.config_dir)

        self.save_storage_settings(settings)
        return settings

    def save_storage_settings(self, settings: StorageSettings) -> None:
        """Write storage settings to ``config.yaml``."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.settings_file, "w", encoding="utf-8") as f:
            yaml.safe_dump(settings.to_dict(), f, default_flow_style=False, sort_keys=True)
        logger.debug(f"Saved storage settings to {self.settings_file}")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment.value,
            "config_dir": str(self.config_dir),
            "settings_file": str(self.settings_file),
            "debug": self.debug,
            "log_level": self.log_level,
        }


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    return get_config().config_dir


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST
