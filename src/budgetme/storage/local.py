#!/usr/bin/env python3
"""
Local File Storage

Keeps the ledger as pretty-printed JSON in ``<directory>/data.json``.
"""

import json
import logging
from pathlib import Path

from ..core.json_utils import read_json, write_json
from ..ledger.errors import CorruptLedgerError
from ..ledger.models import Ledger
from .provider import LEDGER_FILENAME, StorageProvider

logger = logging.getLogger(__name__)


class LocalStorageProvider(StorageProvider):
    """Ledger stored in a local directory."""

    def __init__(self, directory: str | Path):
        """
        Args:
            directory: Directory holding data.json; a leading ``~`` is expanded
        """
        self.directory = Path(directory).expanduser()
        self.ledger_file = self.directory / LEDGER_FILENAME

    def exists(self) -> bool:
        """Check if a ledger file exists."""
        return self.ledger_file.exists()

    def fetch(self) -> Ledger | None:
        if not self.exists():
            logger.debug(f"No ledger at {self.ledger_file}")
            return None

        try:
            data = read_json(self.ledger_file)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptLedgerError(f"Could not read ledger {self.ledger_file}: {e}") from e

        return Ledger.from_dict(data)

    def store(self, ledger: Ledger) -> None:
        write_json(self.ledger_file, ledger.to_dict())
        logger.debug(f"Wrote ledger to {self.ledger_file}")

    def describe(self) -> str:
        return str(self.ledger_file)
