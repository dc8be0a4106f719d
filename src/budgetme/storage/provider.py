#!/usr/bin/env python3
"""
StorageProvider - interface for ledger persistence.

A provider holds exactly one ledger document. ``fetch`` returns whatever is
currently persisted (or None) and ``store`` replaces it wholesale; there is
no versioning or locking, which is why every write goes through
reconciliation first.
"""

from abc import ABC, abstractmethod

from ..ledger.models import Ledger

LEDGER_FILENAME = "data.json"


class StorageProvider(ABC):
    """Abstract ledger store."""

    @abstractmethod
    def fetch(self) -> Ledger | None:
        """
        Load the persisted ledger.

        Returns:
            The ledger, or None if nothing was ever written or it could not be reached

        Raises:
            UnsupportedLedgerVersionError: If the stored document has an unknown version
            CorruptLedgerError: If a stored document exists but cannot be parsed
        """
        ...

    @abstractmethod
    def store(self, ledger: Ledger) -> None:
        """
        Persist ``ledger`` as the sole current snapshot (full overwrite).

        Args:
            ledger: Ledger to write
        """
        ...

    @abstractmethod
    def describe(self) -> str:
        """Human-readable location of the ledger, for CLI output and logs."""
        ...
