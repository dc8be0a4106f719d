"""
Test Suite for budgetme

Test Structure:
- fixtures/: Shared test helpers (in-memory ledger store)
- unit/: Unit tests mirroring the src/ package structure
- integration/: Configuration and CLI tests against real files

No test touches the real configuration directory or a real S3 bucket.
"""
