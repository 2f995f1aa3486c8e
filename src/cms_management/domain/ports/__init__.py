"""Domain port definitions for adapters."""

from __future__ import annotations

from .submission import MigrationResult, MigrationSubmitter

__all__ = ["MigrationResult", "MigrationSubmitter"]
