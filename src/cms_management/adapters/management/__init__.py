"""Management API adapter."""

from __future__ import annotations

from .client import (
    ManagementAPIError,
    ManagementClient,
    MigrationFailedError,
    MigrationTimeoutError,
)

__all__ = [
    "ManagementAPIError",
    "ManagementClient",
    "MigrationFailedError",
    "MigrationTimeoutError",
]
