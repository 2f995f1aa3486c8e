"""Schema builder error definitions."""

from __future__ import annotations


class SchemaValidationError(ValueError):
    """Raised when a builder call is missing an attribute the remote engine requires.

    Only cheap, obviously-missing attributes are checked locally. Anything that needs
    knowledge of the remote schema is left for the migration engine to reject.
    """
