"""Environment variable lookups."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable


def _read(name: str) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or None


def require_env_vars(names: Iterable[str]) -> dict[str, str]:
    """Read every variable in ``names``; blank values count as missing.

    All missing names are reported together, in sorted order.
    """

    found = {name: _read(name) for name in names}
    missing = sorted(name for name, value in found.items() if value is None)
    if missing:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")
    return {name: value for name, value in found.items() if value is not None}


def require_env_var(name: str) -> str:
    return require_env_vars((name,))[name]
