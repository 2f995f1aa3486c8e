"""Management API configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from .env import require_env_vars
from .errors import InvalidConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

MANAGEMENT_TIMEOUT_SECONDS = 30.0
DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_MAX_POLLS = 120

ENDPOINT_VAR = "CMS_MANAGEMENT_ENDPOINT"
TOKEN_VAR = "CMS_AUTH_TOKEN"  # noqa: S105
ENVIRONMENT_VAR = "CMS_ENVIRONMENT_ID"
POLL_INTERVAL_VAR = "CMS_POLL_INTERVAL_SECONDS"
MAX_POLLS_VAR = "CMS_MAX_POLLS"


@dataclass(frozen=True)
class ManagementConfig:
    """Holds management API configuration values."""

    endpoint: str
    auth_token: str
    environment_id: str
    resilience: ResilienceConfig
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    max_polls: int = DEFAULT_MAX_POLLS


def _optional_number[T: (int, float)](name: str, parse: type[T], default: T) -> T:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = parse(raw.strip())
    except ValueError as exc:
        raise InvalidConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise InvalidConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _with_auth_header(resilience: ResilienceConfig, token: str) -> ResilienceConfig:
    headers = {"Authorization": f"Bearer {token}", **(resilience.default_headers or {})}
    return replace(resilience, default_headers=headers)


def get_management_config(*, resilience: ResilienceConfig | None = None) -> ManagementConfig:
    """Build the management config from the environment.

    A ``resilience`` override keeps its own settings; the bearer header derived from
    ``CMS_AUTH_TOKEN`` is added unless the override already sets ``Authorization``.
    """

    values = require_env_vars((ENDPOINT_VAR, TOKEN_VAR, ENVIRONMENT_VAR))
    endpoint = values[ENDPOINT_VAR]
    token = values[TOKEN_VAR]
    base = resilience or ResilienceConfig(
        name="management",
        base_url=endpoint,
        timeout_seconds=MANAGEMENT_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )
    return ManagementConfig(
        endpoint=endpoint,
        auth_token=token,
        environment_id=values[ENVIRONMENT_VAR],
        resilience=_with_auth_header(base, token),
        poll_interval_seconds=_optional_number(
            POLL_INTERVAL_VAR, float, DEFAULT_POLL_INTERVAL_SECONDS
        ),
        max_polls=_optional_number(MAX_POLLS_VAR, int, DEFAULT_MAX_POLLS),
    )
