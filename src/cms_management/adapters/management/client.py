"""GraphQL client submitting batch migrations to the management API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from cms_management.adapters.http_resilience import ResilientClient
from cms_management.config.management import ManagementConfig, get_management_config
from cms_management.domain.ports.submission import MigrationResult, MigrationSubmitter

from .queries import MIGRATION_STATUS, SUBMIT_BATCH_CHANGES
from .schema import MigrationPayload, MigrationStatusResponse, SubmitBatchChangesResponse

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from cms_management.config.http_resilience import ResilienceConfig
    from cms_management.domain.schema import ChangeRecord

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class ManagementAPIError(RuntimeError):
    """Raised when the management API answers with GraphQL-level errors."""

    def __init__(self, message: str, *, errors: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.errors = list(errors)


class MigrationFailedError(ManagementAPIError):
    """Raised when the remote engine reports a migration as failed."""

    def __init__(self, result: MigrationResult) -> None:
        detail = "; ".join(result.errors) or "no details reported"
        super().__init__(f"Migration {result.migration_id} failed: {detail}", errors=result.errors)
        self.result = result


class MigrationTimeoutError(ManagementAPIError):
    """Raised when a migration does not finish within the polling budget."""


@dataclass(slots=True)
class ManagementClient:
    config: ManagementConfig = field(default_factory=get_management_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)

    def __call__(
        self,
        changes: Sequence[ChangeRecord],
        *,
        name: str | None = None,
    ) -> MigrationResult:
        return asyncio.run(self.submit(changes, name=name))

    async def submit(
        self,
        changes: Sequence[ChangeRecord],
        *,
        name: str | None = None,
    ) -> MigrationResult:
        async with self.client_factory(self.config.resilience) as client:
            migration_id = await self._submit_batch(client, changes, name)
            log.info("Submitted migration %s (%d changes)", migration_id, len(changes))
            payload = await self._wait_for_completion(client, migration_id)

        result = MigrationResult(
            migration_id=payload.id,
            status=payload.status,
            name=payload.name,
            errors=payload.errors,
        )
        if not result.succeeded:
            log.error(f"Migration {result.migration_id} failed: {result.errors}")
            raise MigrationFailedError(result)
        log.info("Migration %s finished with status %s", result.migration_id, result.status)
        return result

    async def _submit_batch(
        self,
        client: ResilientClient,
        changes: Sequence[ChangeRecord],
        name: str | None,
    ) -> str:
        data: dict[str, object] = {
            "environmentId": self.config.environment_id,
            "changes": list(changes),
        }
        if name is not None:
            data["name"] = name
        payload = await client.execute(self.config.endpoint, SUBMIT_BATCH_CHANGES, {"data": data})
        response = SubmitBatchChangesResponse.model_validate(payload)
        if response.errors or response.data is None:
            raise _api_error("submitBatchChanges", [error.message for error in response.errors])
        return response.data.submit_batch_changes.migration.id

    async def _wait_for_completion(
        self,
        client: ResilientClient,
        migration_id: str,
    ) -> MigrationPayload:
        for attempt in range(1, self.config.max_polls + 1):
            payload = await client.execute(
                self.config.endpoint, MIGRATION_STATUS, {"id": migration_id}
            )
            response = MigrationStatusResponse.model_validate(payload)
            if response.errors or response.data is None:
                raise _api_error("migration", [error.message for error in response.errors])
            migration = response.data.viewer.migration
            if migration is None:
                raise ManagementAPIError(f"Migration {migration_id} not found")
            if migration.is_finished:
                return migration
            log.debug(
                "Migration %s is %s (poll %d/%d)",
                migration_id,
                migration.status,
                attempt,
                self.config.max_polls,
            )
            await self.sleep(self.config.poll_interval_seconds)

        raise MigrationTimeoutError(
            f"Migration {migration_id} did not finish after {self.config.max_polls} polls"
        )


def _api_error(operation: str, messages: list[str]) -> ManagementAPIError:
    detail = "; ".join(messages) or "empty response"
    log.error(f"Management API error in {operation}: {detail}")
    return ManagementAPIError(f"{operation} failed: {detail}", errors=messages)


if TYPE_CHECKING:
    _submitter_check: MigrationSubmitter = ManagementClient()
