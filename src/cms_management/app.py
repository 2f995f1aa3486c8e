"""Application orchestration entry points."""

from __future__ import annotations

import importlib.util
from logging import getLogger
from typing import TYPE_CHECKING

from cms_management.adapters.management import ManagementClient
from cms_management.domain.migration import Migration

if TYPE_CHECKING:
    from pathlib import Path

    from cms_management.domain.ports.submission import MigrationResult, MigrationSubmitter
    from cms_management.domain.schema import ChangeRecord

MIGRATE_FUNCTION = "migrate"

log = getLogger(__name__)


class MigrationScriptError(RuntimeError):
    """Raised when a migration script cannot be loaded or does not define ``migrate``."""


def load_migration(path: Path, *, name: str | None = None) -> Migration:
    """Execute ``migrate(migration)`` from a script file and return the built migration."""

    spec = importlib.util.spec_from_file_location(f"_cms_migration_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise MigrationScriptError(f"Cannot load migration script: {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except FileNotFoundError as exc:
        raise MigrationScriptError(f"Migration script not found: {path}") from exc

    migrate = getattr(module, MIGRATE_FUNCTION, None)
    if not callable(migrate):
        raise MigrationScriptError(f"{path} does not define a {MIGRATE_FUNCTION}() function")

    migration = Migration(name=name or path.stem)
    migrate(migration)
    log.info("Built migration %r with %d changes", migration.name, len(migration))
    return migration


def render_migration(migration: Migration) -> list[ChangeRecord]:
    """Return the ordered change records without contacting the remote engine."""

    return migration.dry_run()


def run_migration(
    migration: Migration,
    *,
    submitter: MigrationSubmitter | None = None,
) -> MigrationResult:
    """Submit a migration with the configured management client."""

    effective_submitter = submitter or ManagementClient()
    log.info("Starting migration %r: changes=%d", migration.name, len(migration))
    result = migration.run(effective_submitter)
    log.info(
        f"Finished migration {migration.name!r}: id={result.migration_id}, "
        f"status={result.status}"
    )
    return result
