"""Ports for handing rendered migrations to the remote engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cms_management.domain.schema import ChangeRecord


@dataclass(slots=True)
class MigrationResult:
    """Final state of a migration as reported by the remote engine."""

    migration_id: str
    status: str
    name: str | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == "SUCCESS"


@runtime_checkable
class MigrationSubmitter(Protocol):
    """Callable port executing an ordered batch of change records."""

    def __call__(
        self,
        changes: Sequence[ChangeRecord],
        *,
        name: str | None = None,
    ) -> MigrationResult:
        ...


__all__ = ["MigrationResult", "MigrationSubmitter"]
