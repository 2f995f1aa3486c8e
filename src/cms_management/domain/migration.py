"""Migration sessions: ordered change collection and entity factories."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from cms_management.domain.schema import (
    Component,
    Enumeration,
    Model,
    MutationMode,
    SchemaEntity,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cms_management.domain.ports.submission import MigrationResult, MigrationSubmitter
    from cms_management.domain.schema import ChangeItem, ChangeRecord

log = getLogger(__name__)


class ChangeAccumulator:
    """Append-only, ordered collection of change items.

    Items arrive fully normalized, so nothing is validated or deduplicated here. The
    order of registration is the order in which the remote engine executes them.
    Appends are not synchronized; share one accumulator across threads only behind
    the caller's own lock.
    """

    def __init__(self) -> None:
        self._items: list[ChangeItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ChangeItem]:
        return iter(tuple(self._items))

    def register_change(self, item: ChangeItem) -> None:
        self._items.append(item)
        log.debug("Registered change #%d: %r", len(self._items), item)

    def materialize(self) -> list[ChangeRecord]:
        return [item.render_change() for item in self._items]


class Migration:
    """A named batch of schema changes bound to one accumulator.

    Entity factories register the entity's own change first, so field changes added
    through the returned builder follow it in execution order.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._changes = ChangeAccumulator()

    def __len__(self) -> int:
        return len(self._changes)

    @property
    def accumulator(self) -> ChangeAccumulator:
        return self._changes

    def _register_entity[TEntity: SchemaEntity](self, entity: TEntity) -> TEntity:
        if entity.has_changes():
            self._changes.register_change(entity)
        else:
            log.debug("Skipping %r without pending changes", entity)
        return entity

    def create_model(self, **args: object) -> Model:
        return self._register_entity(Model(self._changes, MutationMode.CREATE, args))

    def update_model(self, **args: object) -> Model:
        return self._register_entity(Model(self._changes, MutationMode.UPDATE, args))

    def delete_model(self, api_id: str) -> Model:
        return self._register_entity(
            Model(self._changes, MutationMode.DELETE, {"apiId": api_id})
        )

    def create_component(self, **args: object) -> Component:
        return self._register_entity(Component(self._changes, MutationMode.CREATE, args))

    def update_component(self, **args: object) -> Component:
        return self._register_entity(Component(self._changes, MutationMode.UPDATE, args))

    def delete_component(self, api_id: str) -> Component:
        return self._register_entity(
            Component(self._changes, MutationMode.DELETE, {"apiId": api_id})
        )

    def create_enumeration(self, **args: object) -> Enumeration:
        return self._register_entity(Enumeration(self._changes, MutationMode.CREATE, args))

    def update_enumeration(self, **args: object) -> Enumeration:
        return self._register_entity(Enumeration(self._changes, MutationMode.UPDATE, args))

    def delete_enumeration(self, api_id: str) -> Enumeration:
        return self._register_entity(
            Enumeration(self._changes, MutationMode.DELETE, {"apiId": api_id})
        )

    def changes(self) -> list[ChangeRecord]:
        """Render every registered change in registration order."""

        return self._changes.materialize()

    def dry_run(self) -> list[ChangeRecord]:
        return self.changes()

    def run(self, submitter: MigrationSubmitter) -> MigrationResult:
        changes = self.changes()
        log.info("Submitting migration %r with %d changes", self.name, len(changes))
        return submitter(changes, name=self.name)
