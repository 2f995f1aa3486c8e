"""Fluent builders for schema entities.

An entity renders its own create/update/delete change and, for models and
components, acts as a factory for field changes. Field changes are registered with
the shared listener as siblings of the entity change, never nested inside it.
"""

from __future__ import annotations

import copy
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar, Self

from .changes import FieldChange, entity_action, render_record
from .enums import EntityKind, FieldKind, MutationMode
from .errors import SchemaValidationError
from .normalization import FieldOwner, delete_field, normalize_field

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .changes import ChangeListener, ChangePayload, ChangeRecord

log = getLogger(__name__)

type FieldArgs = Mapping[str, object]


def _field_args(field: FieldArgs | None, overrides: Mapping[str, object]) -> dict[str, object]:
    args = dict(field) if field is not None else {}
    args.update(overrides)
    return args


def _warn_deprecated_hidden(owner: str, args: Mapping[str, object]) -> None:
    reverse = args.get("reverseField")
    if "isHidden" in args or (isinstance(reverse, dict) and "isHidden" in reverse):
        log.warning(
            "Field %r on %s uses the deprecated isHidden attribute; prefer visibility",
            args.get("apiId"),
            owner,
        )


class SchemaEntity:
    """A model, component or enumeration together with its own change."""

    kind: ClassVar[EntityKind]

    def __init__(
        self,
        listener: ChangeListener,
        mode: MutationMode,
        args: Mapping[str, object],
    ) -> None:
        if not args.get("apiId"):
            raise SchemaValidationError(f"apiId is required for {self.kind.lower()} changes")
        self._listener = listener
        self._mode = MutationMode(mode)
        self._args: ChangePayload = copy.deepcopy(dict(args))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api_id={self.api_id!r}, mode={self._mode.value!r})"

    @property
    def api_id(self) -> str:
        return str(self._args["apiId"])

    @property
    def mode(self) -> MutationMode:
        return self._mode

    def has_changes(self) -> bool:
        # creates and deletes always carry a change; updates need more than the apiId
        if self._mode is not MutationMode.UPDATE:
            return True
        return len(self._args) > 1

    def render_change(self) -> ChangeRecord:
        return render_record(entity_action(self.kind, self._mode), self._args)


class _FieldBuilder(SchemaEntity):
    """Field surface shared by models and components."""

    def __init__(
        self,
        listener: ChangeListener,
        mode: MutationMode,
        args: Mapping[str, object],
    ) -> None:
        super().__init__(listener, mode, args)
        self._owner = self._make_owner(self.api_id)

    @staticmethod
    def _make_owner(api_id: str) -> FieldOwner:
        raise NotImplementedError

    def _register_field(
        self,
        mode: MutationMode,
        kind: FieldKind,
        field: FieldArgs | None,
        overrides: Mapping[str, object],
    ) -> Self:
        args = _field_args(field, overrides)
        _warn_deprecated_hidden(self.api_id, args)
        payload = normalize_field(mode, kind, args, self._owner)
        self._listener.register_change(FieldChange(payload, mode, kind))
        return self

    def add_simple_field(self, field: FieldArgs | None = None, /, **kwargs: object) -> Self:
        """Add a scalar field; ``STRING`` fields default to the single-line renderer."""
        return self._register_field(MutationMode.CREATE, FieldKind.SIMPLE, field, kwargs)

    def update_simple_field(self, field: FieldArgs | None = None, /, **kwargs: object) -> Self:
        """Update a scalar field. A supplied ``type`` only selects validations."""
        return self._register_field(MutationMode.UPDATE, FieldKind.SIMPLE, field, kwargs)

    def add_relational_field(self, field: FieldArgs | None = None, /, **kwargs: object) -> Self:
        """Add a relation to ``model`` (or an asset field when ``model`` is ``"Asset"``).

        ``relationType`` decides the list-ness of both sides. A reverse side named after
        this entity is created when ``reverseField`` is omitted.
        """
        return self._register_field(MutationMode.CREATE, FieldKind.RELATIONAL, field, kwargs)

    def update_relational_field(
        self, field: FieldArgs | None = None, /, **kwargs: object
    ) -> Self:
        return self._register_field(MutationMode.UPDATE, FieldKind.RELATIONAL, field, kwargs)

    def add_union_field(self, field: FieldArgs | None = None, /, **kwargs: object) -> Self:
        """Add a union field over ``models`` (models) or ``components`` (components)."""
        return self._register_field(MutationMode.CREATE, FieldKind.UNION, field, kwargs)

    def update_union_field(self, field: FieldArgs | None = None, /, **kwargs: object) -> Self:
        return self._register_field(MutationMode.UPDATE, FieldKind.UNION, field, kwargs)

    def add_enumerable_field(self, field: FieldArgs | None = None, /, **kwargs: object) -> Self:
        return self._register_field(MutationMode.CREATE, FieldKind.ENUMERABLE, field, kwargs)

    def update_enumerable_field(
        self, field: FieldArgs | None = None, /, **kwargs: object
    ) -> Self:
        return self._register_field(MutationMode.UPDATE, FieldKind.ENUMERABLE, field, kwargs)

    def add_remote_field(self, field: FieldArgs | None = None, /, **kwargs: object) -> Self:
        return self._register_field(MutationMode.CREATE, FieldKind.REMOTE, field, kwargs)

    def update_remote_field(self, field: FieldArgs | None = None, /, **kwargs: object) -> Self:
        return self._register_field(MutationMode.UPDATE, FieldKind.REMOTE, field, kwargs)

    def delete_field(self, api_id: str) -> Self:
        change = FieldChange(delete_field(api_id, self._owner), MutationMode.DELETE)
        self._listener.register_change(change)
        return self


class Model(_FieldBuilder):
    kind = EntityKind.MODEL

    @staticmethod
    def _make_owner(api_id: str) -> FieldOwner:
        return FieldOwner.model(api_id)

    def add_component_field(self, field: FieldArgs | None = None, /, **kwargs: object) -> Self:
        return self._register_field(MutationMode.CREATE, FieldKind.COMPONENT, field, kwargs)

    def update_component_field(
        self, field: FieldArgs | None = None, /, **kwargs: object
    ) -> Self:
        return self._register_field(MutationMode.UPDATE, FieldKind.COMPONENT, field, kwargs)

    def add_component_union_field(
        self, field: FieldArgs | None = None, /, **kwargs: object
    ) -> Self:
        return self._register_field(
            MutationMode.CREATE, FieldKind.COMPONENT_UNION, field, kwargs
        )

    def update_component_union_field(
        self, field: FieldArgs | None = None, /, **kwargs: object
    ) -> Self:
        return self._register_field(
            MutationMode.UPDATE, FieldKind.COMPONENT_UNION, field, kwargs
        )


class Component(_FieldBuilder):
    kind = EntityKind.COMPONENT

    @staticmethod
    def _make_owner(api_id: str) -> FieldOwner:
        return FieldOwner.component(api_id)


class Enumeration(SchemaEntity):
    """Enumeration change; values travel inside the entity payload."""

    kind = EntityKind.ENUMERATION
