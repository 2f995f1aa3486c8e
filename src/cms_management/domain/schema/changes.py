"""Change protocol shared by every buildable schema change.

A change renders to exactly one :data:`ChangeRecord`: a single-key mapping from the
remote action name to its payload. Action names are looked up in fixed tables keyed
by mode and kind so that every name the engine accepts is spelled out once.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .enums import EntityKind, FieldKind, MutationMode

if TYPE_CHECKING:
    from collections.abc import Mapping


type ChangePayload = dict[str, object]
type ChangeRecord = dict[str, ChangePayload]

DELETE_FIELD_ACTION = "deleteField"

ENTITY_ACTIONS: dict[tuple[EntityKind, MutationMode], str] = {
    (EntityKind.MODEL, MutationMode.CREATE): "createModel",
    (EntityKind.MODEL, MutationMode.UPDATE): "updateModel",
    (EntityKind.MODEL, MutationMode.DELETE): "deleteModel",
    (EntityKind.COMPONENT, MutationMode.CREATE): "createComponent",
    (EntityKind.COMPONENT, MutationMode.UPDATE): "updateComponent",
    (EntityKind.COMPONENT, MutationMode.DELETE): "deleteComponent",
    (EntityKind.ENUMERATION, MutationMode.CREATE): "createEnumeration",
    (EntityKind.ENUMERATION, MutationMode.UPDATE): "updateEnumeration",
    (EntityKind.ENUMERATION, MutationMode.DELETE): "deleteEnumeration",
}

FIELD_ACTIONS: dict[tuple[MutationMode, FieldKind], str] = {
    (MutationMode.CREATE, FieldKind.SIMPLE): "createSimpleField",
    (MutationMode.CREATE, FieldKind.RELATIONAL): "createRelationalField",
    (MutationMode.CREATE, FieldKind.ENUMERABLE): "createEnumerableField",
    (MutationMode.CREATE, FieldKind.UNION): "createUnionField",
    (MutationMode.CREATE, FieldKind.REMOTE): "createRemoteField",
    (MutationMode.CREATE, FieldKind.COMPONENT): "createComponentField",
    (MutationMode.CREATE, FieldKind.COMPONENT_UNION): "createComponentUnionField",
    (MutationMode.UPDATE, FieldKind.SIMPLE): "updateSimpleField",
    (MutationMode.UPDATE, FieldKind.RELATIONAL): "updateRelationalField",
    (MutationMode.UPDATE, FieldKind.ENUMERABLE): "updateEnumerableField",
    (MutationMode.UPDATE, FieldKind.UNION): "updateUnionField",
    (MutationMode.UPDATE, FieldKind.REMOTE): "updateRemoteField",
    (MutationMode.UPDATE, FieldKind.COMPONENT): "updateComponentField",
    (MutationMode.UPDATE, FieldKind.COMPONENT_UNION): "updateComponentUnionField",
}


@runtime_checkable
class ChangeItem(Protocol):
    """Anything that renders to one change record on demand."""

    def render_change(self) -> ChangeRecord: ...


@runtime_checkable
class ChangeListener(Protocol):
    """Sink that collects change items in registration order."""

    def register_change(self, item: ChangeItem) -> None: ...


def entity_action(kind: EntityKind, mode: MutationMode) -> str:
    return ENTITY_ACTIONS[(kind, mode)]


def field_action(mode: MutationMode, kind: FieldKind | None) -> str:
    if mode is MutationMode.DELETE:
        return DELETE_FIELD_ACTION
    if kind is None:
        raise ValueError(f"A field kind is required for {mode} field changes")
    return FIELD_ACTIONS[(mode, kind)]


def render_record(action: str, payload: Mapping[str, object]) -> ChangeRecord:
    """Build a record around a deep copy so stored payloads never leak out."""

    return {action: copy.deepcopy(dict(payload))}


@dataclass(frozen=True, slots=True)
class FieldChange:
    """One normalized field-level change.

    ``kind`` is fixed at construction. Deletes are kind-agnostic: the engine only
    needs the field and owner identifiers, so ``kind`` stays ``None`` for them.
    """

    args: ChangePayload
    mode: MutationMode
    kind: FieldKind | None = None
    action: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", MutationMode(self.mode))
        if self.mode is MutationMode.DELETE and self.kind is not None:
            raise ValueError("Field deletes do not track a field kind")
        object.__setattr__(self, "action", field_action(self.mode, self.kind))
        object.__setattr__(self, "args", copy.deepcopy(dict(self.args)))

    def render_change(self) -> ChangeRecord:
        return render_record(self.action, self.args)
