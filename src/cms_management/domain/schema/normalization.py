"""Field argument normalization.

Every function here takes the caller's field description and the owning entity,
leaves the input untouched, and returns a new canonical payload ready to be wrapped
in a :class:`~cms_management.domain.schema.changes.FieldChange`.

Models and components share one engine. The differences between them are captured by
:class:`FieldOwner`: which attribute carries the parent identity for each field kind,
which attribute lists union targets, and which optional capabilities apply.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Flag, auto
from typing import TYPE_CHECKING

from .enums import (
    EntityKind,
    FieldKind,
    MutationMode,
    RelationalFieldType,
    RelationType,
    Renderer,
    SimpleFieldType,
)
from .errors import SchemaValidationError
from .validations import extract_field_validations

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from .changes import ChangePayload

    type Normalizer = Callable[[Mapping[str, object], FieldOwner], ChangePayload]


MODEL_ID_ATTRIBUTE = "modelApiId"
PARENT_ID_ATTRIBUTE = "parentApiId"

# These kinds always address their owner through ``parentApiId``, even on models.
_PARENT_SCOPED_KINDS = frozenset(
    {FieldKind.REMOTE, FieldKind.COMPONENT, FieldKind.COMPONENT_UNION}
)

_FORWARD_LIST_RELATIONS = frozenset({RelationType.ONE_TO_MANY, RelationType.MANY_TO_MANY})
_REVERSE_LIST_RELATIONS = frozenset({RelationType.MANY_TO_ONE, RelationType.MANY_TO_MANY})


class OwnerCapability(Flag):
    NONE = 0
    COMPONENT_FIELDS = auto()
    UNION_REVERSE_SIDE = auto()


@dataclass(frozen=True, slots=True)
class FieldOwner:
    """Identity and capabilities of the entity that owns a field."""

    api_id: str
    kind: EntityKind
    capabilities: OwnerCapability = OwnerCapability.NONE

    @classmethod
    def model(cls, api_id: str) -> FieldOwner:
        return cls(
            api_id=api_id,
            kind=EntityKind.MODEL,
            capabilities=OwnerCapability.COMPONENT_FIELDS | OwnerCapability.UNION_REVERSE_SIDE,
        )

    @classmethod
    def component(cls, api_id: str) -> FieldOwner:
        return cls(api_id=api_id, kind=EntityKind.COMPONENT)

    def supports(self, capability: OwnerCapability) -> bool:
        return capability in self.capabilities

    def id_attribute(self, field_kind: FieldKind | None) -> str:
        """Attribute naming the owner in a payload; ``None`` stands for a delete."""

        if self.kind is EntityKind.MODEL and field_kind not in _PARENT_SCOPED_KINDS:
            return MODEL_ID_ATTRIBUTE
        return PARENT_ID_ATTRIBUTE

    @property
    def union_target_attribute(self) -> str:
        return "models" if self.supports(OwnerCapability.UNION_REVERSE_SIDE) else "components"


def _with_parent(
    args: Mapping[str, object],
    owner: FieldOwner,
    kind: FieldKind | None,
) -> ChangePayload:
    payload = copy.deepcopy(dict(args))
    payload[owner.id_attribute(kind)] = owner.api_id
    return payload


def _default_reverse_side(owner: FieldOwner) -> dict[str, object]:
    return {
        "apiId": f"related{owner.api_id}",
        "displayName": f"Related {owner.api_id}",
    }


def _reverse_side(payload: ChangePayload, owner: FieldOwner) -> dict[str, object]:
    reverse = payload.get("reverseField")
    if reverse is None:
        return _default_reverse_side(owner)
    return dict(reverse)  # type: ignore[arg-type]


def _is_asset(value: object) -> bool:
    return isinstance(value, str) and value.upper() == RelationalFieldType.ASSET


def _require(args: Mapping[str, object], attribute: str, message: str) -> None:
    if not args.get(attribute):
        raise SchemaValidationError(message)


# Simple fields


def create_simple_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    payload = _with_parent(args, owner, FieldKind.SIMPLE)
    if payload.get("type") == SimpleFieldType.STRING and not payload.get("formRenderer"):
        payload["formRenderer"] = Renderer.SINGLE_LINE.value
    if payload.get("validations"):
        payload["validations"] = extract_field_validations(payload)
    return payload


def update_simple_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    payload = _with_parent(args, owner, FieldKind.SIMPLE)
    if payload.get("validations"):
        payload["validations"] = extract_field_validations(payload)
    # the type of a field is fixed once it exists
    payload.pop("type", None)
    return payload


# Relational fields


def create_relational_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    payload = _with_parent(args, owner, FieldKind.RELATIONAL)
    target = payload.pop("model", None)
    relation_type = payload.pop("relationType", None)

    if _is_asset(payload.get("type")) or _is_asset(target):
        category = RelationalFieldType.ASSET
    else:
        category = RelationalFieldType.RELATION
    payload["type"] = category.value

    reverse = _reverse_side(payload, owner)
    # the reverse side always points at the declared target, never a caller value
    if target is None:
        reverse.pop("modelApiId", None)
    else:
        reverse["modelApiId"] = target

    payload["isList"] = relation_type in _FORWARD_LIST_RELATIONS
    reverse["isList"] = relation_type in _REVERSE_LIST_RELATIONS

    if category is RelationalFieldType.ASSET:
        if payload.get("isRequired") is None:
            payload["isRequired"] = False
        reverse["isList"] = True
        reverse["isHidden"] = True
    else:
        payload.pop("isRequired", None)

    payload["reverseField"] = reverse
    return payload


def update_relational_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    payload = _with_parent(args, owner, FieldKind.RELATIONAL)
    if _is_asset(payload.get("type")) and payload.get("isRequired") is not None:
        payload["isRequired"] = bool(payload["isRequired"])
    return payload


# Union fields


def create_union_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    targets_attribute = owner.union_target_attribute
    _require(args, targets_attribute, f"{targets_attribute} cannot be empty")

    payload = _with_parent(args, owner, FieldKind.UNION)
    relation_type = payload.pop("relationType", None)
    payload["isList"] = relation_type in _FORWARD_LIST_RELATIONS

    if owner.supports(OwnerCapability.UNION_REVERSE_SIDE):
        targets = payload.pop(targets_attribute)
        reverse = _reverse_side(payload, owner)
        reverse["modelApiIds"] = targets
        reverse["isList"] = relation_type in _REVERSE_LIST_RELATIONS
        payload["reverseField"] = reverse
    return payload


def update_union_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    payload = _with_parent(args, owner, FieldKind.UNION)
    targets = payload.pop(owner.union_target_attribute, None)

    if owner.supports(OwnerCapability.UNION_REVERSE_SIDE):
        reverse = dict(payload.pop("reverseField", None) or {})  # type: ignore[call-overload]
        if targets is not None:
            reverse["modelApiIds"] = targets
        if reverse:
            payload["reverseField"] = reverse
    return payload


# Enumerable fields


def create_enumerable_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    _require(args, "enumerationApiId", "enumerationApiId is required for enumerable field")
    return _with_parent(args, owner, FieldKind.ENUMERABLE)


def update_enumerable_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    return _with_parent(args, owner, FieldKind.ENUMERABLE)


# Remote fields


def create_remote_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    return _with_parent(args, owner, FieldKind.REMOTE)


def update_remote_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    return _with_parent(args, owner, FieldKind.REMOTE)


# Component and component-union fields


def _require_component_fields(owner: FieldOwner) -> None:
    if not owner.supports(OwnerCapability.COMPONENT_FIELDS):
        raise SchemaValidationError(
            f"{owner.kind} {owner.api_id!r} cannot hold component fields"
        )


def create_component_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    _require_component_fields(owner)
    _require(args, "componentApiId", "componentApiId cannot be empty")
    return _with_parent(args, owner, FieldKind.COMPONENT)


def update_component_field(args: Mapping[str, object], owner: FieldOwner) -> ChangePayload:
    _require_component_fields(owner)
    return _with_parent(args, owner, FieldKind.COMPONENT)


def create_component_union_field(
    args: Mapping[str, object],
    owner: FieldOwner,
) -> ChangePayload:
    _require_component_fields(owner)
    _require(args, "componentApiIds", "componentApiIds cannot be empty")
    return _with_parent(args, owner, FieldKind.COMPONENT_UNION)


def update_component_union_field(
    args: Mapping[str, object],
    owner: FieldOwner,
) -> ChangePayload:
    _require_component_fields(owner)
    return _with_parent(args, owner, FieldKind.COMPONENT_UNION)


# Deletes


def delete_field(api_id: str, owner: FieldOwner) -> ChangePayload:
    return {"apiId": api_id, owner.id_attribute(None): owner.api_id}


NORMALIZERS: dict[tuple[MutationMode, FieldKind], Normalizer] = {
    (MutationMode.CREATE, FieldKind.SIMPLE): create_simple_field,
    (MutationMode.UPDATE, FieldKind.SIMPLE): update_simple_field,
    (MutationMode.CREATE, FieldKind.RELATIONAL): create_relational_field,
    (MutationMode.UPDATE, FieldKind.RELATIONAL): update_relational_field,
    (MutationMode.CREATE, FieldKind.UNION): create_union_field,
    (MutationMode.UPDATE, FieldKind.UNION): update_union_field,
    (MutationMode.CREATE, FieldKind.ENUMERABLE): create_enumerable_field,
    (MutationMode.UPDATE, FieldKind.ENUMERABLE): update_enumerable_field,
    (MutationMode.CREATE, FieldKind.REMOTE): create_remote_field,
    (MutationMode.UPDATE, FieldKind.REMOTE): update_remote_field,
    (MutationMode.CREATE, FieldKind.COMPONENT): create_component_field,
    (MutationMode.UPDATE, FieldKind.COMPONENT): update_component_field,
    (MutationMode.CREATE, FieldKind.COMPONENT_UNION): create_component_union_field,
    (MutationMode.UPDATE, FieldKind.COMPONENT_UNION): update_component_union_field,
}


def normalize_field(
    mode: MutationMode,
    kind: FieldKind,
    args: Mapping[str, object],
    owner: FieldOwner,
) -> ChangePayload:
    """Dispatch to the normalizer registered for ``mode`` and ``kind``."""

    return NORMALIZERS[(mode, kind)](args, owner)
