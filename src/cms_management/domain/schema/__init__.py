"""Public schema-builder surface."""

from __future__ import annotations

from cms_management.domain.schema.changes import (
    ENTITY_ACTIONS,
    FIELD_ACTIONS,
    ChangeItem,
    ChangeListener,
    ChangePayload,
    ChangeRecord,
    FieldChange,
)
from cms_management.domain.schema.entities import Component, Enumeration, Model, SchemaEntity
from cms_management.domain.schema.enums import (
    EntityKind,
    FieldKind,
    MutationMode,
    RelationalFieldType,
    RelationType,
    Renderer,
    SimpleFieldType,
    VisibilityType,
)
from cms_management.domain.schema.errors import SchemaValidationError
from cms_management.domain.schema.normalization import FieldOwner, OwnerCapability
from cms_management.domain.schema.validations import extract_field_validations

__all__ = [
    "ENTITY_ACTIONS",
    "FIELD_ACTIONS",
    "ChangeItem",
    "ChangeListener",
    "ChangePayload",
    "ChangeRecord",
    "Component",
    "EntityKind",
    "Enumeration",
    "FieldChange",
    "FieldKind",
    "FieldOwner",
    "Model",
    "MutationMode",
    "OwnerCapability",
    "RelationType",
    "RelationalFieldType",
    "Renderer",
    "SchemaEntity",
    "SchemaValidationError",
    "SimpleFieldType",
    "VisibilityType",
    "extract_field_validations",
]
