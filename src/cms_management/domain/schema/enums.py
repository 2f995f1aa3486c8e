"""Schema enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class MutationMode(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class EntityKind(StrEnum):
    MODEL = "Model"
    COMPONENT = "Component"
    ENUMERATION = "Enumeration"


class FieldKind(StrEnum):
    """Field families understood by the remote migration engine."""

    SIMPLE = "SimpleField"
    RELATIONAL = "RelationalField"
    ENUMERABLE = "EnumerableField"
    UNION = "UnionField"
    REMOTE = "RemoteField"
    COMPONENT = "ComponentField"
    COMPONENT_UNION = "ComponentUnionField"


class RelationType(StrEnum):
    ONE_TO_ONE = "ONE_TO_ONE"
    ONE_TO_MANY = "ONE_TO_MANY"
    MANY_TO_ONE = "MANY_TO_ONE"
    MANY_TO_MANY = "MANY_TO_MANY"


class SimpleFieldType(StrEnum):
    ID = "ID"
    STRING = "STRING"
    RICHTEXT = "RICHTEXT"
    INT = "INT"
    FLOAT = "FLOAT"
    BOOLEAN = "BOOLEAN"
    JSON = "JSON"
    DATETIME = "DATETIME"
    DATE = "DATE"
    LOCATION = "LOCATION"
    COLOR = "COLOR"


class RelationalFieldType(StrEnum):
    RELATION = "RELATION"
    ASSET = "ASSET"


class Renderer(StrEnum):
    """Form renderers available to simple fields in the editing UI."""

    SINGLE_LINE = "GCMS_SINGLE_LINE"
    MULTI_LINE = "GCMS_MULTI_LINE"
    MARKDOWN = "GCMS_MARKDOWN"
    SLUG = "GCMS_SLUG"


class VisibilityType(StrEnum):
    READ_WRITE = "READ_WRITE"
    READ_ONLY = "READ_ONLY"
    HIDDEN = "HIDDEN"
    API_ONLY = "API_ONLY"
