"""Expansion of simple-field validation shorthand.

Callers describe validations flatly::

    {"characters": {"min": 1, "max": 80}, "matches": {"regex": "^[a-z]+$"}}

while the migration engine wants them grouped under the value category of the
field::

    {"String": {"characters": {"min": 1, "max": 80}, "matches": {"regex": "^[a-z]+$"}}}
"""

from __future__ import annotations

import copy
from logging import getLogger
from typing import TYPE_CHECKING

from .enums import SimpleFieldType

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)

_STRING_RULES = ("characters", "matches", "notMatches", "listItemCount")
_NUMBER_RULES = ("range", "listItemCount")

_CATEGORIES: dict[SimpleFieldType, tuple[str, tuple[str, ...]]] = {
    SimpleFieldType.STRING: ("String", _STRING_RULES),
    SimpleFieldType.INT: ("Int", _NUMBER_RULES),
    SimpleFieldType.FLOAT: ("Float", _NUMBER_RULES),
}

CANONICAL_CATEGORIES = frozenset(category for category, _ in _CATEGORIES.values())


def extract_field_validations(field_args: Mapping[str, object]) -> object:
    """Return the canonical ``validations`` payload for a simple field.

    The declared ``type`` selects the category. Payloads that are already grouped by
    category, or whose field type has no validation category, pass through unchanged
    for the remote engine to judge.
    """

    validations = field_args.get("validations")
    if not isinstance(validations, dict):
        return copy.deepcopy(validations)
    if CANONICAL_CATEGORIES.intersection(validations):
        return copy.deepcopy(validations)

    category = _category_for(field_args.get("type"))
    if category is None:
        log.debug("No validation category for field type %r", field_args.get("type"))
        return copy.deepcopy(validations)

    name, rules = category
    expanded = {
        rule: copy.deepcopy(validations[rule])
        for rule in rules
        if validations.get(rule) is not None
    }
    return {name: expanded}


def _category_for(field_type: object) -> tuple[str, tuple[str, ...]] | None:
    if not isinstance(field_type, str):
        return None
    try:
        return _CATEGORIES.get(SimpleFieldType(field_type.upper()))
    except ValueError:
        return None
