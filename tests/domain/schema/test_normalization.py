from __future__ import annotations

import pytest

from cms_management.domain.schema import (
    EntityKind,
    FieldKind,
    FieldOwner,
    MutationMode,
    OwnerCapability,
    SchemaValidationError,
)
from cms_management.domain.schema.normalization import (
    NORMALIZERS,
    create_component_field,
    create_relational_field,
    create_union_field,
    delete_field,
    normalize_field,
    update_simple_field,
)


def test_model_owner_capabilities() -> None:
    owner = FieldOwner.model("Post")

    assert owner.kind is EntityKind.MODEL
    assert owner.supports(OwnerCapability.COMPONENT_FIELDS)
    assert owner.supports(OwnerCapability.UNION_REVERSE_SIDE)
    assert owner.union_target_attribute == "models"


def test_component_owner_capabilities() -> None:
    owner = FieldOwner.component("Author")

    assert not owner.supports(OwnerCapability.COMPONENT_FIELDS)
    assert not owner.supports(OwnerCapability.UNION_REVERSE_SIDE)
    assert owner.union_target_attribute == "components"


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (FieldKind.SIMPLE, "modelApiId"),
        (FieldKind.RELATIONAL, "modelApiId"),
        (FieldKind.UNION, "modelApiId"),
        (FieldKind.ENUMERABLE, "modelApiId"),
        (None, "modelApiId"),
        (FieldKind.REMOTE, "parentApiId"),
        (FieldKind.COMPONENT, "parentApiId"),
        (FieldKind.COMPONENT_UNION, "parentApiId"),
    ],
)
def test_model_parent_attribute(kind: FieldKind | None, expected: str) -> None:
    assert FieldOwner.model("Post").id_attribute(kind) == expected


def test_component_parent_attribute_is_uniform() -> None:
    owner = FieldOwner.component("Author")

    assert {owner.id_attribute(kind) for kind in (*FieldKind, None)} == {"parentApiId"}


def test_every_create_and_update_has_a_normalizer() -> None:
    for mode in (MutationMode.CREATE, MutationMode.UPDATE):
        for kind in FieldKind:
            assert (mode, kind) in NORMALIZERS


def test_normalizers_return_new_payloads() -> None:
    args = {"apiId": "author", "model": "Author", "relationType": "ONE_TO_MANY"}

    first = create_relational_field(args, FieldOwner.model("Post"))
    second = create_relational_field(args, FieldOwner.model("Post"))

    assert first == second
    assert first is not second
    assert args == {"apiId": "author", "model": "Author", "relationType": "ONE_TO_MANY"}


def test_reverse_side_synthesized_only_when_omitted() -> None:
    owner = FieldOwner.model("Post")

    synthesized = create_relational_field({"apiId": "a", "model": "Author"}, owner)
    given = create_relational_field(
        {"apiId": "a", "model": "Author", "reverseField": {"apiId": "writings"}}, owner
    )

    assert synthesized["reverseField"]["apiId"] == "relatedPost"  # type: ignore[index]
    assert given["reverseField"] == {"apiId": "writings", "modelApiId": "Author", "isList": False}


def test_unknown_relation_type_is_not_a_list() -> None:
    payload = create_relational_field(
        {"apiId": "a", "model": "Author", "relationType": "SOMETIMES"}, FieldOwner.model("Post")
    )

    assert payload["isList"] is False
    assert payload["reverseField"]["isList"] is False  # type: ignore[index]


def test_union_models_are_copied_into_reverse_side() -> None:
    models = ["Post", "Page"]
    payload = create_union_field({"apiId": "u", "models": models}, FieldOwner.model("Post"))

    models.append("Mutated")

    assert payload["reverseField"]["modelApiIds"] == ["Post", "Page"]  # type: ignore[index]
    assert "models" not in payload


def test_union_requires_targets_before_any_work() -> None:
    with pytest.raises(SchemaValidationError, match="models cannot be empty"):
        create_union_field({"apiId": "u", "models": None}, FieldOwner.model("Post"))


def test_component_field_rejected_for_component_owner() -> None:
    with pytest.raises(SchemaValidationError, match="cannot hold component fields"):
        create_component_field(
            {"apiId": "seo", "componentApiId": "Seo"}, FieldOwner.component("Author")
        )


def test_update_simple_field_without_validations() -> None:
    payload = update_simple_field({"apiId": "title", "type": "STRING"}, FieldOwner.model("Post"))

    assert payload == {"apiId": "title", "modelApiId": "Post"}


def test_delete_field_payload_is_minimal() -> None:
    assert delete_field("x", FieldOwner.model("Post")) == {"apiId": "x", "modelApiId": "Post"}
    assert delete_field("x", FieldOwner.component("Seo")) == {"apiId": "x", "parentApiId": "Seo"}


def test_normalize_field_dispatches_by_mode_and_kind() -> None:
    payload = normalize_field(
        MutationMode.UPDATE,
        FieldKind.REMOTE,
        {"apiId": "weather", "remoteConfig": {"url": "https://example.com"}},
        FieldOwner.model("City"),
    )

    assert payload == {
        "apiId": "weather",
        "remoteConfig": {"url": "https://example.com"},
        "parentApiId": "City",
    }
