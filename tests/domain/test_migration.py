from __future__ import annotations

from typing import TYPE_CHECKING

from cms_management.domain.migration import ChangeAccumulator, Migration
from cms_management.domain.ports.submission import MigrationResult
from cms_management.domain.schema import FieldChange, FieldKind, Model, MutationMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cms_management.domain.schema import ChangeRecord


class _RecordingSubmitter:
    def __init__(self) -> None:
        self.calls: list[tuple[list[ChangeRecord], str | None]] = []

    def __call__(
        self,
        changes: Sequence[ChangeRecord],
        *,
        name: str | None = None,
    ) -> MigrationResult:
        self.calls.append((list(changes), name))
        return MigrationResult(migration_id="m-1", status="SUCCESS", name=name)


def test_accumulator_preserves_registration_order(accumulator: ChangeAccumulator) -> None:
    first = FieldChange({"apiId": "a"}, MutationMode.CREATE, FieldKind.SIMPLE)
    second = FieldChange({"apiId": "a"}, MutationMode.CREATE, FieldKind.SIMPLE)

    accumulator.register_change(first)
    accumulator.register_change(second)

    assert len(accumulator) == 2
    assert list(accumulator) == [first, second]
    assert accumulator.materialize() == [
        {"createSimpleField": {"apiId": "a"}},
        {"createSimpleField": {"apiId": "a"}},
    ]


def test_migration_registers_entity_before_its_fields(migration: Migration) -> None:
    (
        migration.create_model(apiId="Post", apiIdPlural="Posts", displayName="Post")
        .add_simple_field(apiId="title", displayName="Title", type="STRING")
        .add_relational_field(apiId="author", model="Author", relationType="MANY_TO_ONE")
    )

    actions = [next(iter(record)) for record in migration.changes()]
    assert actions == ["createModel", "createSimpleField", "createRelationalField"]


def test_update_without_changes_registers_only_fields(migration: Migration) -> None:
    model = migration.update_model(apiId="Post")
    model.delete_field("legacy")

    assert isinstance(model, Model)
    assert migration.changes() == [{"deleteField": {"apiId": "legacy", "modelApiId": "Post"}}]


def test_update_with_changes_registers_entity(migration: Migration) -> None:
    migration.update_model(apiId="Post", displayName="Article")
    migration.update_component(apiId="Seo", description="Search metadata")

    assert migration.changes() == [
        {"updateModel": {"apiId": "Post", "displayName": "Article"}},
        {"updateComponent": {"apiId": "Seo", "description": "Search metadata"}},
    ]


def test_entity_deletes_and_enumerations(migration: Migration) -> None:
    migration.create_enumeration(
        apiId="Status",
        displayName="Status",
        values=[{"apiId": "DRAFT", "displayName": "Draft"}],
    )
    migration.delete_component("Legacy")
    migration.delete_model("Old")
    migration.delete_enumeration("Mood")

    assert migration.changes() == [
        {
            "createEnumeration": {
                "apiId": "Status",
                "displayName": "Status",
                "values": [{"apiId": "DRAFT", "displayName": "Draft"}],
            }
        },
        {"deleteComponent": {"apiId": "Legacy"}},
        {"deleteModel": {"apiId": "Old"}},
        {"deleteEnumeration": {"apiId": "Mood"}},
    ]


def test_component_session_fields(migration: Migration) -> None:
    migration.create_component(apiId="Seo", apiIdPlural="Seos", displayName="SEO").add_simple_field(
        apiId="metaTitle", type="STRING"
    )

    assert migration.changes()[1] == {
        "createSimpleField": {
            "apiId": "metaTitle",
            "type": "STRING",
            "formRenderer": "GCMS_SINGLE_LINE",
            "parentApiId": "Seo",
        }
    }


def test_dry_run_matches_changes(migration: Migration) -> None:
    migration.create_model(apiId="Post").add_simple_field(apiId="title", type="STRING")

    assert migration.dry_run() == migration.changes()
    assert len(migration) == 2


def test_run_hands_rendered_changes_to_submitter(migration: Migration) -> None:
    submitter = _RecordingSubmitter()
    migration.create_model(apiId="Post")

    result = migration.run(submitter)

    assert result.succeeded
    assert submitter.calls == [([{"createModel": {"apiId": "Post"}}], "test-migration")]
