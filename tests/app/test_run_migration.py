from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cms_management import app as app_module
from cms_management.app import (
    MigrationScriptError,
    load_migration,
    render_migration,
    run_migration,
)
from cms_management.domain.migration import Migration
from cms_management.domain.ports.submission import MigrationResult

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from cms_management.domain.schema import ChangeRecord

SCRIPT = """
def migrate(migration):
    (
        migration.create_model(apiId="Post", apiIdPlural="Posts", displayName="Post")
        .add_simple_field(apiId="title", displayName="Title", type="STRING")
    )
"""


def _write_script(tmp_path: Path, body: str = SCRIPT) -> Path:
    path = tmp_path / "add_posts.py"
    path.write_text(body)
    return path


def test_load_migration_runs_migrate(tmp_path: Path) -> None:
    migration = load_migration(_write_script(tmp_path))

    assert migration.name == "add_posts"
    assert [next(iter(record)) for record in render_migration(migration)] == [
        "createModel",
        "createSimpleField",
    ]


def test_load_migration_uses_explicit_name(tmp_path: Path) -> None:
    migration = load_migration(_write_script(tmp_path), name="release-42")

    assert migration.name == "release-42"


def test_load_migration_requires_migrate_function(tmp_path: Path) -> None:
    path = _write_script(tmp_path, "VALUE = 1\n")

    with pytest.raises(MigrationScriptError, match="migrate"):
        load_migration(path)


def test_load_migration_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MigrationScriptError, match="not found"):
        load_migration(tmp_path / "absent.py")


def test_run_migration_uses_given_submitter() -> None:
    captured: dict[str, object] = {}

    def submitter(changes: Sequence[ChangeRecord], *, name: str | None = None) -> MigrationResult:
        captured["changes"] = list(changes)
        captured["name"] = name
        return MigrationResult(migration_id="m-9", status="SUCCESS", name=name)

    migration = Migration(name="demo")
    migration.delete_model("Legacy")

    result = run_migration(migration, submitter=submitter)

    assert result.migration_id == "m-9"
    assert captured == {"changes": [{"deleteModel": {"apiId": "Legacy"}}], "name": "demo"}


def test_run_migration_defaults_to_management_client(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str | None] = []

    class FakeClient:
        def __call__(
            self, changes: Sequence[ChangeRecord], *, name: str | None = None
        ) -> MigrationResult:
            del changes
            calls.append(name)
            return MigrationResult(migration_id="m-1", status="SUCCESS", name=name)

    monkeypatch.setattr(app_module, "ManagementClient", FakeClient)

    run_migration(Migration(name="demo"))

    assert calls == ["demo"]
