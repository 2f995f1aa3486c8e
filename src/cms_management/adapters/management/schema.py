"""Pydantic models describing management API responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

TERMINAL_STATUSES = frozenset({"SUCCESS", "FAILED"})


class ManagementBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GraphQLError(ManagementBaseModel):
    message: str


class MigrationRef(ManagementBaseModel):
    id: str


class SubmitBatchChangesPayload(ManagementBaseModel):
    migration: MigrationRef


class SubmitBatchChangesData(ManagementBaseModel):
    submit_batch_changes: SubmitBatchChangesPayload = Field(alias="submitBatchChanges")


class SubmitBatchChangesResponse(ManagementBaseModel):
    data: SubmitBatchChangesData | None = None
    errors: list[GraphQLError] = Field(default_factory=list)


class MigrationPayload(ManagementBaseModel):
    id: str
    status: str
    name: str | None = None
    errors: list[str] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def _errors_as_list(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        return value

    @property
    def is_finished(self) -> bool:
        return self.status in TERMINAL_STATUSES


class Viewer(ManagementBaseModel):
    migration: MigrationPayload | None = None


class MigrationStatusData(ManagementBaseModel):
    viewer: Viewer


class MigrationStatusResponse(ManagementBaseModel):
    data: MigrationStatusData | None = None
    errors: list[GraphQLError] = Field(default_factory=list)
