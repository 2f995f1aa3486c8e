"""GraphQL documents sent to the management API."""

from __future__ import annotations

SUBMIT_BATCH_CHANGES = """
mutation SubmitBatchChanges($data: BatchMigrationInput!) {
  submitBatchChanges(data: $data) {
    migration {
      id
    }
  }
}
"""

MIGRATION_STATUS = """
query MigrationStatus($id: ID!) {
  viewer {
    migration(id: $id) {
      id
      name
      status
      errors
    }
  }
}
"""
