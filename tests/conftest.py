from __future__ import annotations

import pytest

from cms_management.domain.migration import ChangeAccumulator, Migration
from cms_management.domain.schema import Component, Model, MutationMode


@pytest.fixture
def accumulator() -> ChangeAccumulator:
    return ChangeAccumulator()


@pytest.fixture
def post_model(accumulator: ChangeAccumulator) -> Model:
    return Model(accumulator, MutationMode.UPDATE, {"apiId": "Post"})


@pytest.fixture
def author_component(accumulator: ChangeAccumulator) -> Component:
    return Component(accumulator, MutationMode.UPDATE, {"apiId": "Author"})


@pytest.fixture
def migration() -> Migration:
    return Migration(name="test-migration")
