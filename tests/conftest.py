from __future__ import annotations

from pathlib import Path

import pytest

from reporeview.models import RepositoryFacts
from tests._fixtures.builders import GitRepoBuilder, make_facts


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepoBuilder:
    builder = GitRepoBuilder(tmp_path)
    yield builder
    builder.close()


@pytest.fixture
def well_kept_facts() -> RepositoryFacts:
    return make_facts()
