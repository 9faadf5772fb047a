from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def resource_docs_dir() -> Path:
    return FIXTURES_DIR / "resources"


@pytest.fixture
def datasource_docs_dir() -> Path:
    return FIXTURES_DIR / "datasources"
