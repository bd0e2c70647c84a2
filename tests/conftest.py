import json
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


def fixture_text(name):
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def modern_raw():
    return json.loads(fixture_text("23w45a.json"))


@pytest.fixture
def legacy_raw():
    return json.loads(fixture_text("1.8.9.json"))


@pytest.fixture
def modern_path():
    return FIXTURES / "23w45a.json"


@pytest.fixture
def legacy_path():
    return FIXTURES / "1.8.9.json"
