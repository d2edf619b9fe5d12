from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def timeseries_html() -> str:
    return read_fixture("timeseries.html")


@pytest.fixture
def level_html() -> str:
    return read_fixture("level.html")
