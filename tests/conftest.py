import pathlib

import pytest

DATA = pathlib.Path(__file__).parent / "data"


@pytest.fixture
def sample_path():
    return DATA / "sample.wsn"


@pytest.fixture
def sample_text(sample_path):
    return sample_path.read_text(encoding="utf-8")
