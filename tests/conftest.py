import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=str(tmp_path / "data"))


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
