import pytest
from fastapi.testclient import TestClient

from gradebook_api.config import settings
from gradebook_api.main import app
from gradebook_api.storage import Store


@pytest.fixture(autouse=True)
def db_file(tmp_path, monkeypatch):
    """Redirect the collection file to a temporary directory."""
    path = tmp_path / "db.json"
    monkeypatch.setattr(settings, "db_file", str(path))
    return path


@pytest.fixture()
def client():
    # Entering the client runs the lifespan hook, which loads (or seeds) the store.
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def store(db_file):
    s = Store(str(db_file))
    s.load()
    return s
