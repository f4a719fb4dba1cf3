import pytest
import storage
from fastapi.testclient import TestClient
from main import app


@pytest.fixture(autouse=True)
def tmp_data_dir(tmp_path, monkeypatch):
    """Redirect all storage reads/writes to a temporary directory."""
    monkeypatch.setattr(storage, 'DATA_DIR', str(tmp_path))
    return tmp_path


@pytest.fixture()
def client():
    c = TestClient(app)
    c.headers.update({"X-User-Id": "alice"})
    return c


@pytest.fixture()
def class_id(client):
    resp = client.post("/me/classes", json={"name": "Chemistry", "period": 2})
    return resp.json()["class"]["id"]
