import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

import importlib
from pathlib import Path

import pytest
import yaml
from fastapi.testclient import TestClient

from cms.auth.passwords import hash_password
from cms.auth.users import CredentialStore


@pytest.fixture(scope="session")
def admin_hash() -> str:
    return hash_password("secret")


@pytest.fixture()
def users_file(tmp_path: Path, admin_hash: str) -> Path:
    """users.yml holding a single account: admin / secret."""
    p = tmp_path / "users.yml"
    p.write_text(yaml.safe_dump({"version": 1, "users": {"admin": admin_hash}}), encoding="utf-8")
    return p


@pytest.fixture()
def credential_store(users_file: Path) -> CredentialStore:
    return CredentialStore(users_file)


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    d = tmp_path / "data"
    d.mkdir()
    return d


@pytest.fixture()
def images_dir(tmp_path: Path) -> Path:
    return tmp_path / "images"


@pytest.fixture()
def secret_key(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")


@pytest.fixture()
def app_module(secret_key, users_file, data_dir, images_dir, monkeypatch):
    monkeypatch.setenv("CMS_DATA_DIR", str(data_dir))
    monkeypatch.setenv("CMS_IMAGES_DIR", str(images_dir))
    monkeypatch.setenv("CMS_USERS_PATH", str(users_file))

    import cms.app as app_module
    importlib.reload(app_module)
    return app_module


@pytest.fixture()
def client(app_module) -> TestClient:
    return TestClient(app_module.app)


@pytest.fixture()
def admin_client(client: TestClient) -> TestClient:
    r = client.post("/users/signin", data={"username": "admin", "password": "secret"}, follow_redirects=False)
    assert r.status_code == 303
    return client


@pytest.fixture()
def create_document(data_dir: Path):
    def _create(name: str, content: str = "") -> Path:
        p = data_dir / name
        p.write_text(content, encoding="utf-8")
        return p

    return _create
