from pathlib import Path

import pytest
import yaml

from cms.auth import users as users_module
from cms.auth.passwords import hash_password, verify_password
from cms.auth.users import CredentialStore, verify_credentials
from cms.errors import DuplicateUsername


def test_verify_credentials_exact_match(credential_store):
    assert verify_credentials(credential_store, "admin", "secret") is True


def test_verify_credentials_wrong_password(credential_store):
    assert verify_credentials(credential_store, "admin", "Secret") is False
    assert verify_credentials(credential_store, "admin", "") is False


def test_verify_credentials_unknown_user_skips_hash_check(credential_store, monkeypatch):
    def _boom(*args, **kwargs):
        raise AssertionError("verify_password must not be called")

    monkeypatch.setattr(users_module, "verify_password", _boom)
    assert verify_credentials(credential_store, "nobody", "secret") is False
    assert verify_credentials(credential_store, "", "secret") is False


def test_missing_file_is_an_empty_store(tmp_path: Path):
    store = CredentialStore(tmp_path / "missing.yml")
    assert store.load() == {}
    assert verify_credentials(store, "admin", "secret") is False


def test_load_accepts_nested_password_hash(tmp_path: Path, admin_hash):
    p = tmp_path / "users.yml"
    p.write_text(yaml.safe_dump({"users": {"admin": {"password_hash": admin_hash}}}), encoding="utf-8")
    assert verify_credentials(CredentialStore(p), "admin", "secret")


def test_create_persists_hashed_password(credential_store, users_file):
    credential_store.create("user1", "pass1")

    raw = yaml.safe_load(users_file.read_text(encoding="utf-8"))
    assert set(raw["users"]) == {"admin", "user1"}
    assert raw["users"]["user1"] != "pass1"
    assert verify_credentials(credential_store, "user1", "pass1")


def test_create_rejects_existing_username(credential_store):
    with pytest.raises(DuplicateUsername) as exc:
        credential_store.create("admin", "pass2")
    assert exc.value.message == "That username already exists! Username must be unique."
    assert verify_credentials(credential_store, "admin", "secret")


def test_create_rejects_blank_input(credential_store):
    with pytest.raises(ValueError):
        credential_store.create("  ", "pw")
    with pytest.raises(ValueError):
        credential_store.create("user2", "")


def test_password_hashes_are_salted():
    a = hash_password("secret")
    b = hash_password("secret")
    assert a != b
    assert verify_password(a, "secret") and verify_password(b, "secret")
    assert verify_password("not-a-hash", "secret") is False
