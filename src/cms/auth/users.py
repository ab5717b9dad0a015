# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml

from cms import config
from cms.auth.passwords import hash_password, verify_password
from cms.errors import DuplicateUsername

logger = logging.getLogger(__name__)


class CredentialStore:
    """username -> password hash, persisted as ``users.yml``.

    The file is read wholesale on every lookup and rewritten wholesale on every
    creation. Concurrent writers race; the last one wins.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else config.users_path()

    def _read_raw(self) -> dict:
        if not self.path.exists():
            return {"version": 1, "users": {}}
        raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raw = {}
        if not isinstance(raw.get("users"), dict):
            raw["users"] = {}
        return raw

    def load(self) -> Dict[str, str]:
        out: Dict[str, str] = {}
        for uname, value in self._read_raw()["users"].items():
            username = str(uname).strip()
            # Older files may nest the hash under "password_hash".
            if isinstance(value, dict):
                value = value.get("password_hash")
            ph = str(value or "").strip()
            if username and ph:
                out[username] = ph
        return out

    def get_hash(self, username: str) -> Optional[str]:
        u = (username or "").strip()
        if not u:
            return None
        return self.load().get(u)

    def create(self, username: str, password: str) -> None:
        u = (username or "").strip()
        if not u:
            raise ValueError("Username must not be blank")
        raw = self._read_raw()
        if u in {str(k).strip() for k in raw["users"]}:
            raise DuplicateUsername(u)
        raw["users"][u] = hash_password(password)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(yaml.safe_dump(raw, sort_keys=False, allow_unicode=True), encoding="utf-8")
        logger.info("Created user %s", u)


def verify_credentials(store: CredentialStore, username: str, password: str) -> bool:
    ph = store.get_hash(username)
    if ph is None:
        return False
    return verify_password(ph, password)
