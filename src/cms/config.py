# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from pathlib import Path

# Anchor defaults to the project root, not the current working directory.
BASE_DIR = Path(__file__).resolve().parents[2]


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "y"}


def data_dir() -> Path:
    return Path(os.getenv("CMS_DATA_DIR", "data")).resolve()


def images_dir() -> Path:
    raw = os.getenv("CMS_IMAGES_DIR")
    if raw:
        return Path(raw).resolve()
    return data_dir() / "images"


def users_path() -> Path:
    return Path(os.getenv("CMS_USERS_PATH", str(BASE_DIR / "users.yml"))).resolve()


def secret_key() -> str:
    secret = os.getenv("SECRET_KEY") or os.getenv("CMS_SECRET_KEY")
    if not secret:
        raise RuntimeError("SECRET_KEY (or CMS_SECRET_KEY) is not set")
    return secret


def session_salt() -> str:
    return os.getenv("CMS_SESSION_SALT", "cms.session.v1")


def cookie_name() -> str:
    return os.getenv("CMS_COOKIE_NAME", "cms_session")


def session_max_age() -> int:
    return int(os.getenv("CMS_SESSION_MAX_AGE", "28800"))  # 8 hours


def cookie_settings() -> dict:
    return {"httponly": True, "samesite": "lax", "secure": _flag("CMS_COOKIE_SECURE")}


def server_settings() -> dict:
    return {
        "host": os.getenv("CMS_HOST", "0.0.0.0"),
        "port": int(os.getenv("CMS_PORT", "8000")),
        "reload": _flag("CMS_RELOAD"),
    }


def log_level() -> str:
    return os.getenv("CMS_LOG_LEVEL", "INFO").upper()
