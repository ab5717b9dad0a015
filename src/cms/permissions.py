# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

from fastapi import Request

from cms import config
from cms.auth.session import SessionContext, SessionStore, verify_session_id
from cms.errors import AuthRequired


def load_session_from_request(request: Request, store: SessionStore) -> SessionContext:
    token = request.cookies.get(config.cookie_name(), "")
    return store.open(verify_session_id(token))


def get_session(request: Request) -> SessionContext:
    return request.state.session


def current_user(ctx: SessionContext) -> Optional[str]:
    return ctx.username


def require_signed_in(ctx: SessionContext) -> str:
    u = current_user(ctx)
    if not u:
        raise AuthRequired()
    return u


def require_user(request: Request) -> str:
    return require_signed_in(get_session(request))
