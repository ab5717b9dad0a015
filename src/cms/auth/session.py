# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-client session state.

The cookie carries only a signed session id; the state itself lives in a
:class:`SessionStore` owned by the application.
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from itsdangerous import BadSignature, BadTimeSignature, URLSafeTimedSerializer

from cms import config


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key=config.secret_key(), salt=config.session_salt())


def sign_session_id(session_id: str) -> str:
    return _serializer().dumps({"sid": session_id})


def verify_session_id(token: str, *, max_age: Optional[int] = None) -> Optional[str]:
    if not token:
        return None
    if max_age is None:
        max_age = config.session_max_age()
    try:
        data = _serializer().loads(token, max_age=max_age)
    except (BadSignature, BadTimeSignature):
        return None
    sid = str((data or {}).get("sid") or "").strip()
    return sid or None


@dataclass
class SessionState:
    username: Optional[str] = None
    message: Optional[str] = None
    last_seen: float = field(default_factory=time.time)

    def is_empty(self) -> bool:
        return not self.username and not self.message


@dataclass
class SessionContext:
    """The session handed to each request handler."""

    session_id: str
    state: SessionState = field(default_factory=SessionState)
    is_new: bool = False

    @property
    def username(self) -> Optional[str]:
        return self.state.username

    def sign_in(self, username: str) -> None:
        self.state.username = username

    def sign_out(self) -> None:
        self.state.username = None

    def flash(self, message: str) -> None:
        self.state.message = message

    def pop_message(self) -> Optional[str]:
        msg, self.state.message = self.state.message, None
        return msg


class SessionStore:
    """In-memory map of session id -> state.

    A session is only kept while it holds a username or a message; entries not
    seen for ``max_age`` seconds are dropped.
    """

    def __init__(self, max_age: Optional[int] = None) -> None:
        self._sessions: Dict[str, SessionState] = {}
        self._max_age = max_age

    @property
    def max_age(self) -> int:
        return self._max_age if self._max_age is not None else config.session_max_age()

    def purge_expired(self, now: Optional[float] = None) -> None:
        cutoff = (now if now is not None else time.time()) - self.max_age
        for sid in [sid for sid, st in self._sessions.items() if st.last_seen < cutoff]:
            del self._sessions[sid]

    def open(self, session_id: Optional[str]) -> SessionContext:
        now = time.time()
        self.purge_expired(now)
        state = self._sessions.get(session_id) if session_id else None
        if state is not None:
            state.last_seen = now
            return SessionContext(session_id=session_id, state=state)
        # Not stored until save() sees some state in it.
        return SessionContext(session_id=secrets.token_urlsafe(32), is_new=True)

    def save(self, ctx: SessionContext) -> bool:
        """Keep ``ctx`` while it holds state; drop it once it is empty."""
        if ctx.state.is_empty():
            self.discard(ctx.session_id)
            return False
        ctx.state.last_seen = time.time()
        self._sessions[ctx.session_id] = ctx.state
        return True

    def rotate(self, ctx: SessionContext) -> None:
        """Move ``ctx`` to a fresh id; the old id stops working."""
        self.discard(ctx.session_id)
        ctx.session_id = secrets.token_urlsafe(32)
        ctx.is_new = True

    def get(self, session_id: str) -> Optional[SessionState]:
        return self._sessions.get(session_id)

    def discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
