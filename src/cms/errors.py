# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Errors raised by the core and mapped to responses at the request boundary."""

from __future__ import annotations


class CmsError(Exception):
    """Base class. ``message`` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidFilename(CmsError):
    pass


class DuplicateUsername(CmsError):
    def __init__(self, username: str) -> None:
        super().__init__("That username already exists! Username must be unique.")
        self.username = username


class AuthRequired(CmsError):
    def __init__(self, message: str = "You must be signed in to do that.") -> None:
        super().__init__(message)


class NotFound(CmsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"The file '{name}' does not exist.")
        self.name = name
