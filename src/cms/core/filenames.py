# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Filename rules: accepted extensions and names for duplicated documents.

Everything here is pure; nothing touches the filesystem.
"""

from __future__ import annotations

import re
from typing import Tuple

from cms.errors import InvalidFilename

DOCUMENT_EXTS = (".txt", ".md")
IMAGE_EXTS = (".jpg", ".jpeg", ".gif", ".png")

_COPY_TOKEN_RE = re.compile(r"-copy[0-9]+")
_DIGIT_RE = re.compile(r"[0-9]")


def _has_suffix(name: str, exts: Tuple[str, ...]) -> bool:
    if not isinstance(name, str) or not name:
        return False
    return name.endswith(exts)


def is_valid_document_name(name: str) -> bool:
    return _has_suffix(name, DOCUMENT_EXTS)


def is_valid_image_name(name: str) -> bool:
    return _has_suffix(name, IMAGE_EXTS)


def validate_document_name(name: str) -> str:
    n = (name or "").strip()
    if not n:
        raise InvalidFilename("A name is required.")
    if not is_valid_document_name(n):
        raise InvalidFilename(
            "Invalid filename - name can't be blank and files must be either *.md or *.txt."
        )
    return n


def validate_image_name(name: str) -> str:
    n = (name or "").strip()
    if not n:
        raise InvalidFilename("A name is required.")
    if not is_valid_image_name(n):
        raise InvalidFilename(
            "Invalid image - files must be *.jpg, *.jpeg, *.gif or *.png."
        )
    return n


def split_extension(name: str) -> Tuple[str, str]:
    """Split ``name`` at its last dot: ``("a.b", ".md")`` for ``a.b.md``."""
    idx = name.rfind(".")
    if idx <= 0:
        return name, ""
    return name[:idx], name[idx:]


def next_duplicate_name(name: str) -> str:
    """Return the name for a copy of ``name``.

    The counter is every digit found in the base name, concatenated. With no
    digits the copy is ``<base>-copy1<ext>``; otherwise the first ``-copyN``
    marker becomes ``-copy<counter+1>`` (appended when the base has none).
    """
    base, ext = split_extension(name)
    digits = "".join(_DIGIT_RE.findall(base))
    counter = int(digits) if digits else 0
    if counter == 0:
        return f"{base}-copy1{ext}"

    token = f"-copy{counter + 1}"
    if _COPY_TOKEN_RE.search(base):
        return _COPY_TOKEN_RE.sub(token, base, count=1) + ext
    return f"{base}{token}{ext}"
