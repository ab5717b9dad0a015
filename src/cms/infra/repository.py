# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from cms.errors import InvalidFilename, NotFound

logger = logging.getLogger(__name__)


def is_safe_basename(name: str) -> bool:
    """Allow only simple filenames (no directories)."""
    if not isinstance(name, str) or not name:
        return False
    if name in {".", ".."}:
        return False
    if name != Path(name).name:
        return False
    if "/" in name or "\\" in name:
        return False
    return True


class FilesystemRepository:
    """Flat directory of named files. Last write wins."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).resolve()

    def ensure(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def path(self, name: str) -> Path:
        if not is_safe_basename(name):
            raise InvalidFilename(f"'{name}' is not a valid file name.")
        resolved = (self.root / name).resolve()
        if resolved.parent != self.root:
            raise InvalidFilename(f"'{name}' is not a valid file name.")
        return resolved

    def list(self) -> List[str]:
        if not self.root.exists():
            return []
        return sorted(p.name for p in self.root.iterdir() if p.is_file())

    def exists(self, name: str) -> bool:
        try:
            return self.path(name).is_file()
        except InvalidFilename:
            return False

    def read(self, name: str) -> bytes:
        p = self.path(name)
        if not p.is_file():
            raise NotFound(name)
        return p.read_bytes()

    def write(self, name: str, data: bytes) -> None:
        p = self.path(name)
        self.ensure()
        p.write_bytes(data)
        logger.info("Wrote %s (%d bytes)", p, len(data))

    def delete(self, name: str) -> None:
        p = self.path(name)
        if not p.is_file():
            raise NotFound(name)
        p.unlink()
        logger.info("Deleted %s", p)
