# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""File-backed CMS: markdown/text documents and images stored on disk."""

__version__ = "0.1.0"
