# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication helpers.

This package provides:
- Password hashing/verification (argon2)
- Credential store backed by a YAML file (users.yml)
- Server-side session store addressed by a signed cookie (itsdangerous)
"""
