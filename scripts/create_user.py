#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

from cms.auth.users import CredentialStore
from cms.errors import DuplicateUsername


def main() -> None:
    store = CredentialStore()

    username = input("Username: ").strip()
    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    try:
        store.create(username, pw1)
    except DuplicateUsername as e:
        raise SystemExit(e.message)
    except ValueError as e:
        raise SystemExit(str(e))
    print(f"OK -> {store.path}")


if __name__ == "__main__":
    main()
