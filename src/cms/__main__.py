# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""CMS entrypoint.

Run with:
  python -m cms
"""

import logging

import uvicorn

from cms import config


def main() -> None:
    level = config.log_level()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = config.server_settings()
    uvicorn.run("cms.app:app", log_level=level.lower(), **settings)


if __name__ == "__main__":
    main()
