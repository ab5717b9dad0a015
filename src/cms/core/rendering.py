# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import markdown
from markdown.extensions import Extension

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


class EscapeRawHtmlExtension(Extension):
    """Treat raw HTML in the source as text so it is escaped, not passed through."""

    def extendMarkdown(self, md):
        md.preprocessors.deregister("html_block", strict=False)
        md.inlinePatterns.deregister("html", strict=False)


def render_markdown(text: str) -> str:
    """Convert markdown source to an HTML fragment.

    Raw HTML in ``text`` comes out escaped; the result is safe to mark ``| safe``.
    """
    return markdown.markdown(text or "", extensions=[*MARKDOWN_EXTENSIONS, EscapeRawHtmlExtension()])


def decode_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")
