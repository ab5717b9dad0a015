from cms.core.rendering import decode_text, render_markdown


def test_markdown_is_rendered():
    html = render_markdown("# Title\n\nSome *text*.")
    assert "<h1>Title</h1>" in html
    assert "<em>text</em>" in html


def test_raw_html_block_is_escaped():
    html = render_markdown("<script>alert(1)</script>")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_inline_raw_html_is_escaped():
    html = render_markdown('Hello <img src=x onerror="alert(1)"> there')
    assert "<img" not in html
    assert "&lt;img" in html


def test_decode_text_replaces_invalid_bytes():
    assert decode_text(b"caf\xc3\xa9") == "café"
    assert decode_text(b"\xff") == "�"
