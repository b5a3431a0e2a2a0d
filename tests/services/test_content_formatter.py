from app.services.content_formatter import format_content


def test_empty_input_yields_empty_fragment():
    assert format_content(None) == ""
    assert format_content("") == ""
    assert format_content("\n\n   \n\n") == ""


def test_plain_paragraphs_are_wrapped_unchanged():
    text = "First paragraph here.\n\nSecond one follows."
    assert format_content(text) == "<p>First paragraph here.</p><p>Second one follows.</p>"


def test_single_hash_and_triple_hash_both_render_h3():
    assert format_content("# A\n\n### B") == "<h3>A</h3><h3>B</h3>"


def test_double_hash_renders_h2():
    assert format_content("## Oloroso") == "<h2>Oloroso</h2>"


def test_heading_with_following_line_keeps_line_break():
    html = format_content("## Fino\nBright and saline.")
    assert html == "<h2>Fino<br>Bright and saline.</h2>"


def test_blockquote():
    assert format_content("> Aged in Jerez") == "<blockquote>Aged in Jerez</blockquote>"


def test_inline_emphasis_and_code():
    html = format_content("Some **bold**, *italic* and `code`.")
    assert html == "<p>Some <strong>bold</strong>, <em>italic</em> and <code>code</code>.</p>"


def test_single_newlines_become_line_breaks():
    assert format_content("line one\nline two") == "<p>line one<br>line two</p>"


def test_windows_newlines_split_paragraphs():
    assert format_content("one\r\n\r\ntwo") == "<p>one</p><p>two</p>"


def test_image_becomes_lazy_figure():
    html = format_content("![A cask](https://img.test/cask.png)")
    assert html == (
        '<p><figure><img src="https://img.test/cask.png" alt="A cask" loading="lazy">'
        "<figcaption>A cask</figcaption></figure></p>"
    )


def test_link_opens_in_new_context_without_referrer():
    html = format_content("Read [the guide](https://example.test/guide).")
    assert (
        '<a href="https://example.test/guide" target="_blank" '
        'rel="noopener noreferrer">the guide</a>'
    ) in html


def test_markup_in_source_is_escaped():
    html = format_content("<script>alert(1)</script>")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_javascript_urls_are_neutralised():
    html = format_content("[click](javascript:alert(1))")
    assert 'href="#"' in html
    assert "javascript:" not in html
