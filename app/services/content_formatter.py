import re

from markupsafe import escape

IMAGE_PATTERN = re.compile(r"!\[(.*?)\]\((.*?)\)")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")
ITALIC_PATTERN = re.compile(r"\*(.*?)\*")
CODE_PATTERN = re.compile(r"`(.*?)`")

# Leading token -> tag. `# ` renders as h3, same as `### `.
BLOCK_RULES = (
    ("### ", "h3"),
    ("## ", "h2"),
    ("# ", "h3"),
    ("&gt; ", "blockquote"),
)

_UNSAFE_SCHEMES = ("javascript:", "vbscript:")


def format_content(content: str | None) -> str:
    """
    Render a plain-text post body with lightweight markup into HTML.

    The body is escaped first, so only the markup produced here reaches the
    page. Images and links are rewritten before the text is split into
    blank-line separated blocks; each block then gets inline emphasis and is
    wrapped according to its leading token.
    """
    if not content:
        return ""

    text = str(escape(content.replace("\r\n", "\n")))
    text = IMAGE_PATTERN.sub(_render_image, text)
    text = LINK_PATTERN.sub(_render_link, text)

    blocks = [block.strip() for block in text.split("\n\n")]
    return "".join(_render_block(block) for block in blocks if block)


def _render_block(block: str) -> str:
    text = BOLD_PATTERN.sub(r"<strong>\1</strong>", block)
    text = ITALIC_PATTERN.sub(r"<em>\1</em>", text)
    text = CODE_PATTERN.sub(r"<code>\1</code>", text)
    text = text.replace("\n", "<br>")

    for token, tag in BLOCK_RULES:
        if text.startswith(token):
            return f"<{tag}>{text[len(token):]}</{tag}>"
    return f"<p>{text}</p>"


def _render_image(match: re.Match) -> str:
    alt, url = match.group(1), safe_url(match.group(2))
    return (
        f'<figure><img src="{url}" alt="{alt}" loading="lazy">'
        f"<figcaption>{alt}</figcaption></figure>"
    )


def _render_link(match: re.Match) -> str:
    label, url = match.group(1), safe_url(match.group(2))
    return f'<a href="{url}" target="_blank" rel="noopener noreferrer">{label}</a>'


def safe_url(url: str) -> str:
    """Neutralise script URLs; everything else passes through trimmed."""
    url = url.strip()
    if url.lower().startswith(_UNSAFE_SCHEMES):
        return "#"
    return url
