"""Document wrapper — rendered markup plus metadata into a full HTML page.

Pure functions, no I/O.  Metadata values are attribute-escaped; the body
markup is inserted verbatim.
"""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kiln.routes.models import Metadata

_DOCUMENT = """<!doctype html>
<html lang="{lang}">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
{head}
  </head>
  <body>
    {body}
  </body>
</html>
"""


def create_html(html: str, metadata: Metadata, *, lang: str = "en") -> str:
    """Wrap *html* in a complete document with title, description and social tags."""
    return _DOCUMENT.format(
        lang=escape(lang),
        head="\n".join(f"    {tag}" for tag in meta_tags(metadata)),
        body=html,
    )


def meta_tags(metadata: Metadata) -> list[str]:
    """Head tags for *metadata*; image tags only when an image is set."""
    title = escape(metadata.title)
    description = escape(metadata.description)
    tags = [
        f"<title>{title}</title>",
        f'<meta name="description" content="{description}" />',
        f'<meta property="og:title" content="{title}" />',
        f'<meta property="og:description" content="{description}" />',
        '<meta name="twitter:card" content="summary_large_image" />',
        f'<meta name="twitter:title" content="{title}" />',
        f'<meta name="twitter:description" content="{description}" />',
    ]
    if metadata.image:
        image = escape(metadata.image)
        tags.append(f'<meta property="og:image" content="{image}" />')
        tags.append(f'<meta name="twitter:image" content="{image}" />')
    return tags
