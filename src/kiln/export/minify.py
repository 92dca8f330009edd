"""Document minification, enabled with ``minify`` / ``--minify``.

Collapses whitespace, drops comments and minifies inline ``<style>`` and
``<script>`` content with minify-html.
"""

from __future__ import annotations

import minify_html


def minify_document(document: str) -> str:
    """Return *document* minified, including inline CSS and JS."""
    return minify_html.minify(document, minify_css=True, minify_js=True)
