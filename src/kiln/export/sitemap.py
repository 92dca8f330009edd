"""Sitemap generation — produce sitemap.xml from the resolved routes.

One ``<url><loc>`` entry per route.  The public path of a route is derived
from its output file: ``todo/1/index.html`` is served as ``/todo/1/``.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, tostring

from kiln.routes.paths import INDEX_DOCUMENT

if TYPE_CHECKING:
    from kiln.export.static import ExportedFile
    from kiln.routes.models import RouteDescriptor

# XML namespace for sitemaps
_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

SITEMAP_NAME = "sitemap.xml"


def public_path(output_file: str) -> str:
    """Return the URL path serving *output_file*.

    ``index.html``           -> ``/``
    ``todo/1/index.html``    -> ``/todo/1/``
    ``feed.xml``             -> ``/feed.xml``

    """
    if output_file == INDEX_DOCUMENT:
        return "/"
    if output_file.endswith("/" + INDEX_DOCUMENT):
        return "/" + output_file[: -len(INDEX_DOCUMENT)]
    return "/" + output_file


def canonical_url(base_url: str, output_file: str) -> str:
    """Join *base_url* and the route's public path with exactly one slash."""
    return base_url.rstrip("/") + public_path(output_file)


def generate_sitemap(
    routes: Sequence[RouteDescriptor],
    base_url: str,
) -> str:
    """Generate a sitemap.xml string for *routes*.

    Args:
        routes: Resolved route descriptors, in build order.
        base_url: Site base URL (e.g., ``"https://example.com"``).  Trailing
            slashes are stripped.

    Returns:
        Complete XML string suitable for writing to ``sitemap.xml``.

    """
    urlset = Element("urlset")
    urlset.set("xmlns", _SITEMAP_NS)

    for route in routes:
        url_el = SubElement(urlset, "url")
        loc = SubElement(url_el, "loc")
        loc.text = canonical_url(base_url, route.output_file)

    xml = tostring(urlset, encoding="unicode", xml_declaration=False)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml + "\n"


async def write_sitemap(
    output_dir: Path,
    routes: Sequence[RouteDescriptor],
    base_url: str,
) -> ExportedFile:
    """Write sitemap.xml to the output directory.

    Raises:
        OSError: If the file cannot be written.

    """
    from kiln.export.static import ExportedFile

    t0 = time.perf_counter()
    xml = generate_sitemap(routes, base_url)

    sitemap_path = output_dir / SITEMAP_NAME
    data = xml.encode("utf-8")
    await asyncio.to_thread(sitemap_path.write_bytes, data)
    elapsed = (time.perf_counter() - t0) * 1000

    return ExportedFile(
        source_path="/" + SITEMAP_NAME,
        output_path=sitemap_path,
        source_type="sitemap",
        size_bytes=len(data),
        duration_ms=elapsed,
    )
