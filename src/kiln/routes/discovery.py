"""Route discovery — walk the page-source tree into route descriptors.

File-path convention::

    pages/index.py           -> index.html
    pages/about.py           -> about/index.html
    pages/docs/index.py      -> docs/index.html
    pages/docs/intro.py      -> docs/intro/index.html
    pages/todo/[id].py       -> todo/<id>/index.html  (one per param result)

Skips ``__pycache__``, hidden entries, and names starting with ``_``
(helpers, ``__init__.py``).  Entries are visited in name order so repeated
builds list routes identically.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from kiln._errors import DiscoveryError
from kiln.routes.expander import expand_dynamic_route
from kiln.routes.loader import PAGE_SUFFIX
from kiln.routes.models import RouteDescriptor
from kiln.routes.paths import (
    INDEX_NAME,
    derive_output_file,
    is_dynamic_segment,
    join_logical,
)

if TYPE_CHECKING:
    from kiln.observability.collector import BuildCollector
    from kiln.routes.loader import PageRegistry

_SKIPPED_PREFIXES = (".", "_")


async def discover_routes(
    source_dir: Path,
    base_path: Sequence[str] = (),
    *,
    registry: PageRegistry,
    events: BuildCollector,
) -> list[RouteDescriptor]:
    """Return every route reachable under *source_dir*.

    Args:
        source_dir: Absolute directory to walk.
        base_path: Logical segments leading to *source_dir*.
        registry: Per-build page manifest used by dynamic expansion.
        events: Collector receiving expansion warnings.

    Raises:
        DiscoveryError: If a directory cannot be read.
        ExpansionError: If a dynamic page yields an unusable parameter result.

    """
    entries = await _list_dir(source_dir)
    routes: list[RouteDescriptor] = []

    for name, is_dir in entries:
        if name.startswith(_SKIPPED_PREFIXES):
            continue

        full_path = source_dir / name

        if is_dir:
            routes.extend(await discover_routes(
                full_path,
                [*base_path, name],
                registry=registry,
                events=events,
            ))
            continue

        if not name.endswith(PAGE_SUFFIX):
            continue

        leaf = name[: -len(PAGE_SUFFIX)]
        logical_path = join_logical(base_path, leaf)

        if is_dynamic_segment(leaf):
            routes.extend(await expand_dynamic_route(
                logical_path,
                full_path,
                registry=registry,
                events=events,
            ))
        else:
            routes.append(RouteDescriptor(
                logical_path=logical_path,
                output_file=derive_output_file(base_path, leaf, leaf == INDEX_NAME),
                source=full_path,
            ))

    return routes


async def _list_dir(directory: Path) -> list[tuple[str, bool]]:
    """List ``(name, is_dir)`` pairs sorted by name.

    Raises:
        DiscoveryError: If *directory* cannot be read.

    """
    def _scan() -> list[tuple[str, bool]]:
        with os.scandir(directory) as it:
            return sorted((entry.name, entry.is_dir()) for entry in it)

    try:
        return await asyncio.to_thread(_scan)
    except OSError as exc:
        msg = f"Failed to read page directory {directory}: {exc}"
        raise DiscoveryError(msg) from exc
