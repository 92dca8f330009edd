"""Static export — render every resolved route to an HTML file.

Pipeline order:
    1. Prepare the output directory (``clean`` never removes project sources)
    2. Copy public assets (failures are warnings)
    3. Discover and expand routes (failures are fatal)
    4. Reject output collisions
    5. Render, minify if enabled, and write each route in discovery order
       (failures are fatal)
    6. Generate sitemap (if base_url configured; failures are warnings)
"""

from __future__ import annotations

import asyncio
import shutil
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from kiln._errors import DiscoveryError, ExportError, RenderError
from kiln.export.document import create_html
from kiln.export.minify import minify_document
from kiln.export.render import render_markup, render_page
from kiln.observability.collector import BuildCollector
from kiln.routes.discovery import discover_routes
from kiln.routes.loader import PageRegistry

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from kiln._types import DocumentTransform, Renderer
    from kiln.config import KilnConfig
    from kiln.observability.events import BuildWarning
    from kiln.routes.models import Metadata, RouteDescriptor


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        source_path: Logical source (e.g., ``"todo/[id]"`` or ``"/favicon.ico"``).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the exported file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to render and write this file.

    """

    source_path: str
    output_path: Path
    source_type: Literal["page", "asset", "sitemap"]
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of a full static export.

    Attributes:
        files: All files written during export.
        routes: The resolved route set, in build order.
        warnings: Recoverable problems recorded during the build.
        total_pages: Number of route documents written.
        total_assets: Number of static asset files copied.
        duration_ms: Total wall-clock time for the export.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[ExportedFile, ...]
    routes: tuple[RouteDescriptor, ...]
    warnings: tuple[BuildWarning, ...]
    total_pages: int
    total_assets: int
    duration_ms: float
    output_dir: Path


class StaticExporter:
    """Builds a kiln site as static files.

    Args:
        config: Frozen kiln configuration.
        renderer: Turns a page unit's return value into markup text.
        wrapper: Wraps markup and metadata into a full document.
        transform: Optional post-processing over each document, applied
            before minification.
        events: Collector for build events and warnings.

    """

    def __init__(
        self,
        config: KilnConfig,
        *,
        renderer: Renderer = render_markup,
        wrapper: Callable[[str, Metadata], str] = create_html,
        transform: DocumentTransform | None = None,
        events: BuildCollector | None = None,
    ) -> None:
        self._config = config
        self._renderer = renderer
        self._wrapper = wrapper
        self._transform = transform
        self._events = events if events is not None else BuildCollector()

    @property
    def events(self) -> BuildCollector:
        return self._events

    async def export(self) -> ExportResult:
        """Run the full export pipeline and return the result.

        Returns:
            ExportResult with metadata about all exported files.

        Raises:
            DiscoveryError: If the page-source tree cannot be walked.
            ExpansionError: If a dynamic page yields an unusable result.
            ExportError: On output collisions, missing metadata, or a route
                that fails to render or write.

        """
        start = time.perf_counter()
        self._events.reset()
        output_dir = self._config.output_path

        await self._prepare_output(output_dir)

        all_files: list[ExportedFile] = []
        all_files.extend(await self._copy_assets(output_dir))

        registry = PageRegistry(self._config.pages_path)
        routes = await self._resolve_routes(registry)

        for route in routes:
            all_files.append(await self._render_route(route, registry, output_dir))

        sitemap = await self._generate_sitemap(output_dir, routes)
        if sitemap is not None:
            all_files.append(sitemap)

        elapsed = (time.perf_counter() - start) * 1000
        total_pages = sum(1 for f in all_files if f.source_type == "page")
        total_assets = sum(1 for f in all_files if f.source_type == "asset")

        self._events.record_finished(
            total_pages=total_pages,
            total_assets=total_assets,
            duration_ms=elapsed,
        )

        return ExportResult(
            files=tuple(all_files),
            routes=tuple(routes),
            warnings=self._events.warnings,
            total_pages=total_pages,
            total_assets=total_assets,
            duration_ms=elapsed,
            output_dir=output_dir,
        )

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    async def _prepare_output(self, output_dir: Path) -> None:
        """Create the output directory, removing it first when ``clean`` is set.

        Raises:
            ExportError: If ``clean`` would remove the project root or the
                page or asset sources.

        """
        if self._config.clean:
            check_clean_target(self._config)

        def _prepare() -> None:
            if self._config.clean and output_dir.exists():
                shutil.rmtree(output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)

        try:
            await asyncio.to_thread(_prepare)
        except OSError as exc:
            msg = f"Failed to prepare output directory {output_dir}: {exc}"
            raise ExportError(msg) from exc

    async def _copy_assets(self, output_dir: Path) -> tuple[ExportedFile, ...]:
        """Mirror the public directory; I/O failures become warnings."""
        from kiln.export.assets import copy_assets

        public_path = self._config.public_path
        try:
            return await asyncio.to_thread(copy_assets, public_path, output_dir)
        except OSError as exc:
            self._events.warn(
                "assets",
                str(public_path),
                f"Could not copy public files from {public_path}: {exc}",
            )
            return ()

    async def _resolve_routes(self, registry: PageRegistry) -> list[RouteDescriptor]:
        pages_path = self._config.pages_path
        if not pages_path.is_dir():
            msg = f"Page directory {pages_path} does not exist"
            raise DiscoveryError(msg)

        routes = await discover_routes(
            pages_path,
            registry=registry,
            events=self._events,
        )
        check_collisions(routes)
        return routes

    async def _render_route(
        self,
        route: RouteDescriptor,
        registry: PageRegistry,
        output_dir: Path,
    ) -> ExportedFile:
        """Render *route* and write its document.

        Dynamic descriptors share the definition loaded during expansion;
        static pages are imported here on first use.

        """
        t0 = time.perf_counter()
        filepath = output_dir / route.output_file

        try:
            definition = await asyncio.to_thread(
                registry.get, route.logical_path, route.source,
            )
        except Exception as exc:
            msg = f"Failed to load page {route.source} for {route.output_file}: {exc}"
            raise RenderError(msg) from exc

        metadata = route.metadata or definition.metadata
        if metadata is None:
            msg = (
                f"Missing metadata in {route.source}: define 'metadata' or return "
                f"it from generate_static_params"
            )
            raise ExportError(msg)

        try:
            html = await render_page(
                definition.unit, route.render_props(), self._renderer,
            )
            document = self._wrapper(html, metadata)
            if self._transform is not None:
                document = self._transform(document)
            if self._config.minify:
                document = minify_document(document)
        except Exception as exc:
            msg = f"Failed to render {route.logical_path} -> {route.output_file}: {exc}"
            raise RenderError(msg) from exc

        try:
            size = await asyncio.to_thread(self._write_html, filepath, document)
        except OSError as exc:
            msg = f"Failed to write {filepath}: {exc}"
            raise RenderError(msg) from exc

        elapsed = (time.perf_counter() - t0) * 1000
        self._events.record_written(
            route.logical_path,
            route.output_file,
            size_bytes=size,
            duration_ms=elapsed,
        )

        return ExportedFile(
            source_path=route.logical_path,
            output_path=filepath,
            source_type="page",
            size_bytes=size,
            duration_ms=elapsed,
        )

    async def _generate_sitemap(
        self,
        output_dir: Path,
        routes: Sequence[RouteDescriptor],
    ) -> ExportedFile | None:
        """Write sitemap.xml when a base URL is set; failures become warnings."""
        from kiln.export.sitemap import write_sitemap

        base_url = self._config.base_url.strip()
        if not base_url:
            print(
                "  Sitemap skipped — set base_url to enable",
                file=sys.stderr,
            )
            return None

        try:
            return await write_sitemap(output_dir, routes, base_url)
        except Exception as exc:
            self._events.warn(
                "sitemap",
                str(output_dir),
                f"Failed to generate sitemap.xml: {exc}",
            )
            return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _write_html(filepath: Path, html: str) -> int:
        """Write HTML content to a file, creating parent dirs as needed.

        Returns the size in bytes of the written file.

        """
        filepath.parent.mkdir(parents=True, exist_ok=True)
        data = html.encode("utf-8")
        filepath.write_bytes(data)
        return len(data)


def check_collisions(routes: Sequence[RouteDescriptor]) -> None:
    """Reject route sets where two descriptors share an output file.

    Raises:
        ExportError: Naming both routes and the contested file.

    """
    seen: dict[str, RouteDescriptor] = {}
    for route in routes:
        previous = seen.get(route.output_file)
        if previous is not None:
            msg = (
                f"Duplicate output file {route.output_file!r}: produced by "
                f"{_describe(previous)} and {_describe(route)}"
            )
            raise ExportError(msg)
        seen[route.output_file] = route


def check_clean_target(config: KilnConfig) -> None:
    """Refuse to clean an output directory that holds project sources.

    Raises:
        ExportError: If the output directory is the project root or an
            ancestor of it, or contains the page or public directory.

    """
    output = config.output_path.resolve()
    protected = {
        "project root": config.root.resolve(),
        "page directory": config.pages_path.resolve(),
        "public directory": config.public_path.resolve(),
    }
    for label, path in protected.items():
        if path.is_relative_to(output):
            msg = (
                f"Refusing to clean output directory {output}: it contains the "
                f"{label} {path}"
            )
            raise ExportError(msg)


def _describe(route: RouteDescriptor) -> str:
    if route.is_dynamic:
        return f"{route.source} with params {dict(route.params)!r}"
    return str(route.source)
