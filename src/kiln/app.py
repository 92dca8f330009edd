"""Kiln application — public entry points.

The three public functions (build, watch, serve) load configuration, print
the banner, and drive the async pipeline.  ``build_site`` is the awaitable
core shared by all of them.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from kiln._errors import ExportError
from kiln.banner import print_banner, print_export_summary
from kiln.config_loader import load_config
from kiln.export.render import render_markup
from kiln.export.static import ExportResult, StaticExporter
from kiln.lifecycle import AppLifecycle

if TYPE_CHECKING:
    from kiln._types import DocumentTransform, Renderer
    from kiln.config import KilnConfig
    from kiln.observability.collector import BuildCollector


async def build_site(
    config: KilnConfig,
    *,
    renderer: Renderer = render_markup,
    transform: DocumentTransform | None = None,
    events: BuildCollector | None = None,
) -> ExportResult:
    """Run one full build for *config* and return its result.

    Raises:
        KilnError: On any fatal build error.

    """
    exporter = StaticExporter(
        config,
        renderer=renderer,
        transform=transform,
        events=events,
    )
    return await exporter.export()


async def watch_site(
    config: KilnConfig,
    lifecycle: AppLifecycle,
    *,
    renderer: Renderer = render_markup,
    transform: DocumentTransform | None = None,
) -> None:
    """Build once, then rebuild on page changes until *lifecycle* stops."""
    from kiln.content.watcher import WatchCoordinator

    async def _build() -> ExportResult:
        result = await build_site(config, renderer=renderer, transform=transform)
        print_export_summary(result)
        return result

    lifecycle.start()
    try:
        coordinator = WatchCoordinator(config, _build, lifecycle=lifecycle)
        coordinator.trigger()
        await coordinator.run()
    finally:
        lifecycle.close()


def build(root: str | Path = ".", **kwargs: object) -> ExportResult:
    """Export the site as static HTML files.

    Args:
        root: Path to the project root directory.
        **kwargs: Override KilnConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    print_banner(config, mode="build")

    result = asyncio.run(build_site(config))
    print_export_summary(result)
    return result


def watch(root: str | Path = ".", **kwargs: object) -> None:
    """Build the site and rebuild whenever a page module changes.

    Runs until SIGINT/SIGTERM.

    Args:
        root: Path to the project root directory.
        **kwargs: Override KilnConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    print_banner(config, mode="watch")

    asyncio.run(watch_site(config, AppLifecycle(install_signals=True)))


def serve(root: str | Path = ".", **kwargs: object) -> None:
    """Serve the built output directory for local preview via pounce.

    Args:
        root: Path to the project root directory.
        **kwargs: Override KilnConfig fields.

    Raises:
        ExportError: If the output directory has not been built yet.

    """
    from kiln.server import run_server

    config = load_config(Path(root), **kwargs)
    if not config.output_path.is_dir():
        msg = f"Output directory {config.output_path} does not exist; run kiln build first"
        raise ExportError(msg)

    print_banner(config, mode="serve")
    run_server(config)
