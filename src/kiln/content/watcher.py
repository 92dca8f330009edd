"""Watch coordinator — rebuild the site when page modules change.

Observes the page-source tree recursively with watchfiles.  A change batch
that touches a page module (``.py``) triggers one build.  While that build
is in flight, further batches are dropped rather than queued; the next
change after the build completes triggers a fresh one.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, TypeAlias

from watchfiles import Change, awatch

from kiln.routes.loader import PAGE_SUFFIX

if TYPE_CHECKING:
    from kiln.config import KilnConfig
    from kiln.lifecycle import AppLifecycle

RawChanges: TypeAlias = Iterable[tuple[Change, str]]


def touches_pages(changes: RawChanges) -> bool:
    """Return True if any changed path is a page module."""
    return any(Path(path).suffix == PAGE_SUFFIX for _, path in changes)


class WatchCoordinator:
    """Re-runs a build on page changes, dropping events during a build.

    Args:
        config: Frozen kiln configuration (``pages_path`` is watched).
        build: Coroutine function performing one full build.
        lifecycle: Provides the stop event that ends :meth:`run`.

    """

    def __init__(
        self,
        config: KilnConfig,
        build: Callable[[], Awaitable[object]],
        *,
        lifecycle: AppLifecycle,
    ) -> None:
        self._config = config
        self._build = build
        self._lifecycle = lifecycle
        self._task: asyncio.Task[None] | None = None
        self.builds_started = 0
        self.batches_dropped = 0

    @property
    def is_building(self) -> bool:
        """Whether a build triggered by this coordinator is in flight."""
        return self._task is not None and not self._task.done()

    def handle_changes(self, changes: RawChanges) -> bool:
        """Start a build for *changes* unless irrelevant or already building.

        Must be called from within the running event loop.

        Returns:
            True if a build was started.

        """
        if not touches_pages(changes):
            return False
        return self.trigger()

    def trigger(self) -> bool:
        """Start a build unless one is already in flight.

        Returns:
            True if a build was started.

        """
        if self.is_building:
            self.batches_dropped += 1
            return False

        self.builds_started += 1
        self._task = asyncio.create_task(self._run_build())
        return True

    async def wait_idle(self) -> None:
        """Wait for the in-flight build, if any, to finish."""
        if self._task is not None:
            await self._task

    async def run(self) -> None:
        """Watch until the lifecycle is stopped, then let the last build finish."""
        async for changes in awatch(
            self._config.pages_path,
            stop_event=self._lifecycle.stop_event,
            debounce=300,
            step=100,
        ):
            self.handle_changes(changes)
        await self.wait_idle()

    async def _run_build(self) -> None:
        print("  Change detected, rebuilding...", file=sys.stderr)
        try:
            await self._build()
        except Exception as exc:
            print(f"  Build failed: {exc}", file=sys.stderr)
