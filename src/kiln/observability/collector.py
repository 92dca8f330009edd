"""Build collector — records build events and echoes warnings to stderr.

Every pipeline stage reports through one collector so a build's warnings
can be counted for the summary and queried afterwards from the EventLog.

"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Literal, TextIO

from kiln.observability.events import (
    BuildFinished,
    BuildWarning,
    RouteSkipped,
    RouteWritten,
    now_ns,
)
from kiln.observability.log import EventLog

if TYPE_CHECKING:
    from kiln.observability.events import StackEvent


class BuildCollector:
    """Event collector for one or more builds.

    Args:
        log: The EventLog to store events in.
        stream: Where warnings are echoed (default: ``sys.stderr``).

    """

    __slots__ = ("_log", "_stream", "_warnings")

    def __init__(
        self,
        log: EventLog | None = None,
        *,
        stream: TextIO | None = None,
    ) -> None:
        self._log = log if log is not None else EventLog()
        self._stream = stream
        self._warnings: list[BuildWarning] = []

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    @property
    def warnings(self) -> tuple[BuildWarning, ...]:
        """Warnings recorded since the last :meth:`reset`."""
        return tuple(self._warnings)

    def reset(self) -> None:
        """Forget per-build warnings. The event log is kept."""
        self._warnings.clear()

    def record(self, event: StackEvent) -> None:
        self._log.append(event)

    def record_written(
        self,
        logical_path: str,
        output_file: str,
        *,
        size_bytes: int,
        duration_ms: float,
    ) -> None:
        """Record a route document written to disk."""
        self._log.append(
            RouteWritten(
                logical_path=logical_path,
                output_file=output_file,
                size_bytes=size_bytes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_skipped(
        self,
        logical_path: str,
        reason: Literal["no_params_hook", "no_params", "load_failed", "hook_failed"],
        detail: str,
    ) -> None:
        """Record a dynamic page that contributed no routes.

        Skips are also build warnings.

        """
        self._log.append(
            RouteSkipped(
                logical_path=logical_path,
                reason=reason,
                detail=detail,
                timestamp_ns=now_ns(),
            )
        )
        self.warn("expansion", logical_path, detail)

    def warn(
        self,
        stage: Literal["assets", "expansion", "sitemap"],
        path: str,
        message: str,
    ) -> None:
        """Record a warning and print it."""
        warning = BuildWarning(
            stage=stage,
            path=path,
            message=message,
            timestamp_ns=now_ns(),
        )
        self._warnings.append(warning)
        self._log.append(warning)
        print(f"  Warning: {message}", file=self._stream or sys.stderr)

    def record_finished(
        self,
        *,
        total_pages: int,
        total_assets: int,
        duration_ms: float,
    ) -> None:
        """Record build completion."""
        self._log.append(
            BuildFinished(
                total_pages=total_pages,
                total_assets=total_assets,
                warnings=len(self._warnings),
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
