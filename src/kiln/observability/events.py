"""Build event model.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal, TypeAlias


@dataclass(frozen=True, slots=True)
class RouteWritten:
    """A concrete route was rendered and written.

    Attributes:
        logical_path: Unexpanded route path (``todo/[id]``).
        output_file: Output file relative to the output root.
        size_bytes: Size of the written document.
        duration_ms: Time taken to render and write.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    logical_path: str
    output_file: str
    size_bytes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouteSkipped:
    """A dynamic page contributed no routes.

    Attributes:
        logical_path: Unexpanded route path.
        reason: Why the page was skipped.
        detail: Human-readable explanation.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    logical_path: str
    reason: Literal["no_params_hook", "no_params", "load_failed", "hook_failed"]
    detail: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BuildWarning:
    """A recoverable problem that did not abort the build.

    Attributes:
        stage: Pipeline stage that produced the warning.
        path: Route or filesystem path the warning concerns.
        message: Human-readable explanation.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    stage: Literal["assets", "expansion", "sitemap"]
    path: str
    message: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BuildFinished:
    """A build completed successfully.

    Attributes:
        total_pages: Number of route documents written.
        total_assets: Number of asset files copied.
        warnings: Number of warnings recorded during the build.
        duration_ms: Wall-clock time of the build.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    total_pages: int
    total_assets: int
    warnings: int
    duration_ms: float
    timestamp_ns: int


StackEvent: TypeAlias = RouteWritten | RouteSkipped | BuildWarning | BuildFinished


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
