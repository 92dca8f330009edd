"""Event log — bounded store of build events.

One log can outlive many builds (watch mode reuses its collector), so the
oldest events fall off once ``max_events`` is reached.  Queries return
events in the order they were recorded, which for a single build is the
order routes were written.

Thread Safety:
    Appends and queries are protected by a ``threading.Lock``; page loads
    run in worker threads.

"""

import threading
from collections import deque

from kiln.observability.events import StackEvent

# Event attributes a path query is matched against
_PATH_FIELDS = ("logical_path", "output_file", "path")


class EventLog:
    """Bounded build-event store.

    Args:
        max_events: Maximum number of events retained.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[StackEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: StackEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        path: str | None = None,
    ) -> list[StackEvent]:
        """Return recorded events, oldest first.

        Args:
            event_type: Only events of this type.
            path: Only events whose logical path, output file or filesystem
                path contains this string (``"todo/"`` matches every
                ``todo/[id]`` route).

        """
        with self._lock:
            events = list(self._events)

        return [
            event
            for event in events
            if (event_type is None or isinstance(event, event_type))
            and (path is None or _matches_path(event, path))
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


def _matches_path(event: StackEvent, needle: str) -> bool:
    return any(needle in getattr(event, name, "") for name in _PATH_FIELDS)
