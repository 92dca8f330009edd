"""Build observability — structured events for every build.

Quick Start:
    >>> from kiln.observability import BuildCollector, EventLog
    >>> log = EventLog()
    >>> collector = BuildCollector(log)
    >>> # Pass collector to StaticExporter(events=collector)
    >>> # then inspect log.query(event_type=BuildWarning)

"""

from kiln.observability.collector import BuildCollector
from kiln.observability.events import (
    BuildFinished,
    BuildWarning,
    RouteSkipped,
    RouteWritten,
    StackEvent,
    now_ns,
)
from kiln.observability.log import EventLog

__all__ = [
    "BuildCollector",
    "BuildFinished",
    "BuildWarning",
    "EventLog",
    "RouteSkipped",
    "RouteWritten",
    "StackEvent",
    "now_ns",
]
