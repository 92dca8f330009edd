"""Content layer — watching the page-source tree for rebuilds."""

from kiln.content.watcher import WatchCoordinator, touches_pages

__all__ = ["WatchCoordinator", "touches_pages"]
