"""Application lifecycle — explicit start/stop around long-running modes.

Owns the stop event the watch loop waits on and, when asked, the process
signal handlers that set it.  Tests drive ``stop()`` directly instead of
sending signals.
"""

from __future__ import annotations

import asyncio
import signal

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class AppLifecycle:
    """Start/stop state for one long-running kiln process.

    Args:
        install_signals: Install SIGINT/SIGTERM handlers in :meth:`start`.

    """

    __slots__ = ("_install_signals", "_installed", "_loop", "_stop_event")

    def __init__(self, *, install_signals: bool = False) -> None:
        self._install_signals = install_signals
        self._stop_event = asyncio.Event()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._installed: list[signal.Signals] = []

    @property
    def stop_event(self) -> asyncio.Event:
        return self._stop_event

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> None:
        """Bind to the running loop and install signal handlers if requested."""
        self._loop = asyncio.get_running_loop()
        self._stop_event.clear()
        if not self._install_signals:
            return
        for sig in _STOP_SIGNALS:
            try:
                self._loop.add_signal_handler(sig, self.stop)
            except (NotImplementedError, RuntimeError):
                # Not supported on this platform or outside the main thread
                continue
            self._installed.append(sig)

    def stop(self) -> None:
        """Request shutdown. Safe to call more than once."""
        self._stop_event.set()

    def close(self) -> None:
        """Remove any signal handlers installed by :meth:`start`."""
        if self._loop is not None:
            for sig in self._installed:
                self._loop.remove_signal_handler(sig)
        self._installed.clear()
        self._loop = None

    async def wait(self) -> None:
        """Block until :meth:`stop` is called."""
        await self._stop_event.wait()
