"""Startup banner — mode-aware status output.

Prints a short banner with the project layout and, for ``serve``, the URL.
Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kiln._types import KilnMode
    from kiln.config import KilnConfig
    from kiln.export.static import ExportResult


# ---------------------------------------------------------------------------
# ANSI helpers: respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "build": (_YELLOW, "build"),
    "watch": (_GREEN, "watch"),
    "serve": (_CYAN, "serve"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(config: KilnConfig, mode: KilnMode) -> None:
    """Print the kiln startup banner to stderr."""
    from kiln import __version__

    lines: list[str] = [
        "",
        f"  {_BOLD}kiln{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    if mode in ("build", "watch"):
        lines.append(f"  {_DIM}├─{_RESET} pages: {_DIM}{config.pages_path}{_RESET}")
        if config.public_path.is_dir():
            lines.append(f"  {_DIM}├─{_RESET} public: {_DIM}{config.public_path}{_RESET}")
        if config.base_url:
            lines.append(f"  {_DIM}├─{_RESET} base url: {config.base_url}")
    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}")

    if mode == "serve":
        lines.append("")
        lines.append(f"  {_BOLD}{_CYAN}http://{config.host}:{config.port}{_RESET}")

    if mode == "watch":
        lines.append("")
        lines.append(f"  {_DIM}Watching for changes...{_RESET}")

    lines.append("")
    print("\n".join(lines), file=sys.stderr)


def print_export_summary(result: ExportResult) -> None:
    """Print export completion summary to stderr."""
    lines = [
        "",
        "─" * 41,
        f"  Generated {_plural(result.total_pages, 'page')}",
    ]
    if result.total_assets > 0:
        lines.append(f"  Copied {_plural(result.total_assets, 'asset')}")
    if result.warnings:
        lines.append(f"  {_YELLOW}{_plural(len(result.warnings), 'warning')}{_RESET}")
    lines.append(f"  Output: {result.output_dir}")
    lines.append(f"  {_GREEN}Done{_RESET} in {result.duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)


def print_error(message: str) -> None:
    """Print a fatal build error to stderr."""
    print(f"\n  {_RED}{_BOLD}Build failed:{_RESET} {message}\n", file=sys.stderr)
