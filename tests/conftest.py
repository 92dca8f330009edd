"""Shared test fixtures for kiln."""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

import pytest

from kiln.observability.collector import BuildCollector
from kiln.observability.log import EventLog
from kiln.routes.loader import PageRegistry

STATIC_PAGE = """
metadata = {{"title": "{title}", "description": "About {title}"}}


def page(props):
    return "<h1>{title}</h1>"
"""

WritePage: TypeAlias = Callable[[str, str], Path]


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    """An empty ``pages/`` directory under a temporary project root."""
    d = tmp_path / "pages"
    d.mkdir()
    return d


@pytest.fixture
def write_page(pages_dir: Path) -> WritePage:
    """Write a page module at ``pages/<relative>`` and return its path.

    Source is dedented so tests can use indented triple-quoted strings.
    """

    def _write(relative: str, source: str) -> Path:
        path = pages_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def static_page() -> Callable[[str], str]:
    """Source for a static page titled *title* with metadata."""
    return lambda title: STATIC_PAGE.format(title=title)


@pytest.fixture
def registry(pages_dir: Path) -> PageRegistry:
    return PageRegistry(pages_dir)


@pytest.fixture
def events() -> BuildCollector:
    """A collector whose warnings are printed nowhere."""
    import io

    return BuildCollector(EventLog(), stream=io.StringIO())


@pytest.fixture
def todo_site(tmp_path: Path, write_page: WritePage, static_page: Callable[[str], str]) -> Path:
    """The index + ``todo/[id]`` site; returns the project root."""
    write_page("index.py", static_page("Home"))
    write_page(
        "todo/[id].py",
        """
        async def generate_static_params():
            return [
                {
                    "params": {"id": "1"},
                    "props": {"title": "Buy milk"},
                    "metadata": {"title": "Todo 1", "description": "Buy milk"},
                },
                {
                    "params": {"id": "2"},
                    "props": {"title": "Walk dog"},
                    "metadata": {"title": "Todo 2", "description": "Walk dog"},
                },
            ]


        async def page(props):
            return f"<h1>Todo #{props['params']['id']}: {props['title']}</h1>"
        """,
    )
    return tmp_path
