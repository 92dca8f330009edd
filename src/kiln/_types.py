"""Shared type definitions for kiln."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Literal, TypeAlias

# Mode of operation
KilnMode: TypeAlias = Literal["build", "watch", "serve"]

# Slash-separated logical route path (e.g., "todo/[id]")
LogicalPath: TypeAlias = str

# Output file relative to the output root (e.g., "todo/1/index.html")
OutputFile: TypeAlias = str

# Render-time properties handed to a page unit
Props: TypeAlias = Mapping[str, Any]

# Turns the markup source returned by a page unit into markup text
Renderer: TypeAlias = Callable[[Any], str | Awaitable[str]]

# Post-processing transform over a finished document (e.g., a minifier)
DocumentTransform: TypeAlias = Callable[[str], str]
