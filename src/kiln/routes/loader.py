"""Page loader — import page definition modules and resolve their contract.

A page module lives under the page-source directory and exports:

    page(props)               — the renderable unit (``def`` or ``async def``)
    metadata                  — optional Metadata or mapping
    generate_static_params()  — optional, dynamic pages only (sync or async)
    props_schema              — optional ``{"name": type}`` prop contract

Modules are imported with ``importlib.util.spec_from_file_location`` and
resolved once into a :class:`PageDefinition`.  Whether the unit must be
awaited is decided here, at load time, and carried as ``PageUnit.kind``.
"""

from __future__ import annotations

import importlib.util
import inspect
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from kiln._errors import ContentError
from kiln.routes.models import Metadata

PAGE_SUFFIX = ".py"

# Name of the renderable unit inside a page module
_UNIT_NAME = "page"
_PARAMS_HOOK_NAME = "generate_static_params"

_MODULE_PREFIX = "kiln_pages"


@dataclass(frozen=True, slots=True)
class PageUnit:
    """The renderable unit of a page, tagged by calling convention.

    Attributes:
        func: Callable accepting the props bag and returning markup source.
        kind: ``"async"`` when *func* must be awaited, else ``"sync"``.

    """

    func: Callable[..., Any]
    kind: Literal["sync", "async"]

    @classmethod
    def from_callable(cls, func: Callable[..., Any]) -> PageUnit:
        kind: Literal["sync", "async"] = (
            "async" if inspect.iscoroutinefunction(func) else "sync"
        )
        return cls(func=func, kind=kind)


@dataclass(frozen=True, slots=True)
class PageDefinition:
    """A loaded page module, resolved into its exported contract.

    Attributes:
        logical_path: Unexpanded route path (``todo/[id]``).
        source: Absolute path to the page module.
        unit: The renderable unit.
        metadata: Statically declared metadata, if any.
        generate_params: Parameter-generation hook, if any.
        props_schema: Declared prop names and types, if any.

    """

    logical_path: str
    source: Path
    unit: PageUnit
    metadata: Metadata | None = None
    generate_params: Callable[[], Any] | None = None
    props_schema: Mapping[str, type] | None = None


class PageRegistry:
    """Per-build manifest mapping logical paths to loaded page definitions.

    Each page module is imported at most once per registry, so every
    descriptor expanded from one dynamic page shares a single definition.
    Pages can also be registered explicitly, bypassing the filesystem.

    """

    __slots__ = ("_pages", "_root")

    def __init__(self, root: Path) -> None:
        self._root = root
        self._pages: dict[str, PageDefinition] = {}

    @property
    def root(self) -> Path:
        """Page-source directory the manifest resolves modules against."""
        return self._root

    def __contains__(self, logical_path: str) -> bool:
        return logical_path in self._pages

    def __len__(self) -> int:
        return len(self._pages)

    def register(self, definition: PageDefinition) -> None:
        """Add a definition to the manifest, replacing any previous entry."""
        self._pages[definition.logical_path] = definition

    def source_for(self, logical_path: str) -> Path:
        """Filesystem location of the module behind *logical_path*."""
        *dirs, leaf = logical_path.split("/")
        return self._root.joinpath(*dirs, leaf + PAGE_SUFFIX)

    def get(self, logical_path: str, source: Path | None = None) -> PageDefinition:
        """Return the definition for *logical_path*, importing it on first use.

        *source* overrides the module location derived from the logical path.

        Raises:
            ContentError: If the module cannot be imported or lacks a page unit.

        """
        definition = self._pages.get(logical_path)
        if definition is None:
            definition = load_page(source or self.source_for(logical_path), logical_path)
            self._pages[logical_path] = definition
        return definition


def load_page(source: Path, logical_path: str) -> PageDefinition:
    """Import *source* and resolve it into a :class:`PageDefinition`.

    Raises:
        ContentError: If the module fails to import or its exports are invalid.

    """
    module = _load_module(source, logical_path)
    return _extract_definition(module, source, logical_path)


def _load_module(source: Path, logical_path: str) -> object:
    """Import a Python file as a module without touching ``sys.path``.

    The module is re-executed on every call so watch-mode rebuilds pick up
    edits.

    """
    # pages/todo/[id].py -> kiln_pages.todo.[id]
    module_name = _MODULE_PREFIX + "." + logical_path.replace("/", ".")

    spec = importlib.util.spec_from_file_location(module_name, source)
    if spec is None or spec.loader is None:
        msg = f"Cannot load page module {source}"
        raise ContentError(msg)

    try:
        module = importlib.util.module_from_spec(spec)
        # Registered so dataclasses and pickling inside pages can resolve it
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"Failed to load page module {source}: {exc}"
        raise ContentError(msg) from exc

    return module


def _extract_definition(
    module: object,
    source: Path,
    logical_path: str,
) -> PageDefinition:
    func = getattr(module, _UNIT_NAME, None)
    if func is None or not callable(func):
        msg = f"Page module {source} must define a callable '{_UNIT_NAME}(props)'"
        raise ContentError(msg)

    raw_metadata = getattr(module, "metadata", None)
    metadata = (
        None
        if raw_metadata is None
        else Metadata.coerce(raw_metadata, origin=str(source))
    )

    hook = getattr(module, _PARAMS_HOOK_NAME, None)
    if hook is not None and not callable(hook):
        msg = f"Page module {source}: '{_PARAMS_HOOK_NAME}' must be callable"
        raise ContentError(msg)

    schema = getattr(module, "props_schema", None)
    if schema is not None:
        schema = _validate_schema(schema, source)

    return PageDefinition(
        logical_path=logical_path,
        source=source,
        unit=PageUnit.from_callable(func),
        metadata=metadata,
        generate_params=hook,
        props_schema=schema,
    )


def _validate_schema(schema: object, source: Path) -> Mapping[str, type]:
    if not isinstance(schema, Mapping) or not all(
        isinstance(k, str) and isinstance(v, type) for k, v in schema.items()
    ):
        msg = f"Page module {source}: 'props_schema' must map prop names to types"
        raise ContentError(msg)
    return dict(schema)
