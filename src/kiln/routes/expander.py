"""Dynamic route expansion — one ``[name].py`` page into N concrete routes.

A dynamic page exports ``generate_static_params()`` returning an ordered
sequence of parameter results::

    async def generate_static_params():
        return [
            {"params": {"id": "1"}, "props": {...}, "metadata": {...}},
            {"params": {"id": "2"}},
        ]

Each result becomes one :class:`RouteDescriptor` whose output path has the
placeholder replaced by the parameter value.

Failure policy: a page that cannot be loaded, or whose hook raises, is
skipped with a warning so one broken page cannot block unrelated routes.
A result that loads fine but cannot produce a safe output path (missing
parameter, empty or path-like value, props violating ``props_schema``) is
an :class:`ExpansionError` and aborts the build.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from kiln._errors import ContentError, ExpansionError
from kiln.routes.models import ParamResult, RouteDescriptor
from kiln.routes.paths import dynamic_output_file, placeholder_name

if TYPE_CHECKING:
    from kiln.observability.collector import BuildCollector
    from kiln.routes.loader import PageDefinition, PageRegistry

# Parameter values that would escape or collapse the output directory
_UNSAFE_VALUES = frozenset({"", ".", ".."})


async def expand_dynamic_route(
    logical_path: str,
    source: Path,
    *,
    registry: PageRegistry,
    events: BuildCollector,
) -> list[RouteDescriptor]:
    """Expand the dynamic page at *source* into concrete route descriptors.

    Args:
        logical_path: Unexpanded route path (``todo/[id]``).
        source: Absolute path to the page module.
        registry: Per-build page manifest; the loaded page is cached there.
        events: Collector receiving skip warnings.

    Returns:
        One descriptor per parameter result, in hook order.  Empty when the
        page was skipped.

    Raises:
        ExpansionError: If a parameter result cannot be turned into a route.

    """
    try:
        definition = await asyncio.to_thread(registry.get, logical_path, source)
    except ContentError as exc:
        events.record_skipped(
            logical_path,
            "load_failed",
            f"Dynamic route {logical_path} failed to load: {exc}",
        )
        return []

    if definition.generate_params is None:
        events.record_skipped(
            logical_path,
            "no_params_hook",
            f"Dynamic route {logical_path} missing generate_static_params function",
        )
        return []

    try:
        raw_results = await _call_hook(definition.generate_params)
    except Exception as exc:
        events.record_skipped(
            logical_path,
            "hook_failed",
            f"Error generating params for dynamic route {logical_path}: {exc!r}",
        )
        return []

    if not raw_results:
        events.record_skipped(
            logical_path,
            "no_params",
            f"Dynamic route {logical_path} generated no params; no pages written",
        )
        return []

    name = placeholder_name(logical_path.rpartition("/")[2])
    return [
        _expand_one(definition, name, raw, index)
        for index, raw in enumerate(raw_results)
    ]


async def _call_hook(hook: Any) -> list[Any]:
    """Invoke a sync or async hook and materialise its results."""
    result = hook()
    if inspect.isawaitable(result):
        result = await result
    if isinstance(result, AsyncIterable):
        return [item async for item in result]
    if result is None:
        return []
    return list(result)


def _expand_one(
    definition: PageDefinition,
    name: str,
    raw: object,
    index: int,
) -> RouteDescriptor:
    origin = f"{definition.logical_path} (result #{index})"
    try:
        result = ParamResult.coerce(raw, origin=origin)
    except ContentError as exc:
        raise ExpansionError(str(exc)) from exc

    value = result.params.get(name)
    if value is None:
        msg = (
            f"{origin}: params {dict(result.params)!r} do not define "
            f"placeholder {name!r}"
        )
        raise ExpansionError(msg)
    if value in _UNSAFE_VALUES or "/" in value or "\\" in value:
        msg = f"{origin}: param {name}={value!r} is not a valid path segment"
        raise ExpansionError(msg)

    if definition.props_schema is not None:
        _check_props(definition.props_schema, result, origin)

    return RouteDescriptor(
        logical_path=definition.logical_path,
        output_file=dynamic_output_file(definition.logical_path, name, value),
        source=definition.source,
        is_dynamic=True,
        params=result.params,
        props=result.props,
        metadata=result.metadata,
    )


def _check_props(
    schema: Mapping[str, type],
    result: ParamResult,
    origin: str,
) -> None:
    for prop, expected in schema.items():
        if prop not in result.props:
            msg = f"{origin}: missing prop {prop!r} required by props_schema"
            raise ExpansionError(msg)
        actual = result.props[prop]
        if not isinstance(actual, expected):
            msg = (
                f"{origin}: prop {prop!r} must be {expected.__name__}, "
                f"got {type(actual).__name__}"
            )
            raise ExpansionError(msg)
