"""Page rendering — invoke a page unit and turn its output into markup.

The unit's calling convention was fixed at load time (``PageUnit.kind``):
async units are awaited with the props bag before their result reaches the
renderer; sync units are called directly.  The renderer itself may also
return an awaitable.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kiln._types import Props, Renderer
    from kiln.routes.loader import PageUnit


def render_markup(source: Any) -> str:
    """Default renderer.

    Accepts plain strings and objects implementing ``__html__()`` (the
    markupsafe protocol used by most Python template engines).

    Raises:
        TypeError: For any other markup source.

    """
    if isinstance(source, str):
        return source
    html = getattr(source, "__html__", None)
    if callable(html):
        return str(html())
    msg = f"Cannot render {type(source).__name__}; return str or an object with __html__()"
    raise TypeError(msg)


async def render_page(
    unit: PageUnit,
    props: Props,
    renderer: Renderer = render_markup,
) -> str:
    """Render *unit* with *props* and return markup text."""
    if unit.kind == "async":
        source = await unit.func(props)
    else:
        source = unit.func(props)

    markup = renderer(source)
    if inspect.isawaitable(markup):
        markup = await markup
    return markup
