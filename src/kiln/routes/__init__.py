"""Route resolution — page discovery, loading and dynamic expansion.

Walks a ``pages/`` directory of Python modules, loads each page definition,
and resolves the full set of routes to render.

Public API::

    from kiln.routes import PageRegistry, discover_routes

    registry = PageRegistry(Path("my-site/pages"))
    routes = await discover_routes(registry.root, registry=registry, events=collector)
"""

from kiln.routes.discovery import discover_routes
from kiln.routes.expander import expand_dynamic_route
from kiln.routes.loader import PageDefinition, PageRegistry, PageUnit, load_page
from kiln.routes.models import Metadata, ParamResult, RouteDescriptor
from kiln.routes.paths import derive_output_file

__all__ = [
    "Metadata",
    "PageDefinition",
    "PageRegistry",
    "PageUnit",
    "ParamResult",
    "RouteDescriptor",
    "derive_output_file",
    "discover_routes",
    "expand_dynamic_route",
    "load_page",
]
