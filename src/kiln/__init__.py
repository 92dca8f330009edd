"""Kiln — a static site builder for Python page modules.

Each module under ``pages/`` is one page; ``[name].py`` modules are dynamic
pages expanded at build time from ``generate_static_params()``.

Quick start::

    import kiln

    kiln.build("my-site/", base_url="https://example.com")

Three modes::

    kiln.build("my-site/")        # One static build
    kiln.watch("my-site/")        # Rebuild on page changes
    kiln.serve("my-site/")        # Preview the output directory

"""

__version__ = "0.1.0"
__all__ = [
    "KilnConfig",
    "Metadata",
    "ParamResult",
    "__version__",
    "build",
    "build_site",
    "serve",
    "watch",
]

_LAZY = {
    "KilnConfig": "kiln.config",
    "Metadata": "kiln.routes.models",
    "ParamResult": "kiln.routes.models",
    "build": "kiln.app",
    "build_site": "kiln.app",
    "serve": "kiln.app",
    "watch": "kiln.app",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import kiln`` fast; page modules importing ``kiln.Metadata``
    only pay for the data model.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
