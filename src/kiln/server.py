"""Preview server for the built output directory.

The output tree is mounted at the site root through chirp's StaticFiles
middleware and served by pounce.  Resolution for a request path:

    1. The file at the path, if present
    2. The path's ``index.html``, if present (directories without a
       trailing slash are redirected first)
    3. ``404.html`` from the output root with status 404, if the site has one
    4. 404

Only for local previews; responses are sent with ``Cache-Control: no-cache``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chirp import App, AppConfig
from chirp.middleware import StaticFiles

from kiln.routes.paths import INDEX_DOCUMENT

if TYPE_CHECKING:
    from kiln.config import KilnConfig

NOT_FOUND_DOCUMENT = "404.html"


def create_app(config: KilnConfig) -> App:
    """Build a chirp App that serves ``config.output_path`` at ``/``."""
    app = App(config=AppConfig(
        host=config.host,
        port=config.port,
        debug=False,
        static_dir=None,
        # Serve built documents byte for byte, without chirp's htmx snippets
        safe_target=False,
        sse_lifecycle=False,
    ))
    app.add_middleware(StaticFiles(
        directory=config.output_path,
        prefix="/",
        index=INDEX_DOCUMENT,
        not_found_page=NOT_FOUND_DOCUMENT,
        cache_control="no-cache",
    ))
    return app


def run_server(config: KilnConfig) -> None:
    """Serve the output directory with a single pounce worker until interrupted."""
    from pounce.config import ServerConfig
    from pounce.server import Server

    server_config = ServerConfig(
        host=config.host,
        port=config.port,
        workers=1,
    )
    server = Server(server_config, create_app(config))
    server.run()
