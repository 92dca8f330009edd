"""Export layer — static output generation.

Renders every resolved route to an HTML document, mirrors public assets,
and writes the sitemap.
"""

from kiln.export.static import (
    ExportedFile,
    ExportResult,
    StaticExporter,
    check_clean_target,
    check_collisions,
)

__all__ = [
    "ExportResult",
    "ExportedFile",
    "StaticExporter",
    "check_clean_target",
    "check_collisions",
]
