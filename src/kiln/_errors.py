"""Kiln error hierarchy.

All kiln-specific errors inherit from KilnError for easy catching.
"""


class KilnError(Exception):
    """Base error for all kiln operations."""


class ConfigError(KilnError):
    """Invalid or missing configuration."""


class ContentError(KilnError):
    """Error in page content (loading, metadata, parameter results)."""


class DiscoveryError(ContentError):
    """The page-source tree could not be walked."""


class ExpansionError(ContentError):
    """A dynamic route produced an unusable parameter result."""


class ExportError(KilnError):
    """Error during static export."""


class RenderError(ExportError):
    """A concrete route failed to render or write."""
