"""Kiln configuration.

KilnConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class KilnConfig:
    """Configuration for a kiln build.

    Attributes:
        root: Path to the project root (contains pages/, public/, etc.).
              Always resolved to an absolute path on construction.
        pages_dir: Directory containing page definition modules.
        public_dir: Directory of static assets mirrored into the output root.
        output: Output directory for the generated site.
        base_url: Base URL for the site (enables sitemap generation).
        clean: Remove the output directory before building.
        minify: Minify every written document (HTML with inline CSS and JS).
        host: Bind address for ``kiln serve``.
        port: Bind port for ``kiln serve``.

    """

    root: Path = field(default_factory=Path.cwd)
    pages_dir: str = "pages"
    public_dir: str = "public"
    output: Path = field(default_factory=lambda: Path("dist"))
    base_url: str = ""
    clean: bool = False
    minify: bool = False
    host: str = "127.0.0.1"
    port: int = 3000

    def __post_init__(self) -> None:
        # watchfiles reports absolute paths; keep root comparable to them.
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

    @property
    def pages_path(self) -> Path:
        """Absolute path to the page-source directory."""
        return self.root / self.pages_dir

    @property
    def public_path(self) -> Path:
        """Absolute path to the static asset directory."""
        return self.root / self.public_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
