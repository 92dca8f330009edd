"""Tests for kiln.banner — startup banner and export summary output."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

from kiln.banner import print_banner, print_error, print_export_summary
from kiln.config import KilnConfig
from kiln.export.static import ExportResult
from kiln.observability.events import BuildWarning


def _capture(func: object, *args: object, **kwargs: object) -> str:
    buf = io.StringIO()
    with patch.object(sys, "stderr", buf):
        func(*args, **kwargs)  # type: ignore[operator]
    return buf.getvalue()


def _result(tmp_path: Path, **kwargs: object) -> ExportResult:
    defaults: dict[str, object] = {
        "files": (),
        "routes": (),
        "warnings": (),
        "total_pages": 3,
        "total_assets": 0,
        "duration_ms": 12.4,
        "output_dir": tmp_path / "dist",
    }
    defaults.update(kwargs)
    return ExportResult(**defaults)  # type: ignore[arg-type]


class TestPrintBanner:
    """Tests for the startup banner."""

    def test_contains_name_and_version(self, tmp_path: Path) -> None:
        from kiln import __version__

        output = _capture(print_banner, KilnConfig(root=tmp_path), "build")
        assert "kiln" in output
        assert __version__ in output

    def test_build_mode(self, tmp_path: Path) -> None:
        output = _capture(print_banner, KilnConfig(root=tmp_path), "build")
        assert "[build]" in output
        assert "pages:" in output
        assert "output:" in output

    def test_public_listed_only_when_present(self, tmp_path: Path) -> None:
        config = KilnConfig(root=tmp_path)
        assert "public:" not in _capture(print_banner, config, "build")

        (tmp_path / "public").mkdir()
        assert "public:" in _capture(print_banner, config, "build")

    def test_base_url_shown(self, tmp_path: Path) -> None:
        config = KilnConfig(root=tmp_path, base_url="https://example.com")
        assert "https://example.com" in _capture(print_banner, config, "build")

    def test_serve_shows_url(self, tmp_path: Path) -> None:
        config = KilnConfig(root=tmp_path, host="0.0.0.0", port=8080)
        output = _capture(print_banner, config, "serve")
        assert "[serve]" in output
        assert "http://0.0.0.0:8080" in output
        assert "pages:" not in output

    def test_watch_mode(self, tmp_path: Path) -> None:
        output = _capture(print_banner, KilnConfig(root=tmp_path), "watch")
        assert "[watch]" in output
        assert "Watching for changes" in output


class TestPrintExportSummary:

    def test_counts(self, tmp_path: Path) -> None:
        output = _capture(print_export_summary, _result(tmp_path))
        assert "Generated 3 pages" in output
        assert "Copied" not in output
        assert "warning" not in output
        assert "Done" in output

    def test_singular(self, tmp_path: Path) -> None:
        output = _capture(print_export_summary, _result(tmp_path, total_pages=1, total_assets=1))
        assert "Generated 1 page\n" in output
        assert "Copied 1 asset" in output

    def test_warnings_counted(self, tmp_path: Path) -> None:
        warnings = (BuildWarning("sitemap", "/out", "failed", 0),)
        output = _capture(print_export_summary, _result(tmp_path, warnings=warnings))
        assert "1 warning" in output

    def test_output_dir(self, tmp_path: Path) -> None:
        output = _capture(print_export_summary, _result(tmp_path))
        assert str(tmp_path / "dist") in output


class TestPrintError:

    def test_message(self) -> None:
        output = _capture(print_error, "Missing metadata in about.py")
        assert "Build failed:" in output
        assert "Missing metadata in about.py" in output
