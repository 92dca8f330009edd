"""Tests for kiln._cli — argument parsing and command dispatch."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from kiln._cli import _build_parser, _overrides, main
from kiln._errors import ExportError


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_build_default_args(self) -> None:
        args = _build_parser().parse_args(["build"])
        assert args.command == "build"
        assert args.root == "."
        assert args.output is None
        assert args.base_url is None
        assert args.clean is None
        assert args.minify is None

    def test_build_with_flags(self) -> None:
        args = _build_parser().parse_args([
            "build", "site/", "--output", "out", "--pages", "src/pages",
            "--public", "static", "--base-url", "https://example.com", "--clean",
        ])
        assert args.root == "site/"
        assert args.output == "out"
        assert args.pages_dir == "src/pages"
        assert args.public_dir == "static"
        assert args.base_url == "https://example.com"
        assert args.clean is True

    def test_watch_shares_build_args(self) -> None:
        args = _build_parser().parse_args(["watch", "--base-url", "https://x.dev"])
        assert args.command == "watch"
        assert args.base_url == "https://x.dev"

    def test_serve_args(self) -> None:
        args = _build_parser().parse_args(["serve", "--host", "0.0.0.0", "--port", "8080"])
        assert args.command == "serve"
        assert args.host == "0.0.0.0"
        assert args.port == 8080

    def test_minify_flag(self) -> None:
        args = _build_parser().parse_args(["build", "--minify"])
        assert args.minify is True
        assert _overrides(args) == {"minify": True}

    def test_serve_rejects_build_flags(self) -> None:
        with pytest.raises(SystemExit), patch.object(sys, "stderr", io.StringIO()):
            _build_parser().parse_args(["serve", "--clean"])

    def test_no_command(self) -> None:
        args = _build_parser().parse_args([])
        assert args.command is None


class TestOverrides:

    def test_unset_flags_omitted(self) -> None:
        args = _build_parser().parse_args(["build"])
        assert _overrides(args) == {}

    def test_given_flags_kept(self) -> None:
        args = _build_parser().parse_args(["build", "--output", "out", "--clean"])
        assert _overrides(args) == {"output": "out", "clean": True}

    def test_serve_flags(self) -> None:
        args = _build_parser().parse_args(["serve", "--port", "9000"])
        assert _overrides(args) == {"port": 9000}


class TestMain:

    def test_no_command_prints_help(self) -> None:
        buf = io.StringIO()
        with patch.object(sys, "stdout", buf), pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "kiln" in buf.getvalue()

    def test_dispatches_build(self) -> None:
        with patch("kiln.app.build") as build:
            main(["build", "site/", "--base-url", "https://example.com"])
        build.assert_called_once_with(root="site/", base_url="https://example.com")

    def test_kiln_error_exits_1(self) -> None:
        buf = io.StringIO()
        with (
            patch("kiln.app.build", side_effect=ExportError("Missing metadata in a.py")),
            patch.object(sys, "stderr", buf),
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["build"])
        assert exc_info.value.code == 1
        assert "Missing metadata in a.py" in buf.getvalue()

    def test_build_end_to_end(self, tmp_path: Path, write_page, static_page) -> None:
        write_page("index.py", static_page("Home"))

        with patch.object(sys, "stderr", io.StringIO()):
            main(["build", str(tmp_path)])

        assert (tmp_path / "dist" / "index.html").is_file()
