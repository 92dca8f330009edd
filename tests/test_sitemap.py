"""Tests for kiln.export.sitemap — sitemap.xml generation."""

from __future__ import annotations

from pathlib import Path
from xml.etree.ElementTree import fromstring

import pytest

from kiln.export.sitemap import (
    canonical_url,
    generate_sitemap,
    public_path,
    write_sitemap,
)
from kiln.routes.models import RouteDescriptor

_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _route(output_file: str) -> RouteDescriptor:
    return RouteDescriptor(
        logical_path=output_file.removesuffix("/index.html"),
        output_file=output_file,
        source=Path("/pages/x.py"),
    )


def _locs(xml: str) -> list[str]:
    root = fromstring(xml.split("\n", 1)[1])  # skip XML declaration
    return [url.find(f"{{{_NS}}}loc").text for url in root.findall(f"{{{_NS}}}url")]


class TestPublicPath:
    """public_path — output file to URL path."""

    def test_root_index(self) -> None:
        assert public_path("index.html") == "/"

    def test_nested_index(self) -> None:
        assert public_path("todo/1/index.html") == "/todo/1/"

    def test_non_index_file(self) -> None:
        assert public_path("feed.xml") == "/feed.xml"

    def test_index_suffix_needs_separator(self) -> None:
        assert public_path("myindex.html") == "/myindex.html"


class TestCanonicalUrl:
    """Exactly one slash between base and path."""

    @pytest.mark.parametrize(
        "base",
        ["https://example.com", "https://example.com/", "https://example.com///"],
    )
    def test_root(self, base: str) -> None:
        assert canonical_url(base, "index.html") == "https://example.com/"

    @pytest.mark.parametrize("base", ["https://example.com", "https://example.com/"])
    def test_nested(self, base: str) -> None:
        assert canonical_url(base, "about/index.html") == "https://example.com/about/"

    def test_base_with_subpath(self) -> None:
        assert canonical_url("https://example.com/blog/", "a/index.html") == (
            "https://example.com/blog/a/"
        )


class TestGenerateSitemap:
    """generate_sitemap — XML string generation."""

    def test_declaration_and_namespace(self) -> None:
        xml = generate_sitemap([_route("index.html")], "https://example.com")

        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        root = fromstring(xml.split("\n", 1)[1])
        assert root.tag == f"{{{_NS}}}urlset"

    def test_one_entry_per_route(self) -> None:
        routes = [_route("index.html"), _route("todo/1/index.html"), _route("todo/2/index.html")]
        assert _locs(generate_sitemap(routes, "https://example.com")) == [
            "https://example.com/",
            "https://example.com/todo/1/",
            "https://example.com/todo/2/",
        ]

    def test_empty(self) -> None:
        assert _locs(generate_sitemap([], "https://example.com")) == []

    def test_special_characters_escaped(self) -> None:
        xml = generate_sitemap([_route("a&b/index.html")], "https://example.com")
        assert "a&amp;b" in xml
        assert _locs(xml) == ["https://example.com/a&b/"]


class TestWriteSitemap:
    """write_sitemap — file output."""

    @pytest.mark.asyncio
    async def test_writes_file(self, tmp_path: Path) -> None:
        result = await write_sitemap(tmp_path, [_route("index.html")], "https://example.com")

        path = tmp_path / "sitemap.xml"
        assert path.exists()
        assert result.source_type == "sitemap"
        assert result.output_path == path
        assert result.size_bytes == path.stat().st_size

    @pytest.mark.asyncio
    async def test_missing_output_dir_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            await write_sitemap(tmp_path / "absent", [], "https://example.com")
