"""Tests for kiln.routes.loader — page module loading and the registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from kiln._errors import ContentError
from kiln.routes.loader import PageDefinition, PageRegistry, PageUnit, load_page
from kiln.routes.models import Metadata


class TestPageUnit:
    """PageUnit.from_callable — calling convention fixed at load time."""

    def test_sync(self) -> None:
        def page(props: object) -> str:
            return ""

        assert PageUnit.from_callable(page).kind == "sync"

    def test_async(self) -> None:
        async def page(props: object) -> str:
            return ""

        assert PageUnit.from_callable(page).kind == "async"

    def test_frozen(self) -> None:
        unit = PageUnit.from_callable(lambda props: "")
        with pytest.raises(AttributeError):
            unit.kind = "async"  # type: ignore[misc]


class TestLoadPage:
    """load_page — import a module and resolve its exports."""

    def test_static_page(self, write_page, static_page) -> None:
        path = write_page("about.py", static_page("About"))
        definition = load_page(path, "about")

        assert definition.logical_path == "about"
        assert definition.source == path
        assert definition.unit.kind == "sync"
        assert definition.metadata == Metadata(title="About", description="About About")
        assert definition.generate_params is None
        assert definition.props_schema is None

    def test_async_page_with_hook(self, write_page) -> None:
        path = write_page(
            "todo/[id].py",
            """
            def generate_static_params():
                return []

            async def page(props):
                return ""
            """,
        )
        definition = load_page(path, "todo/[id]")

        assert definition.unit.kind == "async"
        assert callable(definition.generate_params)
        assert definition.metadata is None

    def test_props_schema(self, write_page) -> None:
        path = write_page(
            "a.py",
            """
            props_schema = {"todo": dict, "count": int}

            def page(props):
                return ""
            """,
        )
        assert load_page(path, "a").props_schema == {"todo": dict, "count": int}

    def test_invalid_props_schema(self, write_page) -> None:
        path = write_page(
            "a.py",
            """
            props_schema = {"todo": "dict"}

            def page(props):
                return ""
            """,
        )
        with pytest.raises(ContentError, match="props_schema"):
            load_page(path, "a")

    def test_missing_page_callable(self, write_page) -> None:
        path = write_page("a.py", "metadata = None\n")
        with pytest.raises(ContentError, match="page\\(props\\)"):
            load_page(path, "a")

    def test_import_error_wrapped(self, write_page) -> None:
        path = write_page("broken.py", "raise RuntimeError('boom')\n")
        with pytest.raises(ContentError, match="boom") as exc_info:
            load_page(path, "broken")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_syntax_error_wrapped(self, write_page) -> None:
        path = write_page("bad.py", "def page(:\n")
        with pytest.raises(ContentError, match=str(path.name)):
            load_page(path, "bad")

    def test_non_callable_hook(self, write_page) -> None:
        path = write_page(
            "[id].py",
            """
            generate_static_params = [1, 2]

            def page(props):
                return ""
            """,
        )
        with pytest.raises(ContentError, match="generate_static_params"):
            load_page(path, "[id]")

    def test_reload_picks_up_edits(self, write_page) -> None:
        path = write_page("a.py", "def page(props):\n    return 'one'\n")
        assert load_page(path, "a").unit.func({}) == "one"

        path.write_text("def page(props):\n    return 'second'\n")
        assert load_page(path, "a").unit.func({}) == "second"


class TestPageRegistry:
    """PageRegistry — per-build manifest of loaded pages."""

    def test_source_for(self, registry: PageRegistry, pages_dir: Path) -> None:
        assert registry.source_for("todo/[id]") == pages_dir / "todo" / "[id].py"
        assert registry.source_for("index") == pages_dir / "index.py"

    def test_source_for_keeps_dots(self, registry: PageRegistry, pages_dir: Path) -> None:
        assert registry.source_for("v1.2") == pages_dir / "v1.2.py"

    def test_get_loads_once(self, registry: PageRegistry, write_page, static_page) -> None:
        write_page("about.py", static_page("About"))

        first = registry.get("about")
        second = registry.get("about")

        assert first is second
        assert "about" in registry
        assert len(registry) == 1

    def test_get_with_explicit_source(
        self, registry: PageRegistry, write_page, static_page,
    ) -> None:
        path = write_page("elsewhere/real.py", static_page("Real"))
        definition = registry.get("alias", path)
        assert definition.source == path

    def test_register_manifest_entry(self, registry: PageRegistry) -> None:
        definition = PageDefinition(
            logical_path="generated",
            source=Path("/virtual/generated.py"),
            unit=PageUnit.from_callable(lambda props: "<p>hi</p>"),
            metadata=Metadata(title="G", description="D"),
        )
        registry.register(definition)
        assert registry.get("generated") is definition

    def test_missing_module(self, registry: PageRegistry) -> None:
        with pytest.raises(ContentError):
            registry.get("nope")
