"""Tests for the tag generator system.

Covers:
- TagGenerator ABC contract
- Built-in generators (segment, module, config)
- TagGeneratorManager: creation, unknown names, entry-point discovery,
  listing
"""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import pytest

from yang2swagger.exceptions import PluginError
from yang2swagger.generator.path_segment import PathSegment
from yang2swagger.plugins import (
    ConfigTagGenerator,
    ModuleTagGenerator,
    SegmentTagGenerator,
    TagGenerator,
    TagGeneratorManager,
)
from yang2swagger.plugins.manager import ENTRY_POINT_GROUP


# ---------------------------------------------------------------------------
# Test generators
# ---------------------------------------------------------------------------


class OwnerTags(TagGenerator):
    @property
    def name(self) -> str:
        return "owner"

    @property
    def description(self) -> str:
        return "Tag with the owning team"

    def tags(self, segment: PathSegment) -> list[str]:
        return ["network-team"]


class BrokenTags(TagGenerator):
    def __init__(self) -> None:
        raise RuntimeError("boom")

    @property
    def name(self) -> str:
        return "broken"

    def tags(self, segment: PathSegment) -> list[str]:
        return []


class NotAGenerator:
    pass


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


class TestTagGeneratorABC:
    def test_cannot_instantiate_abstract(self) -> None:
        with pytest.raises(TypeError):
            TagGenerator()  # type: ignore[abstract]

    def test_default_description(self) -> None:
        class Bare(TagGenerator):
            @property
            def name(self) -> str:
                return "bare"

            def tags(self, segment: PathSegment) -> list[str]:
                return []

        assert Bare().description == ""


# ---------------------------------------------------------------------------
# Built-ins
# ---------------------------------------------------------------------------


class TestBuiltins:
    def test_segment_uses_top_level_name(self) -> None:
        segment = PathSegment.root("m").push("system").push("ntp").push("server")
        assert SegmentTagGenerator().tags(segment) == ["system"]

    def test_segment_on_root(self) -> None:
        assert SegmentTagGenerator().tags(PathSegment.root("m")) == []

    def test_module(self) -> None:
        segment = PathSegment.root("m").push("system").push("ntp", "ext")
        assert ModuleTagGenerator().tags(segment) == ["ext"]

    @pytest.mark.parametrize(
        "read_only, expected",
        [(False, ["configuration"]), (True, ["operational"])],
    )
    def test_config(self, read_only: bool, expected: list[str]) -> None:
        segment = PathSegment.root("m").push("system", read_only=read_only)
        assert ConfigTagGenerator().tags(segment) == expected

    def test_names(self) -> None:
        names = [g().name for g in (SegmentTagGenerator, ModuleTagGenerator, ConfigTagGenerator)]
        assert names == ["segment", "module", "config"]


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------


class TestTagGeneratorManager:
    """Test entry-point discovery and lookup."""

    def _make_entry_point(self, name: str, target: Any, fail: bool = False) -> Any:
        """Create a mock entry point."""

        class MockEP:
            def __init__(self, n: str, obj: Any) -> None:
                self.name = n
                self._obj = obj

            def load(self) -> Any:
                if fail:
                    raise ImportError("missing module")
                return self._obj

        return MockEP(name, target)

    def _make_entry_points_result(self, eps: list[Any]) -> Any:
        """Create a mock entry_points() return value with select()."""

        class MockEPs:
            def __init__(self, items: list[Any]) -> None:
                self._items = items

            def select(self, group: str) -> list[Any]:
                if group == ENTRY_POINT_GROUP:
                    return self._items
                return []

        return MockEPs(eps)

    def _patched(self, eps: list[Any]):
        return patch(
            "yang2swagger.plugins.manager.importlib.metadata.entry_points",
            return_value=self._make_entry_points_result(eps),
        )

    def test_create_builtin_without_discovery(self) -> None:
        manager = TagGeneratorManager()
        with patch("yang2swagger.plugins.manager.importlib.metadata.entry_points") as mock_eps:
            generator = manager.create("segment")
        assert isinstance(generator, SegmentTagGenerator)
        mock_eps.assert_not_called()

    def test_create_all(self) -> None:
        generators = TagGeneratorManager().create_all(["config", "module"])
        assert [g.name for g in generators] == ["config", "module"]

    def test_discover_entry_point(self) -> None:
        manager = TagGeneratorManager()
        with self._patched([self._make_entry_point("owner", OwnerTags)]):
            loaded = manager.discover()
        assert loaded == ["owner"]
        assert isinstance(manager.create("owner"), OwnerTags)

    def test_create_triggers_discovery(self) -> None:
        manager = TagGeneratorManager()
        with self._patched([self._make_entry_point("owner", OwnerTags)]):
            generator = manager.create("owner")
        assert generator.tags(PathSegment.root("m").push("x")) == ["network-team"]

    def test_builtin_cannot_be_shadowed(self) -> None:
        manager = TagGeneratorManager()
        with self._patched([self._make_entry_point("segment", OwnerTags)]):
            loaded = manager.discover()
        assert loaded == []
        assert isinstance(manager.create("segment"), SegmentTagGenerator)

    def test_failed_load_skipped(self, caplog) -> None:
        manager = TagGeneratorManager()
        with self._patched([self._make_entry_point("owner", OwnerTags, fail=True)]):
            loaded = manager.discover()
        assert loaded == []
        assert "Failed to load tag generator 'owner'" in caplog.text

    def test_non_generator_skipped(self, caplog) -> None:
        manager = TagGeneratorManager()
        with self._patched([self._make_entry_point("odd", NotAGenerator)]):
            loaded = manager.discover()
        assert loaded == []
        assert "does not refer to a TagGenerator subclass" in caplog.text

    def test_unknown_name(self) -> None:
        manager = TagGeneratorManager()
        with self._patched([]):
            with pytest.raises(PluginError, match="Unknown tag generator 'nope'") as exc_info:
                manager.create("nope")
        assert "config, module, segment" in str(exc_info.value)

    def test_constructor_failure(self) -> None:
        manager = TagGeneratorManager()
        with self._patched([self._make_entry_point("broken", BrokenTags)]):
            with pytest.raises(PluginError, match="Failed to create tag generator 'broken'"):
                manager.create("broken")

    def test_list_generators(self) -> None:
        manager = TagGeneratorManager()
        with self._patched([self._make_entry_point("owner", OwnerTags)]):
            rows = manager.list_generators()
        by_name = {row["name"]: row for row in rows}
        assert by_name["segment"]["source"] == "builtin"
        assert by_name["owner"]["source"] == "entry-point"
        assert by_name["owner"]["description"] == "Tag with the owning team"

    def test_list_generators_describes_broken_as_empty(self, caplog) -> None:
        manager = TagGeneratorManager()
        with self._patched([self._make_entry_point("broken", BrokenTags)]):
            rows = manager.list_generators()
        broken = next(row for row in rows if row["name"] == "broken")
        assert broken["description"] == ""
        assert "Cannot describe tag generator 'broken'" in caplog.text
