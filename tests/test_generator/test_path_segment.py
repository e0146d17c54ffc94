"""Tests for yang2swagger.generator.path_segment -- the immutable path cursor."""

from __future__ import annotations

import pytest

from yang2swagger.generator.path_segment import PathSegment
from yang2swagger.models import LeafNode, ListNode


def _list(name: str, *keys: str, typed: bool = True) -> ListNode:
    children = [LeafNode(name=k, type="string") for k in keys] if typed else []
    return ListNode(name=name, key=list(keys), children=children)


class TestPushDrop:
    def test_root_is_unnamed(self) -> None:
        root = PathSegment.root("m")
        assert root.is_root
        assert root.name is None
        assert root.module == "m"
        assert list(root) == []
        assert root.depth == 0

    def test_push_returns_new_segment(self) -> None:
        root = PathSegment.root("m")
        child = root.push("a")
        assert child is not root
        assert child.parent is root
        assert child.module == "m"
        assert root.depth == 0
        assert child.depth == 1

    def test_push_overrides_module(self) -> None:
        child = PathSegment.root("m").push("a").push("b", "ext")
        assert child.module == "ext"

    def test_drop_returns_parent(self) -> None:
        root = PathSegment.root("m")
        child = root.push("a")
        assert child.drop() is root

    def test_drop_root_raises(self) -> None:
        with pytest.raises(ValueError, match="root"):
            PathSegment.root("m").drop()

    def test_segments_are_immutable(self) -> None:
        segment = PathSegment.root("m").push("a")
        with pytest.raises(AttributeError):
            segment.name = "b"  # type: ignore[misc]

    def test_siblings_share_parent_only(self) -> None:
        parent = PathSegment.root("m").push("a")
        left = parent.push("left")
        right = parent.push("right", read_only=True)
        assert left.names == ["a", "left"]
        assert right.names == ["a", "right"]
        assert not left.read_only
        assert right.read_only


class TestNavigation:
    def test_iteration_is_top_down(self) -> None:
        segment = PathSegment.root("m").push("a").push("b").push("c")
        assert [s.name for s in segment] == ["a", "b", "c"]
        assert segment.names == ["a", "b", "c"]

    def test_top(self) -> None:
        segment = PathSegment.root("m").push("a").push("b")
        assert segment.top.name == "a"
        assert PathSegment.root("m").top is None

    def test_module_changed(self) -> None:
        first = PathSegment.root("m").push("a")
        same = first.push("b")
        other = same.push("c", "ext")
        assert first.module_changed
        assert not same.module_changed
        assert other.module_changed


class TestKeyParameters:
    def test_container_has_no_parameters(self) -> None:
        segment = PathSegment.root("m").push("a")
        assert segment.key_parameters() == []

    def test_list_keys_become_parameters(self) -> None:
        node = _list("route", "prefix", "metric")
        segment = PathSegment.root("m").push("routes").push("route", list_node=node)
        params = segment.key_parameters()
        assert [p[2] for p in params] == ["prefix", "metric"]
        assert all(p[0] is segment for p in params)
        assert isinstance(params[0][1], LeafNode)
        assert params[0][1].name == "prefix"

    def test_untyped_key_falls_back_to_name(self) -> None:
        node = _list("entry", "id", typed=False)
        segment = PathSegment.root("m").push("entry", list_node=node)
        assert segment.key_parameters()[0][1] == "id"

    def test_colliding_key_names_are_qualified(self) -> None:
        outer = _list("network", "name")
        inner = _list("interface", "name")
        segment = (
            PathSegment.root("m")
            .push("network", list_node=outer)
            .push("interface", list_node=inner)
        )
        assert [p[2] for p in segment.key_parameters()] == ["name", "interface-name"]

    def test_repeated_collisions_get_suffix(self) -> None:
        first = _list("a", "id")
        second = _list("a", "id")
        third = _list("a", "id")
        segment = (
            PathSegment.root("m")
            .push("a", list_node=first)
            .push("a", list_node=second)
            .push("a", list_node=third)
        )
        assert [p[2] for p in segment.key_parameters()] == ["id", "a-id", "a-id2"]
