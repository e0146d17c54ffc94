"""Immutable path cursor used while walking a module.

A :class:`PathSegment` is one level of the generated resource hierarchy. The
traversal engine never mutates a segment: entering a container or list
creates a child with :meth:`PathSegment.push`, and leaving it simply
returns to the parent (:meth:`PathSegment.drop`). Only the chain from the
root to the active segment is reachable at any time, so the cursor can be
passed down recursive calls by value.

The root segment carries a module name but no local name and never appears
in a rendered path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from yang2swagger.models import LeafNode, ListNode


@dataclass(frozen=True)
class PathSegment:
    """One level of the resource path.

    Attributes:
        name: Local name of the schema node (``None`` for the root).
        module: Name of the module owning the node.
        read_only: ``True`` for operational data; path handlers emit only
            retrieval operations for read-only segments.
        list_node: The list node when the segment addresses list entries;
            its keys become path parameters.
        parent: The enclosing segment (``None`` for the root).
    """

    name: Optional[str] = None
    module: Optional[str] = None
    read_only: bool = False
    list_node: Optional[ListNode] = None
    parent: Optional["PathSegment"] = field(default=None, repr=False, compare=False)

    @classmethod
    def root(cls, module: str) -> "PathSegment":
        return cls(module=module)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def push(
        self,
        name: str,
        module: Optional[str] = None,
        read_only: bool = False,
        list_node: Optional[ListNode] = None,
    ) -> "PathSegment":
        """Return a new child segment of this one."""
        return PathSegment(
            name=name,
            module=module or self.module,
            read_only=read_only,
            list_node=list_node,
            parent=self,
        )

    def drop(self) -> "PathSegment":
        """Return the parent segment.

        Raises:
            ValueError: When called on the root segment.
        """
        if self.parent is None:
            raise ValueError("Cannot drop the root path segment")
        return self.parent

    def __iter__(self) -> Iterator["PathSegment"]:
        """Named segments from the top of the hierarchy down to this one."""
        chain: list[PathSegment] = []
        segment: Optional[PathSegment] = self
        while segment is not None:
            if segment.name is not None:
                chain.append(segment)
            segment = segment.parent
        return reversed(chain)

    @property
    def depth(self) -> int:
        return sum(1 for _ in self)

    @property
    def top(self) -> Optional["PathSegment"]:
        """The first named segment (the top-level data node), if any."""
        return next(iter(self), None)

    @property
    def module_changed(self) -> bool:
        """Whether this segment's module differs from the named segment above it.

        The first named segment always counts as a change, since rendered
        paths qualify it with its module.
        """
        parent = self.parent
        while parent is not None and parent.name is None:
            parent = parent.parent
        if parent is None:
            return True
        return parent.module != self.module

    @property
    def names(self) -> list[str]:
        return [segment.name for segment in self if segment.name is not None]

    def key_parameters(self) -> list[tuple["PathSegment", LeafNode | str, str]]:
        """Path parameters for every keyed list on the path.

        Returns:
            ``(segment, key, parameter_name)`` triples in path order, where
            *key* is the key leaf when the list declares it and the bare key
            name otherwise. A key name already taken higher up the path is
            renamed ``<list>-<key>``, then suffixed with a number until
            unique.
        """
        params: list[tuple[PathSegment, LeafNode | str, str]] = []
        taken: set[str] = set()
        for segment in self:
            if segment.list_node is None:
                continue
            for key in segment.list_node.key:
                param = key
                if param in taken:
                    param = f"{segment.name}-{key}"
                suffix = 2
                base = param
                while param in taken:
                    param = f"{base}{suffix}"
                    suffix += 1
                taken.add(param)
                params.append((segment, _key_leaf(segment.list_node, key) or key, param))
        return params


def _key_leaf(node: ListNode, key: str) -> Optional[LeafNode]:
    for child in node.children:
        if isinstance(child, LeafNode) and child.name == key:
            return child
    return None
