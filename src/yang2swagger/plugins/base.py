"""Abstract base class for tag generators.

A tag generator labels the operations of a path with Swagger tags. Every
operation emitted by a path handler receives the union of the tags produced
by all configured generators, in registration order.

Tag generators are registered as entry points in the
``yang2swagger.tag_generators`` group and discovered at runtime by
:class:`~yang2swagger.plugins.manager.TagGeneratorManager`.

Example:
    Minimal tag generator::

        class OwnerTags(TagGenerator):
            @property
            def name(self) -> str:
                return "owner"

            def tags(self, segment):
                return ["network-team"] if segment.module == "interfaces" else []
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from yang2swagger.generator.path_segment import PathSegment


class TagGenerator(ABC):
    """Base class for all tag generators.

    Subclasses must implement :attr:`name` and :meth:`tags`. Generators are
    instantiated with no arguments and may be shared between modules, so
    :meth:`tags` should not keep per-call state.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique generator name used for lookup and ``--tag-generator``.

        Returns:
            A short identifier (e.g. ``"segment"``).
        """
        ...

    @property
    def description(self) -> str:
        """Return a one-line description shown by ``inspect tags``."""
        return ""

    @abstractmethod
    def tags(self, segment: PathSegment) -> list[str]:
        """Return the tags for the operations emitted at *segment*.

        Args:
            segment: The path segment of the node (or RPC) being emitted.

        Returns:
            Tag names, possibly empty.
        """
        ...
