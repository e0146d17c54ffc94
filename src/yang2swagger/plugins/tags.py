"""Built-in tag generators.

* :class:`SegmentTagGenerator` (``segment``) -- tags operations with the
  name of the top-level data node (or RPC) they belong to.
* :class:`ModuleTagGenerator` (``module``) -- tags operations with the name
  of the module that owns the segment.
* :class:`ConfigTagGenerator` (``config``) -- tags operations as
  ``configuration`` or ``operational`` depending on the segment's
  read-only flag.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from yang2swagger.plugins.base import TagGenerator

if TYPE_CHECKING:
    from yang2swagger.generator.path_segment import PathSegment


class SegmentTagGenerator(TagGenerator):
    @property
    def name(self) -> str:
        return "segment"

    @property
    def description(self) -> str:
        return "Tag with the top-level node name"

    def tags(self, segment: PathSegment) -> list[str]:
        top = segment.top
        return [top.name] if top is not None and top.name else []


class ModuleTagGenerator(TagGenerator):
    @property
    def name(self) -> str:
        return "module"

    @property
    def description(self) -> str:
        return "Tag with the owning module name"

    def tags(self, segment: PathSegment) -> list[str]:
        return [segment.module] if segment.module else []


class ConfigTagGenerator(TagGenerator):
    @property
    def name(self) -> str:
        return "config"

    @property
    def description(self) -> str:
        return "Tag configuration and operational data separately"

    def tags(self, segment: PathSegment) -> list[str]:
        return ["operational" if segment.read_only else "configuration"]


BUILTIN_TAG_GENERATORS: dict[str, type[TagGenerator]] = {
    "segment": SegmentTagGenerator,
    "module": ModuleTagGenerator,
    "config": ConfigTagGenerator,
}
"""Built-in generators by name; entry points may not shadow these."""
