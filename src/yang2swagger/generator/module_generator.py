"""Module traversal engine -- walk one module and drive the collaborators.

:class:`ModuleGenerator` maps the schema tree of a module onto the path
hierarchy:

* a **container** pushes a segment (read-only when the node is operational
  data), asks the path handler for its operations, walks its children and
  finally registers its model;
* a **list** does the same with the list attached to the segment so its
  keys become path parameters;
* a **choice** is transparent: the children of every case are walked as if
  they were children of the choice's parent;
* **leafs** and **leaf-lists** produce nothing on their own, they only show
  up as properties of their parent's model;
* every **RPC** is handed to the path handler as an ``(input, output)`` pair
  under a segment named after it.

Nodes owned by a module outside the selected set (for instance, augmented in
by a module that was not selected) are skipped silently. Segments are
immutable and passed down the recursion by value, so every call sees exactly
the path from the root to its own node.
"""

from __future__ import annotations

import logging
from typing import Iterable

from yang2swagger.generator.data_objects import DataObjectBuilder
from yang2swagger.generator.path_segment import PathSegment
from yang2swagger.generator.restconf import PathHandler
from yang2swagger.models import (
    ChoiceNode,
    ContainerNode,
    Element,
    LeafListNode,
    LeafNode,
    ListNode,
    Module,
)

logger = logging.getLogger(__name__)


class ModuleGenerator:
    """Walks one module, emitting paths and models into the shared document.

    Args:
        module: The module to walk.
        modules: Names of every module selected for generation.
        elements: Which element kinds produce paths.
        handler: Path handler bound to *module*.
        data_objects: Model strategy shared by the whole run.
    """

    def __init__(
        self,
        module: Module,
        modules: Iterable[str],
        elements: Iterable[Element],
        handler: PathHandler,
        data_objects: DataObjectBuilder,
    ) -> None:
        self.module = module
        self._modules = frozenset(modules)
        self._elements = frozenset(Element(e) for e in elements)
        self._handler = handler
        self._data_objects = data_objects

    def generate(self) -> None:
        if Element.DATA in self._elements:
            root = PathSegment.root(self.module.name)
            for child in self.module.children:
                self._visit(child, root)

        if Element.RPC in self._elements:
            for rpc in self.module.rpcs:
                segment = PathSegment.root(self.module.name).push(rpc.name, self.module.name)
                self._handler.rpc_path(rpc.input, rpc.output, segment)
                logger.debug("Emitted rpc %s:%s", self.module.name, rpc.name)

    def _visit(self, node, parent: PathSegment) -> None:
        if node.module and node.module not in self._modules:
            logger.debug(
                "Skipping %s, module %s is not selected", node.qualified_name, node.module
            )
            return

        if isinstance(node, ContainerNode):
            segment = parent.push(node.name, node.module, read_only=not node.is_configuration)
            self._handler.path(node, segment)
            self._walk(node.children, segment)
            self._data_objects.add_model(node)
        elif isinstance(node, ListNode):
            segment = parent.push(
                node.name,
                node.module,
                read_only=not node.is_configuration,
                list_node=node,
            )
            self._handler.path(node, segment)
            self._walk(node.children, segment)
            self._data_objects.add_model(node)
        elif isinstance(node, ChoiceNode):
            for case in node.cases:
                self._walk(case.children, parent)
        elif isinstance(node, (LeafNode, LeafListNode)):
            pass
        else:
            logger.debug("Ignoring unsupported node %r", node)

    def _walk(self, children: Iterable, segment: PathSegment) -> None:
        for child in children:
            self._visit(child, segment)
