"""Model strategies -- turn schema nodes into reusable definitions.

The traversal engine and the path handlers only know the
:class:`DataObjectBuilder` interface: they ask for the definition name of a
node (:meth:`~DataObjectBuilder.get_name`) or a reference to it
(:meth:`~DataObjectBuilder.get_ref`) and register the node's model once its
subtree has been walked (:meth:`~DataObjectBuilder.add_model`).

Two strategies ship with the package:

* :class:`OptimizingDataObjectBuilder` (``optimizing``) emits one definition
  per grouping and composes node definitions from them with ``allOf``. A
  node that does nothing but use a single grouping becomes an alias
  wrapper, which the post-processor later removes.
* :class:`UnpackingDataObjectBuilder` (``unpacking``) inlines everything:
  each node becomes a plain object holding all of its effective children.

Definition names are the node's local name. When the name is already
taken, the parent's name is prefixed (``parent-name``), and if that is
taken too a numeric suffix is appended (``parent-name2``, ...). Names are
handed out per node instance and never change once assigned.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional, Union

from yang2swagger.generator.type_converter import TypeConverter
from yang2swagger.models import (
    ChoiceNode,
    ContainerNode,
    Grouping,
    LeafListNode,
    LeafNode,
    ListNode,
    Module,
    SchemaContext,
    Strategy,
)
from yang2swagger.swagger import (
    ArrayProperty,
    ComposedModel,
    Model,
    ModelImpl,
    Property,
    RefModel,
    RefProperty,
    Swagger,
)

logger = logging.getLogger(__name__)

ModelNode = Union[ContainerNode, ListNode]


def flatten_choices(children: Iterable) -> Iterator:
    """Yield *children* with every choice replaced by its cases' children."""
    for child in children:
        if isinstance(child, ChoiceNode):
            for case in child.cases:
                yield from flatten_choices(case.children)
        else:
            yield child


class DataObjectBuilder(ABC):
    """Registers definitions for schema nodes in the document."""

    @abstractmethod
    def process_module(self, module: Module) -> None:
        """Prepare a module before traversal (name its nodes, emit shared models)."""

    @abstractmethod
    def add_model(self, node: ModelNode) -> str:
        """Register the definition for *node* and return its name.

        Calling this again for the same node is a no-op.
        """

    @abstractmethod
    def get_name(self, node: ModelNode) -> str:
        """Return the definition name for *node*, assigning one if needed."""

    def get_ref(self, node: ModelNode) -> RefProperty:
        return RefProperty.to(self.get_name(node))


class AbstractDataObjectBuilder(DataObjectBuilder):
    """Naming, idempotent registration and property building shared by both strategies."""

    def __init__(
        self,
        context: SchemaContext,
        document: Swagger,
        converter: Optional[TypeConverter] = None,
        modules: Optional[Iterable[str]] = None,
    ) -> None:
        self._context = context
        # None means every module is selected
        self._modules = frozenset(modules) if modules is not None else None
        self._document = document
        self._converter = converter or TypeConverter(context)
        self._names: dict[int, str] = {}
        self._parents: dict[int, str] = {}
        self._added: set[int] = set()
        self._taken: set[str] = set(document.definitions or ())

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def process_module(self, module: Module) -> None:
        self._index(module.children, None, module.name)
        for rpc in module.rpcs:
            for body in (rpc.input, rpc.output):
                if body is not None:
                    self.get_name(body)
                    self._index(body.children, self.get_name(body), module.name)
        logger.debug("Named %d node(s) after processing %s", len(self._names), module.name)

    def _selected(self, node, owner_module: Optional[str]) -> bool:
        """False for a child grafted in by a module outside the selection."""
        if self._modules is None or not node.module or node.module == owner_module:
            return True
        return node.module in self._modules

    def _index(
        self, children: Iterable, parent: Optional[str], owner_module: Optional[str]
    ) -> None:
        for child in flatten_choices(children):
            if isinstance(child, (ContainerNode, ListNode)) and self._selected(child, owner_module):
                if parent is not None:
                    self._parents.setdefault(id(child), parent)
                name = self.get_name(child)
                self._index(child.children, name, child.module)

    def get_name(self, node: ModelNode) -> str:
        key = id(node)
        name = self._names.get(key)
        if name is None:
            parent = self._parents.get(key)
            if parent is None and len(node.schema_path) > 1:
                parent = node.schema_path[-2]
            name = self._reserve(node.name, parent)
            self._names[key] = name
        return name

    def _reserve(self, name: str, parent: Optional[str]) -> str:
        candidate = name
        if candidate in self._taken and parent:
            candidate = f"{parent}-{name}"
        base = candidate
        suffix = 2
        while candidate in self._taken:
            candidate = f"{base}{suffix}"
            suffix += 1
        self._taken.add(candidate)
        return candidate

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_model(self, node: ModelNode) -> str:
        name = self.get_name(node)
        if id(node) in self._added:
            return name
        self._added.add(id(node))
        self._document.add_definition(name, self._build_model(node))
        logger.debug("Registered definition %s for %s", name, node.qualified_name)
        return name

    @abstractmethod
    def _build_model(self, node: ModelNode) -> Model:
        ...

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def _plain(
        self,
        owner_module: str,
        children: Iterable,
        description: Optional[str] = None,
        keys: Iterable[str] = (),
    ) -> ModelImpl:
        properties: dict[str, Property] = {}
        required: list[str] = list(keys)
        for child in flatten_choices(children):
            if not self._selected(child, owner_module):
                logger.debug(
                    "Leaving %s out of the model, module %s is not selected",
                    child.qualified_name,
                    child.module,
                )
                continue
            prop = self._property(child)
            if prop is None:
                continue
            name = child.name if child.module == owner_module else child.qualified_name
            properties[name] = prop
            if isinstance(child, LeafNode) and child.mandatory and name not in required:
                required.append(name)
        return ModelImpl(
            description=description,
            properties=properties or None,
            required=required or None,
        )

    def _property(self, node) -> Optional[Property]:
        if isinstance(node, LeafNode):
            return self._converter.convert(node)
        if isinstance(node, LeafListNode):
            return ArrayProperty(
                items=self._converter.convert(node),
                description=node.description,
                min_items=node.min_elements,
                max_items=node.max_elements,
                read_only=True if not node.is_configuration else None,
            )
        if isinstance(node, ContainerNode):
            return RefProperty.to(self.add_model(node))
        if isinstance(node, ListNode):
            return ArrayProperty(
                items=RefProperty.to(self.add_model(node)),
                description=node.description,
                min_items=node.min_elements,
                max_items=node.max_elements,
            )
        return None


class OptimizingDataObjectBuilder(AbstractDataObjectBuilder):
    """One definition per grouping; nodes are ``allOf`` compositions of them.

    Example::

        builder = OptimizingDataObjectBuilder(context, document)
        builder.process_module(module)      # emits grouping definitions
        builder.add_model(container)        # {"allOf": [{"$ref": ...}, {...}]}
    """

    def __init__(
        self,
        context: SchemaContext,
        document: Swagger,
        converter: Optional[TypeConverter] = None,
        modules: Optional[Iterable[str]] = None,
    ) -> None:
        super().__init__(context, document, converter, modules)
        self._grouping_names: dict[int, str] = {}

    def process_module(self, module: Module) -> None:
        for grouping in module.groupings:
            self._add_grouping(grouping, module.name)
        super().process_module(module)

    def _add_grouping(self, grouping: Grouping, module: str) -> str:
        key = id(grouping)
        name = self._grouping_names.get(key)
        if name is not None:
            return name
        name = self._reserve(grouping.name, module)
        self._grouping_names[key] = name
        self._index((c for c in grouping.children if c.added_by_uses is None), name, module)
        self._document.add_definition(
            name,
            self._compose(grouping.uses, grouping.children, module, grouping.description),
        )
        logger.debug("Registered grouping definition %s", name)
        return name

    def _build_model(self, node: ModelNode) -> Model:
        keys = node.key if isinstance(node, ListNode) else ()
        return self._compose(
            node.uses, node.children, node.defined_in or node.module, node.description,
            owner_module=node.module, keys=keys,
        )

    def _compose(
        self,
        uses: list[str],
        children: list,
        lookup: str,
        description: Optional[str],
        owner_module: Optional[str] = None,
        keys: Iterable[str] = (),
    ) -> Model:
        owner_module = owner_module or lookup
        if not uses:
            return self._plain(owner_module, children, description, keys)

        parents: list[RefModel] = []
        for reference in uses:
            grouping = self._context.find_grouping(reference, lookup)
            if grouping is None:
                # the resolver rejects unknown groupings, so this only
                # happens for hand-built trees
                logger.warning("Unknown grouping %s referenced from %s", reference, lookup)
                continue
            parents.append(RefModel.to(self._add_grouping(grouping, grouping.module or lookup)))

        own = [child for child in children if child.added_by_uses is None]
        all_of: list[Union[RefModel, ModelImpl]] = [ref.model_copy() for ref in parents]
        if own or not parents:
            all_of.append(self._plain(owner_module, own, keys=keys))
        return ComposedModel(description=description, all_of=all_of, interfaces=parents)


class UnpackingDataObjectBuilder(AbstractDataObjectBuilder):
    """Every node becomes a plain object with all of its effective children."""

    def _build_model(self, node: ModelNode) -> Model:
        keys = node.key if isinstance(node, ListNode) else ()
        return self._plain(node.module, node.children, node.description, keys)


_STRATEGIES: dict[Strategy, type[AbstractDataObjectBuilder]] = {
    Strategy.OPTIMIZING: OptimizingDataObjectBuilder,
    Strategy.UNPACKING: UnpackingDataObjectBuilder,
}


def build_data_objects(
    strategy: Strategy,
    context: SchemaContext,
    document: Swagger,
    modules: Optional[Iterable[str]] = None,
) -> DataObjectBuilder:
    """Instantiate the model strategy selected by *strategy*.

    Children owned by a module outside *modules* are left out of every model.
    """
    return _STRATEGIES[Strategy(strategy)](context, document, modules=modules)
