"""Resolve a raw schema document into a :class:`~yang2swagger.models.SchemaContext`.

The raw document describes modules the way they are written: containers
that ``uses`` groupings, ``augment`` statements that graft nodes onto other
modules, and ``config`` flags that are only stated where they change. The
generator wants the *effective* tree instead, so :func:`resolve_schema`:

* validates the document against the schema tree models;
* instantiates every ``uses`` statement by deep-copying the grouping's
  nodes into the using node (grouping nodes come first, in ``uses`` order,
  followed by the node's own children) and marking the copies with
  ``added_by_uses``;
* applies ``augment`` statements, appending the augmenting nodes to their
  target and marking them as owned by the augmenting module;
* propagates ``config`` (a ``config: false`` ancestor makes the whole
  subtree read-only) and fills ``module``, ``defined_in`` and
  ``schema_path`` on every node;
* names RPC bodies ``<rpc>-input`` / ``<rpc>-output``.

Groupings are copied from a snapshot taken before any expansion, so a
grouping used in several places yields independent node instances.
Circular ``uses`` chains are detected via a ``seen`` set of grouping names
on the current expansion stack and rejected.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from yang2swagger.exceptions import SchemaParseError
from yang2swagger.models import (
    Augment,
    CaseNode,
    ChoiceNode,
    ContainerNode,
    Grouping,
    ListNode,
    Module,
    SchemaContext,
    SchemaNodeBase,
)

logger = logging.getLogger(__name__)

_Owner = Union[ContainerNode, ListNode, CaseNode, Grouping]


def resolve_schema(document: dict[str, Any]) -> SchemaContext:
    """Validate a raw schema document and resolve it into an effective tree.

    Args:
        document: The mapping returned by
            :func:`~yang2swagger.parser.loader.load_schema`.

    Returns:
        A fully resolved :class:`~yang2swagger.models.SchemaContext`.

    Raises:
        SchemaParseError: If the document does not match the schema models,
            declares a module twice, references an unknown grouping or
            augment target, or uses groupings circularly.

    Example::

        context = resolve_schema(load_schema("network.yaml"))
        [m.name for m in context.modules]
    """
    try:
        context = SchemaContext.model_validate(document)
    except ValidationError as exc:
        raise SchemaParseError(f"Invalid schema document: {exc}") from exc

    return _Resolver(context).resolve()


class _Resolver:
    def __init__(self, context: SchemaContext) -> None:
        self._context = context
        self._pristine: dict[tuple[str, str], Grouping] = {
            (module.name, grouping.name): grouping.model_copy(deep=True)
            for module in context.modules
            for grouping in module.groupings
        }

    def resolve(self) -> SchemaContext:
        seen_names: set[str] = set()
        for module in self._context.modules:
            if module.name in seen_names:
                raise SchemaParseError(f"Module '{module.name}' is declared twice")
            seen_names.add(module.name)

        for module in self._context.modules:
            self._resolve_module(module)

        for module in self._context.modules:
            for augment in module.augments:
                self._apply_augment(module, augment)

        logger.debug(
            "Resolved %d module(s): %s",
            len(self._context.modules),
            ", ".join(self._context.module_names),
        )
        return self._context

    # ------------------------------------------------------------------
    # Modules
    # ------------------------------------------------------------------

    def _resolve_module(self, module: Module) -> None:
        for grouping in module.groupings:
            grouping.module = module.name
            grouping.schema_path = [f"grouping:{grouping.name}"]
            self._expand(
                grouping,
                module.name,
                module.name,
                grouping.schema_path,
                True,
                frozenset({f"{module.name}:{grouping.name}"}),
            )

        for node in module.children:
            self._resolve_node(node, module.name, module.name, [], True, frozenset())

        for rpc in module.rpcs:
            rpc.module = module.name
            for kind, body in (("input", rpc.input), ("output", rpc.output)):
                if body is None:
                    continue
                body.name = f"{rpc.name}-{kind}"
                body.module = module.name
                body.defined_in = module.name
                body.config = True
                body.schema_path = [rpc.name, kind]
                self._expand(
                    body, module.name, module.name, body.schema_path, True, frozenset()
                )

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def _resolve_node(
        self,
        node: SchemaNodeBase,
        module: str,
        lookup: str,
        parent_path: list[str],
        parent_config: bool,
        seen: frozenset[str],
    ) -> None:
        if not node.module:
            node.module = module
        if not node.defined_in:
            node.defined_in = lookup
        node.schema_path = [*parent_path, node.name]
        node.config = parent_config and node.config is not False

        if isinstance(node, (ContainerNode, ListNode, CaseNode)):
            self._expand(
                node, node.module, node.defined_in, node.schema_path, node.config, seen
            )
        elif isinstance(node, ChoiceNode):
            for case in node.cases:
                self._resolve_node(
                    case, node.module, node.defined_in, node.schema_path, node.config, seen
                )

    def _expand(
        self,
        owner: _Owner,
        module: str,
        lookup: str,
        path: list[str],
        config: bool,
        seen: frozenset[str],
    ) -> None:
        """Replace ``owner.children`` with grouping copies plus own children, then recurse."""
        pending: list[tuple[Any, frozenset[str]]] = []
        for reference in owner.uses:
            grouping, grouping_module = self._lookup_grouping(reference, lookup)
            qualified = f"{grouping_module}:{grouping.name}"
            visited: set[str] = set()
            nodes = self._instantiate(grouping_module, grouping.name, seen, visited)
            for node in nodes:
                node.added_by_uses = qualified
                pending.append((node, seen | visited))
        pending.extend((child, seen) for child in owner.children)
        owner.children = [node for node, _ in pending]

        for child, child_seen in pending:
            self._resolve_node(child, module, lookup, path, config, child_seen)

    def _instantiate(
        self,
        module: str,
        name: str,
        seen: frozenset[str],
        visited: set[str],
    ) -> list[Any]:
        """Fresh copies of a grouping's nodes, with its own ``uses`` expanded first."""
        key = f"{module}:{name}"
        if key in seen or key in visited:
            raise SchemaParseError(f"Grouping '{key}' is used circularly")
        visited.add(key)

        grouping = self._pristine[(module, name)]
        nodes: list[Any] = []
        for reference in grouping.uses:
            inner, inner_module = self._lookup_grouping(reference, module)
            nodes.extend(self._instantiate(inner_module, inner.name, seen, visited))
        for child in grouping.children:
            copy = child.model_copy(deep=True)
            copy.defined_in = module
            nodes.append(copy)
        return nodes

    def _lookup_grouping(self, reference: str, lookup: str) -> tuple[Grouping, str]:
        grouping = self._context.find_grouping(reference, lookup)
        if grouping is None:
            raise SchemaParseError(
                f"Unknown grouping '{reference}' referenced from module '{lookup}'"
            )
        owner = self._context.find_module(reference.split(":", 1)[0]) if ":" in reference else None
        return grouping, owner.name if owner is not None else lookup

    # ------------------------------------------------------------------
    # Augmentations
    # ------------------------------------------------------------------

    def _apply_augment(self, module: Module, augment: Augment) -> None:
        target = self._find_target(augment.target, module)

        pending: list[tuple[Any, frozenset[str]]] = []
        for reference in augment.uses:
            grouping, grouping_module = self._lookup_grouping(reference, module.name)
            visited: set[str] = set()
            nodes = self._instantiate(grouping_module, grouping.name, frozenset(), visited)
            pending.extend((node, frozenset(visited)) for node in nodes)
        pending.extend(
            (child.model_copy(deep=True), frozenset()) for child in augment.children
        )

        for node, seen in pending:
            node.module = module.name
            target.children.append(node)
            self._resolve_node(
                node,
                module.name,
                node.defined_in or module.name,
                target.schema_path,
                target.is_configuration,
                seen,
            )
        logger.debug(
            "Augmented %s with %d node(s) from %s", augment.target, len(pending), module.name
        )

    def _find_target(self, target: str, module: Module) -> Union[ContainerNode, ListNode, CaseNode]:
        segments = [s for s in target.split("/") if s]
        if not segments:
            raise SchemaParseError(f"Empty augment target in module '{module.name}'")

        first_prefix = segments[0].split(":", 1)[0] if ":" in segments[0] else None
        target_module = (
            self._context.find_module(first_prefix) if first_prefix else module
        )
        if target_module is None:
            raise SchemaParseError(
                f"Augment target {target} refers to unknown module '{first_prefix}'"
            )

        current: Optional[Any] = None
        candidates: Iterable[Any] = target_module.children
        for segment in segments:
            name = segment.split(":", 1)[-1]
            current = next((c for c in candidates if c.name == name), None)
            if current is None:
                raise SchemaParseError(f"Augment target {target} not found")
            if isinstance(current, ChoiceNode):
                candidates = current.cases
            else:
                candidates = getattr(current, "children", [])

        if not isinstance(current, (ContainerNode, ListNode, CaseNode)):
            raise SchemaParseError(
                f"Augment target {target} is not a container, list or case"
            )
        return current
