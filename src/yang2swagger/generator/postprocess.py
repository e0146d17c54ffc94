"""Post-processing of a generated document.

The model strategies may produce *alias wrappers*: composed definitions
whose ``allOf`` is a single reference and nothing else (typically a node
that only ``uses`` one grouping). :func:`postprocess` removes them:

1. **Reference map** -- every alias wrapper maps to the simple name of the
   definition it wraps (:func:`build_reference_map`). The map is built in
   one pass over the original definitions and is not transitive: sites
   referencing a wrapper of a wrapper end up pointing at the inner wrapper,
   which is removed as well. ``resolve_chains`` follows such chains to the
   final definition instead.
2. **Rewrite** -- every reference site is pointed at the replacement:
   model properties and array items (including those of every inline
   ``allOf`` part), ``allOf`` entries (in place, keeping their position)
   and the ``interfaces`` view, bare reference definitions, body parameters, response
   schemas, and the human-readable descriptions that mention the old name.
3. **Cleanup** -- the wrappers are deleted from ``definitions``.
4. **Ordering** -- every ``allOf`` is stably sorted: inline models first in
   their original order, then references by name
   (:func:`sort_definitions`).

Example::

    postprocess(document)
    "Wrapper" in document.definitions   # False once it only wrapped Base
"""

from __future__ import annotations

import logging
from typing import Optional

from yang2swagger.swagger import (
    ArrayProperty,
    BodyParameter,
    ComposedModel,
    Model,
    ModelImpl,
    Operation,
    Property,
    RefModel,
    RefProperty,
    Swagger,
)

logger = logging.getLogger(__name__)


def postprocess(document: Swagger, resolve_chains: bool = False) -> Swagger:
    """Remove alias wrappers from *document* and order ``allOf`` lists.

    The document is modified in place and returned for convenience.

    Args:
        document: The generated document.
        resolve_chains: Point references to a chain of wrappers
            (``W2 -> W1 -> Base``) at the final definition.
    """
    definitions = document.definitions
    if not definitions:
        logger.warning("Document has no definitions, skipping post-processing")
        return document

    replacements = build_reference_map(definitions, resolve_chains=resolve_chains)
    logger.debug("Replacing %d alias definition(s): %s", len(replacements), replacements)

    for name in list(definitions):
        definitions[name] = _rewrite_model(name, definitions[name], replacements)
    if replacements:
        for item in document.paths.values():
            for operation in item.operations():
                _rewrite_operation(operation, replacements)

    for name in replacements:
        definitions.pop(name, None)

    sort_definitions(definitions)
    return document


# ---------------------------------------------------------------------------
# Reference map
# ---------------------------------------------------------------------------


def build_reference_map(
    definitions: dict[str, Model], resolve_chains: bool = False
) -> dict[str, str]:
    """Map every alias wrapper to the name of the definition it wraps.

    A definition qualifies when it is a :class:`ComposedModel` whose
    ``allOf`` holds exactly one entry and that entry is a reference. A
    wrapper that refers to itself is left alone.
    """
    replacements: dict[str, str] = {}
    for name, model in definitions.items():
        if not isinstance(model, ComposedModel) or len(model.all_of) != 1:
            continue
        (parent,) = model.all_of
        if not isinstance(parent, RefModel):
            continue
        target = parent.simple_ref
        if target == name:
            logger.warning("Definition %s is an alias of itself, keeping it", name)
            continue
        replacements[name] = target

    if resolve_chains:
        return _close(replacements)
    for name, target in replacements.items():
        if target in replacements:
            logger.warning(
                "Definition %s wraps alias %s, references to it will not resolve "
                "without resolve_chains",
                name,
                target,
            )
    return replacements


def _close(replacements: dict[str, str]) -> dict[str, str]:
    """Follow each mapping to its final target; drop names caught in a cycle."""
    closed: dict[str, str] = {}
    for name, target in replacements.items():
        seen = {name}
        while target in replacements:
            if target in seen:
                logger.warning("Alias cycle through %s, keeping its definitions", name)
                target = None
                break
            seen.add(target)
            target = replacements[target]
        if target is not None:
            closed[name] = target
    return closed


# ---------------------------------------------------------------------------
# Rewriting
# ---------------------------------------------------------------------------


def _rewrite_model(name: str, model: Model, replacements: dict[str, str]) -> Model:
    if isinstance(model, ModelImpl):
        _rewrite_properties(name, model, replacements)
    elif isinstance(model, ComposedModel):
        for index, part in enumerate(model.all_of):
            if isinstance(part, ModelImpl):
                _rewrite_properties(name, part, replacements)
            else:
                model.all_of[index] = _replace_model(part, replacements)
        for index, ref in enumerate(model.interfaces):
            model.interfaces[index] = _replace_model(ref, replacements)
    elif isinstance(model, RefModel):
        return _replace_model(model, replacements)
    return model


def _rewrite_properties(name: str, model: ModelImpl, replacements: dict[str, str]) -> None:
    if model.properties is None:
        logger.warning("Empty model in %s", name)
        return
    for key, prop in model.properties.items():
        model.properties[key] = _replace_property(prop, replacements)


def _replace_property(prop: Property, replacements: dict[str, str]) -> Property:
    if isinstance(prop, RefProperty):
        target = replacements.get(prop.simple_ref)
        if target is not None:
            return RefProperty.to(target, description=prop.description)
    elif isinstance(prop, ArrayProperty):
        prop.items = _replace_property(prop.items, replacements)
    return prop


def _replace_model(model, replacements: dict[str, str]):
    if isinstance(model, RefModel):
        target = replacements.get(model.simple_ref)
        if target is not None:
            return RefModel.to(target)
    return model


def _rewrite_operation(operation: Operation, replacements: dict[str, str]) -> None:
    for param in operation.parameters:
        if isinstance(param, BodyParameter) and isinstance(param.schema_, RefModel):
            old = param.schema_.simple_ref
            new = replacements.get(old)
            if new is not None:
                param.schema_ = RefModel.to(new)
                param.description = _replace_text(param.description, old, new)

    for response in operation.responses.values():
        schema = response.schema_
        if isinstance(schema, RefProperty):
            old = schema.simple_ref
            new = replacements.get(old)
            if new is not None:
                response.schema_ = RefProperty.to(
                    new, description=_replace_text(schema.description, old, new)
                )
                response.description = _replace_text(response.description, old, new)
        elif isinstance(schema, ArrayProperty):
            response.schema_ = _replace_property(schema, replacements)

    if operation.description:
        for old, new in replacements.items():
            if old in operation.description:
                operation.description = operation.description.replace(old, new)
                break


def _replace_text(text: Optional[str], old: str, new: str) -> Optional[str]:
    if text is None:
        return None
    return text.replace(old, new)


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def _parent_order(part) -> tuple[int, str]:
    if isinstance(part, RefModel):
        return 1, part.simple_ref
    return 0, ""


def sort_definitions(definitions: dict[str, Model]) -> None:
    """Stably sort every ``allOf``: inline models first, then references by name."""
    for model in definitions.values():
        if isinstance(model, ComposedModel):
            model.all_of = sorted(model.all_of, key=_parent_order)
