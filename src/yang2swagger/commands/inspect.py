"""Inspect commands -- examine a schema document and the available tag generators.

Provides the ``yang2swagger inspect`` sub-command group with read-only
commands: the modules a schema declares, the resolved data tree of one or
more modules (after groupings and augmentations are applied), and the tag
generators that ``generate --tag-generator`` accepts.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from yang2swagger.exceptions import Yang2SwaggerError
from yang2swagger.exit_codes import EXIT_CONFIG_ERROR
from yang2swagger.models import (
    CaseNode,
    ChoiceNode,
    ContainerNode,
    LeafListNode,
    LeafNode,
    ListNode,
    SchemaContext,
)
from yang2swagger.output import error, get_output, info
from yang2swagger.plugins import TagGeneratorManager


inspect_app = typer.Typer(no_args_is_help=True)


def _load_context(schema: str) -> SchemaContext:
    """Load and resolve *schema*, exiting with the error's code on failure."""
    from yang2swagger.parser import load_schema, resolve_schema

    try:
        return resolve_schema(load_schema(schema))
    except Yang2SwaggerError as exc:
        error(f"Failed to load schema: {exc}")
        raise typer.Exit(code=exc.exit_code) from None


@inspect_app.command("modules")
def inspect_modules(
    schema: str = typer.Argument(..., help="Schema document (file, URL or '-')."),
) -> None:
    """List the modules declared in a schema document.

    Example::

        yang2swagger inspect modules network.yaml
    """
    context = _load_context(schema)
    if not context.modules:
        info("No modules declared in this schema.")
        return

    headers = ["Module", "Prefix", "Revision", "Data nodes", "RPCs", "Groupings"]
    rows: list[list[str]] = []
    for module in context.modules:
        rows.append([
            module.name,
            module.prefix or "-",
            module.revision or "-",
            str(len(module.children)),
            str(len(module.rpcs)),
            str(len(module.groupings)),
        ])
    get_output().print_table(headers, rows, title=f"Modules ({len(rows)})")


def _label(node: Any) -> str:
    if isinstance(node, ListNode):
        label = f"{node.name} (list"
        if node.key:
            label += f", key: {' '.join(node.key)}"
        label += ")"
    elif isinstance(node, LeafNode):
        label = f"{node.name}: {node.type.name}"
    elif isinstance(node, LeafListNode):
        label = f"{node.name}: {node.type.name}[]"
    else:
        label = f"{node.name} ({node.kind})"
    if not node.is_configuration:
        label += " [ro]"
    if node.added_by_uses:
        label += f" <{node.added_by_uses}>"
    return label


def _node_tree(node: Any, owner: str) -> dict[str, Any]:
    label = _label(node)
    if node.module and node.module != owner:
        label = f"{node.module}:{label}"
    children: list[Any] = []
    if isinstance(node, ChoiceNode):
        children = node.cases
    elif isinstance(node, (ContainerNode, ListNode, CaseNode)):
        children = node.children
    return {"label": label, "children": [_node_tree(c, owner) for c in children]}


@inspect_app.command("tree")
def inspect_tree(
    schema: str = typer.Argument(..., help="Schema document (file, URL or '-')."),
    module: Optional[list[str]] = typer.Option(
        None, "--module", "-m", help="Module to show (repeatable, default: all)."
    ),
) -> None:
    """Show the resolved data tree of each module.

    Groupings are expanded and augmentations applied, so the tree is
    exactly what ``generate`` walks. Read-only nodes are marked ``[ro]``.

    Example::

        yang2swagger inspect tree network.yaml -m interfaces
    """
    context = _load_context(schema)
    names = module or context.module_names

    for name in names:
        found = context.find_module(name)
        if found is None:
            error(f"Unknown module '{name}'")
            raise typer.Exit(code=EXIT_CONFIG_ERROR)

        rpcs = [
            {
                "label": f"{rpc.name} (rpc)",
                "children": [
                    _node_tree(body, found.name)
                    for body in (rpc.input, rpc.output)
                    if body is not None
                ],
            }
            for rpc in found.rpcs
        ]
        get_output().print_tree(
            {
                "label": found.name,
                "children": [_node_tree(n, found.name) for n in found.children] + rpcs,
            }
        )


@inspect_app.command("tags")
def inspect_tags() -> None:
    """List the tag generators available to ``generate --tag-generator``.

    Example::

        yang2swagger inspect tags
    """
    rows = [
        [entry["name"], entry["source"], entry["description"] or "-"]
        for entry in TagGeneratorManager().list_generators()
    ]
    get_output().print_table(["Name", "Source", "Description"], rows, title="Tag generators")
