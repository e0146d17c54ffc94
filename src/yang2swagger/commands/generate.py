"""Generate command -- turn a schema document into a Swagger document.

Loads and resolves the schema, merges the configuration layers (flags,
environment, project file, defaults) and runs the
:class:`~yang2swagger.generator.SwaggerGenerator`. The document goes to
stdout unless ``--output`` names a file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from yang2swagger.config import resolve_config
from yang2swagger.exceptions import Yang2SwaggerError
from yang2swagger.generator import SwaggerGenerator
from yang2swagger.generator.writer import dump
from yang2swagger.models import Element, Format, Strategy
from yang2swagger.output import debug, error, print_document, success, suggest
from yang2swagger.parser import load_schema, resolve_schema


def generate_command(
    schema: str = typer.Argument(
        ..., help="Schema document: file path, http(s) URL, or '-' for stdin."
    ),
    module: Optional[list[str]] = typer.Option(
        None, "--module", "-m", help="Module to generate for (repeatable, default: all)."
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the document to this file instead of stdout."
    ),
    fmt: Optional[Format] = typer.Option(
        None, "--format", "-f", help="Output format."
    ),
    element: Optional[list[Element]] = typer.Option(
        None, "--element", "-e", help="Element kinds that produce paths (repeatable)."
    ),
    strategy: Optional[Strategy] = typer.Option(
        None, "--strategy", "-s", help="How groupings become definitions."
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Swagger host."),
    base_path: Optional[str] = typer.Option(None, "--base-path", help="Swagger basePath."),
    api_version: Optional[str] = typer.Option(
        None, "--api-version", help="Version string for the info section."
    ),
    tag_generator: Optional[list[str]] = typer.Option(
        None, "--tag-generator", "-t", help="Tag generator to apply (repeatable)."
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Project config file (JSON or YAML)."
    ),
    collapse_alias_chains: Optional[bool] = typer.Option(
        None,
        "--collapse-alias-chains/--no-collapse-alias-chains",
        help="Remove wrapper-of-wrapper definitions in a single run.",
    ),
) -> None:
    """Generate a Swagger 2.0 document from a schema document.

    Example::

        yang2swagger generate network.yaml -m interfaces -o api.yaml
        cat network.json | yang2swagger generate - --format json
    """
    try:
        config = resolve_config(
            config_file,
            host=host,
            base_path=base_path,
            version=api_version,
            format=fmt,
            elements=element or None,
            strategy=strategy,
            tag_generators=tag_generator or None,
            collapse_alias_chains=collapse_alias_chains,
        )
        context = resolve_schema(load_schema(schema))
        modules = module or context.module_names
        debug(f"Generating for modules: {', '.join(modules) or '-'}")

        generator = SwaggerGenerator(context, modules, config)
        if output_file is not None:
            document = generator.write(output_file)
            success(
                f"Wrote {output_file} ({len(document.paths)} paths, "
                f"{len(document.definitions or ())} definitions)"
            )
        else:
            document = generator.generate()
            print_document(dump(document, config.format), syntax=config.format.value)
    except Yang2SwaggerError as exc:
        error(str(exc))
        if not module and "No modules selected" in str(exc):
            suggest("The schema declares no modules; check its 'modules' list")
        raise typer.Exit(code=exc.exit_code) from None
