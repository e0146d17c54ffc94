"""yang2swagger -- Generate Swagger 2.0 API documents from YANG schema trees.

This package walks the data nodes and RPCs of one or more schema modules and
produces a Swagger document: a RESTCONF-style path for every container and
list, an operation per supported verb, and a reusable definition per data
node or grouping.

Typical workflow::

    yang2swagger generate network.yaml -m network -o network-api.yaml

Or from Python::

    from yang2swagger.parser import load_schema, resolve_schema
    from yang2swagger.generator import SwaggerGenerator

    context = resolve_schema(load_schema("network.yaml"))
    document = SwaggerGenerator(context, context.modules).generate()

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for the schema tree and generator configuration.
    swagger: Pydantic models for the generated Swagger document.
    config: Configuration file discovery and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.3.0"
