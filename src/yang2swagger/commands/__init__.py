"""Built-in CLI sub-commands for yang2swagger.

* :mod:`~yang2swagger.commands.generate` -- produce a Swagger document from
  a schema document.
* :mod:`~yang2swagger.commands.inspect` -- examine modules, resolved trees
  and tag generators.

``generate`` is a plain callback registered directly on the root app;
``inspect`` is a :class:`typer.Typer` sub-application.
"""
