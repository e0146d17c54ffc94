"""Numeric process exit codes for the ``yang2swagger`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~yang2swagger.exceptions.Yang2SwaggerError` subclass.
Build scripts can inspect the exit code to tell a broken schema from a
broken configuration without parsing stderr.

Example::

    $ yang2swagger generate broken.yaml
    $ echo $?
    4   # EXIT_SCHEMA_ERROR -- the schema document could not be resolved
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_CONFIG_ERROR = 3
"""The generator configuration is incomplete or invalid."""

EXIT_SCHEMA_ERROR = 4
"""The schema document could not be loaded or resolved."""

EXIT_OUTPUT_ERROR = 5
"""The generated document could not be written."""

EXIT_PLUGIN_ERROR = 10
"""A tag generator plugin failed to load."""
