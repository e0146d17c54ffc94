"""Exception hierarchy for yang2swagger.

All exceptions inherit from :class:`Yang2SwaggerError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`yang2swagger.exit_codes`. The CLI entry point in
:func:`yang2swagger.app.main` catches ``Yang2SwaggerError`` and exits with
the matching code.

Subclass hierarchy::

    Yang2SwaggerError     (exit 1)
    +-- InvalidUsageError (exit 2)
    +-- ConfigError       (exit 3)
    +-- SchemaParseError  (exit 4)
    +-- OutputError       (exit 5)
    +-- PluginError       (exit 10)
"""

from yang2swagger.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_OUTPUT_ERROR,
    EXIT_PLUGIN_ERROR,
    EXIT_SCHEMA_ERROR,
)


class Yang2SwaggerError(Exception):
    """Base exception for all yang2swagger errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(Yang2SwaggerError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(Yang2SwaggerError):
    """Raised when generation is requested with an unusable configuration.

    Covers an empty module selection, a missing required argument, no
    element kinds to emit, modules absent from the schema context, and
    invalid configuration files. Always raised before the output document
    is touched.
    """

    exit_code = EXIT_CONFIG_ERROR


class SchemaParseError(Yang2SwaggerError):
    """Raised when a schema document cannot be loaded or resolved."""

    exit_code = EXIT_SCHEMA_ERROR


class OutputError(Yang2SwaggerError):
    """Raised when the generated document cannot be written to its target."""

    exit_code = EXIT_OUTPUT_ERROR


class PluginError(Yang2SwaggerError):
    """Raised when a tag generator is unknown or fails to load."""

    exit_code = EXIT_PLUGIN_ERROR
