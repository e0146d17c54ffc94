"""Schema parser -- load a schema document and resolve it into a schema tree.

This sub-package is the first half of the yang2swagger pipeline: turning a
YAML/JSON description of YANG-style modules (local file, remote URL or
stdin) into a resolved :class:`~yang2swagger.models.SchemaContext` that the
generator can walk.

Typical usage::

    from yang2swagger.parser import load_schema, resolve_schema

    raw = load_schema("schemas/network.yaml")
    context = resolve_schema(raw)

Sub-modules:

* :mod:`~yang2swagger.parser.loader` -- I/O layer (URL, file, stdin) plus
  format detection.
* :mod:`~yang2swagger.parser.resolver` -- Grouping, augment and config
  resolution with circular ``uses`` detection.
"""

from yang2swagger.parser.loader import load_schema
from yang2swagger.parser.resolver import resolve_schema

__all__ = ["load_schema", "resolve_schema"]
