"""Swagger generator -- turn a resolved schema tree into a Swagger document.

This sub-package is the second half of the yang2swagger pipeline: taking a
:class:`~yang2swagger.models.SchemaContext` (produced by the parser) and
building a :class:`~yang2swagger.swagger.Swagger` document with paths for
every data node and RPC plus reusable definitions.

Typical usage::

    from yang2swagger.generator import SwaggerGenerator
    from yang2swagger.models import GeneratorConfig

    generator = SwaggerGenerator(context, ["interfaces"], GeneratorConfig())
    document = generator.generate()

Sub-modules:

* :mod:`~yang2swagger.generator.path_segment` -- Immutable path cursor.
* :mod:`~yang2swagger.generator.module_generator` -- Recursive traversal of
  one module.
* :mod:`~yang2swagger.generator.data_objects` -- Model strategies.
* :mod:`~yang2swagger.generator.restconf` -- Path strategies.
* :mod:`~yang2swagger.generator.postprocess` -- Alias removal and ``allOf``
  ordering.
* :mod:`~yang2swagger.generator.swagger_generator` -- The orchestrator.
* :mod:`~yang2swagger.generator.writer` -- YAML/JSON serialisation.
"""

from yang2swagger.generator.postprocess import postprocess
from yang2swagger.generator.swagger_generator import SwaggerGenerator

__all__ = ["SwaggerGenerator", "postprocess"]
