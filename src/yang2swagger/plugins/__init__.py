"""Tag generators -- label generated operations with Swagger tags.

Third-party packages can register tag generators by declaring an entry
point in the ``yang2swagger.tag_generators`` group. At runtime,
:class:`TagGeneratorManager` resolves generator names (built-in or
discovered) into instances that the path handlers consult for every
operation they emit.

Key classes:

* :class:`TagGenerator` -- Abstract base class that all generators extend.
* :class:`TagGeneratorManager` -- Discovers and instantiates generators.

Example:
    Typical usage::

        from yang2swagger.plugins import TagGeneratorManager

        generators = TagGeneratorManager().create_all(["segment", "module"])
"""

from yang2swagger.plugins.base import TagGenerator
from yang2swagger.plugins.manager import TagGeneratorManager
from yang2swagger.plugins.tags import (
    ConfigTagGenerator,
    ModuleTagGenerator,
    SegmentTagGenerator,
)

__all__ = [
    "TagGenerator",
    "TagGeneratorManager",
    "SegmentTagGenerator",
    "ModuleTagGenerator",
    "ConfigTagGenerator",
]
