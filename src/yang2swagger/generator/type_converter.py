"""Map leaf types onto Swagger property schemas.

Built-in types map through ``_TYPE_MAP``; anything the map does not know
(``identityref``, ``bits``, ``union``, ``instance-identifier`` and custom
names that resolve to nothing) degrades to a plain string. Typedef names are
resolved through the schema context before mapping, following chains of
typedefs until a built-in is reached.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Union

from yang2swagger.models import LeafListNode, LeafNode, SchemaContext, TypeSpec
from yang2swagger.swagger import ScalarProperty

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Type mapping
# ---------------------------------------------------------------------------

_TYPE_MAP: dict[str, tuple[str, Optional[str]]] = {
    "int8": ("integer", "int32"),
    "int16": ("integer", "int32"),
    "int32": ("integer", "int32"),
    "uint8": ("integer", "int32"),
    "uint16": ("integer", "int32"),
    "int64": ("integer", "int64"),
    "uint32": ("integer", "int64"),
    "uint64": ("integer", "int64"),
    "decimal64": ("number", "double"),
    "boolean": ("boolean", None),
    "empty": ("boolean", None),
    "binary": ("string", "byte"),
    "string": ("string", None),
    "enumeration": ("string", None),
    "leafref": ("string", None),
}

_BUILTIN_STRINGS = frozenset(
    {"identityref", "bits", "union", "instance-identifier"}
)

# "1..10" or "-5..5"; ranges with alternatives ("1..5 | 10..20") or the
# min/max keywords are not mapped
_SIMPLE_RANGE_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*\.\.\s*(-?\d+(?:\.\d+)?)\s*$")


def _parse_range(text: Optional[str]) -> tuple[Optional[float], Optional[float]]:
    if not text:
        return None, None
    match = _SIMPLE_RANGE_RE.match(text)
    if match is None:
        return None, None
    low, high = (float(v) for v in match.groups())
    return low, high


def _as_number(value: Optional[float]) -> Optional[Union[int, float]]:
    if value is not None and value.is_integer():
        return int(value)
    return value


class TypeConverter:
    """Turn leaf and leaf-list types into :class:`ScalarProperty` objects.

    Args:
        context: The schema context used to resolve typedef references.

    Example::

        converter = TypeConverter(context)
        prop = converter.convert(leaf)
        prop.type, prop.format
    """

    def __init__(self, context: SchemaContext) -> None:
        self._context = context

    def convert(self, node: Union[LeafNode, LeafListNode]) -> ScalarProperty:
        """Build the property describing a single value of *node*.

        For leaf-lists this is the ``items`` schema; the caller wraps it in
        an array.
        """
        spec, typedef_description = self._resolve(node.type, node.defined_in or node.module)
        prop = self._from_spec(spec)

        description = node.description or typedef_description
        if isinstance(node, LeafNode):
            prop.description = description
            prop.default = node.default
            if not node.is_configuration:
                prop.read_only = True
        return prop

    def convert_spec(self, spec: TypeSpec, module: str) -> ScalarProperty:
        """Build a property for a bare type statement seen in *module*."""
        resolved, _ = self._resolve(spec, module)
        return self._from_spec(resolved)

    # ------------------------------------------------------------------
    # Typedef resolution
    # ------------------------------------------------------------------

    def _resolve(self, spec: TypeSpec, module: str) -> tuple[TypeSpec, Optional[str]]:
        """Follow typedef references until a built-in type is reached.

        Restrictions written on the referencing statement win over the ones
        inherited from the typedef. The first typedef description found is
        returned alongside the resolved type.
        """
        description: Optional[str] = None
        seen: set[tuple[str, str]] = set()
        current = spec
        current_module = module
        overrides = spec.model_dump(exclude={"name", "types"}, exclude_defaults=True)

        while current.name not in _TYPE_MAP and current.name not in _BUILTIN_STRINGS:
            typedef, owner = self._context.find_typedef(current.name, current_module)
            if typedef is None:
                logger.debug(
                    "Unknown type %s in module %s, mapping to string",
                    current.name,
                    current_module,
                )
                return TypeSpec(name="string"), description
            if (owner, typedef.name) in seen:
                logger.warning("Circular typedef %s:%s, mapping to string", owner, typedef.name)
                return TypeSpec(name="string"), description
            seen.add((owner, typedef.name))
            if description is None:
                description = typedef.description
            current = typedef.type
            current_module = owner

        if overrides:
            current = current.model_copy(update=overrides)
        return current, description

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _from_spec(spec: TypeSpec) -> ScalarProperty:
        schema_type, schema_format = _TYPE_MAP.get(spec.name, ("string", None))
        prop = ScalarProperty(type=schema_type, format=schema_format)

        if spec.name == "enumeration" and spec.enum:
            prop.enum = list(spec.enum)
        elif spec.name == "string":
            prop.pattern = spec.pattern
            min_length, max_length = _parse_range(spec.length)
            prop.min_length = _as_number(min_length)
            prop.max_length = _as_number(max_length)
        elif spec.name == "leafref":
            prop.x_path = spec.path

        if schema_type in ("integer", "number"):
            minimum, maximum = _parse_range(spec.range)
            prop.minimum = _as_number(minimum)
            prop.maximum = _as_number(maximum)
        return prop
