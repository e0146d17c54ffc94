"""Canonical Pydantic models shared across all yang2swagger modules.

The models fall into two groups:

**Schema tree models** -- the input of the generator, produced by
:func:`~yang2swagger.parser.resolver.resolve_schema` from a YAML/JSON schema
document:
    :class:`TypeSpec`, :class:`Typedef`, :class:`LeafNode`,
    :class:`LeafListNode`, :class:`ContainerNode`, :class:`ListNode`,
    :class:`CaseNode`, :class:`ChoiceNode`, :class:`Grouping`,
    :class:`Augment`, :class:`RpcNode`, :class:`Module` and
    :class:`SchemaContext`.

**Configuration models** -- the knobs of a generation run:
    :class:`Format`, :class:`Element`, :class:`Strategy` and
    :class:`GeneratorConfig`.

Data nodes form a discriminated union on the ``kind`` field (see
:data:`DataNode`). The attributes ``module``, ``defined_in``,
``schema_path`` and ``added_by_uses`` are not meant to be written by hand;
the resolver fills them in while expanding groupings and augmentations.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# --- Schema tree ---


class TypeSpec(BaseModel):
    """Type statement of a leaf, leaf-list or typedef.

    ``name`` is either a built-in type (``string``, ``uint32``,
    ``enumeration``, ``leafref``, ...) or the name of a typedef, optionally
    qualified with a module prefix (``inet:ip-address``). Restrictions that
    map onto Swagger keywords are kept; everything else is ignored.

    Example::

        TypeSpec(name="string", pattern="[a-z]+", length="1..64")
        TypeSpec(name="enumeration", enum=["up", "down"])
    """

    name: str
    enum: list[str] = Field(default_factory=list)
    pattern: Optional[str] = None
    length: Optional[str] = None
    range: Optional[str] = None
    fraction_digits: Optional[int] = None
    path: Optional[str] = Field(default=None, description="leafref target path")
    base: Optional[str] = Field(default=None, description="identityref base")
    types: list["TypeSpec"] = Field(
        default_factory=list, description="Member types of a union"
    )


def _coerce_type(value: object) -> object:
    """Accept ``type: string`` as shorthand for ``type: {name: string}``."""
    if isinstance(value, str):
        return {"name": value}
    return value


class Typedef(BaseModel):
    """A named, reusable type declared at module level."""

    name: str
    type: TypeSpec
    description: Optional[str] = None
    units: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce(cls, value: object) -> object:
        return _coerce_type(value)


class SchemaNodeBase(BaseModel):
    """Attributes shared by every data node.

    Attributes:
        name: Local name of the node.
        description: Free-text description from the schema.
        config: ``True`` for configuration (read/write) data, ``False`` for
            operational (read-only) data. ``None`` in the source document
            means "inherit"; after resolution it is always a bool.
        module: Name of the module that owns the node instance. Nodes added
            by an ``augment`` belong to the augmenting module.
        defined_in: Module whose namespace resolves the node's ``uses`` and
            typedef references (the module the statement was written in).
        schema_path: Local names from the module root down to this node,
            including choice and case names.
        added_by_uses: Qualified grouping name when the node was copied in
            by a ``uses`` statement of its parent.
    """

    name: str
    description: Optional[str] = None
    config: Optional[bool] = None
    module: str = ""
    defined_in: str = ""
    schema_path: list[str] = Field(default_factory=list)
    added_by_uses: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        """``module:name`` form of the node name."""
        return f"{self.module}:{self.name}" if self.module else self.name

    @property
    def is_configuration(self) -> bool:
        """Effective configuration flag (unset counts as configuration)."""
        return self.config is not False


class LeafNode(SchemaNodeBase):
    """A single scalar value."""

    kind: Literal["leaf"] = "leaf"
    type: TypeSpec
    mandatory: bool = False
    default: Optional[str] = None
    units: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce(cls, value: object) -> object:
        return _coerce_type(value)


class LeafListNode(SchemaNodeBase):
    """An ordered collection of scalar values."""

    kind: Literal["leaf-list"] = "leaf-list"
    type: TypeSpec
    min_elements: Optional[int] = None
    max_elements: Optional[int] = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce(cls, value: object) -> object:
        return _coerce_type(value)


class ContainerNode(SchemaNodeBase):
    """An interior node grouping child data nodes.

    Also used for RPC ``input`` and ``output`` statements, which is why
    ``kind`` has a default.
    """

    kind: Literal["container"] = "container"
    presence: Optional[str] = None
    uses: list[str] = Field(default_factory=list)
    children: list["DataNode"] = Field(default_factory=list)


class ListNode(SchemaNodeBase):
    """A keyed (or unkeyed) sequence of entries."""

    kind: Literal["list"] = "list"
    key: list[str] = Field(default_factory=list)
    min_elements: Optional[int] = None
    max_elements: Optional[int] = None
    uses: list[str] = Field(default_factory=list)
    children: list["DataNode"] = Field(default_factory=list)

    @field_validator("key", mode="before")
    @classmethod
    def _split_key(cls, value: object) -> object:
        # YANG writes keys as a space separated string
        if isinstance(value, str):
            return value.split()
        return value


class CaseNode(SchemaNodeBase):
    """One alternative of a :class:`ChoiceNode`."""

    kind: Literal["case"] = "case"
    uses: list[str] = Field(default_factory=list)
    children: list["DataNode"] = Field(default_factory=list)


class ChoiceNode(SchemaNodeBase):
    """Mutually exclusive alternatives.

    A choice carries no addressing or modelling identity of its own: both
    the path generator and the model builders see its cases' children as
    direct children of the choice's parent.
    """

    kind: Literal["choice"] = "choice"
    cases: list[CaseNode] = Field(default_factory=list)


DataNode = Annotated[
    Union[ContainerNode, ListNode, ChoiceNode, LeafNode, LeafListNode],
    Field(discriminator="kind"),
]
"""Any node that may appear in a ``children`` list."""

InteriorNode = Union[ContainerNode, ListNode]
"""Nodes that produce a path segment and a definition."""


class Grouping(BaseModel):
    """A reusable set of data nodes instantiated by ``uses`` statements."""

    name: str
    description: Optional[str] = None
    uses: list[str] = Field(default_factory=list)
    children: list[DataNode] = Field(default_factory=list)
    module: str = ""
    schema_path: list[str] = Field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        return f"{self.module}:{self.name}" if self.module else self.name


class Augment(BaseModel):
    """Data nodes grafted onto a node of (usually) another module.

    ``target`` is an absolute schema path such as ``/base:system/base:ntp``;
    unprefixed segments belong to the augmenting module.
    """

    target: str
    description: Optional[str] = None
    uses: list[str] = Field(default_factory=list)
    children: list[DataNode] = Field(default_factory=list)


class RpcNode(BaseModel):
    """A remote procedure with optional input and output bodies."""

    name: str
    description: Optional[str] = None
    input: Optional[ContainerNode] = None
    output: Optional[ContainerNode] = None
    module: str = ""

    @model_validator(mode="before")
    @classmethod
    def _name_bodies(cls, data: Any) -> Any:
        # input and output statements have no name of their own
        if isinstance(data, dict):
            for kind in ("input", "output"):
                body = data.get(kind)
                if isinstance(body, dict) and "name" not in body:
                    data = {**data, kind: {**body, "name": kind}}
        return data


class Module(BaseModel):
    """A schema module: the unit of selection for generation."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    prefix: Optional[str] = None
    namespace: Optional[str] = None
    revision: Optional[str] = None
    description: Optional[str] = None
    children: list[DataNode] = Field(default_factory=list, alias="data")
    groupings: list[Grouping] = Field(default_factory=list)
    typedefs: list[Typedef] = Field(default_factory=list)
    rpcs: list[RpcNode] = Field(default_factory=list)
    augments: list[Augment] = Field(default_factory=list)

    def find_grouping(self, name: str) -> Optional[Grouping]:
        return next((g for g in self.groupings if g.name == name), None)

    def find_typedef(self, name: str) -> Optional[Typedef]:
        return next((t for t in self.typedefs if t.name == name), None)


class SchemaContext(BaseModel):
    """The universe of parsed modules.

    Used by the generator to check that the selected modules exist and by
    the collaborators to resolve cross-module groupings and typedefs.
    """

    modules: list[Module] = Field(default_factory=list)

    @property
    def module_names(self) -> list[str]:
        return [m.name for m in self.modules]

    def find_module(self, name: str) -> Optional[Module]:
        """Look a module up by name, falling back to its prefix."""
        for module in self.modules:
            if module.name == name:
                return module
        for module in self.modules:
            if module.prefix and module.prefix == name:
                return module
        return None

    def find_grouping(self, reference: str, module: str) -> Optional[Grouping]:
        """Resolve a ``uses`` argument (``name`` or ``prefix:name``) seen in *module*."""
        owner, name = _split_qualified(reference, module)
        target = self.find_module(owner)
        return target.find_grouping(name) if target is not None else None

    def find_typedef(self, reference: str, module: str) -> tuple[Optional[Typedef], str]:
        """Resolve a typedef reference seen in *module*.

        Returns:
            ``(typedef, defining_module_name)``; the typedef is ``None`` when
            nothing matches.
        """
        owner, name = _split_qualified(reference, module)
        target = self.find_module(owner)
        if target is None:
            return None, owner
        return target.find_typedef(name), target.name


def _split_qualified(reference: str, default_module: str) -> tuple[str, str]:
    if ":" in reference:
        prefix, name = reference.split(":", 1)
        return prefix, name
    return default_module, reference


# --- Generator configuration ---


class Format(str, enum.Enum):
    """Textual format of the generated document."""

    YAML = "yaml"
    JSON = "json"


class Element(str, enum.Enum):
    """Schema elements that produce paths."""

    DATA = "data"
    """Containers and lists."""
    RPC = "rpc"
    """Remote procedure calls."""


class Strategy(str, enum.Enum):
    """How groupings are turned into definitions.

    ``optimizing`` emits one definition per grouping and composes node
    definitions from them; ``unpacking`` inlines grouping contents into
    every node that uses them.
    """

    OPTIMIZING = "optimizing"
    UNPACKING = "unpacking"


class GeneratorConfig(BaseModel):
    """Settings for a single generation run.

    Built from defaults, an optional project file, environment variables
    and CLI flags by :func:`~yang2swagger.config.resolve_config`, or
    constructed directly when using the library API.

    Example::

        GeneratorConfig(
            host="device.example.com",
            elements=[Element.DATA],
            strategy=Strategy.UNPACKING,
            tag_generators=["segment"],
        )
    """

    host: str = Field(default="localhost:8080", description="Swagger host")
    base_path: str = Field(default="/restconf", description="Swagger basePath")
    consumes: list[str] = Field(default_factory=lambda: ["application/json"])
    produces: list[str] = Field(default_factory=lambda: ["application/json"])
    version: str = Field(default="1.0.0-SNAPSHOT", description="API version")
    format: Format = Format.YAML
    elements: list[Element] = Field(
        default_factory=lambda: [Element.DATA, Element.RPC],
        description="Schema elements that produce paths",
    )
    strategy: Strategy = Strategy.OPTIMIZING
    tag_generators: list[str] = Field(
        default_factory=list, description="Names of tag generators to apply"
    )
    collapse_alias_chains: bool = Field(
        default=False,
        description="Collapse wrapper-of-wrapper definitions in a single run",
    )


ContainerNode.model_rebuild()
ListNode.model_rebuild()
CaseNode.model_rebuild()
ChoiceNode.model_rebuild()
Grouping.model_rebuild()
Augment.model_rebuild()
RpcNode.model_rebuild()
Module.model_rebuild()
TypeSpec.model_rebuild()
