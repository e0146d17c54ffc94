"""Pydantic models for the generated Swagger 2.0 document.

The generator builds a :class:`Swagger` instance in memory, the
post-processor rewrites it in place, and :mod:`yang2swagger.generator.writer`
serialises it with ``model_dump(by_alias=True, exclude_none=True)``.

Definitions come in three shapes (see :data:`Model`):

* :class:`ModelImpl` -- a plain object with named properties;
* :class:`ComposedModel` -- an ``allOf`` list of parent references and
  inline plain models;
* :class:`RefModel` -- a ``$ref`` to another definition.

Properties are :class:`ScalarProperty`, :class:`ArrayProperty` or
:class:`RefProperty` (see :data:`Property`). References are stored in their
serialised ``#/definitions/<name>`` form; ``simple_ref`` returns ``<name>``.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFINITIONS_PREFIX = "#/definitions/"


def _to_ref(name: str) -> str:
    if name.startswith("#/"):
        return name
    return DEFINITIONS_PREFIX + name


def _simple(ref: str) -> str:
    if ref.startswith(DEFINITIONS_PREFIX):
        return ref[len(DEFINITIONS_PREFIX):]
    return ref


class SwaggerObject(BaseModel):
    """Base for every document object: constructible by field name or alias."""

    model_config = ConfigDict(populate_by_name=True)


# --- Properties ---


class ScalarProperty(SwaggerObject):
    """A primitive-typed property (string, integer, number, boolean)."""

    type: str = "string"
    format: Optional[str] = None
    description: Optional[str] = None
    enum: Optional[list[str]] = None
    default: Optional[str] = None
    pattern: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    min_length: Optional[int] = Field(default=None, alias="minLength")
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    read_only: Optional[bool] = Field(default=None, alias="readOnly")
    x_path: Optional[str] = Field(default=None, alias="x-path")


class RefProperty(SwaggerObject):
    """A property whose value is another definition."""

    ref: str = Field(alias="$ref")
    description: Optional[str] = None

    @classmethod
    def to(cls, name: str, description: Optional[str] = None) -> "RefProperty":
        return cls(ref=_to_ref(name), description=description)

    @property
    def simple_ref(self) -> str:
        return _simple(self.ref)


class ArrayProperty(SwaggerObject):
    """An array of properties (scalars for leaf-lists, refs for lists)."""

    type: Literal["array"] = "array"
    items: "Property"
    description: Optional[str] = None
    min_items: Optional[int] = Field(default=None, alias="minItems")
    max_items: Optional[int] = Field(default=None, alias="maxItems")
    read_only: Optional[bool] = Field(default=None, alias="readOnly")


Property = Union[RefProperty, ArrayProperty, ScalarProperty]


# --- Models ---


class RefModel(SwaggerObject):
    """A model that is a reference to another definition."""

    ref: str = Field(alias="$ref")

    @classmethod
    def to(cls, name: str) -> "RefModel":
        return cls(ref=_to_ref(name))

    @property
    def simple_ref(self) -> str:
        return _simple(self.ref)


class ModelImpl(SwaggerObject):
    """A plain object model.

    ``properties`` is ``None`` (rather than empty) for a model that declares
    nothing at all; the post-processor reports such models.
    """

    type: str = "object"
    description: Optional[str] = None
    properties: Optional[dict[str, Property]] = None
    required: Optional[list[str]] = None


class ComposedModel(SwaggerObject):
    """An ``allOf`` composition of parent references and inline models.

    ``interfaces`` mirrors the parent references of ``all_of`` (in the
    order they were declared) and is not serialised.
    """

    description: Optional[str] = None
    all_of: list[Union[RefModel, ModelImpl]] = Field(
        default_factory=list, alias="allOf"
    )
    interfaces: list[RefModel] = Field(default_factory=list, exclude=True)


Model = Union[ComposedModel, ModelImpl, RefModel]


# --- Operations ---


class PathParameter(SwaggerObject):
    """A parameter substituted into the path template."""

    name: str
    in_: Literal["path"] = Field(default="path", alias="in")
    description: Optional[str] = None
    required: bool = True
    type: str = "string"
    format: Optional[str] = None


class QueryParameter(SwaggerObject):
    """A query-string parameter."""

    name: str
    in_: Literal["query"] = Field(default="query", alias="in")
    description: Optional[str] = None
    required: bool = False
    type: str = "string"
    enum: Optional[list[str]] = None


class BodyParameter(SwaggerObject):
    """The request body of an operation."""

    name: str
    in_: Literal["body"] = Field(default="body", alias="in")
    description: Optional[str] = None
    required: bool = True
    schema_: Model = Field(alias="schema")


Parameter = Union[BodyParameter, PathParameter, QueryParameter]


class Response(SwaggerObject):
    """A response for one status code."""

    description: str = ""
    schema_: Optional[Property] = Field(default=None, alias="schema")


class Operation(SwaggerObject):
    """A single HTTP verb on a path."""

    tags: Optional[list[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    consumes: Optional[list[str]] = None
    produces: Optional[list[str]] = None
    parameters: list[Parameter] = Field(default_factory=list)
    responses: dict[str, Response] = Field(default_factory=dict)


HTTP_METHODS = ("get", "put", "post", "patch", "delete")


class PathItem(SwaggerObject):
    """All operations available on one path."""

    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    patch: Optional[Operation] = None
    delete: Optional[Operation] = None

    def operations(self) -> list[Operation]:
        """Operations present on this path, in ``HTTP_METHODS`` order."""
        return [op for op in (getattr(self, m) for m in HTTP_METHODS) if op is not None]

    def set(self, method: str, operation: Operation) -> "PathItem":
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        setattr(self, method, operation)
        return self


# --- Document ---


class Info(SwaggerObject):
    title: Optional[str] = None
    description: Optional[str] = None
    version: Optional[str] = None


class Tag(SwaggerObject):
    name: str
    description: Optional[str] = None


class Swagger(SwaggerObject):
    """The Swagger 2.0 document produced by a generation run."""

    swagger: str = "2.0"
    info: Info = Field(default_factory=Info)
    host: Optional[str] = None
    base_path: Optional[str] = Field(default=None, alias="basePath")
    tags: Optional[list[Tag]] = None
    consumes: Optional[list[str]] = None
    produces: Optional[list[str]] = None
    paths: dict[str, PathItem] = Field(default_factory=dict)
    definitions: Optional[dict[str, Model]] = None

    def path(self, path: str) -> PathItem:
        """Return the :class:`PathItem` for *path*, creating it if needed."""
        item = self.paths.get(path)
        if item is None:
            item = PathItem()
            self.paths[path] = item
        return item

    def add_definition(self, name: str, model: Model) -> None:
        if self.definitions is None:
            self.definitions = {}
        self.definitions[name] = model


ArrayProperty.model_rebuild()
ComposedModel.model_rebuild()
BodyParameter.model_rebuild()
Response.model_rebuild()
Operation.model_rebuild()
ModelImpl.model_rebuild()
