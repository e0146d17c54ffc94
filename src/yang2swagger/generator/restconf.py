"""Path strategies -- emit the operations for each schema node.

The traversal engine hands every container and list (together with its
current :class:`~yang2swagger.generator.path_segment.PathSegment`) to a
:class:`PathHandler`, and every RPC as an ``(input, output)`` pair. Which
paths and verbs come out is entirely up to the handler; the builder is the
per-run factory that binds handlers to the document and the model strategy.

:class:`RestconfPathHandlerBuilder` is the default, following the RESTCONF
resource layout:

=========================================  ====================================
Path                                       Operations
=========================================  ====================================
``/data/mod:a/b``  (container)             ``GET``; ``PUT``, ``POST``,
                                           ``DELETE`` when writable
``/data/mod:a/b={name}``  (list entry)     ``GET``; ``PUT``, ``DELETE`` when
                                           writable
``/data/mod:a/b``  (list collection)       ``GET`` (array); ``POST`` when
                                           writable
``/operations/mod:rpc``                    ``POST``
=========================================  ====================================

A segment is qualified with its module name when it is the first segment
or when its module differs from the segment above it (augmented nodes).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from yang2swagger.exceptions import ConfigError
from yang2swagger.generator.data_objects import DataObjectBuilder
from yang2swagger.generator.path_segment import PathSegment
from yang2swagger.generator.type_converter import TypeConverter
from yang2swagger.models import ContainerNode, LeafNode, ListNode, Module, SchemaContext
from yang2swagger.plugins.base import TagGenerator
from yang2swagger.swagger import (
    ArrayProperty,
    BodyParameter,
    Operation,
    Parameter,
    PathParameter,
    RefModel,
    RefProperty,
    Response,
    Swagger,
    Tag,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------


class PathHandler(ABC):
    """Emits the operations of one module into the document."""

    @abstractmethod
    def path(self, node: Union[ContainerNode, ListNode], segment: PathSegment) -> None:
        """Emit the operations addressing a single container or list."""

    @abstractmethod
    def rpc_path(
        self,
        input: Optional[ContainerNode],
        output: Optional[ContainerNode],
        segment: PathSegment,
    ) -> None:
        """Emit the operation invoking an RPC; either body may be ``None``."""


class PathHandlerBuilder(ABC):
    """Creates a :class:`PathHandler` per module for one generation run.

    :meth:`configure` is called once by the orchestrator before any handler
    is requested. Tag generators are kept across runs.
    """

    def __init__(self) -> None:
        self._tag_generators: list[TagGenerator] = []
        self.context: Optional[SchemaContext] = None
        self.document: Optional[Swagger] = None
        self.data_objects: Optional[DataObjectBuilder] = None

    def configure(
        self,
        context: SchemaContext,
        document: Swagger,
        data_objects: DataObjectBuilder,
    ) -> "PathHandlerBuilder":
        self.context = context
        self.document = document
        self.data_objects = data_objects
        return self

    def add_tag_generator(self, generator: TagGenerator) -> "PathHandlerBuilder":
        self._tag_generators.append(generator)
        return self

    @property
    def tag_generators(self) -> list[TagGenerator]:
        return list(self._tag_generators)

    @abstractmethod
    def for_module(self, module: Module) -> PathHandler:
        ...


# ---------------------------------------------------------------------------
# RESTCONF
# ---------------------------------------------------------------------------


class RestconfPathHandlerBuilder(PathHandlerBuilder):
    """Builds :class:`RestconfPathHandler` instances.

    Args:
        data_prefix: Prefix of data resource paths (relative to ``basePath``).
        operations_prefix: Prefix of RPC paths.
    """

    def __init__(self, data_prefix: str = "/data", operations_prefix: str = "/operations") -> None:
        super().__init__()
        self.data_prefix = data_prefix.rstrip("/")
        self.operations_prefix = operations_prefix.rstrip("/")

    def for_module(self, module: Module) -> "RestconfPathHandler":
        if self.context is None or self.document is None or self.data_objects is None:
            raise ConfigError("Path handler builder used before configure()")
        return RestconfPathHandler(
            module,
            self.document,
            self.data_objects,
            TypeConverter(self.context),
            self.tag_generators,
            data_prefix=self.data_prefix,
            operations_prefix=self.operations_prefix,
        )


class RestconfPathHandler(PathHandler):
    def __init__(
        self,
        module: Module,
        document: Swagger,
        data_objects: DataObjectBuilder,
        converter: TypeConverter,
        tag_generators: list[TagGenerator],
        data_prefix: str = "/data",
        operations_prefix: str = "/operations",
    ) -> None:
        self.module = module
        self._document = document
        self._data_objects = data_objects
        self._converter = converter
        self._tag_generators = tag_generators
        self._data_prefix = data_prefix
        self._operations_prefix = operations_prefix

    # ------------------------------------------------------------------
    # Data nodes
    # ------------------------------------------------------------------

    def path(self, node: Union[ContainerNode, ListNode], segment: PathSegment) -> None:
        name = self._data_objects.get_name(node)
        tags = self._tags(segment)

        if isinstance(node, ListNode):
            self._list_paths(node, name, segment, tags)
        else:
            self._container_paths(name, segment, tags)

    def _container_paths(self, name: str, segment: PathSegment, tags: list[str]) -> None:
        path = self._render(segment)
        params = self._path_parameters(segment)
        item = self._document.path(path)
        op_id = _operation_id(segment)

        item.get = self._get(name, op_id, params, tags)
        if segment.read_only:
            return
        item.put = self._put(name, op_id, params, tags)
        item.post = self._post(name, op_id, params, tags)
        item.delete = self._delete(name, op_id, params, tags)

    def _list_paths(
        self, node: ListNode, name: str, segment: PathSegment, tags: list[str]
    ) -> None:
        op_id = _operation_id(segment)

        if node.key:
            item = self._document.path(self._render(segment))
            params = self._path_parameters(segment)
            item.get = self._get(name, op_id, params, tags)
            if not segment.read_only:
                item.put = self._put(name, op_id, params, tags)
                item.delete = self._delete(name, op_id, params, tags)

        collection = self._document.path(self._render(segment, keyed=False))
        params = self._path_parameters(segment, include_last=False)
        collection.get = Operation(
            tags=tags or None,
            description=f"returns list of {name}",
            operation_id=f"get{op_id}List",
            parameters=list(params),
            responses={
                "200": Response(
                    description=name,
                    schema_=ArrayProperty(items=RefProperty.to(name)),
                ),
                "400": Response(description="Internal error"),
            },
        )
        if not segment.read_only:
            collection.post = self._post(name, f"{op_id}List", params, tags)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @staticmethod
    def _body(name: str, description: str) -> BodyParameter:
        return BodyParameter(
            name="body",
            description=description,
            schema_=RefModel.to(name),
        )

    def _get(self, name: str, op_id: str, params: list[Parameter], tags: list[str]) -> Operation:
        return Operation(
            tags=tags or None,
            description=f"returns {name}",
            operation_id=f"get{op_id}",
            parameters=list(params),
            responses={
                "200": Response(description=name, schema_=RefProperty.to(name)),
                "400": Response(description="Internal error"),
            },
        )

    def _put(self, name: str, op_id: str, params: list[Parameter], tags: list[str]) -> Operation:
        return Operation(
            tags=tags or None,
            description=f"creates or updates {name}",
            operation_id=f"update{op_id}",
            parameters=[*params, self._body(name, f"{name} to be added or updated")],
            responses={
                "201": Response(description="Object created"),
                "204": Response(description="Object modified"),
                "400": Response(description="Internal error"),
            },
        )

    def _post(self, name: str, op_id: str, params: list[Parameter], tags: list[str]) -> Operation:
        return Operation(
            tags=tags or None,
            description=f"creates {name}",
            operation_id=f"create{op_id}",
            parameters=[*params, self._body(name, f"{name} to be added")],
            responses={
                "201": Response(description="Object created"),
                "409": Response(description="Object already exists"),
                "400": Response(description="Internal error"),
            },
        )

    def _delete(self, name: str, op_id: str, params: list[Parameter], tags: list[str]) -> Operation:
        return Operation(
            tags=tags or None,
            description=f"removes {name}",
            operation_id=f"delete{op_id}",
            parameters=list(params),
            responses={
                "204": Response(description="Object deleted"),
                "400": Response(description="Internal error"),
            },
        )

    # ------------------------------------------------------------------
    # RPCs
    # ------------------------------------------------------------------

    def rpc_path(
        self,
        input: Optional[ContainerNode],
        output: Optional[ContainerNode],
        segment: PathSegment,
    ) -> None:
        path = f"{self._operations_prefix}/{segment.module}:{segment.name}"
        parameters: list[Parameter] = []
        responses: dict[str, Response] = {}

        if input is not None:
            name = self._data_objects.add_model(input)
            parameters.append(self._body(name, f"{name} input"))

        if output is not None:
            name = self._data_objects.add_model(output)
            responses["200"] = Response(description=name, schema_=RefProperty.to(name))
        else:
            responses["204"] = Response(description="Operation completed")
        responses["400"] = Response(description="Internal error")

        self._document.path(path).post = Operation(
            tags=self._tags(segment) or None,
            description=f"invokes {segment.name} operation of {segment.module}",
            operation_id=f"invoke{_operation_id(segment)}",
            parameters=parameters,
            responses=responses,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _render(self, segment: PathSegment, keyed: bool = True) -> str:
        """Render the RESTCONF path of *segment*.

        With ``keyed=False`` the last segment is rendered without its key
        parameters (the list collection path).
        """
        placeholders: dict[int, list[str]] = {}
        for owner, _, param in segment.key_parameters():
            placeholders.setdefault(id(owner), []).append(f"{{{param}}}")

        parts: list[str] = []
        for current in segment:
            text = f"{current.module}:{current.name}" if current.module_changed else current.name
            keys = placeholders.get(id(current))
            if keys and (keyed or current is not segment):
                text += "=" + ",".join(keys)
            parts.append(text)
        return f"{self._data_prefix}/" + "/".join(parts)

    def _path_parameters(self, segment: PathSegment, include_last: bool = True) -> list[Parameter]:
        params: list[Parameter] = []
        for owner, key, name in segment.key_parameters():
            if owner is segment and not include_last:
                continue
            param = PathParameter(name=name, description=f"Id of {owner.name}")
            if isinstance(key, LeafNode):
                prop = self._converter.convert(key)
                param.type = prop.type
                param.format = prop.format
            params.append(param)
        return params

    def _tags(self, segment: PathSegment) -> list[str]:
        tags: list[str] = []
        for generator in self._tag_generators:
            for tag in generator.tags(segment):
                if tag not in tags:
                    tags.append(tag)

        known = {tag.name for tag in self._document.tags or ()}
        for tag in tags:
            if tag not in known:
                if self._document.tags is None:
                    self._document.tags = []
                self._document.tags.append(Tag(name=tag))
                known.add(tag)
        return tags


def _operation_id(segment: PathSegment) -> str:
    """CamelCase identifier built from every segment name (``getInterfacesInterface``)."""
    return "".join(_camel(name) for name in segment.names)


def _camel(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.replace("_", "-").split("-") if part)
