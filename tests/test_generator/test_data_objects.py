"""Tests for yang2swagger.generator.data_objects -- the model strategies.

Covers:
- Definition naming and collision handling
- Idempotent registration
- Property building (leaf, leaf-list, container, list, choice, augmented)
- Optimizing strategy: grouping definitions, alias wrappers, composition
- Unpacking strategy: inlined grouping contents
- Leaving out children grafted in by unselected modules
- Strategy selection
"""

from __future__ import annotations

import pytest

from yang2swagger.generator.data_objects import (
    OptimizingDataObjectBuilder,
    UnpackingDataObjectBuilder,
    build_data_objects,
    flatten_choices,
)
from yang2swagger.models import Strategy
from yang2swagger.swagger import (
    ArrayProperty,
    ComposedModel,
    ModelImpl,
    RefModel,
    RefProperty,
    ScalarProperty,
    Swagger,
)


def _nodes(context):
    interfaces = context.find_module("interfaces").children[0]
    interface = interfaces.children[0]
    statistics = next(c for c in interface.children if c.name == "statistics")
    return interfaces, interface, statistics


@pytest.fixture
def optimizing(network_context):
    document = Swagger()
    builder = OptimizingDataObjectBuilder(network_context, document)
    for module in network_context.modules:
        builder.process_module(module)
    return builder, document


@pytest.fixture
def unpacking(network_context):
    document = Swagger()
    builder = UnpackingDataObjectBuilder(network_context, document)
    for module in network_context.modules:
        builder.process_module(module)
    return builder, document


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


class TestNaming:
    def test_local_names(self, optimizing, network_context) -> None:
        builder, _ = optimizing
        interfaces, interface, statistics = _nodes(network_context)
        assert builder.get_name(interfaces) == "interfaces"
        assert builder.get_name(interface) == "interface"
        assert builder.get_name(statistics) == "statistics"

    def test_rpc_bodies_named(self, optimizing, network_context) -> None:
        builder, _ = optimizing
        rpc = network_context.find_module("interfaces").rpcs[0]
        assert builder.get_name(rpc.input) == "reset-counters-input"
        assert builder.get_name(rpc.output) == "reset-counters-output"

    def test_collision_prefixes_parent(self, make_context) -> None:
        context = make_context(
            {
                "name": "m",
                "data": [
                    {"kind": "container", "name": "a", "children": [{"kind": "container", "name": "config"}]},
                    {"kind": "container", "name": "b", "children": [{"kind": "container", "name": "config"}]},
                ],
            }
        )
        builder = UnpackingDataObjectBuilder(context, Swagger())
        builder.process_module(context.modules[0])
        a, b = context.modules[0].children
        assert builder.get_name(a.children[0]) == "config"
        assert builder.get_name(b.children[0]) == "b-config"

    def test_collision_falls_back_to_suffix(self, make_context) -> None:
        context = make_context(
            {
                "name": "m",
                "data": [
                    {"kind": "container", "name": "x"},
                    {"kind": "container", "name": "x"},
                    {"kind": "container", "name": "x"},
                ],
            }
        )
        builder = UnpackingDataObjectBuilder(context, Swagger())
        builder.process_module(context.modules[0])
        assert [builder.get_name(n) for n in context.modules[0].children] == ["x", "x2", "x3"]

    def test_get_ref(self, optimizing, network_context) -> None:
        builder, _ = optimizing
        _, interface, _ = _nodes(network_context)
        ref = builder.get_ref(interface)
        assert isinstance(ref, RefProperty)
        assert ref.ref == "#/definitions/interface"
        assert ref.simple_ref == "interface"


# ---------------------------------------------------------------------------
# Registration and properties
# ---------------------------------------------------------------------------


class TestRegistration:
    def test_add_model_is_idempotent(self, unpacking, network_context) -> None:
        builder, document = unpacking
        _, interface, _ = _nodes(network_context)
        assert builder.add_model(interface) == "interface"
        first = document.definitions["interface"]
        assert builder.add_model(interface) == "interface"
        assert document.definitions["interface"] is first

    def test_leaf_properties(self, unpacking, network_context) -> None:
        builder, document = unpacking
        _, interface, _ = _nodes(network_context)
        builder.add_model(interface)
        model = document.definitions["interface"]
        assert isinstance(model, ModelImpl)
        assert model.properties["enabled"].type == "boolean"
        assert model.properties["enabled"].default == "true"
        assert model.properties["mtu"].maximum == 9000
        assert model.properties["name"].max_length == 64
        assert model.required == ["name"]

    def test_choice_cases_are_flattened(self, unpacking, network_context) -> None:
        builder, document = unpacking
        _, interface, _ = _nodes(network_context)
        builder.add_model(interface)
        properties = document.definitions["interface"].properties
        assert "addressing" not in properties
        assert "static" not in properties
        assert properties["address"].pattern == "[0-9.]+"
        assert "dhcp-server" in properties

    def test_augmented_property_is_qualified(self, unpacking, network_context) -> None:
        builder, document = unpacking
        _, interface, _ = _nodes(network_context)
        builder.add_model(interface)
        properties = document.definitions["interface"].properties
        assert "ext:description" in properties
        assert "description" not in properties

    def test_container_child_registers_its_model(self, unpacking, network_context) -> None:
        builder, document = unpacking
        _, interface, _ = _nodes(network_context)
        builder.add_model(interface)
        assert document.definitions["interface"].properties["statistics"].simple_ref == "statistics"
        assert "statistics" in document.definitions

    def test_list_child_is_array_of_refs(self, unpacking, network_context) -> None:
        builder, document = unpacking
        interfaces, _, _ = _nodes(network_context)
        builder.add_model(interfaces)
        prop = document.definitions["interfaces"].properties["interface"]
        assert isinstance(prop, ArrayProperty)
        assert prop.items.simple_ref == "interface"

    def test_leaf_list_is_array_of_scalars(self, unpacking, network_context) -> None:
        builder, document = unpacking
        vlan = network_context.find_module("ext").children[0].children[0]
        builder.add_model(vlan)
        ports = document.definitions["vlan"].properties["ports"]
        assert isinstance(ports, ArrayProperty)
        assert isinstance(ports.items, ScalarProperty)
        assert ports.items.max_length == 64
        assert ports.max_items == 48

    def test_empty_container_has_no_properties(self, make_context) -> None:
        context = make_context({"name": "m", "data": [{"kind": "container", "name": "empty"}]})
        document = Swagger()
        builder = UnpackingDataObjectBuilder(context, document)
        builder.process_module(context.modules[0])
        builder.add_model(context.modules[0].children[0])
        assert document.definitions["empty"].properties is None


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class TestOptimizing:
    def test_grouping_definition_emitted(self, optimizing) -> None:
        _, document = optimizing
        model = document.definitions["base-stats"]
        assert isinstance(model, ModelImpl)
        assert list(model.properties) == ["in-octets", "out-octets"]

    def test_pure_use_is_alias_wrapper(self, optimizing, network_context) -> None:
        builder, document = optimizing
        _, _, statistics = _nodes(network_context)
        builder.add_model(statistics)
        model = document.definitions["statistics"]
        assert isinstance(model, ComposedModel)
        assert [part.simple_ref for part in model.all_of] == ["base-stats"]
        assert [ref.simple_ref for ref in model.interfaces] == ["base-stats"]

    def test_use_with_own_children_is_composed(self, make_context) -> None:
        context = make_context(
            {
                "name": "m",
                "groupings": [
                    {"name": "named", "children": [{"kind": "leaf", "name": "name", "type": "string"}]}
                ],
                "data": [
                    {
                        "kind": "container",
                        "name": "server",
                        "uses": ["named"],
                        "children": [{"kind": "leaf", "name": "port", "type": "uint16"}],
                    }
                ],
            }
        )
        document = Swagger()
        builder = OptimizingDataObjectBuilder(context, document)
        builder.process_module(context.modules[0])
        builder.add_model(context.modules[0].children[0])
        model = document.definitions["server"]
        assert isinstance(model, ComposedModel)
        assert isinstance(model.all_of[0], RefModel)
        assert model.all_of[0].simple_ref == "named"
        assert isinstance(model.all_of[1], ModelImpl)
        assert list(model.all_of[1].properties) == ["port"]


class TestUnpacking:
    def test_grouping_contents_inlined(self, unpacking, network_context) -> None:
        builder, document = unpacking
        _, _, statistics = _nodes(network_context)
        builder.add_model(statistics)
        assert "base-stats" not in document.definitions
        model = document.definitions["statistics"]
        assert isinstance(model, ModelImpl)
        assert set(model.properties) == {"in-octets", "out-octets"}
        assert model.properties["in-octets"].read_only is True


# ---------------------------------------------------------------------------
# Module selection
# ---------------------------------------------------------------------------


class TestModuleSelection:
    @pytest.fixture
    def context(self, make_context):
        return make_context(
            {
                "name": "base",
                "data": [
                    {
                        "kind": "container",
                        "name": "system",
                        "children": [{"kind": "leaf", "name": "hostname", "type": "string"}],
                    }
                ],
            },
            {
                "name": "extra",
                "augments": [
                    {
                        "target": "/base:system",
                        "children": [
                            {"kind": "leaf", "name": "owner", "type": "string"},
                            {
                                "kind": "container",
                                "name": "ntp",
                                "children": [{"kind": "leaf", "name": "server", "type": "string"}],
                            },
                        ],
                    }
                ],
            },
        )

    @pytest.mark.parametrize(
        "builder_class", [OptimizingDataObjectBuilder, UnpackingDataObjectBuilder]
    )
    def test_unselected_children_left_out(self, context, builder_class, caplog) -> None:
        caplog.set_level("DEBUG", logger="yang2swagger")
        document = Swagger()
        builder = builder_class(context, document, modules=["base"])
        builder.process_module(context.find_module("base"))
        builder.add_model(context.find_module("base").children[0])
        assert set(document.definitions) == {"system"}
        assert list(document.definitions["system"].properties) == ["hostname"]
        assert "module extra is not selected" in caplog.text

    def test_selected_children_kept(self, context) -> None:
        document = Swagger()
        builder = UnpackingDataObjectBuilder(context, document, modules=["base", "extra"])
        builder.process_module(context.find_module("base"))
        builder.add_model(context.find_module("base").children[0])
        assert set(document.definitions) == {"system", "ntp"}
        assert list(document.definitions["system"].properties) == [
            "hostname", "extra:owner", "extra:ntp",
        ]

    def test_grouping_from_unselected_module_keeps_contents(self, make_context) -> None:
        context = make_context(
            {
                "name": "lib",
                "groupings": [
                    {"name": "named", "children": [{"kind": "leaf", "name": "name", "type": "string"}]}
                ],
            },
            {
                "name": "app",
                "data": [{"kind": "container", "name": "server", "uses": ["lib:named"]}],
            },
        )
        document = Swagger()
        builder = OptimizingDataObjectBuilder(context, document, modules=["app"])
        builder.process_module(context.find_module("app"))
        builder.add_model(context.find_module("app").children[0])
        assert list(document.definitions["named"].properties) == ["name"]


class TestSelection:
    @pytest.mark.parametrize(
        "strategy, expected",
        [
            (Strategy.OPTIMIZING, OptimizingDataObjectBuilder),
            ("unpacking", UnpackingDataObjectBuilder),
        ],
    )
    def test_build_data_objects(self, network_context, strategy, expected) -> None:
        builder = build_data_objects(strategy, network_context, Swagger())
        assert type(builder) is expected

    def test_flatten_choices(self, network_context) -> None:
        _, interface, _ = _nodes(network_context)
        names = [c.name for c in flatten_choices(interface.children)]
        assert names == [
            "name", "enabled", "mtu", "address", "dhcp-server", "statistics", "description",
        ]
