"""Tests for the mapper module."""

from conftest import make_spec

from typegraph.descriptors import Array, Enum, Reference, Scalar, ScalarKind, Union
from typegraph.mapper import map_definition, map_object, map_type

STRING = Scalar(ScalarKind.STRING)
INTEGER = Scalar(ScalarKind.INTEGER)
DECIMAL = Scalar(ScalarKind.DECIMAL)


class TestScalars:
    """Test OpenAPI scalar -> descriptor conversion."""

    def test_string(self):
        assert map_type({"type": "string"}) == (STRING, [])

    def test_integer(self):
        assert map_type({"type": "integer"}) == (INTEGER, [])

    def test_number_is_decimal(self):
        assert map_type({"type": "number"}) == (DECIMAL, [])

    def test_boolean(self):
        assert map_type({"type": "boolean"}) == (Scalar(ScalarKind.BOOLEAN), [])

    def test_date_time(self):
        assert map_type({"type": "string", "format": "date-time"})[0] == Scalar(ScalarKind.DATETIME)

    def test_date(self):
        assert map_type({"type": "string", "format": "date"})[0] == Scalar(ScalarKind.DATE)

    def test_time(self):
        assert map_type({"type": "string", "format": "time"})[0] == Scalar(ScalarKind.TIME)

    def test_other_format_is_string(self):
        assert map_type({"type": "string", "format": "uuid"})[0] == STRING

    def test_nullable_31_type(self):
        assert map_type({"type": ["integer", "null"]})[0] == INTEGER


class TestEnums:
    def test_enum_descriptor_and_definition(self):
        schema = {"type": "string", "enum": ["a", "b"], "description": "Train status"}
        descriptor, definitions = map_type(schema, "Station", "status")
        assert descriptor == Enum("StationStatus", ("a", "b"))
        assert len(definitions) == 1
        assert definitions[0].kind == "enum"
        assert definitions[0].name == "StationStatus"
        assert list(definitions[0].values) == ["a", "b"]
        assert definitions[0].description == "Train status"

    def test_enum_without_parent(self):
        descriptor, _ = map_type({"type": "string", "enum": ["a", "b"]}, None, "status")
        assert descriptor == Enum("Status", ("a", "b"))

    def test_null_enum_value_dropped(self):
        descriptor, _ = map_type({"type": "string", "enum": ["x", None]}, "Stop", "kind")
        assert descriptor.values == ("x",)


class TestArrays:
    def test_array_of_strings(self):
        assert map_type({"type": "array", "items": {"type": "string"}}) == (Array(STRING), [])

    def test_array_of_refs(self):
        schema = {"type": "array", "items": {"$ref": "#/components/schemas/Station"}}
        assert map_type(schema)[0] == Array(Reference("Station"))

    def test_array_of_objects_adds_no_naming_level(self):
        schema = {
            "type": "array",
            "items": {"type": "object", "properties": {"name": {"type": "string"}}},
        }
        descriptor, definitions = map_type(schema, "Station", "platforms")
        assert descriptor == Array(Reference("StationPlatform"))
        assert [d.name for d in definitions] == ["StationPlatform"]
        assert definitions[0].attributes[0].name == "name"
        assert definitions[0].attributes[0].type == STRING

    def test_nested_arrays(self):
        schema = {"type": "array", "items": {"type": "array", "items": {"type": "number"}}}
        assert map_type(schema)[0] == Array(Array(DECIMAL))


class TestUnions:
    def test_scalar_union(self):
        schema = {"oneOf": [{"type": "string"}, {"type": "integer"}]}
        assert map_type(schema, "Station", "value") == (Union((STRING, INTEGER)), [])

    def test_duplicates_collapsed_first_seen_order(self):
        schema = {
            "oneOf": [
                {"type": "integer"},
                {"type": "string"},
                {"type": "integer"},
                {"type": "string", "format": "uuid"},
            ]
        }
        assert map_type(schema)[0] == Union((INTEGER, STRING))

    def test_single_survivor_unwrapped(self):
        schema = {"oneOf": [{"$ref": "#/components/schemas/Stop"}, {"type": "null"}]}
        assert map_type(schema)[0] == Reference("Stop")

    def test_single_non_null_variant_stays_a_union(self):
        schema = {"oneOf": [{"type": "string"}, {"type": "string"}]}
        assert map_type(schema)[0] == Union((STRING,))

    def test_enum_branches_get_distinct_names(self):
        schema = {
            "oneOf": [
                {"type": "string", "enum": ["a", "b"]},
                {"type": "string", "enum": ["c"]},
            ]
        }
        descriptor, definitions = map_type(schema, "Trip", "mode")
        assert descriptor == Union((Enum("TripMode1", ("a", "b")), Enum("TripMode2", ("c",))))
        assert [(d.name, d.kind) for d in definitions] == [("TripMode1", "enum"), ("TripMode2", "enum")]

    def test_nested_union_names_its_object_branch(self):
        schema = {
            "oneOf": [
                {
                    "anyOf": [
                        {"type": "object", "properties": {"amount": {"type": "number"}}},
                        {"type": "integer"},
                    ]
                },
                {"type": "string"},
            ]
        }
        descriptor, definitions = map_type(schema, "Trip", "fare")
        assert descriptor == Union((Union((Reference("TripFare"), INTEGER)), STRING))
        assert [d.name for d in definitions] == ["TripFare"]

    def test_object_branch_becomes_reference(self):
        schema = {
            "oneOf": [
                {"type": "number"},
                {"type": "object", "properties": {"amount": {"type": "number"}}},
            ]
        }
        descriptor, definitions = map_type(schema, "Trip", "fare")
        assert descriptor == Union((DECIMAL, Reference("TripFare")))
        assert [d.name for d in definitions] == ["TripFare"]

    def test_anyof(self):
        schema = {"anyOf": [{"type": "boolean"}, {"type": "string"}]}
        assert map_type(schema)[0] == Union((Scalar(ScalarKind.BOOLEAN), STRING))

    def test_multi_type(self):
        assert map_type({"type": ["string", "integer"]})[0] == Union((STRING, INTEGER))


class TestObjects:
    def test_inline_object_reference_and_body(self):
        schema = {
            "type": "object",
            "properties": {
                "latitude": {"type": "number"},
                "longitude": {"type": "number"},
            },
            "required": ["latitude", "longitude"],
        }
        descriptor, definitions = map_type(schema, "Station", "location")
        assert descriptor == Reference("StationLocation")
        body = definitions[0]
        assert body.name == "StationLocation"
        assert body.kind == "object"
        assert [(a.name, a.type, a.required) for a in body.attributes] == [
            ("latitude", DECIMAL, True),
            ("longitude", DECIMAL, True),
        ]

    def test_grandchild_named_after_immediate_parent(self):
        schema = {
            "type": "object",
            "properties": {
                "point": {"type": "object", "properties": {"x": {"type": "number"}}},
            },
        }
        descriptor, definitions = map_type(schema, "Station", "location")
        assert descriptor == Reference("StationLocation")
        assert [d.name for d in definitions] == ["StationLocation", "StationLocationPoint"]
        assert definitions[0].attributes[0].type == Reference("StationLocationPoint")

    def test_object_without_context_gets_stable_name(self):
        schema = {"type": "object", "properties": {"a": {"type": "string"}}}
        first, _ = map_type(schema)
        second, _ = map_type(dict(schema))
        assert first == second
        assert first.name.startswith("Anonymous")

    def test_ref(self):
        assert map_type({"$ref": "#/components/schemas/Location"}) == (Reference("Location"), [])


class TestFallback:
    def test_free_form_object(self):
        assert map_type({"type": "object"})[0] == STRING

    def test_empty_schema(self):
        assert map_type({})[0] == STRING

    def test_unknown_type(self):
        assert map_type({"type": "file"})[0] == STRING

    def test_allof_without_spec(self):
        assert map_type({"allOf": [{"type": "integer"}]})[0] == STRING

    def test_allof_with_spec_is_merged(self):
        spec = make_spec({"Id": {"type": "integer"}})
        schema = {"allOf": [{"$ref": "#/components/schemas/Id"}]}
        assert map_type(schema, spec=spec)[0] == INTEGER


class TestMapObject:
    def test_attribute_flags(self):
        schema = {
            "type": "object",
            "description": "A stop",
            "properties": {
                "arrival": {"type": "string", "format": "date-time", "description": "When"},
                "departure": {"type": "string", "format": "date-time", "nullable": True},
            },
            "required": ["arrival"],
        }
        definition, extra = map_object("Stop", schema)
        assert extra == []
        assert definition.description == "A stop"
        arrival, departure = definition.attributes
        assert arrival.required and not arrival.nullable
        assert arrival.description == "When"
        assert departure.nullable and not departure.required


class TestMapDefinition:
    def test_declared_enum_keeps_name(self):
        definition, extra = map_definition("Directions", {"type": "string", "enum": ["n", "s"]})
        assert definition.name == "Directions"
        assert definition.kind == "enum"
        assert extra == []

    def test_alias_of_array(self):
        definition, _ = map_definition("Tags", {"type": "array", "items": {"type": "string"}})
        assert definition.kind == "alias"
        assert definition.target == Array(STRING)

    def test_alias_with_inline_item_object(self):
        schema = {"type": "array", "items": {"type": "object", "properties": {"k": {"type": "string"}}}}
        definition, extra = map_definition("Pairs", schema)
        assert definition.target == Array(Reference("PairsItem"))
        assert [d.name for d in extra] == ["PairsItem"]
