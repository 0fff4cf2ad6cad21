"""Test suite for schema-driven value generation.

Covers type dispatch, bounds, defaults, array and object semantics,
uniqueness handling and the documented failure modes.
"""

import pytest
import numpy as np
from scipy import stats

from schema_synth import CannotSatisfyUniquenessError, InvalidSchemaError
from schema_synth.config.defaults import GenerationDefaults, STRING_ALPHABET
from schema_synth.core import SchemaGenerator, SchemaType, generate

N_SAMPLES = 500


def sample(generator, schema, n=N_SAMPLES):
    return [generator.generate(schema) for _ in range(n)]


class TestSchemaValidation:
    """Non-mapping schema nodes are rejected."""

    @pytest.mark.parametrize("bad", [None, 42, "integer", True, [], [{"type": "integer"}]])
    def test_top_level_rejected(self, generator, bad):
        with pytest.raises(InvalidSchemaError):
            generator.generate(bad)

    def test_invalid_schema_error_is_type_error(self, generator):
        with pytest.raises(TypeError):
            generator.generate(None)

    def test_nested_property_rejected(self, generator):
        schema = {"type": "object", "properties": {"a": 5}, "required": ["a"]}
        with pytest.raises(InvalidSchemaError) as exc_info:
            generator.generate(schema)
        assert exc_info.value.path == "$.a"

    def test_nested_items_rejected(self, generator):
        schema = {"type": "array", "items": "integer", "minItems": 1, "maxItems": 1}
        with pytest.raises(InvalidSchemaError) as exc_info:
            generator.generate(schema)
        assert exc_info.value.path == "$[]"


class TestScalarTypes:
    """Integer, number, string and boolean nodes."""

    def test_integer_bounds(self, generator):
        values = sample(generator, {"type": "integer", "minimum": -3, "maximum": 3})
        assert all(type(v) is int for v in values)
        assert all(-3 <= v <= 3 for v in values)
        assert {-3, 3} <= set(values)

    def test_integer_defaults(self, generator):
        values = sample(generator, {"type": "integer"}, n=3000)
        assert all(0 <= v <= 100 for v in values)
        assert 0 in values and 100 in values

    def test_present_zero_bound_honored(self, generator):
        """A maximum of 0 is a real bound, not a missing one."""
        values = sample(generator, {"type": "integer", "minimum": -5, "maximum": 0})
        assert all(-5 <= v <= 0 for v in values)

    def test_number_bounds(self, generator):
        values = sample(generator, {"type": "number", "minimum": 10, "maximum": 20})
        assert all(type(v) is float for v in values)
        assert all(10 <= v < 20 for v in values)

    def test_number_defaults(self, generator):
        values = sample(generator, {"type": "number"})
        assert all(0 <= v < 100 for v in values)

    def test_string_length_and_alphabet(self, generator):
        values = sample(generator, {"type": "string", "minLength": 2, "maxLength": 4})
        assert {len(v) for v in values} == {2, 3, 4}
        assert all(set(v) <= set(STRING_ALPHABET) for v in values)

    def test_string_defaults(self, generator):
        values = sample(generator, {"type": "string"})
        assert all(3 <= len(v) <= 10 for v in values)

    def test_string_enum(self, generator):
        values = sample(generator, {"type": "string", "enum": ["a", "b", "c"]})
        assert set(values) == {"a", "b", "c"}

    def test_empty_enum_falls_back_to_random_string(self, generator):
        values = sample(generator, {"type": "string", "enum": [], "minLength": 5, "maxLength": 5})
        assert all(len(v) == 5 for v in values)

    @pytest.mark.statistical
    def test_enum_uniform(self, generator):
        values = sample(generator, {"type": "string", "enum": ["x", "y", "z", "w"]}, n=4000)
        counts = [values.count(option) for option in ["x", "y", "z", "w"]]
        _, p_value = stats.chisquare(counts)
        assert p_value > 1e-4

    def test_boolean(self, generator):
        values = sample(generator, {"type": "boolean"})
        assert all(type(v) is bool for v in values)
        assert set(values) == {True, False}


class TestUnknownTypes:
    """Absent or unrecognized type tags produce None."""

    @pytest.mark.parametrize("schema", [
        {},
        {"type": "null"},
        {"type": "date"},
        {"type": ["string", "null"]},
        {"minimum": 1, "maximum": 2},
    ])
    def test_null_sentinel(self, generator, schema):
        assert generator.generate(schema) is None

    def test_schema_type_lookup(self):
        assert SchemaType.from_node({"type": "array"}) is SchemaType.ARRAY
        assert SchemaType.from_node({"type": "tuple"}) is None
        assert SchemaType.from_node({}) is None


class TestArrays:
    """Array length, element independence and uniqueness."""

    def test_length_bounds(self, generator):
        schema = {"type": "array", "items": {"type": "integer"}, "minItems": 2, "maxItems": 4}
        lengths = {len(v) for v in sample(generator, schema)}
        assert lengths == {2, 3, 4}

    def test_empty_array_reachable(self, generator):
        """minItems 0 sometimes yields an empty list."""
        schema = {"type": "array", "items": {"type": "integer"}, "minItems": 0, "maxItems": 5}
        values = sample(generator, schema, n=300)
        assert any(len(v) == 0 for v in values)
        assert all(0 <= len(v) <= 5 for v in values)

    def test_default_length_bounds(self, generator):
        values = sample(generator, {"type": "array", "items": {"type": "boolean"}})
        assert {len(v) for v in values} == set(range(0, 6))

    def test_items_generated_from_item_schema(self, generator):
        schema = {"type": "array", "items": {"type": "integer", "minimum": 5, "maximum": 6},
                  "minItems": 3, "maxItems": 3}
        for value in sample(generator, schema, n=100):
            assert all(5 <= item <= 6 for item in value)

    def test_unique_scenario(self, generator):
        """Five distinct integers drawn from [1, 10]."""
        schema = {
            "type": "array",
            "items": {"type": "integer", "minimum": 1, "maximum": 10},
            "minItems": 5,
            "maxItems": 5,
            "uniqueItems": True
        }
        for value in sample(generator, schema, n=200):
            assert len(value) == 5
            assert len(set(value)) == 5
            assert all(1 <= item <= 10 for item in value)

    def test_unique_exhausts_full_range(self, generator):
        """Asking for every value in the range returns a permutation of it."""
        schema = {"type": "array", "items": {"type": "integer", "minimum": 1, "maximum": 4},
                  "minItems": 4, "maxItems": 4, "uniqueItems": True}
        assert sorted(generator.generate(schema)) == [1, 2, 3, 4]

    def test_unique_composite_items(self, generator):
        """Unhashable items are compared by value."""
        schema = {
            "type": "array",
            "minItems": 3,
            "maxItems": 3,
            "uniqueItems": True,
            "items": {
                "type": "object",
                "properties": {"flag": {"type": "boolean"}, "n": {"type": "integer", "minimum": 0, "maximum": 1}},
                "required": ["flag", "n"]
            }
        }
        for value in sample(generator, schema, n=50):
            assert len({(item["flag"], item["n"]) for item in value}) == 3

    def test_unique_boolean_overflow_fails_fast(self, generator):
        schema = {"type": "array", "items": {"type": "boolean"},
                  "minItems": 3, "maxItems": 3, "uniqueItems": True}
        with pytest.raises(CannotSatisfyUniquenessError) as exc_info:
            generator.generate(schema)
        assert exc_info.value.capacity == 2
        assert exc_info.value.requested == 3
        assert exc_info.value.attempts == 0

    def test_unique_enum_overflow_fails_fast(self, generator):
        schema = {"type": "array", "items": {"type": "string", "enum": ["a", "b"]},
                  "minItems": 3, "maxItems": 3, "uniqueItems": True}
        with pytest.raises(CannotSatisfyUniquenessError):
            generator.generate(schema)

    def test_unique_attempt_cap(self, rng):
        """Item spaces without a known capacity stop after max_unique_attempts draws."""
        defaults = GenerationDefaults(max_unique_attempts=25)
        generator = SchemaGenerator(rng=rng, defaults=defaults)
        schema = {
            "type": "array",
            "minItems": 3,
            "maxItems": 3,
            "uniqueItems": True,
            "items": {"type": "array", "items": {"type": "integer"}, "minItems": 0, "maxItems": 0}
        }
        with pytest.raises(CannotSatisfyUniquenessError) as exc_info:
            generator.generate(schema)
        assert exc_info.value.attempts == 25
        assert exc_info.value.found == 1

    def test_unique_zero_length(self, generator):
        schema = {"type": "array", "items": {"type": "boolean"},
                  "minItems": 0, "maxItems": 0, "uniqueItems": True}
        assert generator.generate(schema) == []

    def test_missing_items_with_zero_length(self, generator):
        assert generator.generate({"type": "array", "maxItems": 0}) == []

    def test_missing_items_raises_when_drawn(self, generator):
        with pytest.raises(InvalidSchemaError):
            generator.generate({"type": "array", "minItems": 1, "maxItems": 1})


class TestObjects:
    """Object property selection."""

    def test_required_scenario(self, generator, user_schema):
        for value in sample(generator, user_schema, n=200):
            assert set(value) == {"id", "name", "isActive"}
            assert type(value["id"]) is int and 1 <= value["id"] <= 1000
            assert isinstance(value["name"], str) and 3 <= len(value["name"]) <= 10
            assert type(value["isActive"]) is bool

    def test_optional_properties(self, generator, optional_schema):
        values = sample(generator, optional_schema, n=400)
        properties = set(optional_schema["properties"])
        for value in values:
            assert "id" in value
            assert set(value) <= properties
        # Every optional key is sometimes present and sometimes absent
        for key in ("nickname", "score", "tags"):
            present = sum(key in v for v in values)
            assert 0 < present < len(values)

    @pytest.mark.statistical
    def test_optional_inclusion_probability(self, generator):
        schema = {"type": "object", "properties": {"maybe": {"type": "boolean"}}}
        values = sample(generator, schema, n=4000)
        present = sum("maybe" in v for v in values)
        assert stats.binomtest(present, 4000, 0.5).pvalue > 1e-4

    def test_property_order_preserved(self, generator):
        schema = {"type": "object",
                  "properties": {k: {"type": "integer"} for k in ["z", "a", "m"]},
                  "required": ["z", "a", "m"]}
        assert list(generator.generate(schema)) == ["z", "a", "m"]

    def test_required_not_in_properties_is_skipped(self, generator):
        schema = {"type": "object", "properties": {"a": {"type": "integer"}}, "required": ["a", "ghost"]}
        assert set(generator.generate(schema)) == {"a"}

    def test_empty_properties(self, generator):
        assert generator.generate({"type": "object", "properties": {}}) == {}

    def test_missing_properties_raises_key_error(self, generator):
        with pytest.raises(KeyError):
            generator.generate({"type": "object"})

    def test_nested(self, generator, nested_schema):
        for value in sample(generator, nested_schema, n=100):
            order = value["order"]
            assert order["status"] in {"new", "paid", "shipped"}
            assert 1 <= len(order["lines"]) <= 4
            for line in order["lines"]:
                assert len(line["sku"]) == 6
                assert 1 <= line["qty"] <= 9
                assert 0.5 <= line["price"] < 99.5
            if "note" in value:
                assert value["note"] is None


class TestReproducibility:
    """Seeding and independence of results."""

    def test_same_seed_same_output(self, nested_schema):
        first = SchemaGenerator(seed=99).generate_many(nested_schema, 20)
        second = SchemaGenerator(seed=99).generate_many(nested_schema, 20)
        assert first == second

    def test_different_seed_different_output(self, nested_schema):
        first = SchemaGenerator(seed=1).generate_many(nested_schema, 20)
        second = SchemaGenerator(seed=2).generate_many(nested_schema, 20)
        assert first != second

    def test_injected_rng(self, user_schema):
        a = SchemaGenerator(rng=np.random.default_rng(5)).generate(user_schema)
        b = SchemaGenerator(rng=np.random.default_rng(5)).generate(user_schema)
        assert a == b

    def test_module_generate(self, user_schema):
        value = generate(user_schema, rng=np.random.default_rng(3))
        assert set(value) == {"id", "name", "isActive"}

    def test_schema_not_mutated(self, generator, nested_schema):
        import copy
        snapshot = copy.deepcopy(nested_schema)
        sample(generator, nested_schema, n=20)
        assert nested_schema == snapshot

    def test_results_do_not_share_state(self, generator):
        schema = {"type": "array", "items": {"type": "integer"}, "minItems": 1, "maxItems": 1}
        first = generator.generate(schema)
        second = generator.generate(schema)
        first.append("mutated")
        assert "mutated" not in second

    def test_custom_defaults(self, rng):
        defaults = GenerationDefaults(minimum=5, maximum=6, min_length=1, max_length=1,
                                      optional_property_probability=0.0, true_probability=1.0)
        generator = SchemaGenerator(rng=rng, defaults=defaults)
        assert 5 <= generator.generate({"type": "integer"}) <= 6
        assert len(generator.generate({"type": "string"})) == 1
        assert generator.generate({"type": "boolean"}) is True
        assert generator.generate({"type": "object", "properties": {"x": {"type": "integer"}}}) == {}
