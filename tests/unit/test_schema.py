"""Tests for schema decoding and validation."""

import pytest

from terraform_provider_akeneo.helpers import Diagnostics
from terraform_provider_akeneo.interfaces.schema import (
    BOOL,
    INT64,
    LIST,
    LIST_NESTED,
    MAP,
    MAP_OF_LISTS,
    NUMBER,
    STRING,
    Attribute,
    Schema,
)
from terraform_provider_akeneo.models import Value
from terraform_provider_akeneo.validators import Int64Between, LocaleCode, MapKeysAre


@pytest.fixture
def schema():
    return Schema(
        attributes={
            "code": Attribute(STRING, required=True),
            "enabled": Attribute(BOOL),
            "sort_order": Attribute(INT64, validators=[Int64Between(0, 10)]),
            "number_min": Attribute(NUMBER),
            "locales": Attribute(LIST),
            "labels": Attribute(MAP, validators=[MapKeysAre(LocaleCode())]),
            "requirements": Attribute(MAP_OF_LISTS),
            "sets": Attribute(
                LIST_NESTED,
                nested={
                    "level": Attribute(INT64, required=True),
                    "axes": Attribute(LIST),
                },
            ),
        }
    )


class TestDecode:
    """Test suite for decoding raw configuration."""

    def test_decodes_every_type(self, schema):
        diagnostics = Diagnostics()
        state = schema.decode(
            {
                "code": "color",
                "enabled": True,
                "sort_order": 2,
                "number_min": 1,
                "locales": ["en_US"],
                "labels": {"en_US": "Color"},
                "requirements": {"ecommerce": ["sku"]},
                "sets": [{"level": 1, "axes": ["size"]}],
            },
            diagnostics,
        )

        assert not diagnostics.has_error
        assert state["code"] == Value.of("color")
        assert state["number_min"] == Value.of(1.0)
        assert isinstance(state["number_min"].value, float)
        assert state["sets"].value[0]["level"] == Value.of(1)
        assert state["sets"].value[0]["axes"] == Value.of(["size"])

    def test_missing_values_are_null(self, schema):
        state = schema.decode({"code": "color"}, Diagnostics())
        assert state["labels"].is_null
        assert state["enabled"].is_null

    def test_values_are_passed_through(self, schema):
        state = schema.decode({"code": Value.unknown()}, Diagnostics())
        assert state["code"].is_unknown

    @pytest.mark.parametrize(
        "name, raw",
        [
            ("code", 5),
            ("enabled", "yes"),
            ("sort_order", True),
            ("sort_order", 1.5),
            ("locales", "en_US"),
            ("labels", {"en_US": 1}),
            ("requirements", {"ecommerce": "sku"}),
            ("sets", {"level": 1}),
        ],
    )
    def test_type_mismatch(self, schema, name, raw):
        diagnostics = Diagnostics()
        state = schema.decode({name: raw}, diagnostics)

        assert diagnostics.errors[0].summary == "Incorrect attribute value type"
        assert diagnostics.errors[0].path == name
        assert state[name].is_null

    def test_unsupported_argument(self, schema):
        diagnostics = Diagnostics()
        schema.decode({"code": "x", "colour": "red"}, diagnostics)
        assert diagnostics.errors[0].summary == "Unsupported argument"
        assert diagnostics.errors[0].path == "colour"


class TestValidate:
    """Test suite for schema validation."""

    def test_required_attribute(self, schema):
        diagnostics = Diagnostics()
        schema.validate(schema.decode({}, Diagnostics()), diagnostics)

        assert len(diagnostics.errors) == 1
        assert diagnostics.errors[0].summary == "Missing required argument"
        assert diagnostics.errors[0].path == "code"

    def test_unknown_required_value_is_accepted(self, schema):
        diagnostics = Diagnostics()
        schema.validate(schema.decode({"code": Value.unknown()}, Diagnostics()), diagnostics)
        assert not diagnostics.has_error

    def test_validators_run(self, schema):
        diagnostics = Diagnostics()
        state = schema.decode(
            {"code": "x", "sort_order": 11, "labels": {"english": "Color"}}, Diagnostics()
        )
        schema.validate(state, diagnostics)

        assert {e.path for e in diagnostics.errors} == {"sort_order", "labels['english']"}

    def test_nested_attributes_are_validated_with_paths(self, schema):
        diagnostics = Diagnostics()
        state = schema.decode({"code": "x", "sets": [{"axes": []}]}, Diagnostics())
        schema.validate(state, diagnostics)

        assert diagnostics.errors[0].path == "sets[0].level"

    def test_empty_state(self, schema):
        assert all(v.is_null for v in schema.empty_state().values())
        assert set(schema.empty_state()) == set(schema.attributes)
