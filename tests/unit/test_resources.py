"""Tests for the resource adapters and their shared lifecycle."""

import pytest

from terraform_provider_akeneo.akeneo.client import AkeneoApiError, AkeneoNotFoundError
from terraform_provider_akeneo.helpers import Diagnostics
from terraform_provider_akeneo.models import ResourceData, Value
from terraform_provider_akeneo.resources.association_type import AssociationTypeResource
from terraform_provider_akeneo.resources.attribute import AttributeResource
from terraform_provider_akeneo.resources.attribute_group import AttributeGroupResource
from terraform_provider_akeneo.resources.attribute_option import AttributeOptionResource
from terraform_provider_akeneo.resources.category import CategoryResource
from terraform_provider_akeneo.resources.channel import ChannelResource
from terraform_provider_akeneo.resources.family import FamilyResource
from terraform_provider_akeneo.resources.family_variant import FamilyVariantResource
from terraform_provider_akeneo.resources.measurement_family import (
    MeasurementFamilyResource,
)

ATTRIBUTE_CONFIG = {
    "code": "weight",
    "type": "pim_catalog_metric",
    "group": "technical",
    "group_labels": {"en_US": "Technical"},
    "labels": {"en_US": "Weight", "fr_FR": "Poids"},
    "sort_order": 1,
    "localizable": False,
    "scopable": True,
    "available_locales": ["en_US"],
    "unique": False,
    "useable_as_grid_filter": True,
    "max_characters": 255,
    "validation_rule": "regexp",
    "validation_regexp": "^[0-9]+$",
    "wysiwyg_enabled": False,
    "number_min": 12.5,
    "number_max": 100.0,
    "decimals_allowed": True,
    "negative_allowed": False,
    "metric_family": "Weight",
    "default_metric_unit": "KILOGRAM",
    "date_min": "2020-01-01T00:00:00+00:00",
    "date_max": "2030-01-01T00:00:00+00:00",
    "allowed_extensions": ["pdf", "png"],
    "max_file_size": 10,
    "reference_data_name": "brands",
    "default_value": False,
    "table_configuration": ['{"code": "quantity", "data_type": "number"}'],
}

FULL_CONFIGS = [
    (AttributeResource, ATTRIBUTE_CONFIG),
    (
        AttributeOptionResource,
        {"code": "red", "attribute": "color", "sort_order": 2, "labels": {"en_US": "Red"}},
    ),
    (
        AttributeGroupResource,
        {"code": "marketing", "sort_order": 0, "labels": {"en_US": "Marketing"}},
    ),
    (
        CategoryResource,
        {"code": "shoes", "parent": "master", "labels": {"en_US": "Shoes"}},
    ),
    (
        ChannelResource,
        {
            "code": "ecommerce",
            "labels": {"en_US": "Ecommerce"},
            "locales": ["en_US", "fr_FR"],
            "currencies": ["EUR", "USD"],
            "category_tree": "master",
            "conversion_units": {"weight": "GRAM"},
        },
    ),
    (
        FamilyResource,
        {
            "code": "shoes",
            "labels": {"en_US": "Shoes"},
            "attributes": ["sku", "name", "picture"],
            "attribute_as_label": "name",
            "attribute_as_image": "picture",
            "attribute_requirements": {"ecommerce": ["sku", "name"], "print": ["sku"]},
        },
    ),
    (
        FamilyVariantResource,
        {
            "family_code": "shoes",
            "code": "by_size",
            "labels": {"en_US": "By size"},
            "variant_attribute_sets": [
                {"level": 1, "axes": ["color"], "attributes": ["name"]},
                {"level": 2, "axes": ["size"], "attributes": ["sku"]},
            ],
        },
    ),
    (
        AssociationTypeResource,
        {
            "code": "X_SELL",
            "labels": {"en_US": "Cross sell"},
            "is_quantified": False,
            "is_two_way": True,
        },
    ),
    (
        MeasurementFamilyResource,
        {
            "code": "WEIGHT",
            "standard_unit_code": "KILOGRAM",
            "labels": {"en_US": "Weight"},
            "units": [
                {
                    "code": "GRAM",
                    "labels": {"en_US": "Gram"},
                    "symbol": "g",
                    "convert_from_standard": [{"operator": "mul", "value": "0.001"}],
                },
                {
                    "code": "KILOGRAM",
                    "labels": {"en_US": "Kilogram"},
                    "symbol": "kg",
                    "convert_from_standard": [{"operator": "mul", "value": "1"}],
                },
            ],
        },
    ),
]


def _ids(params):
    return [resource_class.type_name for resource_class, _ in params]


class TestMappingRoundTrip:
    """Every attribute that is set survives the trip to the wire and back."""

    @pytest.mark.parametrize("resource_class, raw", FULL_CONFIGS, ids=_ids(FULL_CONFIGS))
    def test_round_trip(self, resource_class, raw, decode):
        resource = resource_class()
        plan = decode(resource, raw)
        assert not resource.validate_config(plan).has_error

        diagnostics = Diagnostics()
        entity = resource.map_to_api_object(plan, diagnostics)
        # Identity components are always known from the configuration.
        prior = {name: plan[name] for name in resource.import_key.fields}
        state = resource.map_to_tf_object(entity, prior, diagnostics)

        assert not diagnostics.has_error
        assert state == plan

    @pytest.mark.parametrize("resource_class, raw", FULL_CONFIGS, ids=_ids(FULL_CONFIGS))
    def test_null_and_unknown_are_never_sent(self, resource_class, raw, decode):
        resource = resource_class()
        plan = {
            name: Value.unknown() if i % 2 else Value.null()
            for i, name in enumerate(resource.schema().attributes)
        }
        plan["code"] = Value.of(raw["code"])

        payload = resource.map_to_api_object(plan, Diagnostics()).to_payload()

        assert payload == {"code": raw["code"]}

    def test_attribute_wire_representation(self, decode):
        resource = AttributeResource()
        entity = resource.map_to_api_object(
            decode(resource, ATTRIBUTE_CONFIG), Diagnostics()
        )

        payload = entity.to_payload()
        assert payload["number_min"] == "12.5"
        assert payload["number_max"] == "100"
        assert payload["max_file_size"] == "10"
        assert payload["table_configuration"] == [
            {"code": "quantity", "data_type": "number"}
        ]

    def test_invalid_table_configuration(self, decode):
        resource = AttributeResource()
        plan = decode(
            resource,
            {"code": "c", "type": "pim_catalog_table", "group": "g",
             "table_configuration": ["{broken"]},
        )
        diagnostics = Diagnostics()

        assert resource.map_to_api_object(plan, diagnostics) is None
        assert diagnostics.errors[0].summary == "Error parsing table configuration"

    def test_number_read_back(self):
        resource = AttributeResource()
        diagnostics = Diagnostics()
        entity = resource.entity_class(code="weight", number_min="12.5000", number_max="oops")

        state = resource.map_to_tf_object(entity, None, diagnostics)

        assert state["number_min"] == Value.of(12.5)
        assert diagnostics.errors[0].summary == "Error parsing float value"
        assert diagnostics.errors[0].path == "number_max"

    def test_variant_sets_are_sorted_by_level(self):
        resource = FamilyVariantResource()
        entity = resource.entity_class.model_validate(
            {
                "code": "by_size",
                "variant_attribute_sets": [
                    {"level": 2, "axes": ["size"]},
                    {"level": 1, "axes": ["color"]},
                ],
            }
        )

        state = resource.map_to_tf_object(entity, None, Diagnostics())

        levels = [s["level"].value for s in state["variant_attribute_sets"].value]
        assert levels == [1, 2]


class TestConfigure:
    """Test suite for handing provider data to a resource."""

    def test_none_is_a_no_op(self):
        resource = CategoryResource()
        assert len(resource.configure(None)) == 0
        assert resource.service is None

    def test_unexpected_type(self):
        diagnostics = CategoryResource().configure("not resource data")
        assert diagnostics.errors[0].summary == "Unexpected Resource Configure Type"
        assert "str" in diagnostics.errors[0].detail

    def test_missing_client(self):
        diagnostics = CategoryResource().configure(ResourceData(client=None))
        assert diagnostics.errors[0].summary == "Missing client instance"

    def test_unconfigured_resource_fails(self, decode):
        resource = CategoryResource()
        response = resource.create(decode(resource, {"code": "shoes"}))
        assert response.diagnostics.errors[0].summary == "Unconfigured resource"

    def test_extra_attribute_types(self, configure_resource, decode):
        resource = configure_resource(AttributeResource)
        accepted = decode(resource, {"code": "a", "type": "custom_type", "group": "g"})
        rejected = decode(resource, {"code": "a", "type": "unknown_type", "group": "g"})

        assert not resource.validate_config(accepted).has_error
        assert resource.validate_config(rejected).errors[0].path == "type"


class TestLifecycle:
    """Test suite for create/read/update/delete/import against a mocked client."""

    def test_create_posts_then_refreshes(self, configure_resource, decode, mock_client):
        resource = configure_resource(CategoryResource)
        plan = decode(resource, {"code": "shoes", "parent": "master"})
        mock_client.get.return_value = {
            "code": "shoes",
            "parent": "master",
            "labels": {"en_US": "Shoes"},
        }

        response = resource.create(plan)

        assert not response.diagnostics.has_error
        mock_client.post.assert_called_once_with(
            "/api/rest/v1/categories", {"code": "shoes", "parent": "master"}
        )
        mock_client.get.assert_called_once_with("/api/rest/v1/categories/shoes")
        assert response.state["labels"] == Value.of({"en_US": "Shoes"})
        assert response.state["parent"] == Value.of("master")

    def test_create_error(self, configure_resource, decode, mock_client):
        resource = configure_resource(AttributeResource)
        plan = decode(resource, {"code": "a", "type": "pim_catalog_text", "group": "g"})
        mock_client.post.side_effect = AkeneoApiError("Status: 422", 422)

        response = resource.create(plan)

        assert response.state is None
        error = response.diagnostics.errors[0]
        assert error.summary == "Error while creating an attribute"
        assert "Akeneo API Error: Status: 422" in error.detail
        mock_client.get.assert_not_called()

    def test_create_resolves_unknown_values(self, configure_resource, decode, mock_client):
        resource = configure_resource(CategoryResource)
        plan = decode(resource, {"code": "shoes", "parent": Value.unknown()})
        mock_client.get.return_value = {"code": "shoes"}

        response = resource.create(plan)

        assert mock_client.post.call_args.args[1] == {"code": "shoes"}
        assert response.state["parent"].is_null

    def test_refresh_failure_keeps_plan(self, configure_resource, decode, mock_client):
        resource = configure_resource(CategoryResource)
        plan = decode(resource, {"code": "shoes"})
        mock_client.get.side_effect = AkeneoApiError("boom", 500)

        response = resource.create(plan)

        assert not response.diagnostics.has_error
        assert len(response.diagnostics) == 1
        assert response.state == plan

    def test_update_patches_single_path(self, configure_resource, decode, mock_client):
        resource = configure_resource(AssociationTypeResource)
        plan = decode(resource, {"code": "X_SELL", "is_two_way": True})
        mock_client.get.return_value = {"code": "X_SELL", "is_two_way": True, "is_quantified": False}

        response = resource.update(plan)

        mock_client.patch.assert_called_once_with(
            "/api/rest/v1/association-types/X_SELL", {"code": "X_SELL", "is_two_way": True}
        )
        assert response.state["is_two_way"] == Value.of(True)
        assert response.state["is_quantified"] == Value.of(False)

    def test_update_error(self, configure_resource, decode, mock_client):
        resource = configure_resource(ChannelResource)
        plan = decode(
            resource,
            {"code": "web", "locales": ["en_US"], "currencies": ["EUR"], "category_tree": "master"},
        )
        mock_client.patch.side_effect = AkeneoApiError("nope", 400)

        response = resource.update(plan)

        assert response.diagnostics.errors[0].summary == "Error while updating a channel"

    def test_read_overlays_server_state(self, configure_resource, decode, mock_client):
        resource = configure_resource(AttributeOptionResource)
        state = decode(resource, {"code": "red", "attribute": "color", "sort_order": 1})
        mock_client.get.return_value = {"code": "red", "attribute": "color", "sort_order": 5}

        response = resource.read(state)

        mock_client.get.assert_called_once_with("/api/rest/v1/attributes/color/options/red")
        assert response.state["sort_order"] == Value.of(5)

    def test_read_error(self, configure_resource, decode, mock_client):
        resource = configure_resource(FamilyResource)
        mock_client.get.side_effect = AkeneoNotFoundError("Status: 404", 404)

        response = resource.read(decode(resource, {"code": "shoes"}))

        assert response.diagnostics.errors[0].summary == "Error while reading a family"

    def test_read_undecodable_response(self, configure_resource, decode, mock_client):
        resource = configure_resource(CategoryResource)
        mock_client.get.return_value = {"code": "shoes", "labels": []}

        response = resource.read(decode(resource, {"code": "shoes"}))

        assert response.state is None
        error = response.diagnostics.errors[0]
        assert error.summary == "Error while reading a category"
        assert "could not be decoded" in error.detail

    def test_read_family_variant(self, configure_resource, decode, mock_client):
        resource = configure_resource(FamilyVariantResource)
        state = decode(resource, {"family_code": "shoes", "code": "by_size"})
        mock_client.get.return_value = {
            "code": "by_size",
            "variant_attribute_sets": [{"level": 1, "axes": ["size"], "attributes": []}],
        }

        response = resource.read(state)

        mock_client.get.assert_called_once_with("/api/rest/v1/families/shoes/variants/by_size")
        assert response.state["family_code"] == Value.of("shoes")
        attribute_set = response.state["variant_attribute_sets"].value[0]
        assert attribute_set["axes"] == Value.of(["size"])
        assert attribute_set["attributes"].is_null

    @pytest.mark.parametrize("resource_class, raw", FULL_CONFIGS, ids=_ids(FULL_CONFIGS))
    def test_delete_always_fails(self, resource_class, raw, configure_resource, decode, mock_client):
        resource = configure_resource(resource_class)

        response = resource.delete(decode(resource, raw))

        assert response.diagnostics.errors[0].summary == "This resource does not support deletes"
        mock_client.patch.assert_not_called()
        mock_client.post.assert_not_called()

    def test_delete_detail_names_entity(self):
        detail = CategoryResource().delete({}).diagnostics.errors[0].detail
        assert "deletes for categories" in detail

    def test_import_simple_code(self):
        response = CategoryResource().import_state("shoes")
        assert response.state["code"] == Value.of("shoes")
        assert response.state["parent"].is_null

    def test_import_attribute_option(self):
        response = AttributeOptionResource().import_state("color/red")
        assert response.state["attribute"] == Value.of("color")
        assert response.state["code"] == Value.of("red")

    def test_import_family_variant(self):
        response = FamilyVariantResource().import_state("shoes/by_size")
        assert response.state["family_code"] == Value.of("shoes")
        assert response.state["code"] == Value.of("by_size")

    def test_import_malformed_id(self):
        response = AttributeOptionResource().import_state("red")

        assert response.state is None
        error = response.diagnostics.errors[0]
        assert error.summary == "Unexpected Import Identifier"
        assert "attribute/code" in error.detail
