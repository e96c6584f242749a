from typing import List

from ..akeneo import entities
from ..akeneo.services import AttributeService
from ..helpers import MAX_INT32
from ..interfaces.mapping import (
    Field,
    decode_json_list,
    encode_json_list,
    format_decimal,
    format_int,
    parse_decimal,
    parse_int,
)
from ..interfaces.resource import BaseResource
from ..interfaces.schema import BOOL, INT64, LIST, NUMBER, STRING, Attribute, Schema
from ..validators import (
    Int64Between,
    ListValuesAre,
    LocaleCode,
    PimAttributeType,
)
from .common import code_attribute, labels_attribute, sort_order_attribute


def _decimal_field(name: str) -> Field:
    return Field(
        name,
        to_wire=format_decimal,
        from_wire=parse_decimal,
        error_summary="Error parsing float value",
    )


class AttributeResource(BaseResource):
    """Manages a product attribute, e.g. a `pim_catalog_text` 'description'."""

    type_name = "akeneo_attribute"
    entity_class = entities.Attribute
    fields = (
        Field("code"),
        Field("type"),
        Field("group"),
        Field("group_labels"),
        Field("labels"),
        Field("sort_order"),
        Field("localizable"),
        Field("scopable"),
        Field("available_locales"),
        Field("unique"),
        Field("useable_as_grid_filter"),
        Field("max_characters"),
        Field("validation_rule"),
        Field("validation_regexp"),
        Field("wysiwyg_enabled"),
        _decimal_field("number_min"),
        _decimal_field("number_max"),
        Field("decimals_allowed"),
        Field("negative_allowed"),
        Field("metric_family"),
        Field("default_metric_unit"),
        Field("date_min"),
        Field("date_max"),
        Field("allowed_extensions"),
        Field(
            "max_file_size",
            to_wire=format_int,
            from_wire=parse_int,
            error_summary="Error parsing integer value",
        ),
        Field("reference_data_name"),
        Field("default_value"),
        Field(
            "table_configuration",
            to_wire=decode_json_list,
            from_wire=encode_json_list,
            error_summary="Error parsing table configuration",
        ),
    )

    @property
    def extra_attribute_types(self) -> List[str]:
        if self.resource_data is None:
            return []
        return self.resource_data.extra_attribute_types

    def schema(self) -> Schema:
        return Schema(
            description="Akeneo attribute resource",
            attributes={
                "code": code_attribute("Attribute code"),
                "type": Attribute(
                    STRING,
                    "Attribute type - see akeneo available akeneo types in the documentation. Example: pim_catalog_file",
                    required=True,
                    validators=[PimAttributeType(self.extra_attribute_types)],
                ),
                "labels": labels_attribute(),
                "group": Attribute(STRING, "Attribute group", required=True),
                "group_labels": labels_attribute(),
                "sort_order": sort_order_attribute(
                    "Order of the attribute in its group"
                ),
                "localizable": Attribute(
                    BOOL,
                    "Whether the attribute is localizable, i.e. can have one value by locale",
                ),
                "scopable": Attribute(
                    BOOL,
                    "Whether the attribute is scopable, i.e. can have one value by channel",
                ),
                "available_locales": Attribute(
                    LIST,
                    "To make the attribute locale specific, specify here for which locales it is specific",
                    validators=[ListValuesAre(LocaleCode())],
                ),
                "unique": Attribute(
                    BOOL, "Whether two values for the attribute cannot be the same"
                ),
                "useable_as_grid_filter": Attribute(
                    BOOL,
                    "Whether the attribute can be used as a filter for the product grid in the PIM user interface",
                ),
                "max_characters": Attribute(
                    INT64,
                    "Number maximum of characters allowed for the value of the attribute when the attribute type is `pim_catalog_text`, `pim_catalog_textarea` or `pim_catalog_identifier`",
                    validators=[Int64Between(1, MAX_INT32)],
                ),
                "validation_rule": Attribute(
                    STRING,
                    "Validation rule type used to validate any attribute value when the attribute type is `pim_catalog_text` or `pim_catalog_identifier`",
                ),
                "validation_regexp": Attribute(
                    STRING,
                    "Regexp expression used to validate any attribute value when the attribute type is `pim_catalog_text` or `pim_catalog_identifier`",
                ),
                "wysiwyg_enabled": Attribute(
                    BOOL,
                    "Whether the WYSIWYG interface is shown when the attribute type is `pim_catalog_textarea`",
                ),
                "number_min": Attribute(
                    NUMBER,
                    "Minimum value allowed when the attribute type is `pim_catalog_metric`, `pim_catalog_price` or `pim_catalog_number`",
                ),
                "number_max": Attribute(
                    NUMBER,
                    "Maximum value allowed when the attribute type is `pim_catalog_metric`, `pim_catalog_price` or `pim_catalog_number`",
                ),
                "decimals_allowed": Attribute(
                    BOOL,
                    "Whether decimals are allowed when the attribute type is `pim_catalog_metric`, `pim_catalog_price` or `pim_catalog_number`",
                ),
                "negative_allowed": Attribute(
                    BOOL,
                    "Whether negative values are allowed when the attribute type is `pim_catalog_metric` or `pim_catalog_number`",
                ),
                "metric_family": Attribute(
                    STRING,
                    "Metric family when the attribute type is `pim_catalog_metric`",
                ),
                "default_metric_unit": Attribute(
                    STRING,
                    "Default metric unit when the attribute type is `pim_catalog_metric`",
                ),
                "date_min": Attribute(
                    STRING,
                    "Minimum date allowed when the attribute type is `pim_catalog_date`",
                ),
                "date_max": Attribute(
                    STRING,
                    "Maximum date allowed when the attribute type is `pim_catalog_date`",
                ),
                "allowed_extensions": Attribute(
                    LIST,
                    "Extensions allowed when the attribute type is `pim_catalog_file` or `pim_catalog_image`",
                ),
                "max_file_size": Attribute(
                    INT64,
                    "Max file size in MB when the attribute type is `pim_catalog_file` or `pim_catalog_image`",
                ),
                "reference_data_name": Attribute(
                    STRING,
                    "Reference entity code when the attribute type is `akeneo_reference_entity` or `akeneo_reference_entity_collection` OR Asset family code when the attribute type is `pim_catalog_asset_collection`",
                ),
                "default_value": Attribute(
                    BOOL,
                    "Default value for a Yes/No attribute, applied when creating a new product or product model (only available since the 5.0)",
                ),
                "table_configuration": Attribute(
                    LIST,
                    "Configuration of the Table attribute (columns), one JSON-encoded column object per element",
                ),
            },
        )

    def build_service(self, client) -> AttributeService:
        return AttributeService(client)

    def fetch(self, code: str) -> entities.Attribute:
        return self.service.get_attribute(code)

    def create_entity(self, entity, diagnostics):
        self.service.create_attribute(entity)

    def update_entity(self, entity, diagnostics):
        self.service.update_attribute(entity)
