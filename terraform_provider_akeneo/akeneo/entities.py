"""
Data transfer objects mirroring Akeneo's JSON representations.

Every optional field defaults to `None` and payloads are serialized with
`exclude_none`, so a field that was never set is omitted from the request
body instead of being sent as a zero value. Akeneo treats an omitted field as
"do not change" and an explicit empty value as "clear".
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Entity(BaseModel):
    """Base class for all Akeneo entities."""

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Attribute(Entity):
    code: Optional[str] = None
    type: Optional[str] = None
    group: Optional[str] = None
    group_labels: Optional[Dict[str, str]] = None
    labels: Optional[Dict[str, str]] = None
    sort_order: Optional[int] = None
    localizable: Optional[bool] = None
    scopable: Optional[bool] = None
    available_locales: Optional[List[str]] = None
    unique: Optional[bool] = None
    useable_as_grid_filter: Optional[bool] = None
    max_characters: Optional[int] = None
    validation_rule: Optional[str] = None
    validation_regexp: Optional[str] = None
    wysiwyg_enabled: Optional[bool] = None
    # Decimal values travel as strings to avoid float rounding on the server side.
    number_min: Optional[str] = None
    number_max: Optional[str] = None
    decimals_allowed: Optional[bool] = None
    negative_allowed: Optional[bool] = None
    metric_family: Optional[str] = None
    default_metric_unit: Optional[str] = None
    date_min: Optional[str] = None
    date_max: Optional[str] = None
    allowed_extensions: Optional[List[str]] = None
    max_file_size: Optional[str] = None
    reference_data_name: Optional[str] = None
    default_value: Optional[bool] = None
    table_configuration: Optional[List[Dict[str, Any]]] = None


class AttributeOption(Entity):
    code: Optional[str] = None
    attribute: Optional[str] = None
    sort_order: Optional[int] = None
    labels: Optional[Dict[str, str]] = None


class AttributeGroup(Entity):
    code: Optional[str] = None
    attributes: Optional[List[str]] = None
    sort_order: Optional[int] = None
    labels: Optional[Dict[str, str]] = None


class Category(Entity):
    code: Optional[str] = None
    parent: Optional[str] = None
    labels: Optional[Dict[str, str]] = None


class Channel(Entity):
    code: Optional[str] = None
    locales: Optional[List[str]] = None
    currencies: Optional[List[str]] = None
    category_tree: Optional[str] = None
    # Attribute code -> measurement unit code used when exporting to this channel.
    conversion_units: Optional[Dict[str, str]] = None
    labels: Optional[Dict[str, str]] = None


class Family(Entity):
    code: Optional[str] = None
    attribute_as_label: Optional[str] = None
    attribute_as_image: Optional[str] = None
    attributes: Optional[List[str]] = None
    # Channel code -> attribute codes required for completeness on that channel.
    attribute_requirements: Optional[Dict[str, List[str]]] = None
    labels: Optional[Dict[str, str]] = None


class VariantAttributeSet(Entity):
    level: Optional[int] = None
    axes: Optional[List[str]] = None
    attributes: Optional[List[str]] = None


class FamilyVariant(Entity):
    code: Optional[str] = None
    # Not part of Akeneo's body; used to build the nested REST path.
    family: Optional[str] = Field(default=None, exclude=True)
    labels: Optional[Dict[str, str]] = None
    variant_attribute_sets: Optional[List[VariantAttributeSet]] = None


class AssociationType(Entity):
    code: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    is_quantified: Optional[bool] = None
    is_two_way: Optional[bool] = None


class MeasurementUnitConversion(Entity):
    operator: Optional[str] = None
    value: Optional[str] = None


class MeasurementUnit(Entity):
    code: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    convert_from_standard: Optional[List[MeasurementUnitConversion]] = None
    symbol: Optional[str] = None


class MeasurementFamily(Entity):
    code: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    standard_unit_code: Optional[str] = None
    # Unit code -> unit definition.
    units: Optional[Dict[str, MeasurementUnit]] = None


class ValidationError(Entity):
    property: Optional[str] = None
    message: Optional[str] = None


class MeasurementFamilyPatchResponse(Entity):
    """Per-item result of a batch measurement family update."""

    code: Optional[str] = None
    status_code: int = 0
    message: Optional[str] = None
    errors: List[ValidationError] = Field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.status_code > 299
