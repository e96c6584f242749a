"""
Validators attached to schema attributes.

Every validator exposes a human readable `description` and a
`validate(path, value, diagnostics)` method. Null and unknown values are never
validated: they cannot be checked until they are known.
"""

import re
from typing import Any, Iterable, Sequence

from .helpers import Diagnostics
from .models import Value

LOCALE_CODE_PATTERN = re.compile(r"^[a-z]{2}_[A-Z]{2}\Z")

# Decimal literal accepted by Akeneo for unit conversion values.
DECIMAL_PATTERN = re.compile(r"^-?\d*(\.\d+)?\Z")

PIM_CONVERSION_OPERATORS = ["add", "sub", "mul", "div"]

PIM_ATTRIBUTE_TYPES = [
    "pim_catalog_identifier",
    "pim_catalog_text",
    "pim_catalog_textarea",
    "pim_catalog_simpleselect",
    "pim_catalog_multiselect",
    "pim_catalog_boolean",
    "pim_catalog_date",
    "pim_catalog_number",
    "pim_catalog_metric",
    "pim_catalog_price_collection",
    "pim_catalog_image",
    "pim_catalog_file",
    "pim_catalog_asset_collection",
    "akeneo_reference_entity",
    "akeneo_reference_entity_collection",
    "pim_reference_data_simpleselect",
    "pim_reference_data_multiselect",
    "pim_catalog_table",
]


def is_locale_code(value: str) -> bool:
    """Checks a string against the `language_COUNTRY` locale format, e.g. 'en_US'."""
    return isinstance(value, str) and LOCALE_CODE_PATTERN.match(value) is not None


def is_conversion_operator(value: str) -> bool:
    return value in PIM_CONVERSION_OPERATORS


def is_pim_attribute_type(value: str, extra_types: Iterable[str] = ()) -> bool:
    return value in PIM_ATTRIBUTE_TYPES or value in list(extra_types)


def _invalid_value(diagnostics: Diagnostics, path: str, description: str, value: Any):
    diagnostics.add_error(
        "Invalid Attribute Value Match",
        f"Attribute {path} {description}, got: {value}",
        path=path,
    )


class BaseValidator:
    """Base class for all attribute validators."""

    description = ""

    def validate(self, path: str, value: Value, diagnostics: Diagnostics):
        if not value.is_known:
            return
        self.validate_known(path, value.value, diagnostics)

    def validate_known(self, path: str, value: Any, diagnostics: Diagnostics):
        raise NotImplementedError


class LocaleCode(BaseValidator):
    description = "value must be valid locale code (example 'en_US')"

    def validate_known(self, path, value, diagnostics):
        if not is_locale_code(value):
            _invalid_value(diagnostics, path, self.description, value)


class ConversionOperator(BaseValidator):
    description = f"value must be one of: {PIM_CONVERSION_OPERATORS}"

    def validate_known(self, path, value, diagnostics):
        if not is_conversion_operator(value):
            _invalid_value(diagnostics, path, self.description, value)


class PimAttributeType(BaseValidator):
    """Accepts the built-in Akeneo attribute types plus any configured extra types."""

    def __init__(self, extra_types: Sequence[str] = ()):
        self.extra_types = list(extra_types)

    @property
    def description(self):
        return f"value must be one of: {PIM_ATTRIBUTE_TYPES + self.extra_types}"

    def validate_known(self, path, value, diagnostics):
        if not is_pim_attribute_type(value, self.extra_types):
            _invalid_value(diagnostics, path, self.description, value)


class Int64Between(BaseValidator):
    def __init__(self, minimum: int, maximum: int):
        self.minimum = minimum
        self.maximum = maximum
        self.description = f"value must be between {minimum} and {maximum}"

    def validate_known(self, path, value, diagnostics):
        if not self.minimum <= value <= self.maximum:
            diagnostics.add_error(
                "Invalid Attribute Value",
                f"Attribute {path} {self.description}, got: {value}",
                path=path,
            )


class LengthAtLeast(BaseValidator):
    def __init__(self, minimum: int):
        self.minimum = minimum
        self.description = f"string length must be at least {minimum}"

    def validate_known(self, path, value, diagnostics):
        if len(value) < self.minimum:
            diagnostics.add_error(
                "Invalid Attribute Value Length",
                f"Attribute {path} {self.description}, got: {len(value)}",
                path=path,
            )


class RegexMatches(BaseValidator):
    def __init__(self, pattern: re.Pattern, message: str):
        self.pattern = pattern
        self.description = message

    def validate_known(self, path, value, diagnostics):
        if not self.pattern.match(value):
            _invalid_value(diagnostics, path, self.description, value)


class SizeAtLeast(BaseValidator):
    def __init__(self, minimum: int):
        self.minimum = minimum
        self.description = f"list must contain at least {minimum} elements"

    def validate_known(self, path, value, diagnostics):
        if len(value) < self.minimum:
            diagnostics.add_error(
                "Invalid Attribute Value",
                f"Attribute {path} {self.description}, got: {len(value)}",
                path=path,
            )


class MapKeysAre(BaseValidator):
    """Applies string validators to every key of a map attribute."""

    def __init__(self, *validators: BaseValidator):
        self.validators = validators
        self.description = "map keys must satisfy all validations: " + " + ".join(
            v.description for v in validators
        )

    def validate_known(self, path, value, diagnostics):
        for key in value:
            for validator in self.validators:
                validator.validate(f"{path}[{key!r}]", Value.of(key), diagnostics)


class ListValuesAre(BaseValidator):
    """Applies string validators to every element of a list attribute."""

    def __init__(self, *validators: BaseValidator):
        self.validators = validators
        self.description = "list values must satisfy all validations: " + " + ".join(
            v.description for v in validators
        )

    def validate_known(self, path, value, diagnostics):
        for index, item in enumerate(value):
            for validator in self.validators:
                validator.validate(f"{path}[{index}]", Value.of(item), diagnostics)
