from typing import Any, Dict, List

from ..akeneo import entities
from ..akeneo.services import MeasurementFamilyService
from ..helpers import Diagnostics
from ..interfaces.mapping import Field
from ..interfaces.resource import BaseResource
from ..interfaces.schema import LIST_NESTED, STRING, Attribute, Schema
from ..validators import DECIMAL_PATTERN, ConversionOperator, RegexMatches, SizeAtLeast
from .common import code_attribute, labels_attribute

CONVERSION_FIELDS = (
    Field("operator"),
    Field("value"),
)

UNIT_FIELDS = (
    Field("code"),
    Field("labels"),
    Field("symbol"),
    Field("convert_from_standard", nested=CONVERSION_FIELDS),
)


def units_to_wire(units: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """
    Akeneo keys units by their code.

    Raises:
        ValueError: If two units share a code.
    """
    wire = {}
    for unit in sorted(units, key=lambda u: u["code"]):
        if unit["code"] in wire:
            raise ValueError(f"duplicate unit code '{unit['code']}'")
        wire[unit["code"]] = unit
    return wire


def units_from_wire(units: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(units.values(), key=lambda u: u.get("code") or "")


class MeasurementFamilyResource(BaseResource):
    """
    A measurement family and its units.

    Akeneo only offers a batch endpoint for measurement families: a write
    succeeds at the HTTP level even when the family itself is rejected, and
    the per-family result carries the validation errors. Those are turned
    into diagnostics here. A family missing from the collection on read is
    removed from state.
    """

    type_name = "akeneo_measurement_family"
    entity_class = entities.MeasurementFamily
    fields = (
        Field("code"),
        Field("standard_unit_code"),
        Field("labels"),
        Field(
            "units",
            nested=UNIT_FIELDS,
            to_wire=units_to_wire,
            from_wire=units_from_wire,
            error_summary="Error converting measurement units",
        ),
    )

    def schema(self) -> Schema:
        return Schema(
            description="Akeneo measurement family resource",
            attributes={
                "code": code_attribute(
                    "Measurement family code (preferred uppercase values to follow Akeneo's convention)"
                ),
                "standard_unit_code": Attribute(
                    STRING,
                    "Unit code used as the standard unit for this measurement family",
                    required=True,
                ),
                "labels": labels_attribute(),
                "units": Attribute(
                    LIST_NESTED,
                    "Unit definitions",
                    required=True,
                    nested={
                        "code": code_attribute("Measurement unit code."),
                        "labels": labels_attribute(),
                        "symbol": Attribute(
                            STRING, "Measurement unit symbol.", required=True
                        ),
                        "convert_from_standard": Attribute(
                            LIST_NESTED,
                            "Calculation to convert the unit from the standard unit.",
                            required=True,
                            validators=[SizeAtLeast(1)],
                            nested={
                                "operator": Attribute(
                                    STRING,
                                    "The operator for a conversion operation to convert a unit from the standard unit.",
                                    required=True,
                                    validators=[ConversionOperator()],
                                ),
                                "value": Attribute(
                                    STRING,
                                    "The value for a conversion operation to convert the unit from the standard unit.",
                                    required=True,
                                    validators=[
                                        RegexMatches(
                                            DECIMAL_PATTERN,
                                            "must only contain decimal values",
                                        )
                                    ],
                                ),
                            },
                        ),
                    },
                ),
            },
        )

    def build_service(self, client) -> MeasurementFamilyService:
        return MeasurementFamilyService(client)

    def fetch(self, code: str) -> entities.MeasurementFamily:
        return self.service.get_measurement_family(code)

    def create_entity(self, entity, diagnostics):
        self._save(entity, diagnostics, "creating")

    def update_entity(self, entity, diagnostics):
        self._save(entity, diagnostics, "updating")

    def _save(
        self,
        entity: entities.MeasurementFamily,
        diagnostics: Diagnostics,
        action: str,
    ):
        results = self.service.update_measurement_families([entity])
        summary = f"Error while {action} a measurement family"
        for result in results:
            if not result.failed:
                continue
            for error in result.errors:
                diagnostics.add_error(
                    summary,
                    "A validation error was returned from the Akeneo API. \n\n"
                    f"Validation Error: {error.message}\n"
                    f"On property: {error.property}\n",
                )
            # The message only summarises the validation errors when there are any.
            if not result.errors:
                diagnostics.add_error(
                    summary,
                    f"An unexpected error occurred when {action} measurement family. \n\n"
                    f"Akeneo API Error: {result.message or f'status {result.status_code}'}",
                )
