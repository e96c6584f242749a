from ..akeneo import entities
from ..akeneo.services import FamilyService
from ..interfaces.mapping import Field
from ..interfaces.resource import BaseResource
from ..interfaces.schema import LIST, MAP_OF_LISTS, STRING, Attribute, Schema
from .common import code_attribute, labels_attribute


class FamilyResource(BaseResource):
    type_name = "akeneo_family"
    entity_class = entities.Family
    fields = (
        Field("code"),
        Field("labels"),
        Field("attributes"),
        Field("attribute_as_label"),
        Field("attribute_as_image"),
        Field("attribute_requirements"),
    )

    def schema(self) -> Schema:
        return Schema(
            description="Akeneo family resource",
            attributes={
                "code": code_attribute("Family code"),
                "labels": labels_attribute(),
                "attributes": Attribute(LIST, "Attributes assigned to the family"),
                "attribute_as_label": Attribute(
                    STRING, "Attribute used as product label for the family"
                ),
                "attribute_as_image": Attribute(
                    STRING, "Attribute used as product image for the family"
                ),
                "attribute_requirements": Attribute(
                    MAP_OF_LISTS,
                    "Attribute codes of the family that are required for the completeness calculation for each channel.",
                ),
            },
        )

    def build_service(self, client) -> FamilyService:
        return FamilyService(client)

    def fetch(self, code: str) -> entities.Family:
        return self.service.get_family(code)

    def create_entity(self, entity, diagnostics):
        self.service.create_family(entity)

    def update_entity(self, entity, diagnostics):
        self.service.update_family(entity)
