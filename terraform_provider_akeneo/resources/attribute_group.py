from ..akeneo import entities
from ..akeneo.services import AttributeService
from ..interfaces.mapping import Field
from ..interfaces.resource import BaseResource
from ..interfaces.schema import Schema
from .common import code_attribute, labels_attribute, sort_order_attribute


class AttributeGroupResource(BaseResource):
    type_name = "akeneo_attribute_group"
    entity_class = entities.AttributeGroup
    fields = (
        Field("code"),
        Field("sort_order"),
        Field("labels"),
    )

    def schema(self) -> Schema:
        return Schema(
            description="Akeneo attribute group resource",
            attributes={
                "code": code_attribute("Attribute group code"),
                "sort_order": sort_order_attribute("Order of the attribute group"),
                "labels": labels_attribute(),
            },
        )

    def build_service(self, client) -> AttributeService:
        return AttributeService(client)

    def fetch(self, code: str) -> entities.AttributeGroup:
        return self.service.get_attribute_group(code)

    def create_entity(self, entity, diagnostics):
        self.service.create_attribute_group(entity)

    def update_entity(self, entity, diagnostics):
        self.service.update_attribute_group(entity)
