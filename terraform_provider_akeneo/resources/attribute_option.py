from ..akeneo import entities
from ..akeneo.services import AttributeService
from ..interfaces.mapping import Field
from ..interfaces.resource import BaseResource
from ..interfaces.schema import STRING, Attribute, Schema
from ..models import ImportKey
from .common import code_attribute, labels_attribute, sort_order_attribute


class AttributeOptionResource(BaseResource):
    """An option of a select attribute, imported as `<attribute>/<code>`."""

    type_name = "akeneo_attribute_option"
    entity_class = entities.AttributeOption
    fields = (
        Field("code"),
        Field("attribute"),
        Field("sort_order"),
        Field("labels"),
    )
    import_key = ImportKey(("attribute", "code"))

    def schema(self) -> Schema:
        return Schema(
            description="Akeneo attribute option resource",
            attributes={
                "code": code_attribute("Attribute option code"),
                "attribute": Attribute(STRING, "Parent attribute code", required=True),
                "sort_order": sort_order_attribute("Order of the attribute option"),
                "labels": labels_attribute(),
            },
        )

    def build_service(self, client) -> AttributeService:
        return AttributeService(client)

    def fetch(self, attribute: str, code: str) -> entities.AttributeOption:
        return self.service.get_attribute_option(attribute, code)

    def create_entity(self, entity, diagnostics):
        self.service.create_attribute_option(entity)

    def update_entity(self, entity, diagnostics):
        self.service.update_attribute_option(entity)
