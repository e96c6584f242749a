from ..akeneo import entities
from ..akeneo.services import AssociationTypeService
from ..interfaces.mapping import Field
from ..interfaces.resource import BaseResource
from ..interfaces.schema import BOOL, Attribute, Schema
from .common import code_attribute, labels_attribute


class AssociationTypeResource(BaseResource):
    type_name = "akeneo_association_type"
    entity_class = entities.AssociationType
    fields = (
        Field("code"),
        Field("labels"),
        Field("is_quantified"),
        Field("is_two_way"),
    )

    def schema(self) -> Schema:
        return Schema(
            description="Akeneo association type resource",
            attributes={
                "code": code_attribute("Association type code"),
                "labels": labels_attribute(),
                "is_quantified": Attribute(
                    BOOL, "Whether the association type is a quantified association"
                ),
                "is_two_way": Attribute(
                    BOOL, "Whether the association type is a two-way association"
                ),
            },
        )

    def build_service(self, client) -> AssociationTypeService:
        return AssociationTypeService(client)

    def fetch(self, code: str) -> entities.AssociationType:
        return self.service.get_association_type(code)

    def create_entity(self, entity, diagnostics):
        self.service.create_association_type(entity)

    def update_entity(self, entity, diagnostics):
        self.service.update_association_type(entity)
