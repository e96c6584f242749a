from ..akeneo import entities
from ..akeneo.services import CategoryService
from ..interfaces.mapping import Field
from ..interfaces.resource import BaseResource
from ..interfaces.schema import STRING, Attribute, Schema
from .common import code_attribute, labels_attribute


class CategoryResource(BaseResource):
    type_name = "akeneo_category"
    entity_class = entities.Category
    fields = (
        Field("code"),
        Field("parent"),
        Field("labels"),
    )

    def schema(self) -> Schema:
        return Schema(
            description="Akeneo category resource",
            attributes={
                "code": code_attribute("Category code"),
                # Omitted for root categories (category trees).
                "parent": Attribute(STRING, "Category parent"),
                "labels": labels_attribute(),
            },
        )

    def build_service(self, client) -> CategoryService:
        return CategoryService(client)

    def fetch(self, code: str) -> entities.Category:
        return self.service.get_category(code)

    def create_entity(self, entity, diagnostics):
        self.service.create_category(entity)

    def update_entity(self, entity, diagnostics):
        self.service.update_category(entity)
