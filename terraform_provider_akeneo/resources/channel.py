from ..akeneo import entities
from ..akeneo.services import ChannelService
from ..interfaces.mapping import Field
from ..interfaces.resource import BaseResource
from ..interfaces.schema import LIST, MAP, STRING, Attribute, Schema
from .common import code_attribute, labels_attribute


class ChannelResource(BaseResource):
    type_name = "akeneo_channel"
    entity_class = entities.Channel
    fields = (
        Field("code"),
        Field("labels"),
        Field("locales"),
        Field("currencies"),
        Field("category_tree"),
        Field("conversion_units"),
    )

    def schema(self) -> Schema:
        return Schema(
            description="Akeneo channel resource",
            attributes={
                "code": code_attribute("Channel code"),
                "labels": labels_attribute(),
                "locales": Attribute(
                    LIST, "Locales assigned to the channel", required=True
                ),
                "currencies": Attribute(
                    LIST, "Currencies assigned to the channel", required=True
                ),
                "category_tree": Attribute(
                    STRING, "Category tree assigned to the channel", required=True
                ),
                "conversion_units": Attribute(
                    MAP,
                    "Conversion units assigned to the channel (attribute code to measurement unit code)",
                ),
            },
        )

    def build_service(self, client) -> ChannelService:
        return ChannelService(client)

    def fetch(self, code: str) -> entities.Channel:
        return self.service.get_channel(code)

    def create_entity(self, entity, diagnostics):
        self.service.create_channel(entity)

    def update_entity(self, entity, diagnostics):
        self.service.update_channel(entity)
