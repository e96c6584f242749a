from ..akeneo import entities
from ..akeneo.services import FamilyService
from ..helpers import MAX_INT32
from ..interfaces.mapping import Field, sorted_by
from ..interfaces.resource import BaseResource
from ..interfaces.schema import INT64, LIST, LIST_NESTED, STRING, Attribute, Schema
from ..models import ImportKey
from ..validators import Int64Between
from .common import code_attribute, labels_attribute

VARIANT_ATTRIBUTE_SET_FIELDS = (
    Field("level"),
    Field("axes"),
    Field("attributes"),
)


class FamilyVariantResource(BaseResource):
    """
    A family variant, imported as `<family_code>/<code>`.

    Attribute sets are kept ordered by enrichment level in both directions, so
    the order in which Akeneo returns them never shows up as a change.
    """

    type_name = "akeneo_family_variant"
    entity_class = entities.FamilyVariant
    fields = (
        Field("family_code", wire="family"),
        Field("code"),
        Field("labels"),
        Field(
            "variant_attribute_sets",
            nested=VARIANT_ATTRIBUTE_SET_FIELDS,
            to_wire=sorted_by("level"),
            from_wire=sorted_by("level"),
        ),
    )
    import_key = ImportKey(("family_code", "code"))

    def schema(self) -> Schema:
        return Schema(
            description="Akeneo family variant resource",
            attributes={
                "family_code": Attribute(
                    STRING, "Family code to which this variant belongs", required=True
                ),
                "code": code_attribute("Family variant code"),
                "labels": labels_attribute(),
                "variant_attribute_sets": Attribute(
                    LIST_NESTED,
                    "Attribute distributions according to the enrichment level.",
                    nested={
                        "level": Attribute(
                            INT64,
                            "Enrichment level",
                            required=True,
                            validators=[Int64Between(1, MAX_INT32)],
                        ),
                        "axes": Attribute(
                            LIST, "Codes of attributes used as variant axes"
                        ),
                        "attributes": Attribute(
                            LIST, "Codes of attributes bind to this enrichment level"
                        ),
                    },
                ),
            },
        )

    def build_service(self, client) -> FamilyService:
        return FamilyService(client)

    def fetch(self, family_code: str, code: str) -> entities.FamilyVariant:
        return self.service.get_family_variant(family_code, code)

    def create_entity(self, entity, diagnostics):
        self.service.create_family_variant(entity)

    def update_entity(self, entity, diagnostics):
        self.service.update_family_variant(entity)
