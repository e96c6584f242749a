"""
Typed services on top of `AkeneoClient`, one per Akeneo entity family.

Each logical operation ("update this attribute", "fetch this category") maps
to exactly one HTTP call against a fixed URL template. Errors raised by the
client are propagated unchanged.
"""

import enum
import json
import logging
from dataclasses import dataclass
from typing import List, Optional, Type

from pydantic import ValidationError

from .client import AkeneoApiError, AkeneoClient
from .entities import (
    AssociationType,
    Attribute,
    AttributeGroup,
    AttributeOption,
    Category,
    Channel,
    Entity,
    Family,
    FamilyVariant,
    MeasurementFamily,
    MeasurementFamilyPatchResponse,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/rest/v1"


def decode_entity(entity_class: Type[Entity], data) -> Entity:
    """
    Decodes a response body into an entity.

    Raises:
        AkeneoApiError: If the body does not have the shape of `entity_class`.
    """
    try:
        return entity_class.model_validate(data)
    except ValidationError as e:
        raise AkeneoApiError(
            f"The Akeneo response could not be decoded as {entity_class.__name__}: {e}",
            response_body=json.dumps(data, default=str),
        ) from e


class CreateMode(enum.Enum):
    """How an entity type is created on the Akeneo side."""

    # POST to the collection path; fails if the entity already exists.
    POST = "post"
    # PATCH to the single-entity path; Akeneo creates or updates.
    UPSERT = "upsert"


@dataclass(frozen=True)
class Endpoint:
    """
    URL templates and creation semantics of one entity type. Placeholders in
    the templates (e.g. `{code}`, `{attribute}`) are filled from keyword
    arguments at call time.
    """

    collection_path: str
    single_path: str
    entity: Type[Entity]
    create_mode: CreateMode = CreateMode.POST


class BaseService:
    """Generic GET/POST/PATCH helpers shared by all entity services."""

    def __init__(self, client: AkeneoClient):
        self.client = client

    def _get(self, endpoint: Endpoint, **path_params: str) -> Entity:
        data = self.client.get(endpoint.single_path.format(**path_params))
        return decode_entity(endpoint.entity, data or {})

    def _create(self, endpoint: Endpoint, entity: Entity, **path_params: str) -> None:
        payload = entity.to_payload()
        if endpoint.create_mode is CreateMode.UPSERT:
            self.client.patch(endpoint.single_path.format(**path_params), payload)
        else:
            self.client.post(endpoint.collection_path.format(**path_params), payload)

    def _update(
        self, endpoint: Endpoint, entity: Entity, **path_params: str
    ) -> Optional[Entity]:
        data = self.client.patch(
            endpoint.single_path.format(**path_params), entity.to_payload()
        )
        # Akeneo answers most PATCH calls with 204 No Content.
        if not data:
            return None
        return decode_entity(endpoint.entity, data)


class AttributeService(BaseService):
    attributes = Endpoint(
        f"{API_PREFIX}/attributes",
        f"{API_PREFIX}/attributes/{{code}}",
        Attribute,
    )
    options = Endpoint(
        f"{API_PREFIX}/attributes/{{attribute}}/options",
        f"{API_PREFIX}/attributes/{{attribute}}/options/{{code}}",
        AttributeOption,
    )
    groups = Endpoint(
        f"{API_PREFIX}/attribute-groups",
        f"{API_PREFIX}/attribute-groups/{{code}}",
        AttributeGroup,
    )

    def get_attribute(self, code: str) -> Attribute:
        return self._get(self.attributes, code=code)

    def create_attribute(self, attribute: Attribute) -> None:
        self._create(self.attributes, attribute, code=attribute.code)

    def update_attribute(self, attribute: Attribute) -> Optional[Attribute]:
        return self._update(self.attributes, attribute, code=attribute.code)

    def get_attribute_option(self, attribute: str, code: str) -> AttributeOption:
        return self._get(self.options, attribute=attribute, code=code)

    def create_attribute_option(self, option: AttributeOption) -> None:
        self._create(self.options, option, attribute=option.attribute, code=option.code)

    def update_attribute_option(
        self, option: AttributeOption
    ) -> Optional[AttributeOption]:
        return self._update(
            self.options, option, attribute=option.attribute, code=option.code
        )

    def get_attribute_group(self, code: str) -> AttributeGroup:
        return self._get(self.groups, code=code)

    def create_attribute_group(self, group: AttributeGroup) -> None:
        self._create(self.groups, group, code=group.code)

    def update_attribute_group(self, group: AttributeGroup) -> Optional[AttributeGroup]:
        return self._update(self.groups, group, code=group.code)


class CategoryService(BaseService):
    categories = Endpoint(
        f"{API_PREFIX}/categories",
        f"{API_PREFIX}/categories/{{code}}",
        Category,
    )

    def get_category(self, code: str) -> Category:
        return self._get(self.categories, code=code)

    def create_category(self, category: Category) -> None:
        self._create(self.categories, category, code=category.code)

    def update_category(self, category: Category) -> Optional[Category]:
        return self._update(self.categories, category, code=category.code)


class ChannelService(BaseService):
    channels = Endpoint(
        f"{API_PREFIX}/channels",
        f"{API_PREFIX}/channels/{{code}}",
        Channel,
    )

    def get_channel(self, code: str) -> Channel:
        return self._get(self.channels, code=code)

    def create_channel(self, channel: Channel) -> None:
        self._create(self.channels, channel, code=channel.code)

    def update_channel(self, channel: Channel) -> Optional[Channel]:
        return self._update(self.channels, channel, code=channel.code)


class FamilyService(BaseService):
    families = Endpoint(
        f"{API_PREFIX}/families",
        f"{API_PREFIX}/families/{{code}}",
        Family,
    )
    variants = Endpoint(
        f"{API_PREFIX}/families/{{family}}/variants",
        f"{API_PREFIX}/families/{{family}}/variants/{{code}}",
        FamilyVariant,
        CreateMode.UPSERT,
    )

    def get_family(self, code: str) -> Family:
        return self._get(self.families, code=code)

    def create_family(self, family: Family) -> None:
        self._create(self.families, family, code=family.code)

    def update_family(self, family: Family) -> Optional[Family]:
        return self._update(self.families, family, code=family.code)

    def get_family_variant(self, family: str, code: str) -> FamilyVariant:
        variant = self._get(self.variants, family=family, code=code)
        variant.family = family
        return variant

    def create_family_variant(self, variant: FamilyVariant) -> None:
        self._create(self.variants, variant, family=variant.family, code=variant.code)

    def update_family_variant(self, variant: FamilyVariant) -> Optional[FamilyVariant]:
        return self._update(
            self.variants, variant, family=variant.family, code=variant.code
        )


class AssociationTypeService(BaseService):
    association_types = Endpoint(
        f"{API_PREFIX}/association-types",
        f"{API_PREFIX}/association-types/{{code}}",
        AssociationType,
        CreateMode.UPSERT,
    )

    def get_association_type(self, code: str) -> AssociationType:
        return self._get(self.association_types, code=code)

    def create_association_type(self, association: AssociationType) -> None:
        self._create(self.association_types, association, code=association.code)

    def update_association_type(
        self, association: AssociationType
    ) -> Optional[AssociationType]:
        return self._update(self.association_types, association, code=association.code)


class MeasurementFamilyService(BaseService):
    """
    Akeneo exposes measurement families only as a collection: there is no
    single-entity GET, and writes go through a batch PATCH that reports one
    status per submitted family instead of failing the whole request.
    """

    path = f"{API_PREFIX}/measurement-families"

    def get_measurement_family(self, code: str) -> MeasurementFamily:
        """
        Fetches the whole collection and returns the family with the given code,
        or an empty `MeasurementFamily` when there is none.
        """
        data = self.client.get(self.path) or []
        for item in data:
            if isinstance(item, dict) and item.get("code") == code:
                return decode_entity(MeasurementFamily, item)
        logger.debug("Measurement family '%s' not found in collection", code)
        return MeasurementFamily()

    def update_measurement_families(
        self, families: List[MeasurementFamily]
    ) -> List[MeasurementFamilyPatchResponse]:
        data = self.client.patch(self.path, [f.to_payload() for f in families]) or []
        return [decode_entity(MeasurementFamilyPatchResponse, item) for item in data]
